from datetime import date

from flask import render_template, redirect, url_for
from sms_portal.extensions import db
from sms_portal.models.academic import Marks, Student
from sms_portal.utils.decorators import login_required
from sms_portal.utils.queries import attendance_totals
from . import main_bp

@main_bp.route("/")
def home():
    return redirect(url_for("auth.signin"))

@main_bp.route("/dashboard")
@login_required
def dashboard():
    today = date.today()

    student_count = db.session.query(db.func.count(Student.id)).scalar() or 0
    marks_count = db.session.query(db.func.count(Marks.id)).scalar() or 0

    return render_template("dashboard.html",
        student_count=student_count,
        marks_count=marks_count,
        totals=attendance_totals(today),
        today=today
    )
