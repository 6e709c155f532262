from datetime import date

from flask import current_app, render_template, request
from sms_portal.utils.academic import parse_attendance_form
from sms_portal.utils.decorators import login_required
from sms_portal.utils.queries import (
    attendance_for_day, attendance_totals, record_attendance, students_by_name
)
from . import attendance_bp


def _render(today, totals, skipped=()):
    return render_template("attendance/index.html",
                           students=students_by_name(),
                           statuses=attendance_for_day(today),
                           totals=totals,
                           skipped=list(skipped),
                           today=today)


@attendance_bp.route("")
@login_required
def index():
    today = date.today()
    return _render(today, attendance_totals(today))


@attendance_bp.route("", methods=["POST"])
@login_required
def submit():
    # Always the server's day; the form cannot pick a date
    today = date.today()

    entries, malformed = parse_attendance_form(request.form)
    unknown = record_attendance(entries, today)

    skipped = malformed + [f"student_{student_id}" for student_id in unknown]
    if skipped:
        current_app.logger.warning("Skipped attendance entries: %s", ", ".join(skipped))

    current_app.logger.info(
        "Recorded attendance for %d student(s) on %s",
        len(entries) - len(unknown), today.isoformat()
    )
    return _render(today, attendance_totals(today), skipped)
