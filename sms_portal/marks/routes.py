from flask import current_app, render_template, request, redirect, url_for
from sqlalchemy.exc import SQLAlchemyError
from sms_portal.extensions import db
from sms_portal.utils.academic import MAX_RECORD_ID, SUBJECTS, leading_int, scores_from_form
from sms_portal.utils.decorators import login_required
from sms_portal.utils.queries import get_student, marks_summary, record_marks, students_by_name
from . import marks_bp


def _parse_student_id(raw):
    # Same leading-integer reading as the scores: "12abc" is student 12
    student_id = leading_int(raw)
    if student_id is None or not 0 < student_id <= MAX_RECORD_ID:
        return None
    return student_id


@marks_bp.route("")
@login_required
def index():
    return render_template("marks/index.html",
                           students=students_by_name(),
                           selected=None,
                           error=None)


@marks_bp.route("/summary")
@login_required
def summary():
    entries = marks_summary()
    current_app.logger.debug("Marks summary: %d entries", len(entries))
    return render_template("marks/summary.html", entries=entries, error=None)


@marks_bp.route("/<student_id>")
@login_required
def form(student_id):
    numeric_id = _parse_student_id(student_id)
    if numeric_id is None:
        return redirect(url_for("marks.index"))

    student = get_student(numeric_id)
    if student is None:
        return redirect(url_for("marks.index"))

    return render_template("marks/form.html",
                           students=students_by_name(),
                           student=student,
                           subjects=SUBJECTS,
                           error=None)


@marks_bp.route("/<student_id>", methods=["POST"])
@login_required
def submit(student_id):
    numeric_id = _parse_student_id(student_id)
    if numeric_id is None:
        return redirect(url_for("marks.index"), code=303)

    student = get_student(numeric_id)
    if student is None:
        return redirect(url_for("marks.index"), code=303)

    try:
        marks = record_marks(student, scores_from_form(request.form))
    except (SQLAlchemyError, OverflowError):
        # OverflowError: the SQLite driver rejects integers beyond 64 bits
        db.session.rollback()
        current_app.logger.exception("Failed to save marks for student %s", numeric_id)
        return render_template("marks/form.html",
                               students=[],
                               student=student,
                               subjects=SUBJECTS,
                               error="Failed to save marks. Please try again."), 500

    current_app.logger.info(
        "Recorded marks for %s: total=%s grade=%s pass=%s",
        student.reg_no, marks.total, marks.grade, marks.passed
    )
    return redirect(url_for("marks.summary"), code=303)
