from flask import current_app, render_template, request, redirect, url_for
from sms_portal.utils.decorators import login_required
from sms_portal.utils.queries import (
    clean_student_form, create_student, delete_student, get_student,
    list_students, update_student
)
from sms_portal.utils.results import Conflict, NotFound
from . import students_bp


REQUIRED_MESSAGE = "All fields required"
UNIQUE_REG_NO_MESSAGE = "Registration number must be unique"


def _form_error(student, message):
    return render_template("students/form.html",
                           student=student,
                           error=message), 400


@students_bp.route("")
@login_required
def index():
    return render_template("students/index.html", students=list_students())


@students_bp.route("/new")
@login_required
def new():
    return render_template("students/form.html", student=None, error=None)


@students_bp.route("", methods=["POST"])
@login_required
def create():
    fields = clean_student_form(request.form)
    if fields is None:
        return _form_error(None, REQUIRED_MESSAGE)

    result = create_student(fields)

    if isinstance(result, Conflict):
        return _form_error(None, UNIQUE_REG_NO_MESSAGE)

    current_app.logger.info("Created student %s", result.value.reg_no)
    return redirect(url_for("students.index"), code=303)


@students_bp.route("/<int:student_id>/edit")
@login_required
def edit(student_id):
    student = get_student(student_id)

    if student is None:
        return redirect(url_for("students.index"))

    return render_template("students/form.html", student=student, error=None)


@students_bp.route("/<int:student_id>", methods=["POST"])
@login_required
def update(student_id):
    # Echo the submitted values back on failure
    submitted = dict(request.form.items(), id=student_id)

    fields = clean_student_form(request.form)
    if fields is None:
        return _form_error(submitted, REQUIRED_MESSAGE)

    result = update_student(student_id, fields)

    if isinstance(result, NotFound):
        return redirect(url_for("students.index"), code=303)

    if isinstance(result, Conflict):
        return _form_error(submitted, UNIQUE_REG_NO_MESSAGE)

    current_app.logger.info("Updated student %s", result.value.reg_no)
    return redirect(url_for("students.index"), code=303)


@students_bp.route("/<int:student_id>/delete", methods=["POST"])
@login_required
def delete(student_id):
    if delete_student(student_id):
        current_app.logger.info("Deleted student %s", student_id)

    return redirect(url_for("students.index"), code=303)
