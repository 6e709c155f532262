"""Persistence calls used by the request handlers.

Writes that can trip a uniqueness constraint return an explicit result
(``Ok``, ``Conflict`` or ``NotFound``) instead of letting the
``IntegrityError`` escape. The failed transaction is rolled back first, so
nothing is half written.
"""
from sqlalchemy import func
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError

from sms_portal.extensions import db
from sms_portal.models.academic import Attendance, Marks, Student
from sms_portal.models.user import User
from sms_portal.utils.academic import ABSENT, PRESENT, compute_result
from sms_portal.utils.results import Conflict, NotFound, Ok


STUDENT_FIELDS = ("name", "email", "reg_no", "department")


def normalize_email(email):
    return (email or "").strip().lower()


# ---------------- USERS ---------------- #

def create_user(email, password):
    user = User(email=normalize_email(email))
    user.set_password(password)

    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return Conflict("email")

    return Ok(user)


def find_user_by_email(email):
    return User.query.filter_by(email=normalize_email(email)).first()


# ---------------- STUDENTS ---------------- #

def clean_student_form(form):
    """Trimmed student fields, or None when any of them is blank."""
    fields = {name: (form.get(name) or "").strip() for name in STUDENT_FIELDS}

    if not all(fields.values()):
        return None

    fields["email"] = fields["email"].lower()
    return fields


def list_students():
    return Student.query.order_by(Student.id.asc()).all()


def students_by_name():
    return Student.query.order_by(Student.name, Student.id).all()


def get_student(student_id):
    return db.session.get(Student, student_id)


def create_student(fields):
    student = Student(**fields)

    db.session.add(student)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return Conflict("reg_no")

    return Ok(student)


def update_student(student_id, fields):
    student = get_student(student_id)
    if student is None:
        return NotFound()

    for name, value in fields.items():
        setattr(student, name, value)

    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return Conflict("reg_no")

    return Ok(student)


def delete_student(student_id):
    student = get_student(student_id)
    if student is None:
        return False

    db.session.delete(student)
    db.session.commit()
    return True


# ---------------- MARKS ---------------- #

def record_marks(student, scores):
    """Append one marks row for ``student``; earlier rows are kept."""
    total, grade, passed = compute_result(
        scores["tamil"],
        scores["english"],
        scores["maths"],
        scores["science"],
        scores["social_science"],
    )

    marks = Marks(
        student_id=student.id,
        total=total,
        grade=grade,
        passed=passed,
        **scores
    )

    db.session.add(marks)
    db.session.commit()
    return marks


def marks_summary():
    return db.session.query(
        Marks.id,
        Student.reg_no,
        Student.name,
        Marks.tamil,
        Marks.english,
        Marks.maths,
        Marks.science,
        Marks.social_science,
        Marks.total,
        Marks.grade,
        Marks.passed.label("passed"),
        Marks.created_at
    ).join(
        Student, Student.id == Marks.student_id
    ).order_by(
        Marks.id.desc()
    ).all()


# ---------------- ATTENDANCE ---------------- #

def _insert_for_dialect():
    dialect = db.session.get_bind().dialect.name

    if dialect == "postgresql":
        return postgresql.insert
    if dialect == "sqlite":
        return sqlite.insert

    raise RuntimeError(f"Attendance upsert is not supported on {dialect}")


def record_attendance(entries, day):
    """Upsert one status per student for ``day``.

    ``entries`` maps student id to status. Ids that match no student are not
    written and are returned so the caller can report them.
    """
    if not entries:
        return []

    known = set(
        db.session.scalars(
            db.select(Student.id).where(Student.id.in_(list(entries)))
        )
    )
    unknown = sorted(set(entries) - known)

    rows = [
        {"student_id": student_id, "status": entries[student_id], "marked_at": day}
        for student_id in sorted(known)
    ]

    if rows:
        insert = _insert_for_dialect()
        stmt = insert(Attendance).values(rows)
        stmt = stmt.on_conflict_do_update(
            index_elements=["student_id", "marked_at"],
            set_={"status": stmt.excluded.status}
        )
        db.session.execute(stmt)
        db.session.commit()

    return unknown


def attendance_for_day(day):
    rows = db.session.query(
        Attendance.student_id,
        Attendance.status
    ).filter(
        Attendance.marked_at == day
    ).all()

    return {row.student_id: row.status for row in rows}


def attendance_totals(day):
    total = db.session.query(func.count(Student.id)).scalar() or 0

    def count_status(status):
        return db.session.query(
            func.count(Attendance.id)
        ).filter(
            Attendance.marked_at == day,
            Attendance.status == status
        ).scalar() or 0

    return {
        "total": total,
        "present": count_status(PRESENT),
        "absent": count_status(ABSENT),
    }
