from datetime import datetime

from sms_portal.extensions import db

# ---------------- STUDENTS ---------------- #

class Student(db.Model):
    __tablename__ = "students"

    id = db.Column(db.Integer, primary_key=True)

    reg_no = db.Column(db.Text, unique=True, nullable=False)

    name = db.Column(db.Text, nullable=False)

    email = db.Column(db.Text, nullable=False)

    department = db.Column(db.Text, nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    # Student owns its marks and attendance history
    marks = db.relationship(
        "Marks",
        backref="student",
        lazy=True,
        cascade="all, delete-orphan",
        passive_deletes=True
    )
    attendance = db.relationship(
        "Attendance",
        backref="student",
        lazy=True,
        cascade="all, delete-orphan",
        passive_deletes=True
    )

    def __repr__(self):
        return f"<Student {self.reg_no}>"


# ---------------- MARKS ---------------- #

class Marks(db.Model):
    __tablename__ = "marks"

    id = db.Column(db.Integer, primary_key=True)

    student_id = db.Column(
        db.Integer,
        db.ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False
    )

    tamil = db.Column(db.Integer)
    english = db.Column(db.Integer)
    maths = db.Column(db.Integer)
    science = db.Column(db.Integer)
    social_science = db.Column(db.Integer)

    total = db.Column(db.Integer)

    grade = db.Column(db.Text)

    # "pass" is a Python keyword
    passed = db.Column("pass", db.Boolean)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)


# ---------------- ATTENDANCE ---------------- #

class Attendance(db.Model):
    __tablename__ = "attendance"

    id = db.Column(db.Integer, primary_key=True)

    student_id = db.Column(
        db.Integer,
        db.ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False
    )

    status = db.Column(db.Text, nullable=False)

    marked_at = db.Column(
        db.Date,
        nullable=False,
        server_default=db.func.current_date()
    )

    __table_args__ = (
        db.CheckConstraint(
            "status IN ('present', 'absent')",
            name="attendance_status_check"
        ),
        db.Index(
            "attendance_unique_day",
            "student_id", "marked_at",
            unique=True
        ),
    )
