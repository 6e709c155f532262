from sms_portal.models.user import User, SessionRecord
from sms_portal.models.academic import Student, Marks, Attendance

__all__ = ["User", "SessionRecord", "Student", "Marks", "Attendance"]
