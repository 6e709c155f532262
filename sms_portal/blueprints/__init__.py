from sms_portal.main.routes import main_bp
from sms_portal.auth.routes import auth_bp
from sms_portal.students.routes import students_bp
from sms_portal.marks.routes import marks_bp
from sms_portal.attendance.routes import attendance_bp

def register_blueprints(app):
    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(students_bp)
    app.register_blueprint(marks_bp)
    app.register_blueprint(attendance_bp)
