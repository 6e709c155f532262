from datetime import datetime

from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash

from sms_portal.extensions import db


class User(UserMixin, db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)

    email = db.Column(db.Text, unique=True, nullable=False)

    password_hash = db.Column(db.Text, nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    # ------------------
    # Auth helpers
    # ------------------

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)

    def __repr__(self):
        return f"<User {self.email}>"


class SessionRecord(db.Model):
    __tablename__ = "session"

    sid = db.Column(db.String(128), primary_key=True)

    data = db.Column(db.Text, nullable=False)

    expires = db.Column(db.DateTime, nullable=False, index=True)
