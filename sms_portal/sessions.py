"""Server-side sessions kept in the ``session`` table.

The browser only ever holds a signed, opaque token. Everything bound to the
session (the signed-in user id and email, flashed messages) lives in a
``SessionRecord`` row, so sessions survive a process restart.
"""
import secrets
from datetime import datetime

from flask.json.tag import TaggedJSONSerializer
from flask.sessions import SecureCookieSession, SessionInterface
from itsdangerous import BadSignature, Signer

from sms_portal.models.user import SessionRecord


class ServerSideSession(SecureCookieSession):

    def __init__(self, initial=None, sid=None, new=False):
        super().__init__(initial)
        self.sid = sid
        self.new = new


class SessionStore:
    """CRUD over session records, bound to a Flask-SQLAlchemy instance."""

    serializer = TaggedJSONSerializer()

    def __init__(self, db):
        self.db = db

    def load(self, sid, now=None):
        now = now or datetime.utcnow()
        record = self.db.session.get(SessionRecord, sid)

        if record is None or record.expires <= now:
            return None

        return self.serializer.loads(record.data)

    def save(self, sid, data, expires):
        record = self.db.session.get(SessionRecord, sid)

        if record is None:
            record = SessionRecord(sid=sid)
            self.db.session.add(record)

        record.data = self.serializer.dumps(dict(data))
        record.expires = expires
        self.db.session.commit()

    def delete(self, sid):
        record = self.db.session.get(SessionRecord, sid)

        if record is not None:
            self.db.session.delete(record)
            self.db.session.commit()

    def purge_expired(self, now=None):
        now = now or datetime.utcnow()

        removed = SessionRecord.query.filter(
            SessionRecord.expires <= now
        ).delete(synchronize_session=False)
        self.db.session.commit()

        return removed


class DatabaseSessionInterface(SessionInterface):

    session_class = ServerSideSession
    salt = "sms-portal-session"

    def __init__(self, store):
        self.store = store
        self._saves = 0

    def _signer(self, app):
        return Signer(app.secret_key, salt=self.salt)

    @staticmethod
    def _new_sid():
        return secrets.token_urlsafe(32)

    def regenerate(self, session):
        """Move ``session`` to a fresh id, dropping the record of the old one."""
        self.store.delete(session.sid)
        session.sid = self._new_sid()
        session.new = True
        session.modified = True

    def open_session(self, app, request):
        if not app.secret_key:
            return None

        token = request.cookies.get(self.get_cookie_name(app))
        if not token:
            return self.session_class(sid=self._new_sid(), new=True)

        try:
            sid = self._signer(app).unsign(token).decode("utf-8")
        except BadSignature:
            return self.session_class(sid=self._new_sid(), new=True)

        data = self.store.load(sid)
        if data is None:
            return self.session_class(sid=self._new_sid(), new=True)

        return self.session_class(data, sid=sid)

    def _purge_periodically(self, app):
        every = app.config.get("SESSION_CLEANUP_N_REQUESTS")
        if not every:
            return

        self._saves += 1
        if self._saves % every == 0:
            removed = self.store.purge_expired()
            if removed:
                app.logger.info("Purged %d expired session(s)", removed)

    def save_session(self, app, session, response):
        name = self.get_cookie_name(app)
        domain = self.get_cookie_domain(app)
        path = self.get_cookie_path(app)

        if not session:
            if session.modified:
                self.store.delete(session.sid)
                response.delete_cookie(name, domain=domain, path=path)
            return

        if not self.should_set_cookie(app, session):
            return

        # Lifetime runs from issuance, whether or not the session is permanent
        expires = datetime.utcnow() + app.permanent_session_lifetime
        self.store.save(session.sid, session, expires)
        self._purge_periodically(app)

        token = self._signer(app).sign(session.sid.encode("utf-8")).decode("utf-8")
        response.set_cookie(
            name,
            token,
            expires=expires,
            httponly=self.get_cookie_httponly(app),
            domain=domain,
            path=path,
            secure=self.get_cookie_secure(app),
            samesite=self.get_cookie_samesite(app),
        )
        response.vary.add("Cookie")
