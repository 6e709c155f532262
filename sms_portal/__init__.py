import click
from flask import Flask

from sms_portal.blueprints import register_blueprints
from sms_portal.config import Config
from sms_portal.errors import register_error_handlers
from sms_portal.extensions import db, login_manager, migrate
from sms_portal.logs import configure_logging
from sms_portal.sessions import DatabaseSessionInterface, SessionStore


def create_app(config_object=Config):

    app = Flask(__name__)

    app.config.from_object(config_object)

    configure_logging(app)

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)

    session_store = SessionStore(db)
    app.extensions["session_store"] = session_store
    app.session_interface = DatabaseSessionInterface(session_store)

    register_blueprints(app)
    register_error_handlers(app)
    register_commands(app)

    # Schema creation failing here is fatal: the app never starts
    with app.app_context():
        import sms_portal.models  # noqa: F401
        db.create_all()
        app.logger.info("Application ready on %s", db.engine.url.render_as_string())

    return app


def register_commands(app):

    @app.cli.command("purge-sessions")
    def purge_sessions():
        """Delete expired session records."""
        removed = app.extensions["session_store"].purge_expired()
        click.echo(f"Removed {removed} expired session(s)")
