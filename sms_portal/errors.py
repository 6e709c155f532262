from flask import current_app, render_template
from sqlalchemy.exc import SQLAlchemyError

from sms_portal.extensions import db


def register_error_handlers(app):

    @app.errorhandler(SQLAlchemyError)
    def database_error(error):
        db.session.rollback()
        current_app.logger.exception("Database error: %s", error)
        return render_template(
            "errors/500.html",
            error="Something went wrong. Please try again."
        ), 500
