import logging

from flask.logging import default_handler


FORMAT = "[%(asctime)s] %(levelname)s in %(module)s: %(message)s"


def configure_logging(app):
    level = app.config.get("LOG_LEVEL", "INFO")
    app.logger.setLevel(level)

    # app.logger is shared by every app built from this package
    app.logger.removeHandler(default_handler)

    for handler in app.logger.handlers:
        if getattr(handler, "_sms_portal_console", False):
            handler.setLevel(level)
            return

    console = logging.StreamHandler()
    console._sms_portal_console = True
    console.setLevel(level)
    console.setFormatter(logging.Formatter(FORMAT))
    app.logger.addHandler(console)
