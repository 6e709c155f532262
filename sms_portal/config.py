import os
from datetime import timedelta

from dotenv import load_dotenv
from sqlalchemy.engine import URL


load_dotenv()


def database_uri():
    url = os.environ.get("DATABASE_URL")

    if url:
        if url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql://", 1)
        return url

    return URL.create(
        "postgresql+psycopg2",
        username=os.environ.get("PGUSER", "postgres"),
        password=os.environ.get("PGPASSWORD", "postgres"),
        host=os.environ.get("PGHOST", "localhost"),
        port=int(os.environ.get("PGPORT", "5432")),
        database=os.environ.get("PGDATABASE", "SMS"),
    ).render_as_string(hide_password=False)


class Config:

    SECRET_KEY = os.environ.get(
        "SESSION_SECRET",
        "dev-secret"
    )

    SQLALCHEMY_DATABASE_URI = database_uri()
    SQLALCHEMY_ENGINE_OPTIONS = {"pool_pre_ping": True}

    PERMANENT_SESSION_LIFETIME = timedelta(hours=8)
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"
    # Expired session rows are purged on every Nth session write
    SESSION_CLEANUP_N_REQUESTS = int(os.environ.get("SESSION_CLEANUP_N_REQUESTS", "100"))

    PORT = int(os.environ.get("PORT", "3000"))
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")


class TestConfig(Config):

    TESTING = True
    SECRET_KEY = "test-secret"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_ENGINE_OPTIONS = {}
    LOG_LEVEL = "WARNING"
