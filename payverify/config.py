"""
Configuration read from the environment (and .env via python-dotenv).
create_app() applies these first, then any explicit overrides.
"""

import os
from datetime import timedelta

SESSION_TTL = timedelta(hours=6)
ADMIN_COOKIE_NAME = "admin_token"


def _flag(value):
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def database_uri():
    url = os.environ.get("DATABASE_URL")
    if url:
        # Heroku-style URLs are not accepted by SQLAlchemy 2.x
        if url.startswith("postgres://"):
            url = "postgresql://" + url[len("postgres://"):]
        return url

    db_user = os.environ.get("DB_USER", "payverify")
    db_pass = os.environ.get("DB_PASS", "password")
    db_host = os.environ.get("DB_HOST", "localhost")
    db_name = os.environ.get("DB_NAME", "payverify")
    return f"postgresql://{db_user}:{db_pass}@{db_host}/{db_name}"


def load_config():
    production = os.environ.get("APP_ENV", os.environ.get("FLASK_ENV")) == "production"
    origins = os.environ.get("CORS_ORIGINS", "http://localhost:3000")

    return {
        "SQLALCHEMY_DATABASE_URI": database_uri(),
        "SQLALCHEMY_TRACK_MODIFICATIONS": False,
        "MAX_CONTENT_LENGTH": 5 * 1024 * 1024,
        "LOG_LEVEL": os.environ.get("LOG_LEVEL", "INFO"),
        "CORS_ORIGINS": [o.strip() for o in origins.split(",") if o.strip()],

        # Admin credentials: ADMIN_PASSWORD holds a bcrypt hash, never plain text
        "ADMIN_USERNAME": os.environ.get("ADMIN_USERNAME", "admin"),
        "ADMIN_PASSWORD_HASH": os.environ.get("ADMIN_PASSWORD"),

        # Session token (flask-jwt-extended)
        "JWT_SECRET_KEY": os.environ.get("JWT_SECRET", "dev-secret-change-me"),
        "JWT_TOKEN_LOCATION": ["cookies", "headers"],
        "JWT_ACCESS_COOKIE_NAME": ADMIN_COOKIE_NAME,
        "JWT_ACCESS_TOKEN_EXPIRES": SESSION_TTL,
        "JWT_COOKIE_SECURE": production,
        "JWT_COOKIE_SAMESITE": "Strict",
        "JWT_COOKIE_CSRF_PROTECT": False,
        "JWT_SESSION_COOKIE": False,

        # Status transitions
        "STRICT_TRANSITIONS": _flag(os.environ.get("STRICT_TRANSITIONS", "false")),

        # Screenshot storage
        "STORAGE_BACKEND": os.environ.get("STORAGE_BACKEND", "cloudinary"),
        "CLOUDINARY_URL": os.environ.get("CLOUDINARY_URL"),
        "CLOUDINARY_NAME": os.environ.get("CLOUDINARY_NAME"),
        "CLOUDINARY_KEY": os.environ.get("CLOUDINARY_KEY"),
        "CLOUDINARY_SECRET": os.environ.get("CLOUDINARY_SECRET"),
        "CLOUDINARY_FOLDER": os.environ.get("CLOUDINARY_FOLDER", "fyb-payments"),
        "UPLOAD_FOLDER": os.environ.get("UPLOAD_FOLDER", os.path.join(os.getcwd(), "uploads")),
    }
