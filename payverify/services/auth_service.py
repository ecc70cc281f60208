"""
Admin credential checks.
A single admin account is configured through ADMIN_USERNAME / ADMIN_PASSWORD (bcrypt hash).
"""

import hmac
import logging

import bcrypt
from flask import current_app

from payverify.errors import AuthError, ValidationError

logger = logging.getLogger(__name__)


def hash_password(password):
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def check_password(password, password_hash):
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed hash in configuration
        logger.error("ADMIN_PASSWORD is not a valid bcrypt hash")
        return False


def authenticate(username, password):
    """Return the admin identity or raise AuthError("Invalid credentials")."""
    if not username or not password:
        raise ValidationError("Username and password required")
    if not isinstance(username, str) or not isinstance(password, str):
        raise ValidationError("Username and password must be strings")

    expected = current_app.config.get("ADMIN_USERNAME") or ""
    username_ok = hmac.compare_digest(username.encode("utf-8"), expected.encode("utf-8"))
    password_ok = check_password(password, current_app.config.get("ADMIN_PASSWORD_HASH"))

    if not (username_ok and password_ok):
        logger.warning("Failed admin login for username=%r", username)
        raise AuthError("Invalid credentials")

    logger.info("Admin %s logged in", username)
    return username
