"""
Error taxonomy and JSON error handlers.

Every failure leaves the service as
    {"success": false, "error_code": "...", "message": "..."}
"""

import logging

from flask import jsonify
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code = 500
    error_code = "INTERNAL_ERROR"
    message = "Unexpected server error."

    def __init__(self, message=None, status_code=None):
        super().__init__(message or self.message)
        if message:
            self.message = message
        if status_code:
            self.status_code = status_code

    def to_dict(self):
        return {
            "success": False,
            "error_code": self.error_code,
            "message": self.message,
        }


class ValidationError(AppError):
    status_code = 400
    error_code = "VALIDATION_ERROR"
    message = "Invalid request."


class AuthError(AppError):
    """401 for missing credentials/token, 403 for an invalid or expired token."""
    status_code = 401
    error_code = "AUTH_ERROR"
    message = "Unauthorized"


class NotFoundError(AppError):
    status_code = 404
    error_code = "NOT_FOUND"
    message = "Submission not found"


class ConflictError(AppError):
    status_code = 409
    error_code = "INVALID_TRANSITION"
    message = "Status transition not allowed."


class StoreError(AppError):
    error_code = "STORE_ERROR"
    message = "Could not save your submission. Please try again."


class UploadError(AppError):
    error_code = "UPLOAD_ERROR"
    message = "Could not store the screenshot. Please try again."


def error_response(error):
    return jsonify(error.to_dict()), error.status_code


def register_error_handlers(app):

    def handle_app_error(error):
        if error.status_code >= 500:
            logger.error("%s: %s", error.error_code, error)
        return error_response(error)

    def handle_http_error(error):
        return jsonify({
            "success": False,
            "error_code": (error.name or "HTTP_ERROR").upper().replace(" ", "_"),
            "message": error.description,
        }), error.code

    def handle_unexpected(error):
        logger.exception("Unhandled server error")
        return error_response(AppError())

    app.register_error_handler(AppError, handle_app_error)
    app.register_error_handler(HTTPException, handle_http_error)
    app.register_error_handler(Exception, handle_unexpected)


def register_jwt_handlers(jwt):
    """Missing token -> 401, invalid or expired token -> 403."""

    @jwt.unauthorized_loader
    def missing_token(reason):
        return error_response(AuthError("Unauthorized"))

    @jwt.invalid_token_loader
    def invalid_token(reason):
        return error_response(AuthError("Invalid token", status_code=403))

    @jwt.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        return error_response(AuthError("Session expired", status_code=403))
