"""Error responses for the HTTP API.

Every failure leaves the API as ``{"error": "<message>"}`` with the status
code chosen here; handlers raise, they never build error bodies themselves.
"""

import sqlite3

from flask import jsonify
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from services.errors import CategoryTypeMismatchError, NotFoundError
from logger import get_logger

logger = get_logger()


class ApiError(Exception):
    """Base class for errors raised by the request layer."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BindError(ApiError):
    """Request is malformed or misses a required field."""

    status_code = 400

    @classmethod
    def from_validation_error(cls, error: ValidationError) -> "BindError":
        """Report only the first validation failure."""
        first = error.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        if location:
            return cls(f"{location}: {first['msg']}")
        return cls(first["msg"])


class UnauthorizedError(ApiError):
    """Bearer token is missing or invalid."""

    status_code = 401


class ForbiddenError(ApiError):
    """Caller does not own the resource."""

    status_code = 403


def error_response(message: str, status_code: int):
    """Build the error envelope used by every failing response."""
    return jsonify({"error": message}), status_code


def register_error_handlers(app) -> None:
    """Map request-layer, domain and storage errors to HTTP responses.

    Args:
        app: Flask application.
    """

    @app.errorhandler(ApiError)
    def handle_api_error(error: ApiError):
        logger.warning(f"{error.status_code}: {error.message}")
        return error_response(error.message, error.status_code)

    @app.errorhandler(NotFoundError)
    def handle_not_found(error: NotFoundError):
        logger.warning(f"404: {error}")
        return error_response(str(error), 404)

    @app.errorhandler(CategoryTypeMismatchError)
    def handle_type_mismatch(error: CategoryTypeMismatchError):
        logger.warning(
            f"400: account type {error.account_type!r} does not match "
            f"category type {error.category_type!r}"
        )
        return error_response(str(error), 400)

    @app.errorhandler(sqlite3.Error)
    def handle_store_error(error: sqlite3.Error):
        logger.exception(f"Storage error: {error}")
        return error_response("internal server error", 500)

    @app.errorhandler(HTTPException)
    def handle_http_exception(error: HTTPException):
        return error_response(error.description, error.code)

    @app.errorhandler(Exception)
    def handle_unexpected(error: Exception):
        logger.exception(f"Unhandled error: {error}")
        return error_response("internal server error", 500)
