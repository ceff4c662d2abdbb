"""API error types and their JSON rendering."""

from __future__ import annotations

import logging

from flask import jsonify
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base error carrying an HTTP status and a client-safe message."""

    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        if message:
            self.message = message

    def to_response(self):
        return jsonify({"error": self.message}), self.status_code


class InvalidArgument(ApiError):
    status_code = 400
    message = "Invalid request"


class Conflict(InvalidArgument):
    """Duplicate resource; reported as 400 like any other bad input."""

    message = "Resource already exists"


class Unauthenticated(ApiError):
    status_code = 401
    message = "Authentication required"


class MissingToken(Unauthenticated):
    message = "Access token required"


class InvalidToken(Unauthenticated):
    message = "Invalid token"


class InvalidCredentials(Unauthenticated):
    message = "Invalid credentials"


class Forbidden(ApiError):
    status_code = 403
    message = "Access denied"


class NotFound(ApiError):
    status_code = 404
    message = "Not found"


class Internal(ApiError):
    pass


def _rollback_session() -> None:
    from jukebox.database.db_manager import db

    try:
        db.session.rollback()
    except SQLAlchemyError:
        logger.exception("Session rollback failed")


def register_error_handlers(app) -> None:
    """Render every failure as {"error": ...} JSON."""

    @app.errorhandler(ApiError)
    def _handle_api_error(exc: ApiError):
        if exc.status_code >= 500:
            logger.error("Request failed: %s", exc.message)
        else:
            logger.info("Request rejected (%s): %s", exc.status_code, exc.message)
        return exc.to_response()

    @app.errorhandler(HTTPException)
    def _handle_http_exception(exc: HTTPException):
        return jsonify({"error": exc.description or exc.name}), exc.code

    @app.errorhandler(SQLAlchemyError)
    def _handle_storage_error(exc: SQLAlchemyError):
        _rollback_session()
        logger.exception("Storage failure")
        return Internal().to_response()

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        _rollback_session()
        logger.exception("Unhandled error")
        return Internal().to_response()


__all__ = [
    "ApiError",
    "InvalidArgument",
    "Conflict",
    "Unauthenticated",
    "MissingToken",
    "InvalidToken",
    "InvalidCredentials",
    "Forbidden",
    "NotFound",
    "Internal",
    "register_error_handlers",
]
