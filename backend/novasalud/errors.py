# Overview: Error kinds raised by services and the single mapping to JSON responses.

# backend/novasalud/errors.py
"""
Application errors and their HTTP mapping.

Services raise one of the AppError subclasses; routes never build error
payloads themselves. register_error_handlers() wires error_response() into
the Flask app so every failure answers {"error": message} with the status
bound to its kind.
"""
from __future__ import annotations

from flask import Flask, current_app
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException


class AppError(Exception):
    """Base app error."""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """400-level input problem (missing or non-positive values)."""
    status_code = 400


class NotFoundError(AppError):
    """Sale or product id does not exist."""
    status_code = 404


class InsufficientStockError(AppError):
    """Requested debit exceeds the product's current stock."""
    status_code = 400


class StoreError(AppError):
    """Any failure of the underlying data store. The driver message is surfaced as-is."""
    status_code = 500


def error_response(exc: AppError) -> tuple[dict, int]:
    return {"error": exc.message}, exc.status_code


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(AppError)
    def handle_app_error(exc: AppError):
        if isinstance(exc, StoreError):
            current_app.logger.error("store_error message=%s", exc.message)
        return error_response(exc)

    @app.errorhandler(SQLAlchemyError)
    def handle_store_error(exc: SQLAlchemyError):
        current_app.logger.exception("Store read failed")
        return error_response(StoreError(str(exc)))

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        return {"error": exc.description or exc.name}, exc.code

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        current_app.logger.exception("Unhandled error")
        return {"error": "Internal server error"}, 500
