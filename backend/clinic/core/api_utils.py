"""
Common API utilities for consistent response formatting across all controllers.
"""

import logging
from typing import Any, Optional

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from clinic.core.exceptions import InvalidDataError, NotFoundError

logger = logging.getLogger(__name__)


def api_response(
    success: bool, message: str, data: Optional[Any] = None, status_code: int = 200
) -> tuple:
    """
    Standardized API response format for all endpoints.

    Args:
        success: Whether the operation was successful
        message: Human-readable message about the operation
        data: Optional data payload
        status_code: HTTP status code

    Returns:
        Tuple of (json_response, status_code)
    """
    response = {"success": success, "message": message}

    if data is not None:
        response["data"] = data

    return jsonify(response), status_code


def error_response(
    error: str, message: str, status_code: int, field: Optional[str] = None
) -> tuple:
    body = {"success": False, "error": error, "message": message}
    if field is not None:
        body["field"] = field
    return jsonify(body), status_code


def get_json_body() -> dict:
    """Return the JSON request body, or an empty dict when absent or malformed."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def register_error_handlers(app: Flask) -> None:
    """Map the clinic error taxonomy onto HTTP responses."""

    @app.errorhandler(NotFoundError)
    def handle_not_found(exc: NotFoundError):
        logger.info(
            "Resource not found",
            extra={"context": {"entity": exc.entity, "id": exc.identifier}},
        )
        return error_response("not_found", exc.message, 404)

    @app.errorhandler(InvalidDataError)
    def handle_invalid_data(exc: InvalidDataError):
        logger.info(
            "Invalid request data",
            extra={"context": {"field": exc.field_name, "error": exc.message}},
        )
        return error_response("validation_error", exc.message, 400, exc.field_name)

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        if isinstance(exc, HTTPException):
            return error_response(
                exc.name.lower().replace(" ", "_"),
                exc.description or exc.name,
                exc.code or 500,
            )

        logger.error(
            "Unhandled error while processing request",
            extra={"context": {"path": request.path, "error": str(exc)}},
            exc_info=True,
        )
        return error_response("server_error", "An unexpected error occurred", 500)
