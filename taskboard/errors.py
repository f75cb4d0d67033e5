"""Error handlers with OpenTelemetry trace context."""

import logging

from flask import Flask, jsonify
from marshmallow import ValidationError
from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode
from werkzeug.exceptions import HTTPException

from taskboard.extensions import db


logger = logging.getLogger(__name__)


def error_response(message: str, status_code: int) -> tuple:
    """Create error response with trace context.

    Use this function in routes instead of returning jsonify directly.

    Args:
        message: Error message.
        status_code: HTTP status code.

    Returns:
        Tuple of (response, status_code).
    """
    response = {"error": message}

    span = trace.get_current_span()
    span_context = span.get_span_context()
    if span_context.is_valid:
        response["trace_id"] = format(span_context.trace_id, "032x")

    return jsonify(response), status_code


def first_error_message(err: ValidationError) -> str:
    """Return the first message of a marshmallow validation error.

    Args:
        err: Raised validation error.

    Returns:
        The first message of the first failing field.
    """
    messages = err.messages
    while isinstance(messages, (dict, list)) and messages:
        messages = next(iter(messages.values())) if isinstance(messages, dict) else messages[0]
    if isinstance(messages, str) and messages:
        return messages
    return "Validation error"


def validation_error_response(err: ValidationError) -> tuple:
    """Create a 400 response surfacing the first validation message."""
    return error_response(first_error_message(err), 400)


def register_error_handlers(app: Flask) -> None:
    """Register error handlers on Flask app.

    Args:
        app: Flask application instance.
    """

    @app.errorhandler(400)
    def bad_request(error):
        return error_response("Bad request", 400)

    @app.errorhandler(401)
    def unauthorized(error):
        return error_response("Unauthorized", 401)

    @app.errorhandler(403)
    def forbidden(error):
        return error_response("Forbidden", 403)

    @app.errorhandler(404)
    def not_found(error):
        return error_response("Not found", 404)

    @app.errorhandler(405)
    def method_not_allowed(error):
        return error_response("Method not allowed", 405)

    @app.errorhandler(409)
    def conflict(error):
        return error_response("Conflict", 409)

    @app.errorhandler(500)
    def internal_error(error):
        return error_response("Internal server error", 500)

    @app.errorhandler(ValidationError)
    def validation_error(error: ValidationError):
        return validation_error_response(error)

    @app.errorhandler(Exception)
    def unhandled_exception(error: Exception):
        if isinstance(error, HTTPException):
            return error_response(error.name, error.code or 500)

        db.session.rollback()

        span = trace.get_current_span()
        if span.is_recording():
            span.set_status(Status(StatusCode.ERROR, str(error)))
            span.record_exception(error)
            span.set_attribute("error.type", "unhandled_exception")

        logger.exception(f"Unhandled exception: {error}")
        return error_response("Internal server error", 500)
