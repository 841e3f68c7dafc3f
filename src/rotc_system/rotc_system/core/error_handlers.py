"""Translate domain errors into JSON responses.

Every error kind gets a distinct ``error`` field so callers can branch on it.
"""

from __future__ import annotations

import logging

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from .exceptions import DomainError, DuplicateCheckIn, NotFound, OutOfRange, SessionNotActive, ValidationError

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = (
    (ValidationError, 400),
    (NotFound, 404),
    (SessionNotActive, 409),
    (DuplicateCheckIn, 409),
    (OutOfRange, 422),
)


def status_for(exc: DomainError) -> int:
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return 400


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        status_code = status_for(exc)
        logger.warning("%s %s -> %s: %s", request.method, request.path, exc.kind, exc.message)

        body = {"success": False, "error": exc.kind, "message": exc.message}
        if isinstance(exc, OutOfRange) and exc.distance_meters is not None:
            body["distance_meters"] = round(exc.distance_meters, 2)
            body["radius_meters"] = exc.radius_meters
        return jsonify(body), status_code

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        if isinstance(exc, HTTPException):
            return jsonify({"success": False, "error": exc.name, "message": exc.description}), exc.code
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({"success": False, "error": "InternalError", "message": "Internal server error"}), 500
