from __future__ import annotations

import logging
from functools import wraps

from flask import current_app, jsonify, request

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 400),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
)


def json_error(message: str, status: int, **extra):
    body = {"message": message}
    body.update(extra)
    return jsonify(body), status


def status_for(exc: DomainError) -> int:
    for exc_type, status in _STATUS_BY_ERROR:
        if isinstance(exc, exc_type):
            return status
    return 400


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def internal_error(exc: Exception):
    """Log the active exception and answer with a generic 500."""
    logger.exception("Unhandled error on %s %s", request.method, request.path)
    if bool(current_app.config.get("DEBUG", False)):
        return json_error(f"Internal server error: {exc}", 500)
    return json_error("Internal server error", 500)


def json_api(view):
    """Translate domain errors into JSON responses.

    Anything that is not a DomainError is logged and answered with a 500;
    the detail is only exposed when DEBUG is on.
    """

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except DomainError as e:
            return json_error(str(e), status_for(e))
        except Exception as e:
            return internal_error(e)

    return wrapper
