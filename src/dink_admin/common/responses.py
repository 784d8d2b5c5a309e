from __future__ import annotations

from functools import wraps

from flask import current_app, jsonify, request

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    ConflictError,
    DomainError,
    NotFoundError,
    UpstreamError,
    ValidationError,
)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
    (ConfigurationError, 500),
)


def status_for(error: DomainError, *, upstream: int = 500) -> int:
    """HTTP status for a domain error.

    Remote failures default to 500; some endpoints surface them as 400 the
    way the stored procedures report business-rule rejections.
    """
    if isinstance(error, UpstreamError):
        return error.status or upstream
    for cls, status in _STATUS_BY_ERROR:
        if isinstance(error, cls):
            return status
    return 400


def error_response(message: str, status: int, **extra):
    body = {"success": False, "error": message}
    body.update(extra)
    return jsonify(body), status


def internal_error():
    return error_response("Internal server error", 500)


def json_errors(upstream: int = 500):
    """Map domain errors raised by an API view to `{"success": false, "error": ...}`.

    Unexpected exceptions are logged with traceback and answered with a 500.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except DomainError as e:
                return error_response(str(e), status_for(e, upstream=upstream))
            except Exception:
                current_app.logger.exception("Unhandled error in %s", request.path)
                return internal_error()

        return wrapper

    return decorator


def json_body() -> dict:
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}
