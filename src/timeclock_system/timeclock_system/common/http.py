"""JSON helpers shared by the Flask controllers."""
from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DataAccessError,
    DomainError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
)


def ok(data, status: int = 200):
    return jsonify({"success": True, "data": data}), status


def fail(message: str, status: int):
    return jsonify({"success": False, "error": message}), status


def status_for(error: DomainError) -> int:
    for kind, status in _STATUS_BY_ERROR:
        if isinstance(error, kind):
            return status
    return 500


def json_endpoint(failure_message: str):
    """Map domain errors to JSON responses; anything else becomes a generic 500."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except DataAccessError:
                logger.error("%s %s: %s", request.method, request.path, failure_message)
                return fail(failure_message, 500)
            except DomainError as e:
                return fail(str(e), status_for(e))
            except Exception:
                logger.exception("Unhandled error on %s %s", request.method, request.path)
                return fail(failure_message, 500)

        return wrapper

    return decorator


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return fail("Login required", 401)
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return fail("Login required", 401)
        try:
            role = Role(session.get("role"))
        except ValueError:
            role = None
        if role is None or not role.is_admin:
            return fail("Admin access required", 403)
        return view(*args, **kwargs)

    return wrapper


def current_role() -> Role:
    return Role(session.get("role"))


def current_user_id() -> int:
    return int(session["user_id"])


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data
