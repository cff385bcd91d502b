"""Authentication decorators."""
from functools import wraps
from typing import Any, Callable
from flask import current_app, g, jsonify
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError


def require_auth(fn: Callable) -> Callable:
    """
    Decorator requiring a valid bearer token for an active user.

    Sets ``g.user_id`` and ``g.user`` for the wrapped view.

    Usage:
        @require_auth
        def my_view():
            ...
    """

    @wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            verify_jwt_in_request()
            identity = get_jwt_identity()
            user_id = int(identity)
        except (JWTExtendedException, PyJWTError, TypeError, ValueError):
            return jsonify({"error": "Authentication required"}), 401

        user = current_app.container.user_repository().find_by_id(user_id)
        if not user:
            return jsonify({"error": "User not found"}), 401
        if not user.is_active:
            return jsonify({"error": "User account is not active"}), 403

        g.user_id = user.id
        g.user = user
        return fn(*args, **kwargs)

    return wrapper
