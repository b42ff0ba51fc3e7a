from __future__ import annotations

from functools import wraps
from typing import Callable, Optional

from flask import jsonify, session

from ..core.enums import Role


def login_required(view):
    """Session is created by the auth layer; here we only require a user id in it."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"error": "Unauthorized"}), 401
        return view(*args, **kwargs)

    return wrapper


def role_required(resolve_role: Callable[[str], Optional[Role]], *roles: Role):
    """Like login_required, but the user's stored profile role must be one of ``roles``.

    The role is looked up on every request rather than trusted from the session.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return jsonify({"error": "Unauthorized"}), 401
            if resolve_role(str(session["user_id"])) not in roles:
                return jsonify({"error": "Forbidden"}), 403
            return view(*args, **kwargs)

        return wrapper

    return decorator
