"""Auth gate: every API handler except register, login and health sits behind it."""

from functools import wraps
from typing import Callable, ParamSpec, TypeVar

import jwt
from flask import g, request

from taskboard.errors import error_response
from taskboard.extensions import db
from taskboard.models import User
from taskboard.services.auth import user_id_from_token


P = ParamSpec("P")
T = TypeVar("T")


def token_required(f: Callable[P, T]) -> Callable[P, T]:
    """Decorator to require a valid session token.

    Sets g.current_user if the token is valid and its user still exists.
    Returns 401 otherwise.
    """

    @wraps(f)
    def decorated(*args: P.args, **kwargs: P.kwargs) -> T:
        auth_header = request.headers.get("Authorization", "")

        if not auth_header.startswith("Bearer "):
            return error_response("Unauthorized", 401)

        try:
            user_id = user_id_from_token(auth_header.removeprefix("Bearer "))
        except jwt.InvalidTokenError:
            return error_response("Invalid or expired token", 401)

        user = db.session.get(User, user_id)
        if not user:
            return error_response("Unauthorized", 401)

        g.current_user = user
        return f(*args, **kwargs)

    return decorated
