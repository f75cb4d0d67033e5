"""Bearer-token sessions for the task board.

A session is an HS256 JWT naming the user. Tokens are stateless: logging out
only discards the client's copy, and deleting an account invalidates its
tokens because the user lookup in the auth gate fails.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from flask import current_app

from taskboard.models import User


REQUIRED_CLAIMS = ["exp", "user_id"]


def generate_token(user: User) -> str:
    """Issue a session token for a user.

    Args:
        user: User the session belongs to.

    Returns:
        Encoded JWT.
    """
    now = datetime.now(timezone.utc)
    lifetime = timedelta(hours=current_app.config.get("JWT_EXPIRATION_HOURS", 24))

    payload = {
        "user_id": user.id,
        "email": user.email,
        "iat": now,
        "exp": now + lifetime,
    }

    return jwt.encode(
        payload,
        current_app.config["JWT_SECRET_KEY"],
        algorithm=current_app.config.get("JWT_ALGORITHM", "HS256"),
    )


def decode_token(token: str) -> dict[str, Any]:
    """Decode and validate a session token.

    Raises:
        jwt.InvalidTokenError: If the token is malformed, expired, or lacks
            the user_id or exp claim.
    """
    return jwt.decode(
        token,
        current_app.config["JWT_SECRET_KEY"],
        algorithms=[current_app.config.get("JWT_ALGORITHM", "HS256")],
        options={"require": REQUIRED_CLAIMS},
    )


def user_id_from_token(token: str) -> int:
    """Extract the session's user id.

    Raises:
        jwt.InvalidTokenError: If the token is invalid or its user_id is
            not an integer.
    """
    user_id = decode_token(token)["user_id"]
    if not isinstance(user_id, int) or isinstance(user_id, bool):
        raise jwt.InvalidTokenError("user_id claim must be an integer")
    return user_id
