"""One-time signup and password reset tokens.

These are plain PyJWT tokens signed with ``SIGNUP_TOKEN_SECRET``; they are
kept apart from the session JWTs so a mailed link can never be used as an
access token.
"""

from __future__ import annotations

from datetime import datetime, timezone

import jwt
from flask import current_app

ALGORITHM = "HS256"


class SignupTokenError(Exception):
    """Raised when a signup/reset token cannot be trusted."""

    def __init__(self, message: str, expired: bool = False):
        super().__init__(message)
        self.expired = expired


def make_signup_token(user_id: str) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "id": user_id,
        "iat": now,
        "exp": now + current_app.config["SIGNUP_TOKEN_EXPIRES"],
    }
    return jwt.encode(payload, current_app.config["SIGNUP_TOKEN_SECRET"], algorithm=ALGORITHM)


def decode_signup_token(token: str) -> str:
    """Return the user id carried by ``token``."""
    try:
        payload = jwt.decode(
            token, current_app.config["SIGNUP_TOKEN_SECRET"], algorithms=[ALGORITHM]
        )
    except jwt.ExpiredSignatureError:
        raise SignupTokenError("Token has expired.", expired=True)
    except jwt.InvalidTokenError:
        raise SignupTokenError("Token is invalid.")

    user_id = payload.get("id")
    if not user_id:
        raise SignupTokenError("Token is invalid.")
    return user_id
