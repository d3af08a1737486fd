"""Cookie based authentication helpers.

Requests may carry an ``accessToken`` and/or a ``refreshToken`` cookie.
``get_current_user`` resolves the caller once per request:

* a valid access token identifies the user directly;
* failing that, a valid refresh token identifies the user and a fresh
  access token is attached to the response;
* a user flagged as logged out is treated as anonymous (on the refresh
  path the flag is written again and both cookies are cleared);
* anything else leaves the request anonymous.

Views that need a user wrap themselves in ``auth_required``.
"""

from __future__ import annotations

from functools import wraps

from flask import current_app, g
from flask_jwt_extended import (
    create_access_token,
    get_jwt_identity,
    set_access_cookies,
    unset_jwt_cookies,
    verify_jwt_in_request,
)
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError
from werkzeug.exceptions import Forbidden, Unauthorized

from models import User, db

_UNSET = object()


def _verified_identity(refresh: bool = False) -> str | None:
    try:
        verify_jwt_in_request(optional=True, refresh=refresh)
        return get_jwt_identity()
    except (JWTExtendedException, PyJWTError) as exc:
        current_app.logger.debug("Ignoring unusable %s token: %s",
                                 "refresh" if refresh else "access", exc)
        return None


def _resolve_user() -> User | None:
    identity = _verified_identity()
    if identity is not None:
        user = db.session.get(User, str(identity))
        if user is None or user.is_logout:
            return None
        return user

    identity = _verified_identity(refresh=True)
    if identity is None:
        return None

    user = db.session.get(User, str(identity))
    if user is None:
        g.clear_auth_cookies = True
        return None
    if user.is_logout:
        user.is_logout = True
        db.session.commit()
        g.clear_auth_cookies = True
        return None

    g.refreshed_access_token = create_access_token(identity=user.id)
    return user


def get_current_user() -> User | None:
    """Return the authenticated user or ``None`` for anonymous callers."""

    user = g.get("current_user", _UNSET)
    if user is _UNSET:
        user = _resolve_user()
        g.current_user = user
    return user


def auth_required(fn):
    """Reject anonymous callers with 401."""

    @wraps(fn)
    def wrapper(*args, **kwargs):
        if get_current_user() is None:
            raise Unauthorized("Login required.")
        return fn(*args, **kwargs)

    return wrapper


def admin_required(fn):
    """Reject anonymous callers with 401 and non-admins with 403."""

    @wraps(fn)
    def wrapper(*args, **kwargs):
        user = get_current_user()
        if user is None:
            raise Unauthorized("Login required.")
        if not user.is_admin:
            raise Forbidden("Admin privileges required.")
        return fn(*args, **kwargs)

    return wrapper


def apply_auth_cookies(response):
    """``after_request`` hook writing refreshed or cleared cookies."""

    if g.get("clear_auth_cookies"):
        unset_jwt_cookies(response)
    elif g.get("refreshed_access_token"):
        set_access_cookies(response, g.refreshed_access_token)
    return response
