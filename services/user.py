"""Account lifecycle: signup, verification, login state, password reset."""

from __future__ import annotations

from sqlalchemy import func
from sqlalchemy.orm import Session

from models import User, new_uuid
from utils.errors import (
    ConflictError,
    InvalidRequestError,
    NotFoundError,
    PermissionDeniedError,
)
from utils.tokens import SignupTokenError, decode_signup_token, make_signup_token


def normalize_email(raw_email: str | None) -> str:
    """Normalize an email string by stripping whitespace and lowering case."""
    if not isinstance(raw_email, str):
        return ""
    return raw_email.strip().lower()


def is_institutional_email(email: str, domain: str) -> bool:
    local, _, host = email.partition("@")
    return bool(local) and host == domain.lower()


def find_user_by_email(session: Session, email: str) -> User | None:
    return session.query(User).filter(func.lower(User.email) == normalize_email(email)).first()


def create_user(session: Session, email: str, password: str, *, allowed_domain: str) -> User:
    """Register a GUEST account holding a fresh signup token."""

    email = normalize_email(email)
    if not email or not password or not isinstance(password, str):
        raise InvalidRequestError("Email and password are required.")
    if not is_institutional_email(email, allowed_domain):
        raise InvalidRequestError(f"Only @{allowed_domain} addresses can sign up.")
    if find_user_by_email(session, email) is not None:
        raise ConflictError("A user with that email already exists.")

    user = User(id=new_uuid(), email=email, role="GUEST", is_logout=False)
    user.set_password(password)
    user.token = make_signup_token(user.id)
    session.add(user)
    session.commit()
    return user


def confirm_signup(session: Session, user_id: str, token: str | None) -> User:
    """Promote a GUEST to USER if ``token`` is the one mailed to them."""

    if not token or not isinstance(token, str):
        raise InvalidRequestError("token is required.")
    try:
        token_user_id = decode_signup_token(token)
    except SignupTokenError as exc:
        raise PermissionDeniedError(str(exc))
    if token_user_id != user_id:
        raise PermissionDeniedError("Token does not belong to this user.")

    user = session.get(User, user_id)
    if user is None or user.role != "GUEST" or user.token != token:
        raise NotFoundError("No pending signup for this user.")

    user.role = "USER"
    user.token = None
    session.commit()
    return user


def authenticate(session: Session, email: str, password: str) -> User:
    """Check credentials and mark the user as logged in."""

    email = normalize_email(email)
    if not email or not password or not isinstance(password, str):
        raise InvalidRequestError("Email and password are required.")

    user = find_user_by_email(session, email)
    if user is None:
        raise NotFoundError("No user with that email.")
    if not user.check_password(password):
        raise PermissionDeniedError("Password does not match.")

    user.is_logout = False
    session.commit()
    return user


def logout_user(session: Session, user: User) -> None:
    user.is_logout = True
    session.commit()


def delete_user(session: Session, user: User) -> None:
    """Remove an account.

    Hosted studies, applications, flags and notifications go with it;
    authored comments stay but lose their author.
    """
    for study in user.bookmarked_studies.all():
        study.bookmark_count = max(study.bookmark_count - 1, 0)
    for application in user.applications.filter_by(is_accepted=True).all():
        study = application.study
        if study.host_id != user.id:
            study.members_count = max(study.members_count - 1, 0)
            study.sync_vacancy()
    session.delete(user)
    session.commit()


def request_password_reset(session: Session, email: str | None) -> User:
    """Issue a new one-time token for ``email`` and return the user."""

    if not normalize_email(email):
        raise InvalidRequestError("email is required.")
    user = find_user_by_email(session, email)
    if user is None:
        raise NotFoundError("No user with that email.")

    user.token = make_signup_token(user.id)
    session.commit()
    return user


def reset_password(session: Session, token: str, email: str | None, new_password: str | None) -> User:
    if not normalize_email(email) or not new_password or not isinstance(new_password, str):
        raise InvalidRequestError("email and password are required.")

    user = session.query(User).filter(User.token == token).first()
    if user is None:
        raise NotFoundError("No user holds this token.")
    try:
        token_user_id = decode_signup_token(token)
    except SignupTokenError as exc:
        raise PermissionDeniedError(str(exc))
    if token_user_id != user.id or normalize_email(email) != user.email:
        raise PermissionDeniedError("Token verification failed.")

    user.set_password(new_password)
    user.token = None
    session.commit()
    return user
