"""User profile creation, lookup and updates."""

from __future__ import annotations

from sqlalchemy.orm import Session

from models import User, UserProfile
from utils.errors import (
    ConflictError,
    InvalidRequestError,
    NotFoundError,
    PermissionDeniedError,
)

# request key -> column
_TEXT_FIELDS = {
    "userName": "user_name",
    "dept": "dept",
    "bio": "bio",
    "userAbout": "user_about",
    "image": "image",
}
_BOOL_FIELDS = {
    "showDept": "show_dept",
    "showGrade": "show_grade",
    "onBreak": "on_break",
}


def find_profile(session: Session, user_id: str) -> UserProfile | None:
    return session.get(UserProfile, user_id)


def get_profile(session: Session, user_id: str) -> UserProfile:
    profile = find_profile(session, user_id)
    if profile is None:
        raise NotFoundError("No profile for that user.")
    return profile


def is_user_name_taken(session: Session, user_name: str, *, exclude_user_id: str | None = None) -> bool:
    query = session.query(UserProfile.user_id).filter(UserProfile.user_name == user_name)
    if exclude_user_id:
        query = query.filter(UserProfile.user_id != exclude_user_id)
    return query.first() is not None


def _apply_fields(profile: UserProfile, data: dict) -> None:
    for key, column in _TEXT_FIELDS.items():
        if key in data:
            value = data[key]
            if not isinstance(value, str):
                raise InvalidRequestError(f"{key} must be a string.")
            setattr(profile, column, value.strip() if key == "userName" else value)

    for key, column in _BOOL_FIELDS.items():
        if key in data:
            if not isinstance(data[key], bool):
                raise InvalidRequestError(f"{key} must be boolean.")
            setattr(profile, column, data[key])

    if "grade" in data:
        grade = data["grade"]
        if isinstance(grade, bool) or not isinstance(grade, int) or grade < 1:
            raise InvalidRequestError("grade must be a positive integer.")
        profile.grade = grade

    if "links" in data:
        links = data["links"]
        if not isinstance(links, list) or len(links) > 3:
            raise InvalidRequestError("links must be a list of at most three strings.")
        padded = [str(link or "") for link in links] + [""] * (3 - len(links))
        profile.link1, profile.link2, profile.link3 = padded
    for index in (1, 2, 3):
        key = f"link{index}"
        if key in data:
            setattr(profile, key, str(data[key] or ""))

    if "categories" in data:
        categories = data["categories"]
        if isinstance(categories, str):
            categories = [code for code in categories.split(",") if code]
        if not isinstance(categories, list):
            raise InvalidRequestError("categories must be a list.")
        profile.categories = ",".join(str(code) for code in categories)


def create_profile(session: Session, owner: User, user_id: str, data: dict) -> UserProfile:
    """Create the profile of ``user_id`` on behalf of ``owner``."""

    user = session.get(User, user_id)
    if user is None:
        raise NotFoundError("No user with that id.")
    if owner.id != user.id:
        raise PermissionDeniedError("You can only create your own profile.")
    if not user.is_verified:
        raise PermissionDeniedError("Verify your email before creating a profile.")
    if find_profile(session, user.id) is not None:
        raise ConflictError("Profile already exists.")

    user_name = (data.get("userName") or "").strip() if isinstance(data.get("userName"), str) else ""
    if not user_name or not data.get("dept"):
        raise InvalidRequestError("userName and dept are required.")
    if is_user_name_taken(session, user_name):
        raise ConflictError("That user name is already taken.")

    profile = UserProfile(user_id=user.id, email=user.email, user_name=user_name, dept="")
    _apply_fields(profile, data)
    session.add(profile)
    session.commit()
    return profile


def update_profile(session: Session, owner: User, user_id: str, data: dict) -> UserProfile:
    profile = get_profile(session, user_id)
    if owner.id != profile.user_id:
        raise PermissionDeniedError("You can only edit your own profile.")

    if "userName" in data:
        user_name = data["userName"].strip() if isinstance(data["userName"], str) else ""
        if not user_name:
            raise InvalidRequestError("userName must not be empty.")
        if is_user_name_taken(session, user_name, exclude_user_id=profile.user_id):
            raise ConflictError("That user name is already taken.")

    _apply_fields(profile, data)
    session.commit()
    return profile
