"""Database initialization and model exports."""

from datetime import datetime, timezone
import uuid

from flask_sqlalchemy import SQLAlchemy


db = SQLAlchemy()


def utcnow() -> datetime:
    """Naive UTC timestamp used for every DateTime column."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def new_uuid() -> str:
    return str(uuid.uuid4())


def isoformat(value):
    return value.isoformat() if value else None


# Import models to register them with SQLAlchemy metadata.
from .user import User  # noqa: E402,F401
from .user_profile import UserProfile  # noqa: E402,F401
from .category import Category  # noqa: E402,F401
from .study import Study, bookmarks  # noqa: E402,F401
from .study_user import StudyUser  # noqa: E402,F401
from .comment import Comment, Metoo  # noqa: E402,F401
from .notification import Notification  # noqa: E402,F401
from .notice import Notice  # noqa: E402,F401

__all__ = [
    "db",
    "User",
    "UserProfile",
    "Category",
    "Study",
    "bookmarks",
    "StudyUser",
    "Comment",
    "Metoo",
    "Notification",
    "Notice",
]
