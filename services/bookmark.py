"""Bookmarks between users and studies."""

from __future__ import annotations

from sqlalchemy.orm import Session

from models import Study, User, bookmarks
from services.study import get_study
from utils.errors import ConflictError, NotFoundError


def is_bookmarked(session: Session, user: User, study: Study) -> bool:
    row = session.execute(
        bookmarks.select().where(
            bookmarks.c.user_id == user.id, bookmarks.c.study_id == study.id
        )
    ).first()
    return row is not None


def add_bookmark(session: Session, user: User, study_id: str) -> Study:
    study = get_study(session, study_id)
    if is_bookmarked(session, user, study):
        raise ConflictError("Study is already bookmarked.")
    session.execute(bookmarks.insert().values(user_id=user.id, study_id=study.id))
    study.bookmark_count = (study.bookmark_count or 0) + 1
    session.commit()
    return study


def remove_bookmark(session: Session, user: User, study_id: str) -> Study:
    study = get_study(session, study_id)
    if not is_bookmarked(session, user, study):
        raise NotFoundError("Study is not bookmarked.")
    session.execute(
        bookmarks.delete().where(
            bookmarks.c.user_id == user.id, bookmarks.c.study_id == study.id
        )
    )
    study.bookmark_count = max((study.bookmark_count or 0) - 1, 0)
    session.commit()
    return study


def list_bookmarked_studies(session: Session, user: User) -> list[Study]:
    return (
        session.query(Study)
        .join(bookmarks, bookmarks.c.study_id == Study.id)
        .filter(bookmarks.c.user_id == user.id)
        .order_by(Study.created_at.desc())
        .all()
    )
