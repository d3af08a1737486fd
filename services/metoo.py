"""Metoo flags on inquiry comments."""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models import Comment, Metoo, User
from services.comment import get_comment
from services.study import get_study
from utils.errors import ConflictError, NotFoundError


def register_metoo(session: Session, user: User, study_id: str, comment_id: str) -> Metoo:
    study = get_study(session, study_id)
    comment = get_comment(session, study, comment_id)
    if session.get(Metoo, (comment.id, user.id)) is not None:
        raise ConflictError("You already flagged this comment.")

    metoo = Metoo(comment_id=comment.id, user_id=user.id)
    session.add(metoo)
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        raise ConflictError("You already flagged this comment.")
    return metoo


def delete_metoo(session: Session, user: User, study_id: str, comment_id: str) -> Comment:
    study = get_study(session, study_id)
    comment = get_comment(session, study, comment_id)
    metoo = session.get(Metoo, (comment.id, user.id))
    if metoo is None:
        raise NotFoundError("You have not flagged this comment.")
    session.delete(metoo)
    session.commit()
    return comment


def count_metoos(session: Session, comment_id: str) -> int:
    return session.query(Metoo).filter(Metoo.comment_id == comment_id).count()
