"""Threaded inquiry comments under a study.

Comments are one level deep: a reply must point at a top-level comment on
the same study. Deleting a comment that still has replies keeps it in the
thread as a tombstone; a comment without replies is removed, and a
tombstoned parent left with no replies goes with it.
"""

from __future__ import annotations

from sqlalchemy import func
from sqlalchemy.orm import Session

from models import Comment, Metoo, Study, User
from services.notification import build_notification
from services.study import get_study
from utils.errors import InvalidRequestError, NotFoundError, PermissionDeniedError


def _require_content(content) -> str:
    if not isinstance(content, str) or not content.strip():
        raise InvalidRequestError("content is required.")
    return content


def get_comment(session: Session, study: Study, comment_id: str) -> Comment:
    comment = session.get(Comment, comment_id)
    if comment is None or comment.study_id != study.id:
        raise NotFoundError("Comment not found.")
    return comment


def list_comments(session: Session, study_id: str, viewer: User | None = None) -> list[dict]:
    """Return top-level comments with nested replies and metoo annotations."""

    study = get_study(session, study_id)
    comments = (
        session.query(Comment)
        .filter(Comment.study_id == study.id)
        .order_by(Comment.created_at.asc())
        .all()
    )
    ids = [comment.id for comment in comments]

    counts = dict(
        session.query(Metoo.comment_id, func.count(Metoo.user_id))
        .filter(Metoo.comment_id.in_(ids))
        .group_by(Metoo.comment_id)
        .all()
    ) if ids else {}

    flagged = set()
    if viewer is not None and ids:
        flagged = {
            comment_id
            for (comment_id,) in session.query(Metoo.comment_id).filter(
                Metoo.comment_id.in_(ids), Metoo.user_id == viewer.id
            )
        }

    def serialize(comment: Comment) -> dict:
        payload = comment.to_dict()
        payload["metoo"] = comment.id in flagged
        payload["metooCount"] = counts.get(comment.id, 0)
        return payload

    threads = []
    by_id = {}
    for comment in comments:
        if comment.parent_id is None:
            payload = serialize(comment)
            payload["replies"] = []
            by_id[comment.id] = payload
            threads.append(payload)
    for comment in comments:
        parent = by_id.get(comment.parent_id)
        if parent is not None:
            parent["replies"].append(serialize(comment))
    return threads


def create_comment(session: Session, user: User, study_id: str, content, reply_to: str | None = None) -> Comment:
    content = _require_content(content)
    study = get_study(session, study_id)

    parent = None
    if reply_to is not None and not isinstance(reply_to, str):
        raise InvalidRequestError("replyTo must be a comment id.")
    if reply_to:
        parent = get_comment(session, study, reply_to)
        if parent.parent_id is not None:
            raise InvalidRequestError("Replies can only be made to top-level comments.")

    comment = Comment(study_id=study.id, user_id=user.id, parent_id=parent.id if parent else None, content=content)
    session.add(comment)

    if parent is not None and parent.user_id:
        recipient, kind = parent.user_id, "NEW_REPLY"
    else:
        recipient, kind = study.host_id, "NEW_COMMENT"
    if recipient != user.id:
        build_notification(session, recipient, study, kind)

    session.commit()
    return comment


def update_comment(session: Session, user: User, study_id: str, comment_id: str, content) -> Comment:
    content = _require_content(content)
    study = get_study(session, study_id)
    comment = get_comment(session, study, comment_id)
    if comment.is_deleted or comment.user_id != user.id:
        raise PermissionDeniedError("Only the author can edit this comment.")
    comment.content = content
    session.commit()
    return comment


def delete_comment(session: Session, user: User, study_id: str, comment_id: str) -> bool:
    """Delete or tombstone a comment. Returns ``True`` when rows were removed."""

    study = get_study(session, study_id)
    comment = get_comment(session, study, comment_id)
    if user.id not in (comment.user_id, study.host_id):
        raise PermissionDeniedError("Only the author or the host can delete this comment.")

    if comment.replies:
        comment.tombstone()
        session.commit()
        return False

    parent = comment.parent
    if parent is not None:
        parent.replies.remove(comment)
        if parent.is_deleted and not parent.replies:
            session.delete(parent)
    else:
        session.delete(comment)
    session.commit()
    return True
