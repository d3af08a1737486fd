"""Notifications delivered to users about activity on their studies."""

from __future__ import annotations

from sqlalchemy.orm import Session

from models import Notification, Study, User
from utils.errors import NotFoundError

_MESSAGES = {
    "NEW_COMMENT": ("New inquiry", "A new comment was posted on \"{title}\"."),
    "NEW_REPLY": ("New reply", "Someone replied to your comment on \"{title}\"."),
    "NEW_APPLY": ("New applicant", "A new member applied to \"{title}\"."),
    "ACCEPTED": ("Application accepted", "You were accepted to \"{title}\"."),
    "REJECTED": ("Application declined", "Your application to \"{title}\" was declined."),
}


def build_notification(session: Session, user_id: str | None, study: Study, kind: str) -> Notification | None:
    """Stage a notification in ``session`` without committing.

    Callers commit it together with the write that triggered it.
    """
    if not user_id:
        return None
    title, about = _MESSAGES[kind]
    notification = Notification(
        user_id=user_id,
        study_id=study.id,
        title=title,
        about=about.format(title=study.title)[:255],
        type=kind,
    )
    session.add(notification)
    return notification


def list_notifications(session: Session, user: User) -> list[Notification]:
    return (
        session.query(Notification)
        .filter(Notification.user_id == user.id)
        .order_by(Notification.created_at.desc(), Notification.id.desc())
        .all()
    )


def _owned_notification(session: Session, user: User, notification_id: int) -> Notification:
    notification = session.get(Notification, notification_id)
    if notification is None or notification.user_id != user.id:
        raise NotFoundError("Notification not found.")
    return notification


def mark_read(session: Session, user: User, notification_id: int) -> Notification:
    notification = _owned_notification(session, user, notification_id)
    notification.is_read = True
    session.commit()
    return notification


def delete_notification(session: Session, user: User, notification_id: int) -> None:
    session.delete(_owned_notification(session, user, notification_id))
    session.commit()
