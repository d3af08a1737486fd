"""Administrator notices."""

from __future__ import annotations

from sqlalchemy.orm import Session

from models import Notice, User
from utils.errors import InvalidRequestError, NotFoundError
from utils.pagination import paginate

NOTICE_FIELDS = ("title", "about")


def _validate(data: dict, *, partial: bool) -> dict:
    unknown = sorted(set(data) - set(NOTICE_FIELDS))
    if unknown:
        raise InvalidRequestError(f"Unknown fields: {', '.join(unknown)}.")
    values = {}
    for key in NOTICE_FIELDS:
        if key not in data:
            if not partial:
                raise InvalidRequestError(f"{key} is required.")
            continue
        if not isinstance(data[key], str) or not data[key].strip():
            raise InvalidRequestError(f"{key} must be a non-empty string.")
        values[key] = data[key]
    return values


def get_notice(session: Session, notice_id: str) -> Notice:
    notice = session.get(Notice, notice_id)
    if notice is None:
        raise NotFoundError("Notice not found.")
    return notice


def view_notice(session: Session, notice_id: str) -> Notice:
    notice = get_notice(session, notice_id)
    notice.views = (notice.views or 0) + 1
    session.commit()
    return notice


def list_notices(session: Session, page_no: int, limit: int):
    query = session.query(Notice).order_by(Notice.created_at.desc())
    return paginate(query, page_no, limit)


def create_notice(session: Session, admin: User, data: dict) -> Notice:
    values = _validate(data, partial=False)
    notice = Notice(host_id=admin.id, **values)
    session.add(notice)
    session.commit()
    return notice


def update_notice(session: Session, notice_id: str, data: dict) -> Notice:
    values = _validate(data, partial=True)
    notice = get_notice(session, notice_id)
    for key, value in values.items():
        setattr(notice, key, value)
    session.commit()
    return notice


def delete_notice(session: Session, notice_id: str) -> None:
    session.delete(get_notice(session, notice_id))
    session.commit()
