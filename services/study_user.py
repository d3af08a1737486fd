"""Join requests: apply, accept/reject, edit and withdraw."""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models import StudyUser, User, utcnow
from services.notification import build_notification
from services.study import get_study
from utils.errors import (
    ConflictError,
    InvalidRequestError,
    NotFoundError,
    PermissionDeniedError,
)


def _require_temp_bio(temp_bio) -> str:
    if not isinstance(temp_bio, str) or not temp_bio.strip():
        raise InvalidRequestError("tempBio is required.")
    return temp_bio


def find_application(session: Session, study_id: str, user_id: str) -> StudyUser | None:
    return session.get(StudyUser, (study_id, user_id))


def _get_application(session: Session, study_id: str, user_id: str) -> StudyUser:
    application = find_application(session, study_id, user_id)
    if application is None:
        raise NotFoundError("No join request for this study.")
    return application


def join_study(session: Session, user: User, study_id: str, temp_bio) -> StudyUser:
    """Create a pending join request and notify the host in one commit."""

    temp_bio = _require_temp_bio(temp_bio)
    study = get_study(session, study_id)
    if study.host_id == user.id:
        raise InvalidRequestError("The host cannot join their own study.")
    if not study.is_open or study.due_date < utcnow():
        raise InvalidRequestError("This study is no longer accepting applicants.")
    if find_application(session, study.id, user.id) is not None:
        raise ConflictError("You have already applied to this study.")

    application = StudyUser(study_id=study.id, user_id=user.id, temp_bio=temp_bio, is_accepted=False)
    session.add(application)
    build_notification(session, study.host_id, study, "NEW_APPLY")
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        raise ConflictError("You have already applied to this study.")
    return application


def list_members(session: Session, user: User, study_id: str) -> list[StudyUser]:
    """The host sees every applicant; everyone else sees accepted members."""

    study = get_study(session, study_id)
    query = session.query(StudyUser).filter(StudyUser.study_id == study.id)
    if study.host_id != user.id:
        query = query.filter(StudyUser.is_accepted.is_(True))
    return query.order_by(StudyUser.created_at.asc()).all()


def set_acceptance(session: Session, user: User, study_id: str, applicant_id: str, accept: bool) -> StudyUser:
    study = get_study(session, study_id)
    if study.host_id != user.id:
        raise PermissionDeniedError("Only the host can accept or reject applicants.")
    application = _get_application(session, study.id, applicant_id)

    if accept and not application.is_accepted:
        if study.members_count >= study.capacity:
            raise InvalidRequestError("This study is already full.")
        study.members_count += 1
    elif not accept and application.is_accepted:
        study.members_count = max(study.members_count - 1, 0)
    application.is_accepted = accept
    study.sync_vacancy()

    build_notification(session, application.user_id, study, "ACCEPTED" if accept else "REJECTED")
    session.commit()
    return application


def update_temp_bio(session: Session, user: User, study_id: str, temp_bio) -> StudyUser:
    temp_bio = _require_temp_bio(temp_bio)
    application = _get_application(session, study_id, user.id)
    application.temp_bio = temp_bio
    session.commit()
    return application


def withdraw(session: Session, user: User, study_id: str) -> None:
    application = _get_application(session, study_id, user.id)
    if application.is_accepted:
        study = application.study
        study.members_count = max(study.members_count - 1, 0)
        study.sync_vacancy()
    session.delete(application)
    session.commit()


def list_applied(session: Session, user: User) -> list[StudyUser]:
    return (
        session.query(StudyUser)
        .filter(StudyUser.user_id == user.id)
        .order_by(StudyUser.created_at.desc())
        .all()
    )
