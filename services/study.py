"""Study listing CRUD, search and filtering."""

from __future__ import annotations

from sqlalchemy import or_
from sqlalchemy.orm import Session

from models import Category, Study, User
from models.study import FREQUENCIES, LOCATIONS, WEEKDAYS
from utils.errors import InvalidRequestError, NotFoundError, PermissionDeniedError
from utils.pagination import paginate
from utils.request_validation import parse_bool, parse_datetime, parse_string_set

REQUIRED_FIELDS = (
    "title",
    "studyAbout",
    "weekday",
    "frequency",
    "location",
    "capacity",
    "categoryCode",
    "dueDate",
)
MUTABLE_FIELDS = REQUIRED_FIELDS + ("isOpen",)

SORT_OPTIONS = {
    "-createdAt": (Study.created_at.desc(),),
    "+createdAt": (Study.created_at.asc(),),
    "createdAt": (Study.created_at.asc(),),
    "-views": (Study.views.desc(), Study.created_at.desc()),
    "-bookmarkCount": (Study.bookmark_count.desc(), Study.created_at.desc()),
}
DEFAULT_SORT = "-createdAt"


def _positive_int(value, field: str) -> int:
    if isinstance(value, bool):
        raise InvalidRequestError(f"{field} must be an integer.")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise InvalidRequestError(f"{field} must be an integer.")
    if number <= 0:
        raise InvalidRequestError(f"{field} must be greater than zero.")
    return number


def validate_study_fields(session: Session, data: dict, *, partial: bool = False) -> dict:
    """Check a create/update payload and return column values.

    Unknown keys are rejected so that read-only fields such as
    ``createdAt`` or ``views`` cannot be written through the API.
    """

    errors = []
    unknown = sorted(set(data) - set(MUTABLE_FIELDS))
    if unknown:
        raise InvalidRequestError(f"Unknown or read-only fields: {', '.join(unknown)}.")

    if not partial:
        missing = [key for key in REQUIRED_FIELDS if data.get(key) in (None, "", [])]
        if missing:
            raise InvalidRequestError(f"Missing required fields: {', '.join(missing)}.")

    values: dict = {}
    for key, column in (("title", "title"), ("studyAbout", "study_about")):
        if key in data:
            if not isinstance(data[key], str) or not data[key].strip():
                errors.append(f"{key} must be a non-empty string")
            else:
                values[column] = data[key].strip() if key == "title" else data[key]

    if "weekday" in data:
        weekdays = parse_string_set(data["weekday"], WEEKDAYS)
        if weekdays is None:
            errors.append(f"weekday must be a subset of {', '.join(WEEKDAYS)}")
        else:
            values["weekdays"] = weekdays

    if "location" in data:
        locations = parse_string_set(data["location"], LOCATIONS)
        if locations is None:
            errors.append(f"location must be a subset of {', '.join(LOCATIONS)}")
        else:
            values["locations"] = locations

    if "frequency" in data:
        if data["frequency"] not in FREQUENCIES:
            errors.append(f"frequency must be one of {', '.join(FREQUENCIES)}")
        else:
            values["frequency"] = data["frequency"]

    if "dueDate" in data:
        due_date = parse_datetime(data["dueDate"])
        if due_date is None:
            errors.append("dueDate must be ISO 8601 format")
        else:
            values["due_date"] = due_date

    if "isOpen" in data:
        if not isinstance(data["isOpen"], bool):
            errors.append("isOpen must be boolean")
        else:
            values["is_open"] = data["isOpen"]

    if errors:
        raise InvalidRequestError("; ".join(errors))

    if "capacity" in data:
        values["capacity"] = _positive_int(data["capacity"], "capacity")
    if "categoryCode" in data:
        code = _positive_int(data["categoryCode"], "categoryCode")
        if session.get(Category, code) is None:
            raise InvalidRequestError("Unknown categoryCode.")
        values["category_code"] = code
    return values


def find_study(session: Session, study_id: str) -> Study | None:
    return session.get(Study, study_id)


def get_study(session: Session, study_id: str) -> Study:
    study = find_study(session, study_id)
    if study is None:
        raise NotFoundError("Study not found.")
    return study


def create_study(session: Session, host: User, data: dict) -> Study:
    values = validate_study_fields(session, data)
    study = Study(host_id=host.id, members_count=0, views=0, bookmark_count=0)
    for column, value in values.items():
        setattr(study, column, value)
    study.sync_vacancy()
    if "is_open" not in values:
        study.is_open = study.vacancy > 0
    session.add(study)
    session.commit()
    return study


def view_study(session: Session, study_id: str) -> Study:
    """Fetch a study for display and count the view."""

    study = get_study(session, study_id)
    study.views = (study.views or 0) + 1
    session.commit()
    return study


def update_study(session: Session, user: User, study_id: str, data: dict) -> Study:
    values = validate_study_fields(session, data, partial=True)
    study = get_study(session, study_id)
    if study.host_id != user.id:
        raise PermissionDeniedError("Only the host can edit this study.")

    capacity = values.get("capacity", study.capacity)
    if capacity < study.members_count:
        raise InvalidRequestError("capacity cannot be lower than the current member count.")

    for column, value in values.items():
        setattr(study, column, value)
    study.sync_vacancy()
    session.commit()
    return study


def delete_study(session: Session, user: User, study_id: str) -> None:
    study = get_study(session, study_id)
    if study.host_id != user.id:
        raise PermissionDeniedError("Only the host can delete this study.")
    session.delete(study)
    session.commit()


def _csv_filter(args, key: str, allowed):
    raw = args.get(key)
    if raw in (None, ""):
        return None
    values = parse_string_set(raw, allowed)
    if values is None:
        raise InvalidRequestError(f"{key} must be a subset of {', '.join(allowed)}.")
    return values


def list_studies(session: Session, args, page_no: int, limit: int):
    """Return ``(studies, total, pages)`` for the listing query ``args``."""

    query = session.query(Study)

    category_code = args.get("categoryCode")
    if category_code not in (None, ""):
        query = query.filter(Study.category_code == _positive_int(category_code, "categoryCode"))

    frequency = args.get("frequency")
    if frequency not in (None, ""):
        if frequency not in FREQUENCIES:
            raise InvalidRequestError(f"frequency must be one of {', '.join(FREQUENCIES)}.")
        query = query.filter(Study.frequency == frequency)

    weekdays = _csv_filter(args, "weekday", WEEKDAYS)
    if weekdays:
        query = query.filter(_any_of(Study.weekday, weekdays))

    locations = _csv_filter(args, "location", LOCATIONS)
    if locations:
        query = query.filter(_any_of(Study.location, locations))

    if parse_bool(args.get("hideCloseTag")):
        query = Study.open_filter(query)

    # "+" arrives as a space when the query string is not percent-encoded
    sort = (args.get("sort") or DEFAULT_SORT).strip()
    if sort not in SORT_OPTIONS:
        raise InvalidRequestError(f"sort must be one of {', '.join(SORT_OPTIONS)}.")
    query = query.order_by(*SORT_OPTIONS[sort])

    return paginate(query, page_no, limit)


def _any_of(column, values):
    return or_(*(Study.set_contains(column, value) for value in values))
