"""Utilities for validating incoming Flask requests."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable

from flask import Request
from werkzeug.exceptions import BadRequest


def parse_json_request(
    req: Request,
    *,
    required_keys: Iterable[str] | None = None,
    allow_empty: bool = False,
) -> dict:
    """Return the parsed JSON body or raise a 400 error."""

    if not req.is_json:
        if allow_empty and not req.content_length:
            return {}
        raise BadRequest("Request content type must be application/json.")

    data = req.get_json(silent=True)
    if data is None:
        raise BadRequest("Request JSON body is required.")

    if not isinstance(data, dict):
        raise BadRequest("Request JSON payload must be an object.")

    if not data and not allow_empty:
        raise BadRequest("Request JSON body must not be empty.")

    if required_keys:
        missing = [key for key in required_keys if data.get(key) in (None, "", [])]
        if missing:
            raise BadRequest(
                "Missing required fields: {}.".format(
                    ", ".join(sorted(missing))
                )
            )

    return data


def parse_bool(value):
    """Interpret common boolean spellings; ``None`` when unrecognised."""
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    lowered = str(value).strip().lower()
    if lowered in {"1", "true", "yes", "y"}:
        return True
    if lowered in {"0", "false", "no", "n"}:
        return False
    return None


def parse_datetime(value) -> datetime | None:
    """Parse an ISO 8601 timestamp into a naive UTC datetime."""
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def parse_string_set(value, allowed: Iterable[str]) -> list[str] | None:
    """Normalise a list or comma separated string against ``allowed``.

    Returns ``None`` if the value is empty or contains an unknown member.
    """
    if isinstance(value, str):
        items = [item.strip().lower() for item in value.split(",")]
    elif isinstance(value, (list, tuple)):
        items = [str(item).strip().lower() for item in value]
    else:
        return None

    items = [item for item in items if item]
    allowed = tuple(allowed)
    if not items or any(item not in allowed for item in items):
        return None
    # keep declaration order, drop duplicates
    return [option for option in allowed if option in items]
