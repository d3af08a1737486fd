"""Page/limit handling shared by the listing endpoints."""

from __future__ import annotations

import math

from flask import current_app
from werkzeug.exceptions import BadRequest


def parse_page_args(args) -> tuple[int, int]:
    """Return ``(page_no, limit)`` from query arguments."""

    default_limit = current_app.config.get("DEFAULT_PAGE_SIZE", 12)
    max_limit = current_app.config.get("MAX_PAGE_SIZE", 100)

    try:
        limit = int(args.get("limit", default_limit))
        page_no = int(args.get("pageNo", args.get("page", 1)))
    except (TypeError, ValueError):
        raise BadRequest("limit and pageNo must be integers.")

    if limit <= 0 or page_no <= 0:
        raise BadRequest("limit and pageNo must be greater than zero.")
    return page_no, min(limit, max_limit)


def page_count(total: int, limit: int) -> int:
    return math.ceil(total / limit) if total else 0


def paginate(query, page_no: int, limit: int):
    """Apply limit/offset to ``query`` and return ``(items, total, pages)``."""

    total = query.order_by(None).count()
    items = query.limit(limit).offset((page_no - 1) * limit).all()
    return items, total, page_count(total, limit)
