# boxmfg/pagination.py
"""
Page-window arithmetic and the list envelope shared by every list endpoint.

Page and limit come straight from the query string. Anything unparseable,
missing or zero silently falls back to the defaults, and the limit is clamped
to [1, MAX_PAGE_SIZE]. Asking for a page past the end is not an error; it
just yields an empty page.
"""

import math
import re
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

from fastapi import Query
from sqlalchemy import Table

from boxmfg import config

DEFAULT_PAGE = 1
DEFAULT_SORT = "-createdAt"

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


@dataclass(frozen=True)
class PageWindow:
    current_page: int
    page_size: int
    total_pages: int
    skip: int
    has_next: bool
    has_prev: bool
    total: int


@dataclass(frozen=True)
class ListParams:
    page: Optional[int]
    limit: Optional[int]
    sort: str


def parse_int(value: Any) -> Optional[int]:
    """Leading-integer parse: "12abc" -> 12, "2.5" -> 2, "abc" -> None."""
    if value is None:
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    m = _INT_PREFIX.match(str(value))
    if not m:
        return None
    return int(m.group(1))


def compute_window(page: Any, limit: Any, total: int) -> PageWindow:
    current_page = max(1, parse_int(page) or DEFAULT_PAGE)
    page_size = max(1, min(config.MAX_PAGE_SIZE, parse_int(limit) or config.DEFAULT_PAGE_SIZE))
    total_pages = math.ceil(total / page_size)
    skip = (current_page - 1) * page_size

    return PageWindow(
        current_page=current_page,
        page_size=page_size,
        total_pages=total_pages,
        skip=skip,
        has_next=current_page < total_pages,
        has_prev=current_page > 1,
        total=total,
    )


def paginated_response(data: Sequence[Any], window: PageWindow) -> dict:
    return {
        "success": True,
        "data": list(data),
        "pagination": {
            "page": window.current_page,
            "limit": window.page_size,
            "total": window.total,
            "pages": window.total_pages,
            "has_next": window.has_next,
            "has_prev": window.has_prev,
        },
        "count": len(data),
    }


def list_params(
    page: Optional[str] = Query(default=None, description="Page number, 1-based"),
    limit: Optional[str] = Query(
        default=None,
        description="Items per page (default 10, max 100)",
    ),
    sort: Optional[str] = Query(
        default=DEFAULT_SORT,
        description="Field name, prefix with '-' for descending",
    ),
) -> ListParams:
    # Unparseable values become None and fall back to the defaults
    return ListParams(page=parse_int(page), limit=parse_int(limit), sort=sort or DEFAULT_SORT)


def _column_name(field: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", field).lower()


def order_by_clauses(table: Table, sort: Optional[str]) -> List:
    """
    Translate "-createdAt" / "name" / "total_amount" into ORDER BY clauses.

    Unknown fields fall back to the default sort. The primary key is always
    appended so that equal sort keys still page deterministically.
    """
    sort = (sort or DEFAULT_SORT).strip()
    descending = sort.startswith("-")
    name = _column_name(sort.lstrip("-+"))

    column = table.c.get(name)
    if column is None:
        descending = True
        column = table.c.get("created_at")

    clauses = []
    if column is not None:
        clauses.append(column.desc() if descending else column.asc())
    clauses.append(table.c.id.desc() if descending else table.c.id.asc())
    return clauses
