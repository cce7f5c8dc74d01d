# marketing_cms/utils/pagination.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, TypedDict

DEFAULT_LIMIT = 10
MAX_LIMIT = 100

# Largest offset a 64-bit SQL integer can hold
MAX_OFFSET = 2 ** 63 - 1


class PageMeta(TypedDict):
    """
    Offset pagination metadata.

    Explicit keys prevent contract drift across list endpoints.
    """
    page: int
    limit: int
    total: int
    totalPages: int
    hasNext: bool
    hasPrev: bool


@dataclass(frozen=True)
class PageRequest:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def _parse_int(raw: Any) -> Optional[int]:
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


def parse_page_request(
    args: Mapping[str, Any],
    *,
    default_limit: int = DEFAULT_LIMIT,
    max_limit: int = MAX_LIMIT,
) -> PageRequest:
    """
    Build a PageRequest from raw query parameters.

    Never raises:
    - missing, unparseable or zero values fall back to the defaults
    - page is clamped to >= 1 and low enough that the offset fits MAX_OFFSET
    - limit is clamped into [1, max_limit]
    """
    page = _parse_int(args.get("page")) or 1
    limit = _parse_int(args.get("limit")) or default_limit

    limit = min(max_limit, max(1, limit))
    page = min(max(1, page), MAX_OFFSET // limit)

    return PageRequest(page=page, limit=limit)


def page_meta(page: int, limit: int, total: int) -> PageMeta:
    total_pages = (total + limit - 1) // limit if total > 0 else 0

    return {
        "page": page,
        "limit": limit,
        "total": total,
        "totalPages": total_pages,
        "hasNext": page < total_pages,
        "hasPrev": page > 1,
    }
