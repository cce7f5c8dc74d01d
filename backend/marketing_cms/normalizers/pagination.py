# marketing_cms/normalizers/pagination.py
from typing import Callable, Any, List, Dict

from marketing_cms.utils.pagination import PageMeta


def normalize_pagination(
    items: List[Any],
    normalize_fn: Callable[[Any], Dict[str, Any]],
    meta: PageMeta,
    *,
    items_key: str = "data",
) -> Dict[str, Any]:
    """
    Normalize an offset-paginated list response.

    Shape:
    {
        "data": [...],
        "pagination": {page, limit, total, totalPages, hasNext, hasPrev}
    }
    """
    return {
        items_key: [normalize_fn(item) for item in items],
        "pagination": dict(meta),
    }
