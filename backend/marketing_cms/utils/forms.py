# marketing_cms/utils/forms.py
from __future__ import annotations

import re
import time
from typing import Any, Dict, Iterable, Optional

from flask import request

from marketing_cms.errors import ValidationError

TRUE_VALUES = {"1", "true", "yes", "on"}


def request_data() -> Dict[str, Any]:
    """
    Body fields from either a JSON or a form-encoded/multipart request.
    """
    if request.is_json:
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else {}
    return request.form.to_dict()


def to_int(value: Any, default: Optional[int] = None) -> Optional[int]:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def to_bool(value: Any, default: bool = True) -> bool:
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in TRUE_VALUES


def blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def pick(data: Dict[str, Any], fields: Iterable[str]) -> Dict[str, Any]:
    """
    Fields the client actually sent.

    Absent keys are left out so partial updates keep existing values;
    empty strings become None so optional overrides can be cleared.
    Columns hold scalars only, so list and object values are rejected.
    """
    picked = {}
    for field in fields:
        if field not in data:
            continue
        value = data[field]
        if isinstance(value, (list, dict)):
            raise ValidationError(f"Invalid value for {field}")
        picked[field] = blank_to_none(value)
    return picked


def missing_fields(data: Dict[str, Any], required: Iterable[str]) -> list[str]:
    return [field for field in required if blank_to_none(data.get(field)) is None]


def slugify(title: Any) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", str(title or "").lower())
    return slug.strip("-")


def unique_slug(title: Any) -> str:
    base = slugify(title) or "post"
    return f"{base}-{int(time.time() * 1000)}"


def cleared_fields(fields: Dict[str, Any], required: Iterable[str]) -> list[str]:
    """Required fields an update is trying to blank out."""
    return [field for field in required if field in fields and fields[field] is None]
