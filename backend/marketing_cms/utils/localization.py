# marketing_cms/utils/localization.py
from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Optional

DEFAULT_LANGUAGE = "en"
SUPPORTED_LANGUAGES = ("en", "ar", "es", "pt")


def resolve_language(lang: Optional[str]) -> str:
    """
    Normalize a requested language tag.

    Anything outside SUPPORTED_LANGUAGES resolves to the base language.
    """
    if not lang:
        return DEFAULT_LANGUAGE

    lang = lang.strip().lower()
    return lang if lang in SUPPORTED_LANGUAGES else DEFAULT_LANGUAGE


def localize(
    row: Mapping[str, Any],
    fields: Iterable[str],
    lang: Optional[str],
    *,
    base_suffix: Optional[str] = DEFAULT_LANGUAGE,
) -> Dict[str, Any]:
    """
    Return a shallow copy of ``row`` with each localizable field resolved
    for ``lang``.

    Column conventions:
    - base_suffix="en": base value in ``<field>_en``, overrides in ``<field>_<lang>``
    - base_suffix=None: base value in ``<field>``, overrides in ``<field>_<lang>``

    Each field falls back to the base value independently when its override
    is missing or empty, so a row may come back in mixed languages.
    """
    lang = resolve_language(lang)
    data = dict(row)

    for field in fields:
        base_key = f"{field}_{base_suffix}" if base_suffix else field
        value = row.get(base_key)

        if lang != DEFAULT_LANGUAGE:
            override = row.get(f"{field}_{lang}")
            if override not in (None, ""):
                value = override

        data[field] = value

    return data
