import re
from markupsafe import escape

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[A-Za-z]{2,}$")
SCRIPT_RE = re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE)
JS_PROTOCOL_RE = re.compile(r"javascript:", re.IGNORECASE)
EVENT_HANDLER_RE = re.compile(r"on\w+\s*=", re.IGNORECASE)


def sanitize_email(value):
    if not value or not isinstance(value, str):
        return None

    trimmed = value.strip().lower()
    if len(trimmed) > 254 or not EMAIL_RE.match(trimmed):
        return None
    return trimmed


def sanitize_text(value, max_length=10000):
    """Trim, cap and HTML-escape free text."""
    if not value or not isinstance(value, str):
        return ''
    return str(escape(value.strip()[:max_length]))


def sanitize_phone(value):
    if not value or not isinstance(value, str):
        return None

    cleaned = re.sub(r"[^\d+]", "", value)
    if len(cleaned.replace("+", "")) < 7:
        return None
    return cleaned


def sanitize_path(value):
    # Paths keep their slashes, so strip active content instead of escaping
    if not value or not isinstance(value, str):
        return None

    sanitized = value.strip()[:500]
    sanitized = SCRIPT_RE.sub("", sanitized)
    sanitized = JS_PROTOCOL_RE.sub("", sanitized)
    sanitized = EVENT_HANDLER_RE.sub("", sanitized)
    return sanitized
