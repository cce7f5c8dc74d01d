from datetime import timezone

from dateutil.parser import parse
from flask import abort, request


def as_utc(ts):
    """Naive timestamps are stored as UTC."""
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


def _client_timestamp():
    header = request.headers.get("If-Unmodified-Since")
    if not header:
        return None

    try:
        return as_utc(parse(header))
    except (ValueError, OverflowError):
        abort(400, description="Invalid If-Unmodified-Since header")


def enforce_optimistic_lock(entity):
    """
    Abort with 409 when ``entity`` changed after the client's
    If-Unmodified-Since instant. Requests without the header always pass.
    """
    client_ts = _client_timestamp()
    if client_ts is None or entity.updated_at is None:
        return

    # HTTP dates carry whole seconds only
    server_ts = as_utc(entity.updated_at).replace(microsecond=0)
    if server_ts > client_ts:
        abort(409, description="Conflict detected. Resource has been modified.")
