"""Fixed-window request limiting for abuse-prone public endpoints.

Each scope (``login``, ``lead``, ``setup``, ``apply``) gets its own window table keyed
by client address. Tables live on ``app.extensions["rate_limiters"]`` so
every app instance, including each test app, starts from a clean slate.
"""

from __future__ import annotations

import math
import threading
import time
from functools import wraps

from flask import current_app, jsonify, request

DEFAULT_MESSAGES = {
    "login": "Too many login attempts from this IP, please try again after 15 minutes",
    "lead": "Too many form submissions from this IP, please try again later",
    "setup": "Too many setup attempts, please try again later",
    "apply": "Too many applications from this IP, please try again later",
}


class FixedWindowLimiter:
    def __init__(self, max_requests: int, window_seconds: float, sweep_threshold: int = 1024) -> None:
        self.max_requests = max(1, int(max_requests))
        self.window_seconds = float(window_seconds)
        # Expired windows are dropped once the table reaches this size
        self.sweep_threshold = max(1, int(sweep_threshold))
        # key -> (window_start_monotonic, count)
        self._buckets: dict[str, tuple[float, int]] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._buckets)

    def _sweep(self, now: float) -> None:
        expired = [
            key for key, (start, _) in self._buckets.items()
            if now - start >= self.window_seconds
        ]
        for key in expired:
            del self._buckets[key]

    def hit(self, key: str) -> tuple[bool, float]:
        """Count one request; return (allowed, seconds until the window resets)."""
        now = time.monotonic()
        with self._lock:
            if key not in self._buckets and len(self._buckets) >= self.sweep_threshold:
                self._sweep(now)

            start, count = self._buckets.get(key, (now, 0))
            if now - start >= self.window_seconds:
                start, count = now, 0
            retry_after = self.window_seconds - (now - start)
            if count >= self.max_requests:
                self._buckets[key] = (start, count)
                return False, retry_after
            self._buckets[key] = (start, count + 1)
            return True, retry_after


def get_limiter(scope: str) -> FixedWindowLimiter:
    limiters = current_app.extensions.setdefault("rate_limiters", {})
    limiter = limiters.get(scope)
    if limiter is None:
        max_requests, window_seconds = current_app.config["RATE_LIMITS"][scope]
        limiter = FixedWindowLimiter(max_requests, window_seconds)
        limiters[scope] = limiter
    return limiter


def rate_limit(scope: str, envelope: str = "error"):
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            if not current_app.config.get("RATE_LIMIT_ENABLED", True):
                return fn(*args, **kwargs)

            allowed, retry_after = get_limiter(scope).hit(request.remote_addr or "unknown")
            if not allowed:
                current_app.logger.warning(
                    "Rate limit exceeded scope=%s ip=%s", scope, request.remote_addr
                )
                message = DEFAULT_MESSAGES.get(scope, "Too many requests, please try again later")
                body = {"success": False, "error": message} if envelope == "success" else {"error": message}
                response = jsonify(body)
                response.status_code = 429
                response.headers["Retry-After"] = str(max(1, math.ceil(retry_after)))
                return response

            return fn(*args, **kwargs)
        return wrapper
    return decorator
