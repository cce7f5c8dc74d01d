import pytest

from marketing_cms.utils.rate_limit import FixedWindowLimiter


@pytest.fixture
def limited_app(app):
    app.config["RATE_LIMIT_ENABLED"] = True
    app.config["RATE_LIMITS"] = dict(app.config["RATE_LIMITS"], lead=(2, 3600), login=(1, 900))
    return app


def test_limiter_counts_per_key():
    limiter = FixedWindowLimiter(2, 60)

    assert limiter.hit("1.1.1.1")[0] is True
    assert limiter.hit("1.1.1.1")[0] is True
    allowed, retry_after = limiter.hit("1.1.1.1")
    assert allowed is False
    assert 0 < retry_after <= 60
    assert limiter.hit("2.2.2.2")[0] is True


def test_limiter_window_resets(monkeypatch):
    clock = [1000.0]
    monkeypatch.setattr("marketing_cms.utils.rate_limit.time.monotonic", lambda: clock[0])
    limiter = FixedWindowLimiter(1, 10)

    assert limiter.hit("k")[0] is True
    assert limiter.hit("k")[0] is False
    clock[0] += 10
    assert limiter.hit("k")[0] is True


def test_expired_windows_are_swept(monkeypatch):
    clock = [0.0]
    monkeypatch.setattr("marketing_cms.utils.rate_limit.time.monotonic", lambda: clock[0])
    limiter = FixedWindowLimiter(5, 10, sweep_threshold=100)

    for i in range(10000):
        clock[0] += 10
        limiter.hit(f"client-{i}")

    assert len(limiter) <= 100


def test_sweep_keeps_live_windows(monkeypatch):
    clock = [0.0]
    monkeypatch.setattr("marketing_cms.utils.rate_limit.time.monotonic", lambda: clock[0])
    limiter = FixedWindowLimiter(1, 60, sweep_threshold=2)

    limiter.hit("old")
    clock[0] += 30
    limiter.hit("live")
    clock[0] += 31
    limiter.hit("new")

    assert len(limiter) == 2
    assert limiter.hit("live")[0] is False


def test_lead_submissions_are_limited(limited_app):
    client = limited_app.test_client()
    payload = {"name": "Maya", "email": "maya@example.com"}

    assert client.post("/api/leads", json=payload).status_code == 201
    assert client.post("/api/leads", json=payload).status_code == 201

    blocked = client.post("/api/leads", json=payload)
    assert blocked.status_code == 429
    assert blocked.get_json()["success"] is False
    assert int(blocked.headers["Retry-After"]) >= 1


def test_login_is_limited(limited_app):
    client = limited_app.test_client()
    credentials = {"username": "nobody", "password": "whatever"}

    assert client.post("/api/auth/login", json=credentials).status_code == 401
    blocked = client.post("/api/auth/login", json=credentials)
    assert blocked.status_code == 429
    assert "error" in blocked.get_json()


def test_windows_are_per_app(limited_app):
    client = limited_app.test_client()
    payload = {"name": "Maya", "email": "maya@example.com"}
    for _ in range(2):
        client.post("/api/leads", json=payload)

    assert "lead" in limited_app.extensions["rate_limiters"]
