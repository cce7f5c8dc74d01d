from sqlalchemy.exc import OperationalError

from marketing_cms.extensions import db


def test_health_ok(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.get_json() == {
        "status": "ok",
        "service": "marketing-cms",
        "database": "ok",
    }


def test_health_reports_database_failure(client, monkeypatch):
    def broken(*args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("database is locked"))

    monkeypatch.setattr(db.session, "execute", broken)

    response = client.get("/api/health")

    assert response.status_code == 503
    assert response.get_json()["database"] == "error"


def test_request_id_is_echoed(client):
    response = client.get("/api/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"

    generated = client.get("/api/health")
    assert generated.headers["X-Request-ID"]


def test_openapi_document_is_served(client):
    response = client.get("/openapi/site.yaml")

    assert response.status_code == 200
    assert b"openapi: 3.0.3" in response.data


def test_unknown_route_is_json(client):
    response = client.get("/api/does-not-exist")

    assert response.status_code == 404
    assert "error" in response.get_json()
