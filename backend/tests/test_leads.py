from marketing_cms.extensions import db
from marketing_cms.models import Lead


def test_capture_lead_sanitizes_input(client, app):
    response = client.post("/api/leads", json={
        "name": "  <b>Maya</b>  ",
        "email": " Maya@Example.COM ",
        "phone": "+971 (50) 123-4567",
        "formType": "demo",
        "source": "/pricing<script>alert(1)</script>",
    })

    assert response.status_code == 201
    body = response.get_json()
    assert body["success"] is True
    assert body["message"] == "Lead captured successfully"

    with app.app_context():
        lead = db.session.get(Lead, body["leadId"])
        assert lead.name == "&lt;b&gt;Maya&lt;/b&gt;"
        assert lead.email == "maya@example.com"
        assert lead.phone == "+971501234567"
        assert lead.form_type == "demo"
        assert lead.source_page == "/pricing"


def test_missing_fields(client):
    response = client.post("/api/leads", json={"name": "No email"})

    assert response.status_code == 400
    assert response.get_json() == {"success": False, "error": "Name and email are required"}


def test_invalid_email(client):
    response = client.post("/api/leads", json={"name": "Maya", "email": "not-an-email"})

    assert response.status_code == 400
    assert response.get_json() == {"success": False, "error": "Invalid email address"}


def test_admin_list_and_lookup(client, make_row, admin_headers):
    for i in range(3):
        make_row(Lead, name=f"Lead {i}", email=f"lead{i}@example.com")

    body = client.get("/api/leads?limit=2", headers=admin_headers).get_json()

    assert body["success"] is True
    assert len(body["leads"]) == 2
    assert body["pagination"]["total"] == 3
    assert body["pagination"]["totalPages"] == 2

    lead_id = body["leads"][0]["id"]
    single = client.get(f"/api/leads/{lead_id}", headers=admin_headers).get_json()
    assert single["lead"]["id"] == lead_id


def test_admin_list_default_limit(client, admin_headers):
    body = client.get("/api/leads", headers=admin_headers).get_json()
    assert body["pagination"]["limit"] == 50


def test_stats(client, make_row, admin_headers):
    make_row(Lead, name="A", email="a@example.com", form_type="demo", source_page="/pricing")
    make_row(Lead, name="B", email="b@example.com", form_type="demo", source_page="/pricing")
    make_row(Lead, name="C", email="c@example.com")

    stats = client.get("/api/leads/stats", headers=admin_headers).get_json()["stats"]

    assert stats["total"] == 3
    assert {"form_type": "demo", "count": 2} in stats["byType"]
    assert stats["bySource"] == [{"source": "/pricing", "count": 2}]


def test_delete_unknown_lead(client, admin_headers):
    response = client.delete("/api/leads/9", headers=admin_headers)

    assert response.status_code == 404
    assert response.get_json() == {"success": False, "error": "Lead not found"}


def test_lead_list_requires_token(client):
    assert client.get("/api/leads").status_code == 401
