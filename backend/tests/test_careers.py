import io
import os

from marketing_cms.extensions import db
from marketing_cms.models import JobApplication, JobListing


def _listing(make_row, title, status="active", **fields):
    fields.setdefault("department", "Engineering")
    fields.setdefault("location", "Dubai")
    return make_row(JobListing, title=title, status=status, **fields)


def _application(make_row, **fields):
    fields.setdefault("first_name", "Lina")
    fields.setdefault("last_name", "Haddad")
    fields.setdefault("email", "lina@example.com")
    return make_row(JobApplication, **fields)


# ------------------------
# Public listings
# ------------------------

def test_public_list_is_plain_array_of_active_listings(client, make_row):
    _listing(make_row, "Backend Engineer")
    _listing(make_row, "Closed Role", status="inactive")

    body = client.get("/api/careers").get_json()

    assert isinstance(body, list)
    assert [item["title"] for item in body] == ["Backend Engineer"]
    assert body[0]["type"] == "Full-time"


def test_inactive_listing_is_not_public(client, make_row):
    listing_id = _listing(make_row, "Hidden", status="inactive")

    response = client.get(f"/api/careers/{listing_id}")

    assert response.status_code == 404
    assert response.get_json() == {"error": "Job listing not found"}


# ------------------------
# Applications
# ------------------------

def test_apply_with_cv(client, app):
    response = client.post(
        "/api/careers/apply",
        data={
            "firstName": "Omar",
            "lastName": "Saleh",
            "email": "Omar@Example.com",
            "expertise": "<b>Kitchens</b>",
            "cv": (io.BytesIO(b"%PDF-1.4"), "omar.pdf"),
        },
        content_type="multipart/form-data",
    )

    assert response.status_code == 201
    body = response.get_json()
    assert body["success"] is True
    assert body["message"] == "Application submitted successfully"

    with app.app_context():
        application = db.session.get(JobApplication, body["applicationId"])
        assert application.email == "omar@example.com"
        assert application.expertise == "&lt;b&gt;Kitchens&lt;/b&gt;"
        assert application.status == "new"
        assert application.cv_path.startswith("/uploads/applications/cv-")
        assert application.cv_path.endswith(".pdf")
        cv_path = application.cv_path

    assert client.get(cv_path).status_code == 200


def test_apply_accepts_snake_case_json(client):
    response = client.post(
        "/api/careers/apply",
        json={"first_name": "Omar", "last_name": "Saleh", "email": "omar@example.com"},
    )

    assert response.status_code == 201


def test_apply_requires_names_and_email(client):
    response = client.post("/api/careers/apply", json={"firstName": "Omar", "email": "omar@example.com"})

    assert response.status_code == 400
    assert response.get_json() == {
        "success": False,
        "error": "First name, last name, and email are required",
    }


def test_apply_rejects_invalid_email(client):
    response = client.post(
        "/api/careers/apply",
        json={"firstName": "Omar", "lastName": "Saleh", "email": "not-an-email"},
    )

    assert response.status_code == 400
    assert response.get_json()["error"] == "Invalid email address"


def test_apply_rejects_non_document_cv(client, app):
    response = client.post(
        "/api/careers/apply",
        data={
            "firstName": "Omar",
            "lastName": "Saleh",
            "email": "omar@example.com",
            "cv": (io.BytesIO(b"MZ"), "cv.exe"),
        },
        content_type="multipart/form-data",
    )

    assert response.status_code == 400
    assert response.get_json() == {"error": "Only document files (DOC, DOCX, PDF) are allowed"}
    with app.app_context():
        assert db.session.query(JobApplication).count() == 0


def test_admin_lists_applications_by_status(client, make_row, admin_headers):
    _application(make_row, status="new")
    _application(make_row, first_name="Sami", status="hired")

    body = client.get("/api/careers/applications?status=hired", headers=admin_headers).get_json()

    assert [item["first_name"] for item in body["data"]] == ["Sami"]
    assert body["pagination"]["total"] == 1


def test_update_application_status(client, make_row, admin_headers):
    application_id = _application(make_row)

    response = client.put(
        f"/api/careers/applications/{application_id}",
        json={"status": "reviewed"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert response.get_json()["application"]["status"] == "reviewed"

    invalid = client.put(
        f"/api/careers/applications/{application_id}",
        json={"status": "maybe"},
        headers=admin_headers,
    )
    assert invalid.status_code == 400

    missing = client.put("/api/careers/applications/999", json={"status": "hired"}, headers=admin_headers)
    assert missing.status_code == 404


def test_delete_application_removes_cv(client, app, admin_headers):
    application_id = client.post(
        "/api/careers/apply",
        data={
            "firstName": "Omar",
            "lastName": "Saleh",
            "email": "omar@example.com",
            "cv": (io.BytesIO(b"%PDF-1.4"), "omar.pdf"),
        },
        content_type="multipart/form-data",
    ).get_json()["applicationId"]

    response = client.delete(f"/api/careers/applications/{application_id}", headers=admin_headers)

    assert response.status_code == 200
    assert response.get_json()["success"] is True
    assert os.listdir(os.path.join(app.config["UPLOAD_FOLDER"], "applications")) == []

    again = client.delete(f"/api/careers/applications/{application_id}", headers=admin_headers)
    assert again.status_code == 404
    assert again.get_json() == {"success": False, "error": "Application not found"}


def test_applications_require_admin(client):
    assert client.get("/api/careers/applications").status_code == 401


# ------------------------
# Admin listings
# ------------------------

def test_admin_create_listing_defaults(client, admin_headers):
    response = client.post(
        "/api/careers/admin/create",
        json={"title": "Support Lead", "department": "Support", "location": "Riyadh", "type": ""},
        headers=admin_headers,
    )

    assert response.status_code == 201
    listing = response.get_json()
    assert listing["type"] == "Full-time"
    assert listing["status"] == "active"


def test_admin_create_requires_title_department_location(client, admin_headers):
    response = client.post(
        "/api/careers/admin/create",
        json={"title": "No place"},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert response.get_json() == {"error": "Title, department, and location are required"}


def test_admin_update_is_partial(client, make_row, admin_headers):
    listing_id = _listing(make_row, "Designer", description="Draws things")

    response = client.put(
        f"/api/careers/admin/{listing_id}",
        json={"status": "inactive"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    listing = response.get_json()
    assert listing["status"] == "inactive"
    assert listing["description"] == "Draws things"


def test_admin_update_rejects_unknown_status(client, make_row, admin_headers):
    listing_id = _listing(make_row, "Designer")

    response = client.put(
        f"/api/careers/admin/{listing_id}",
        json={"status": "archived"},
        headers=admin_headers,
    )

    assert response.status_code == 400


def test_admin_list_includes_inactive(client, make_row, admin_headers):
    _listing(make_row, "Open")
    _listing(make_row, "Closed", status="inactive")

    body = client.get("/api/careers/admin/all", headers=admin_headers).get_json()

    assert body["pagination"]["total"] == 2


def test_admin_delete_listing(client, make_row, admin_headers):
    listing_id = _listing(make_row, "Temp")

    assert client.delete(f"/api/careers/admin/{listing_id}", headers=admin_headers).status_code == 200

    response = client.delete(f"/api/careers/admin/{listing_id}", headers=admin_headers)
    assert response.status_code == 404
    assert response.get_json() == {"error": "Job listing not found"}


def test_stats(client, make_row, admin_headers):
    _listing(make_row, "A", department="Engineering")
    _listing(make_row, "B", department="Engineering")
    _listing(make_row, "C", department="Sales", status="inactive")
    _application(make_row)
    _application(make_row, status="hired")

    body = client.get("/api/careers/stats", headers=admin_headers).get_json()

    assert body["success"] is True
    listings = body["stats"]["listings"]
    assert listings["total"] == 3
    assert {"department": "Engineering", "count": 2} in listings["byDepartment"]
    applications = body["stats"]["applications"]
    assert applications["total"] == 2
    assert applications["today"] == 2
    assert {"status": "hired", "count": 1} in applications["byStatus"]
