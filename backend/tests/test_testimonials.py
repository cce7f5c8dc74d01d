import io

from marketing_cms.models import Testimonial


def _testimonial(make_row, name="Ahmed", **fields):
    fields.setdefault("company", "The Kebab House")
    fields.setdefault("content", "Orders went up 40%.")
    return make_row(Testimonial, name=name, **fields)


def test_public_list_active_only(client, make_row):
    _testimonial(make_row, "Visible")
    _testimonial(make_row, "Hidden", is_active=False)

    body = client.get("/api/testimonials").get_json()

    assert [item["name"] for item in body["data"]] == ["Visible"]
    assert body["pagination"]["total"] == 1


def test_localizes_bare_base_columns(client, make_row):
    testimonial_id = _testimonial(
        make_row,
        headline="Essential",
        headline_ar="أساسي",
        content="English text",
    )

    body = client.get(f"/api/testimonials/{testimonial_id}?lang=ar").get_json()

    assert body["headline"] == "أساسي"
    assert body["content"] == "English text"


def test_inactive_is_not_public(client, make_row):
    testimonial_id = _testimonial(make_row, is_active=False)

    response = client.get(f"/api/testimonials/{testimonial_id}")

    assert response.status_code == 404
    assert response.get_json() == {"error": "Testimonial not found"}


def test_create_requires_name_company_content(client, admin_headers):
    response = client.post(
        "/api/testimonials/admin/create",
        json={"name": "Only name"},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert response.get_json()["error"] == "Name, company, and content are required"


def test_create_from_form_with_logo(client, admin_headers):
    response = client.post(
        "/api/testimonials/admin/create",
        data={
            "name": "Sara",
            "company": "Cafe",
            "content": "Great",
            "rating": "4",
            "is_active": "true",
            "company_logo": (io.BytesIO(b"<svg/>"), "logo.svg"),
        },
        content_type="multipart/form-data",
        headers=admin_headers,
    )

    assert response.status_code == 201
    testimonial = response.get_json()
    assert testimonial["rating"] == 4
    assert testimonial["is_active"] is True
    assert testimonial["company_logo"].startswith("/uploads/testimonials/")
    assert testimonial["image"] is None


def test_rejects_non_image_upload(client, admin_headers):
    response = client.post(
        "/api/testimonials/admin/create",
        data={
            "name": "Sara",
            "company": "Cafe",
            "content": "Great",
            "image": (io.BytesIO(b"MZ"), "payload.exe"),
        },
        content_type="multipart/form-data",
        headers=admin_headers,
    )

    assert response.status_code == 400


def test_rating_out_of_range(client, admin_headers):
    response = client.post(
        "/api/testimonials/admin/create",
        json={"name": "A", "company": "B", "content": "C", "rating": 9},
        headers=admin_headers,
    )

    assert response.status_code == 400


def test_update_keeps_unsent_fields(client, make_row, admin_headers):
    testimonial_id = _testimonial(make_row, headline="Keep me", rating=3)

    response = client.put(
        f"/api/testimonials/admin/{testimonial_id}",
        json={"is_active": False},
        headers=admin_headers,
    )

    assert response.status_code == 200
    testimonial = response.get_json()
    assert testimonial["is_active"] is False
    assert testimonial["headline"] == "Keep me"
    assert testimonial["rating"] == 3


def test_delete_unknown(client, admin_headers):
    response = client.delete("/api/testimonials/admin/42", headers=admin_headers)

    assert response.status_code == 404
    assert response.get_json() == {"error": "Testimonial not found"}


def test_stats(client, make_row, admin_headers):
    _testimonial(make_row, rating=5)
    _testimonial(make_row, rating=4)

    stats = client.get("/api/testimonials/stats", headers=admin_headers).get_json()["stats"]

    assert stats["total"] == 2
    assert stats["averageRating"] == 4.5
    assert stats["byRating"] == [{"rating": 4, "count": 1}, {"rating": 5, "count": 1}]
