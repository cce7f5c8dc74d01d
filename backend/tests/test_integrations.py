import io

from marketing_cms.models import Integration


def _integration(make_row, name, category="POS", **fields):
    return make_row(Integration, name=name, category=category, **fields)


def test_public_list_ordered_by_display_order(client, make_row):
    _integration(make_row, "Third", display_order=3)
    _integration(make_row, "First", display_order=1)
    _integration(make_row, "Second", display_order=2)
    _integration(make_row, "Off", display_order=0, status="inactive")

    body = client.get("/api/integrations").get_json()

    assert [item["name"] for item in body["data"]] == ["First", "Second", "Third"]
    assert body["pagination"]["limit"] == 20


def test_limit_upper_bound_is_500(client):
    body = client.get("/api/integrations?limit=10000").get_json()
    assert body["pagination"]["limit"] == 500


def test_category_filter(client, make_row):
    _integration(make_row, "Foodics", category="POS")
    _integration(make_row, "Talabat", category="Delivery")

    body = client.get("/api/integrations?category=Delivery").get_json()

    assert [item["name"] for item in body["data"]] == ["Talabat"]


def test_by_category_returns_plain_array(client, make_row):
    _integration(make_row, "Deliveroo", category="Delivery", display_order=2)
    _integration(make_row, "Talabat", category="Delivery", display_order=1)

    body = client.get("/api/integrations/category/Delivery").get_json()

    assert isinstance(body, list)
    assert [item["name"] for item in body] == ["Talabat", "Deliveroo"]


def test_get_unknown_integration(client):
    response = client.get("/api/integrations/999")

    assert response.status_code == 404
    assert response.get_json() == {"error": "Integration not found"}


def test_create_without_name_or_category(client, admin_headers):
    response = client.post(
        "/api/integrations/admin/create",
        json={"description": "No name"},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert response.get_json() == {"error": "Name and category are required"}


def test_create_with_logo_and_form_integers(client, admin_headers):
    response = client.post(
        "/api/integrations/admin/create",
        data={
            "name": "Foodics",
            "category": "POS",
            "display_order": "7",
            "logo": (io.BytesIO(b"fake"), "foodics.webp"),
        },
        content_type="multipart/form-data",
        headers=admin_headers,
    )

    assert response.status_code == 201
    integration = response.get_json()
    assert integration["display_order"] == 7
    assert integration["status"] == "active"
    assert integration["logo_url"].startswith("/uploads/integrations/integration-")


def test_admin_list_filters_by_status(client, make_row, admin_headers):
    _integration(make_row, "On")
    _integration(make_row, "Off", status="inactive")

    body = client.get("/api/integrations/admin/all?status=inactive", headers=admin_headers).get_json()

    assert [item["name"] for item in body["data"]] == ["Off"]


def test_update_and_delete(client, make_row, admin_headers):
    integration_id = _integration(make_row, "Old name")

    updated = client.put(
        f"/api/integrations/admin/{integration_id}",
        json={"name": "New name"},
        headers=admin_headers,
    )
    assert updated.status_code == 200
    assert updated.get_json()["name"] == "New name"
    assert updated.get_json()["category"] == "POS"

    assert client.delete(f"/api/integrations/admin/{integration_id}", headers=admin_headers).status_code == 200
    assert client.delete(f"/api/integrations/admin/{integration_id}", headers=admin_headers).status_code == 404
