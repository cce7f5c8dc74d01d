from marketing_cms.models import VideoGallery


def _video(make_row, title, **fields):
    fields.setdefault("video_url", "https://videos.example/v.mp4")
    return make_row(VideoGallery, title_en=title, **fields)


def test_public_items_use_card_shape(client, make_row):
    _video(
        make_row,
        "Overview",
        description_en="Platform tour",
        title_pt="Visão geral",
        duration=120,
        display_order=1,
    )

    body = client.get("/api/video-galleries?lang=pt").get_json()

    assert body["pagination"]["total"] == 1
    item = body["data"][0]
    assert set(item) == {
        "id", "title", "description", "videoUrl",
        "thumbnailUrl", "logoUrl", "duration", "displayOrder",
    }
    assert item["title"] == "Visão geral"
    # Missing translation falls back per field
    assert item["description"] == "Platform tour"
    assert item["duration"] == 120


def test_inactive_and_ordering(client, make_row):
    _video(make_row, "Second", display_order=2)
    _video(make_row, "First", display_order=1)
    _video(make_row, "Hidden", display_order=0, is_active=False)

    titles = [item["title"] for item in client.get("/api/video-galleries").get_json()["data"]]

    assert titles == ["First", "Second"]


def test_get_unknown_video(client):
    response = client.get("/api/video-galleries/5")

    assert response.status_code == 404
    assert response.get_json() == {"error": "Video not found"}


def test_create_requires_title_and_url(client, admin_headers):
    response = client.post(
        "/api/video-galleries/admin/create",
        json={"title_en": "No url"},
        headers=admin_headers,
    )

    assert response.status_code == 400


def test_admin_create_update_delete(client, admin_headers):
    created = client.post(
        "/api/video-galleries/admin/create",
        json={"title_en": "Demo", "video_url": "https://v.example/demo", "duration": "90"},
        headers=admin_headers,
    )
    assert created.status_code == 201
    video = created.get_json()
    assert video["duration"] == 90
    assert video["is_active"] is True

    updated = client.put(
        f"/api/video-galleries/admin/{video['id']}",
        json={"display_order": 4},
        headers=admin_headers,
    )
    assert updated.get_json()["display_order"] == 4
    assert updated.get_json()["title_en"] == "Demo"

    deleted = client.delete(f"/api/video-galleries/admin/{video['id']}", headers=admin_headers)
    assert deleted.get_json() == {"message": "Video deleted successfully"}
