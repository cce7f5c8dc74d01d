SETUP_HEADERS = {"X-Setup-Token": "test-setup-token"}
CREDENTIALS = {"username": "founder", "password": "long-enough-password"}


def test_creates_first_admin(client):
    response = client.post("/api/auth/create-admin", json=CREDENTIALS, headers=SETUP_HEADERS)

    assert response.status_code == 201
    assert response.get_json() == {
        "success": True,
        "message": "Admin user created successfully",
        "username": "founder",
    }

    login = client.post("/api/auth/login", json=CREDENTIALS)
    assert login.status_code == 200


def test_second_call_conflicts_regardless_of_token(client):
    client.post("/api/auth/create-admin", json=CREDENTIALS, headers=SETUP_HEADERS)

    with_token = client.post("/api/auth/create-admin", json=CREDENTIALS, headers=SETUP_HEADERS)
    wrong_token = client.post("/api/auth/create-admin", json=CREDENTIALS, headers={"X-Setup-Token": "nope"})
    no_token = client.post("/api/auth/create-admin", json=CREDENTIALS)

    for response in (with_token, wrong_token, no_token):
        assert response.status_code == 409
        assert response.get_json()["code"] == "ADMIN_ALREADY_EXISTS"


def test_missing_token(client):
    response = client.post("/api/auth/create-admin", json=CREDENTIALS)

    assert response.status_code == 401
    assert response.get_json()["code"] == "NO_SETUP_TOKEN"


def test_wrong_token(client):
    response = client.post("/api/auth/create-admin", json=CREDENTIALS, headers={"X-Setup-Token": "guess"})

    assert response.status_code == 403
    assert response.get_json()["code"] == "INVALID_SETUP_TOKEN"


def test_unset_secret_never_matches(client, app):
    app.config["SETUP_SECRET_TOKEN"] = None

    response = client.post("/api/auth/create-admin", json=CREDENTIALS, headers=SETUP_HEADERS)

    assert response.status_code == 403


def test_short_password(client):
    response = client.post(
        "/api/auth/create-admin",
        json={"username": "founder", "password": "short"},
        headers=SETUP_HEADERS,
    )

    assert response.status_code == 400
    assert response.get_json()["success"] is False


def test_missing_credentials(client):
    response = client.post("/api/auth/create-admin", json={}, headers=SETUP_HEADERS)
    assert response.status_code == 400
