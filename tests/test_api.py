"""API endpoint tests."""


def _create(client, headers, name="Favorites", **extra):
    response = client.post("/api/v1/collections", headers=headers, json={"name": name, **extra})
    assert response.status_code == 201
    return response.json()


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_signup(client):
    """Test user signup."""
    response = client.post(
        "/api/v1/auth/signup",
        json={"email": "newuser@example.com", "password": "password123"},
    )
    assert response.status_code == 201
    data = response.json()
    assert "access_token" in data
    assert data["token_type"] == "bearer"
    assert data["user"]["email"] == "newuser@example.com"
    assert "password_hash" not in data["user"]


def test_signup_duplicate_email(client, auth_headers):
    """Test signup with a taken email fails with a conflict."""
    response = client.post(
        "/api/v1/auth/signup",
        json={"email": auth_headers.email, "password": "password123"},
    )
    assert response.status_code == 409
    assert response.json()["kind"] == "duplicate_key"


def test_signup_validation(client):
    response = client.post("/api/v1/auth/signup", json={"email": "not-an-email", "password": "x"})
    assert response.status_code == 422


def test_login(client, auth_headers):
    """Test user login."""
    response = client.post(
        "/api/v1/auth/login", json={"email": auth_headers.email, "password": "testpass123"}
    )
    assert response.status_code == 200
    assert "access_token" in response.json()


def test_login_wrong_password(client, auth_headers):
    """Test login with wrong password."""
    response = client.post(
        "/api/v1/auth/login", json={"email": auth_headers.email, "password": "wrongpass"}
    )
    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_get_current_user(client, auth_headers):
    """Test getting current user info."""
    response = client.get("/api/v1/user", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["email"] == auth_headers.email
    assert response.json()["id"] == auth_headers.user_id


def test_update_current_user(client, auth_headers):
    response = client.patch(
        "/api/v1/user", headers=auth_headers, json={"password": "brandnew123"}
    )
    assert response.status_code == 200

    login = client.post(
        "/api/v1/auth/login", json={"email": auth_headers.email, "password": "brandnew123"}
    )
    assert login.status_code == 200


def test_update_current_user_rejects_null(client, auth_headers):
    response = client.put("/api/v1/user", headers=auth_headers, json={"email": None})
    assert response.status_code == 422


def test_update_email_to_taken_one(client, auth_headers, other_auth_headers):
    response = client.put(
        "/api/v1/user", headers=auth_headers, json={"email": other_auth_headers.email}
    )
    assert response.status_code == 409


def test_unauthorized_access(client):
    """Test that endpoints require authentication."""
    assert client.get("/api/v1/collections").status_code == 401
    assert client.get("/api/v1/user").status_code == 401
    assert client.post("/api/v1/collections", json={"name": "Nope"}).status_code == 401


def test_invalid_token(client):
    response = client.get("/api/v1/collections", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 401
    assert response.json()["kind"] == "unauthorized"


def test_token_for_deleted_user(client, auth_headers):
    assert client.delete("/api/v1/user", headers=auth_headers).status_code == 204

    response = client.get("/api/v1/collections", headers=auth_headers)
    assert response.status_code == 401


def test_create_collection(client, auth_headers):
    """Test creating a collection."""
    data = _create(client, auth_headers, description="Best of", poster="posters/a.png")

    assert data["name"] == "Favorites"
    assert data["description"] == "Best of"
    assert data["poster"] == "posters/a.png"
    assert data["author_id"] == auth_headers.user_id
    assert data["images"] == []


def test_create_collection_validation(client, auth_headers):
    response = client.post("/api/v1/collections", headers=auth_headers, json={"name": "ab"})
    assert response.status_code == 422


def test_create_duplicate_collection(client, auth_headers, other_auth_headers):
    _create(client, auth_headers)

    response = client.post(
        "/api/v1/collections", headers=auth_headers, json={"name": "Favorites"}
    )
    assert response.status_code == 409

    # Same name is fine for someone else
    _create(client, other_auth_headers)


def test_get_collection(client, auth_headers):
    created = _create(client, auth_headers)

    response = client.get(f"/api/v1/collections/{created['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["name"] == "Favorites"


def test_get_missing_collection(client, auth_headers):
    response = client.get("/api/v1/collections/9999", headers=auth_headers)
    assert response.status_code == 404
    assert response.json()["kind"] == "not_found"


def test_get_other_users_collection(client, auth_headers, other_auth_headers):
    created = _create(client, auth_headers)

    response = client.get(f"/api/v1/collections/{created['id']}", headers=other_auth_headers)
    assert response.status_code == 403
    assert response.json()["kind"] == "unauthorized"


def test_update_collection(client, auth_headers):
    created = _create(client, auth_headers, description="Best of")

    response = client.patch(
        f"/api/v1/collections/{created['id']}",
        headers=auth_headers,
        json={"name": "Top Picks"},
    )
    assert response.status_code == 200
    assert response.json()["name"] == "Top Picks"
    assert response.json()["description"] == "Best of"


def test_update_collection_rejects_null_name(client, auth_headers):
    created = _create(client, auth_headers)

    response = client.put(
        f"/api/v1/collections/{created['id']}", headers=auth_headers, json={"name": None}
    )
    assert response.status_code == 422


def test_update_other_users_collection(client, auth_headers, other_auth_headers):
    created = _create(client, auth_headers)

    response = client.put(
        f"/api/v1/collections/{created['id']}",
        headers=other_auth_headers,
        json={"name": "Stolen"},
    )
    assert response.status_code == 403

    check = client.get(f"/api/v1/collections/{created['id']}", headers=auth_headers)
    assert check.json()["name"] == "Favorites"


def test_list_collections_only_own(client, auth_headers, other_auth_headers):
    _create(client, auth_headers, name="Mine")
    _create(client, other_auth_headers, name="Theirs")

    response = client.get("/api/v1/collections", headers=auth_headers)
    assert response.status_code == 200
    names = [c["name"] for c in response.json()["collections"]]
    assert names == ["Mine"]


def test_list_other_author_is_empty(client, auth_headers, other_auth_headers):
    _create(client, other_auth_headers, name="Theirs")

    response = client.get(
        f"/api/v1/collections?author={other_auth_headers.user_id}", headers=auth_headers
    )
    assert response.status_code == 200
    assert response.json()["collections"] == []


def test_list_collections_pagination(client, auth_headers):
    for name in ["First", "Second", "Third"]:
        _create(client, auth_headers, name=name)

    response = client.get("/api/v1/collections?limit=1&offset=1", headers=auth_headers)
    data = response.json()
    assert [c["name"] for c in data["collections"]] == ["Second"]
    assert data["limit"] == 1
    assert data["offset"] == 1

    assert client.get("/api/v1/collections?limit=-1", headers=auth_headers).status_code == 422


def test_attach_and_detach_image(client, auth_headers):
    created = _create(client, auth_headers)
    url = f"/api/v1/collections/{created['id']}/images"

    response = client.post(url, headers=auth_headers, json={"img_path": "posters/one.png"})
    assert response.status_code == 200
    assert [i["img_path"] for i in response.json()["images"]] == ["posters/one.png"]

    again = client.post(url, headers=auth_headers, json={"img_path": "posters/one.png"})
    assert again.status_code == 409
    assert again.json()["kind"] == "already_attached"

    response = client.delete(f"{url}/posters/one.png", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["images"] == []

    missing = client.delete(f"{url}/posters/one.png", headers=auth_headers)
    assert missing.status_code == 409
    assert missing.json()["kind"] == "not_attached"


def test_attach_to_other_users_collection(client, auth_headers, other_auth_headers):
    created = _create(client, auth_headers)

    response = client.post(
        f"/api/v1/collections/{created['id']}/images",
        headers=other_auth_headers,
        json={"img_path": "posters/one.png"},
    )
    assert response.status_code == 403


def test_delete_collection(client, auth_headers):
    created = _create(client, auth_headers)

    response = client.delete(f"/api/v1/collections/{created['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["id"] == created["id"]

    gone = client.get(f"/api/v1/collections/{created['id']}", headers=auth_headers)
    assert gone.status_code == 404


def test_end_to_end_ownership(client, auth_headers, other_auth_headers):
    """alice builds a collection; bob cannot delete it."""
    created = _create(client, auth_headers)
    client.post(
        f"/api/v1/collections/{created['id']}/images",
        headers=auth_headers,
        json={"img_path": "poster1.png"},
    )

    response = client.get(
        f"/api/v1/collections?author={auth_headers.user_id}", headers=auth_headers
    )
    collections = response.json()["collections"]
    assert len(collections) == 1
    assert collections[0]["name"] == "Favorites"
    assert [i["img_path"] for i in collections[0]["images"]] == ["poster1.png"]

    denied = client.delete(f"/api/v1/collections/{created['id']}", headers=other_auth_headers)
    assert denied.status_code == 403
    assert denied.json()["kind"] == "unauthorized"

    still_there = client.get(f"/api/v1/collections/{created['id']}", headers=auth_headers)
    assert still_there.status_code == 200
