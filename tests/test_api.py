"""API endpoint tests."""

from unittest.mock import MagicMock

from src.api.dependencies import (
    get_credential_store,
    get_favorites_store,
    get_session_manager,
)
from src.errors import StorageError


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_register_user(client, settings):
    """Test user registration sets a session cookie."""
    response = client.post(
        "/api/auth/register",
        json={"email": "newuser@example.com", "password": "password123", "name": "New User"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["ok"] is True
    assert data["user"]["email"] == "newuser@example.com"
    assert data["user"]["name"] == "New User"
    assert "password_hash" not in data["user"]

    set_cookie = response.headers["set-cookie"]
    assert settings.session_cookie_name in set_cookie
    assert "HttpOnly" in set_cookie
    assert "samesite=lax" in set_cookie.lower()
    assert "secure" not in set_cookie.lower()


def test_register_duplicate_email(client, auth_client):
    """Registering an existing email conflicts regardless of the password."""
    response = client.post(
        "/api/auth/register",
        json={"email": auth_client.email, "password": "something-else"},
    )
    assert response.status_code == 409
    assert response.json() == {"ok": False, "error": "Email already exists"}


def test_register_missing_fields(client):
    """Test registration without a password is rejected."""
    response = client.post("/api/auth/register", json={"email": "x@example.com"})
    assert response.status_code == 400
    assert response.json()["ok"] is False

    response = client.post("/api/auth/register", json={"email": "", "password": "pw"})
    assert response.status_code == 400


def test_login(client, auth_client):
    """Login then /me returns the same user id."""
    client.cookies.clear()
    response = client.post(
        "/api/auth/login", json={"email": auth_client.email, "password": auth_client.password}
    )
    assert response.status_code == 200
    assert response.json()["user"]["id"] == auth_client.user_id

    me = client.get("/api/auth/me")
    assert me.status_code == 200
    assert me.json()["user"]["id"] == auth_client.user_id


def test_login_wrong_password(client, auth_client):
    """Test login with wrong password."""
    response = client.post(
        "/api/auth/login", json={"email": auth_client.email, "password": "wrongpass"}
    )
    assert response.status_code == 401
    assert response.json() == {"ok": False, "error": "Invalid credentials"}


def test_login_unknown_email(client):
    """Unknown emails get the same answer as wrong passwords."""
    response = client.post(
        "/api/auth/login", json={"email": "nobody@example.com", "password": "whatever"}
    )
    assert response.status_code == 401
    assert response.json()["error"] == "Invalid credentials"


def test_login_missing_fields(client):
    response = client.post("/api/auth/login", json={"email": "a@example.com"})
    assert response.status_code == 400
    assert response.json() == {"ok": False, "error": "password required"}


def test_get_current_user(auth_client):
    """Test getting current user info."""
    response = auth_client.get("/api/auth/me")
    assert response.status_code == 200
    user = response.json()["user"]
    assert user["email"] == auth_client.email
    assert user["created_at"] is not None


def test_get_current_user_anonymous(client):
    """No session means user is null, not an error."""
    response = client.get("/api/auth/me")
    assert response.status_code == 200
    assert response.json() == {"ok": True, "user": None}


def test_tampered_cookie_is_ignored(client, settings):
    client.cookies.set(settings.session_cookie_name, "not-a-signed-token")
    response = client.get("/api/auth/me")
    assert response.json()["user"] is None


def test_logout_invalidates_session(auth_client, settings):
    """A cookie saved before logout no longer resolves to a user."""
    old_cookie = auth_client.cookies.get(settings.session_cookie_name)
    assert old_cookie

    response = auth_client.post("/api/auth/logout")
    assert response.status_code == 200
    assert response.json() == {"ok": True}
    assert settings.session_cookie_name in response.headers["set-cookie"]

    auth_client.cookies.set(settings.session_cookie_name, old_cookie)
    me = auth_client.get("/api/auth/me")
    assert me.json() == {"ok": True, "user": None}


def test_logout_without_session(client):
    """Logging out twice is fine."""
    assert client.post("/api/auth/logout").json() == {"ok": True}
    assert client.post("/api/auth/logout").json() == {"ok": True}


def test_logout_failure_still_clears_cookie(app, auth_client, settings):
    sessions = MagicMock()
    sessions.destroy.side_effect = StorageError("Failed to destroy session")
    sessions.resolve.return_value = None
    app.dependency_overrides[get_session_manager] = lambda: sessions

    response = auth_client.post("/api/auth/logout")
    assert response.status_code == 500
    assert response.json() == {"ok": False, "error": "Failed to destroy session"}
    assert settings.session_cookie_name in response.headers["set-cookie"]


def test_full_favorites_scenario(client):
    """Register, add, list, delete, list."""
    response = client.post(
        "/api/auth/register", json={"email": "alice@example.com", "password": "hunter22"}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["ok"] is True
    assert data["user"]["id"] == 1
    assert data["user"]["email"] == "alice@example.com"
    assert data["user"]["name"] is None

    response = client.post("/api/user/favorites", json={"image_id": "abc123"})
    assert response.status_code == 200
    favorite = response.json()["favorite"]
    assert favorite["image_id"] == "abc123"
    assert isinstance(favorite["id"], int)
    assert response.json()["created"] is True

    favorites = client.get("/api/user/favorites").json()["favorites"]
    assert [f["image_id"] for f in favorites] == ["abc123"]

    response = client.delete("/api/user/favorites/abc123")
    assert response.json() == {"ok": True, "deleted": 1}

    response = client.get("/api/user/favorites")
    assert response.json() == {"ok": True, "favorites": []}


def test_add_favorite_twice_keeps_original(auth_client):
    first = auth_client.post(
        "/api/user/favorites",
        json={"image_id": "k7q9", "title": "Mountains", "dimension_x": 1920, "dimension_y": 1080},
    ).json()
    second = auth_client.post(
        "/api/user/favorites",
        json={"image_id": "k7q9", "title": "Renamed", "dimension_x": 800},
    ).json()

    assert second["created"] is False
    assert second["favorite"]["id"] == first["favorite"]["id"]
    assert second["favorite"]["title"] == "Mountains"
    assert second["favorite"]["dimension_x"] == 1920

    favorites = auth_client.get("/api/user/favorites").json()["favorites"]
    assert len(favorites) == 1


def test_list_favorites_newest_first(auth_client):
    for image_id in ["first", "second", "third"]:
        auth_client.post("/api/user/favorites", json={"image_id": image_id})

    favorites = auth_client.get("/api/user/favorites").json()["favorites"]
    assert [f["image_id"] for f in favorites] == ["third", "second", "first"]


def test_list_favorites_anonymous(client):
    """Anonymous callers get an empty list, not a 401."""
    response = client.get("/api/user/favorites")
    assert response.status_code == 200
    assert response.json() == {"ok": True, "favorites": []}


def test_add_favorite_requires_auth(client):
    response = client.post("/api/user/favorites", json={"image_id": "abc123"})
    assert response.status_code == 401
    assert response.json() == {"ok": False, "error": "Not authenticated"}


def test_add_favorite_missing_image_id(auth_client):
    response = auth_client.post("/api/user/favorites", json={"title": "No id"})
    assert response.status_code == 400
    assert response.json() == {"ok": False, "error": "image_id required"}


def test_remove_favorite_requires_auth(client):
    response = client.delete("/api/user/favorites/abc123")
    assert response.status_code == 401


def test_remove_missing_favorite(auth_client):
    """Removing something never added reports zero rows."""
    response = auth_client.delete("/api/user/favorites/never-added")
    assert response.status_code == 200
    assert response.json() == {"ok": True, "deleted": 0}


def test_favorites_are_per_user(client, auth_client):
    auth_client.post("/api/user/favorites", json={"image_id": "shared"})

    client.cookies.clear()
    client.post("/api/auth/register", json={"email": "bob@example.com", "password": "pw"})
    assert client.get("/api/user/favorites").json()["favorites"] == []
    assert client.delete("/api/user/favorites/shared").json()["deleted"] == 0


def test_list_favorites_storage_error(app, auth_client):
    store = MagicMock()
    store.list.side_effect = StorageError()
    app.dependency_overrides[get_favorites_store] = lambda: store

    response = auth_client.get("/api/user/favorites")
    assert response.status_code == 500
    assert response.json() == {"ok": False, "error": "Database error"}


def test_unknown_route_uses_error_shape(client):
    response = client.get("/api/nope")
    assert response.status_code == 404
    assert response.json()["ok"] is False


def test_add_favorite_accepts_long_image_id(auth_client):
    """External ids are opaque; their length is not limited."""
    image_id = "x" * 300
    response = auth_client.post("/api/user/favorites", json={"image_id": image_id})
    assert response.status_code == 200
    assert response.json()["favorite"]["image_id"] == image_id

    response = auth_client.delete(f"/api/user/favorites/{image_id}")
    assert response.json() == {"ok": True, "deleted": 1}


def test_add_favorite_accepts_numeric_image_id(auth_client):
    response = auth_client.post("/api/user/favorites", json={"image_id": 12345})
    assert response.status_code == 200
    assert response.json()["favorite"]["image_id"] == "12345"

    favorites = auth_client.get("/api/user/favorites").json()["favorites"]
    assert [f["image_id"] for f in favorites] == ["12345"]


def test_register_and_login_with_long_password(client):
    password = "p" * 200
    response = client.post(
        "/api/auth/register", json={"email": "long@example.com", "password": password}
    )
    assert response.status_code == 200

    client.cookies.clear()
    response = client.post(
        "/api/auth/login", json={"email": "long@example.com", "password": password}
    )
    assert response.status_code == 200


def test_register_storage_error(app, client):
    credentials = MagicMock()
    credentials.register.side_effect = StorageError()
    app.dependency_overrides[get_credential_store] = lambda: credentials

    response = client.post(
        "/api/auth/register", json={"email": "x@example.com", "password": "pw"}
    )
    assert response.status_code == 500
    assert response.json() == {"ok": False, "error": "Database error"}
    assert "set-cookie" not in response.headers


def test_get_current_user_storage_error(app, auth_client):
    credentials = MagicMock()
    credentials.find_by_id.side_effect = StorageError()
    app.dependency_overrides[get_credential_store] = lambda: credentials

    response = auth_client.get("/api/auth/me")
    assert response.status_code == 500
    assert response.json() == {"ok": False, "error": "Database error"}


def test_add_favorite_storage_error(app, auth_client):
    store = MagicMock()
    store.add_if_absent.side_effect = StorageError()
    app.dependency_overrides[get_favorites_store] = lambda: store

    response = auth_client.post("/api/user/favorites", json={"image_id": "abc123"})
    assert response.status_code == 500
    assert response.json() == {"ok": False, "error": "Database error"}


def test_remove_favorite_storage_error(app, auth_client):
    store = MagicMock()
    store.remove.side_effect = StorageError()
    app.dependency_overrides[get_favorites_store] = lambda: store

    response = auth_client.delete("/api/user/favorites/abc123")
    assert response.status_code == 500
    assert response.json() == {"ok": False, "error": "Database error"}
