from conftest import add_user, auth

from app.core.config import settings
from app.domain.enums import AuthMode, UserRole


def dev_login(client, email):
    resp = client.post("/api/auth/dev-login", json={"email": email})
    assert resp.status_code == 200, resp.text
    return resp.json()


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


def test_artist_signup_flow(client):
    login = dev_login(client, "new@example.com")
    assert login["registered"] is False
    headers = bearer(login["token"])

    # Not in the directory yet
    assert client.get("/api/auth/profile", headers=headers).status_code == 401

    resp = client.post(
        "/api/auth/register/artist",
        json={"displayName": "Nova", "artistName": "Nova Sound", "phoneNumber": "+14155550100",
              "socialMedia": {"instagram": "@nova"}},
        headers=headers,
    )
    assert resp.status_code == 201, resp.text
    user = resp.json()["user"]
    assert user["role"] == "artist"
    assert user["email"] == "new@example.com"
    assert user["socialMedia"] == {"instagram": "@nova"}

    again = dev_login(client, "new@example.com")
    assert again["registered"] is True
    assert again["user"]["uid"] == user["uid"]

    profile = client.post("/api/auth/login", headers=bearer(again["token"]))
    assert profile.status_code == 200
    assert profile.json()["user"]["artistName"] == "Nova Sound"


def test_register_twice_conflicts(client):
    headers = bearer(dev_login(client, "dup@example.com")["token"])
    body = {"displayName": "Dup", "artistName": "Dup"}
    assert client.post("/api/auth/register/artist", json=body, headers=headers).status_code == 201
    assert client.post("/api/auth/register/artist", json=body, headers=headers).status_code == 409


def test_register_validates_phone_and_fields(client):
    headers = bearer(dev_login(client, "bad@example.com")["token"])
    resp = client.post(
        "/api/auth/register/artist",
        json={"displayName": "Bad", "artistName": "Bad", "phoneNumber": "555-CALL-NOW"},
        headers=headers,
    )
    assert resp.status_code == 400
    assert resp.json()["error"].startswith("Invalid phone number format")

    resp = client.post("/api/auth/register/artist", json={"displayName": "Bad"}, headers=headers)
    assert resp.status_code == 400
    assert resp.json()["error"] == "Missing required fields"


def test_first_admin_bootstrap_only_once(client):
    first = bearer(dev_login(client, "boss@example.com")["token"])
    resp = client.post("/api/auth/register/first-admin", json={"displayName": "Boss"}, headers=first)
    assert resp.status_code == 201
    assert resp.json()["user"]["permissions"] == ["review_submissions", "manage_templates"]

    second = bearer(dev_login(client, "sneaky@example.com")["token"])
    resp = client.post("/api/auth/register/first-admin", json={"displayName": "Sneaky"}, headers=second)
    assert resp.status_code == 409


def test_admin_provisions_admin(client, admin, artist):
    body = {"userId": "ops-2", "email": "ops@example.com", "displayName": "Ops"}
    assert client.post("/api/auth/register/admin", json=body, headers=artist).status_code == 403

    resp = client.post("/api/auth/register/admin", json=body, headers=admin)
    assert resp.status_code == 201
    assert resp.json()["user"]["role"] == "admin"
    assert client.get("/api/auth/profile", headers=auth("ops-2")).json()["role"] == "admin"


def test_update_profile_keeps_role(client, artist):
    resp = client.put(
        "/api/auth/profile",
        json={"displayName": "Alpha", "bio": "Berlin based", "role": "admin"},
        headers=artist,
    )
    assert resp.status_code == 200
    user = resp.json()["user"]
    assert user["displayName"] == "Alpha"
    assert user["bio"] == "Berlin based"
    assert user["role"] == "artist"


def test_logout(client, artist):
    assert client.post("/api/auth/logout", headers=artist).status_code == 200


def test_dev_login_hidden_outside_dev_mode(client, monkeypatch):
    monkeypatch.setattr(settings, "AUTH_MODE", AuthMode.PROVIDER)
    assert client.post("/api/auth/dev-login", json={"email": "x@example.com"}).status_code == 404


def test_health(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


def test_list_and_deactivate_users(client, admin, artist):
    add_user("artist-z", "z@example.com", UserRole.ARTIST)

    listed = client.get("/api/users/?role=artist", headers=admin).json()
    assert {u["uid"] for u in listed["users"]} == {"artist-a", "artist-z"}

    resp = client.patch("/api/users/artist-a/status", json={"status": "inactive"}, headers=admin)
    assert resp.status_code == 200
    assert resp.json()["user"]["status"] == "inactive"
    assert client.post("/api/submissions/create", json={"title": "x"}, headers=artist).status_code == 403

    toggled = client.patch("/api/users/artist-a/status", json={}, headers=admin)
    assert toggled.json()["user"]["status"] == "active"


def test_admin_cannot_change_own_status(client, admin):
    assert client.patch("/api/users/admin-1/status", json={"status": "inactive"}, headers=admin).status_code == 409


def test_user_management_is_admin_only(client, artist):
    assert client.get("/api/users/", headers=artist).status_code == 403
