from app import models
from app.core.security import create_token, decode_token
from conftest import ADMIN_PASSWORD, bearer, login


def test_login_returns_access_and_refresh_tokens(client, seeded):
    tokens = login(client, "admin", ADMIN_PASSWORD)
    assert tokens["token_type"] == "Bearer"
    assert tokens["expires_in"] == 900
    assert tokens["refresh_token"]

    claims = decode_token(tokens["access_token"])
    assert claims["sub"] == "admin"
    assert claims["type"] == "access"
    assert claims["exp"] > claims["iat"]


def test_oauth2_form_token_endpoint(client, seeded):
    r = client.post(
        "/api/auth/token",
        data={"username": "admin", "password": ADMIN_PASSWORD},
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )
    assert r.status_code == 200
    assert r.json()["access_token"]


def test_wrong_password_is_rejected_with_envelope(client, seeded):
    r = client.post("/api/auth/login", json={"username": "admin", "password": "nope"})
    assert r.status_code == 401
    body = r.json()
    assert body["errorCode"] == "AUTHENTICATION_FAILED"
    assert body["message"] == "Invalid username or password"
    assert body["path"] == "/api/auth/login"


def test_disabled_account_cannot_login(client, seeded):
    admin = seeded.query(models.User).filter_by(username="admin").one()
    admin.enabled = False
    seeded.commit()

    r = client.post("/api/auth/login", json={"username": "admin", "password": ADMIN_PASSWORD})
    assert r.status_code == 401
    assert r.json()["message"] == "User account is disabled"


def test_register_grants_user_role_and_rejects_duplicates(client, seeded):
    payload = {"username": "jdoe", "email": "JDoe@Example.com", "password": "secret123"}
    r = client.post("/api/auth/register", json=payload)
    assert r.status_code == 201

    me = client.get("/api/auth/me", headers=bearer(r.json()))
    assert me.status_code == 200
    profile = me.json()
    assert profile["email"] == "jdoe@example.com"
    assert profile["roles"] == ["USER"]
    assert profile["permissions"] == ["user:read"]

    dup = client.post("/api/auth/register", json={**payload, "email": "other@example.com"})
    assert dup.status_code == 400
    assert dup.json()["message"] == "Username already exists"


def test_register_validates_input(client, seeded):
    r = client.post(
        "/api/auth/register", json={"username": "ab", "email": "not-an-email", "password": "123"}
    )
    assert r.status_code == 400
    field_errors = r.json()["details"]["fieldErrors"]
    assert {"username", "email", "password"} <= set(field_errors)


def test_refresh_rotates_the_refresh_token(client, seeded):
    tokens = login(client, "admin", ADMIN_PASSWORD)
    r = client.post("/api/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert r.status_code == 200
    rotated = r.json()
    assert rotated["refresh_token"] != tokens["refresh_token"]

    stale = client.post("/api/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert stale.status_code == 401
    assert stale.json()["message"] == "Refresh token not found"


def test_logout_invalidates_refresh_token(client, seeded):
    tokens = login(client, "admin", ADMIN_PASSWORD)
    r = client.post("/api/auth/logout", headers=bearer(tokens))
    assert r.status_code == 204

    again = client.post("/api/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert again.status_code == 401


def test_protected_endpoint_requires_a_valid_access_token(client, seeded):
    assert client.get("/api/currencies").status_code == 401

    garbage = client.get("/api/currencies", headers={"Authorization": "Bearer not-a-jwt"})
    assert garbage.status_code == 401
    assert garbage.json()["errorCode"] == "UNAUTHORIZED"

    wrong_type = create_token("admin", token_type="refresh")
    r = client.get("/api/currencies", headers={"Authorization": f"Bearer {wrong_type}"})
    assert r.status_code == 401
