"""Users API tests — register, login, profile.

Covers:
1. Registration returns {user, token} and never a password
2. Duplicate email and missing fields → 400
3. Login success, and uniform 401 for wrong password / unknown email
4. /profile with valid, missing, invalid and expired tokens
"""

import uuid
from datetime import timedelta

import pytest

from roster.auth.jwt import Principal, create_access_token, verify_token
from tests.conftest import register_user


def _assert_no_password(payload):
    text = str(payload).lower()
    assert "password" not in text
    assert "$2b$" not in text


# ═══════════════════════════════════════════════════════════
# Registration
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_register_returns_user_and_token(client):
    r = await client.post(
        "/api/users/register",
        json={"name": "A", "email": "a@x.com", "password": "secret1"},
    )
    assert r.status_code == 201
    body = r.json()
    _assert_no_password(body)
    assert body["user"]["name"] == "A"
    assert body["user"]["email"] == "a@x.com"
    assert "createdAt" in body["user"]
    assert "updatedAt" in body["user"]

    principal = verify_token(body["token"])
    assert str(principal.user_id) == body["user"]["id"]
    assert principal.email == "a@x.com"


@pytest.mark.asyncio
async def test_register_duplicate_email(client):
    body = {"name": "One", "email": "dup@x.com", "password": "secret1"}
    r1 = await client.post("/api/users/register", json=body)
    assert r1.status_code == 201

    r2 = await client.post("/api/users/register", json={**body, "name": "Two"})
    assert r2.status_code == 400
    assert r2.json()["detail"] == "Email already in use"


@pytest.mark.asyncio
async def test_email_is_case_sensitive(client):
    await register_user(client, email="Case@x.com")
    r = await client.post(
        "/api/users/register",
        json={"name": "Other", "email": "case@x.com", "password": "secret1"},
    )
    assert r.status_code == 201


@pytest.mark.asyncio
async def test_register_missing_fields(client):
    r = await client.post(
        "/api/users/register",
        json={"email": "missing@x.com", "password": "hunter2-secret"},
    )
    assert r.status_code == 400
    body = r.json()
    assert body["detail"] == "Validation failed"
    assert any(e["field"] == "name" for e in body["errors"])
    # The submitted password never comes back.
    assert "hunter2-secret" not in r.text


@pytest.mark.asyncio
async def test_register_empty_password(client):
    r = await client.post(
        "/api/users/register",
        json={"name": "A", "email": "empty@x.com", "password": ""},
    )
    assert r.status_code == 400


# ═══════════════════════════════════════════════════════════
# Login
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_login_success(client):
    account = await register_user(client, email="login@x.com", password="secret1")

    r = await client.post(
        "/api/users/login", json={"email": "login@x.com", "password": "secret1"}
    )
    assert r.status_code == 200
    body = r.json()
    _assert_no_password(body)
    assert body["user"]["id"] == account["user"]["id"]
    assert verify_token(body["token"]).email == "login@x.com"


@pytest.mark.asyncio
async def test_login_failures_look_identical(client):
    """Wrong password and unknown email give the same 401 body."""
    await register_user(client, email="known@x.com", password="secret1")

    wrong_pw = await client.post(
        "/api/users/login", json={"email": "known@x.com", "password": "wrong"}
    )
    unknown = await client.post(
        "/api/users/login", json={"email": "nobody@x.com", "password": "secret1"}
    )

    assert wrong_pw.status_code == 401
    assert unknown.status_code == 401
    assert wrong_pw.json() == unknown.json() == {"detail": "Invalid credentials"}
    assert "token" not in wrong_pw.json()
    assert "user" not in wrong_pw.json()


# ═══════════════════════════════════════════════════════════
# Profile
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_profile_with_token(client, alice):
    r = await client.get("/api/users/profile", headers=alice["headers"])
    assert r.status_code == 200
    body = r.json()
    assert body["id"] == alice["user"]["id"]
    assert body["email"] == "alice@example.com"
    _assert_no_password(body)


@pytest.mark.asyncio
async def test_profile_without_token(client):
    r = await client.get("/api/users/profile")
    assert r.status_code == 401
    assert r.headers["WWW-Authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_profile_with_invalid_token(client):
    r = await client.get(
        "/api/users/profile", headers={"Authorization": "Bearer invalid_token_here"}
    )
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_profile_with_expired_token(client, alice):
    principal = verify_token(alice["token"])
    expired = create_access_token(principal, ttl=timedelta(seconds=-1))
    r = await client.get(
        "/api/users/profile", headers={"Authorization": f"Bearer {expired}"}
    )
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_profile_for_unknown_user(client):
    """A validly signed token for a user that doesn't exist → 404."""
    token = create_access_token(Principal(user_id=uuid.uuid4(), email="ghost@x.com"))
    r = await client.get(
        "/api/users/profile", headers={"Authorization": f"Bearer {token}"}
    )
    assert r.status_code == 404
