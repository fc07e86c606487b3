"""Outermost error boundary tests.

Learn: Starlette re-raises unhandled exceptions after the 500 handler
runs, so this client is built with raise_app_exceptions=False to look
at the response the caller would get.
"""

import uuid

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from structlog.testing import capture_logs

from roster.auth.jwt import Principal, create_access_token
from roster.db.engine import get_db
from tests.conftest import employee_payload


@pytest_asyncio.fixture()
async def broken_db_client(app):
    async def exploding_db():
        raise RuntimeError("connection to 10.0.0.5 refused (password=hunter2)")
        yield  # pragma: no cover

    app.dependency_overrides[get_db] = exploding_db
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    token = create_access_token(Principal(user_id=uuid.uuid4(), email="a@x.com"))
    return {"Authorization": f"Bearer {token}"}


@pytest.mark.asyncio
async def test_storage_failure_is_internal_error(broken_db_client, auth_headers):
    r = await broken_db_client.get("/api/employees", headers=auth_headers)
    assert r.status_code == 500
    assert r.json() == {"detail": "Internal server error"}
    assert "hunter2" not in r.text
    assert "10.0.0.5" not in r.text


@pytest.mark.asyncio
async def test_storage_failure_on_register(broken_db_client):
    r = await broken_db_client.post(
        "/api/users/register",
        json={"name": "A", "email": "a@x.com", "password": "secret1"},
    )
    assert r.status_code == 500
    assert "secret1" not in r.text


@pytest.mark.asyncio
async def test_auth_checked_before_storage(broken_db_client):
    """No token → 401 even when storage is down."""
    r = await broken_db_client.post("/api/employees", json=employee_payload())
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_failed_request_still_logged(broken_db_client, auth_headers):
    with capture_logs() as logs:
        r = await broken_db_client.get("/api/employees", headers=auth_headers)
    assert r.status_code == 500

    access = [e for e in logs if e["event"] == "roster.request"]
    assert len(access) == 1
    assert access[0]["status"] == 500
    assert access[0]["method"] == "GET"
    assert access[0]["path"] == "/api/employees"
