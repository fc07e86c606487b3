"""Test fixtures — a fresh database and app per test.

Learn: Each test builds its own Database (in-memory SQLite by default,
or ROSTER_TEST_DATABASE_URL), creates the tables, and hangs it on a new
app's state, exactly where the lifespan would put it in production.
httpx's ASGITransport doesn't run the lifespan, so Redis stays unset
and rate limiting is off unless a test installs a fake.

bcrypt is turned down to its minimum cost so registration is fast.
"""

import os
import uuid

os.environ.setdefault("ROSTER_BCRYPT_ROUNDS", "4")

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from roster.db.engine import Database
from roster.db.models import Base
from roster.main import create_app

TEST_DB_URL = os.environ.get("ROSTER_TEST_DATABASE_URL", "sqlite+aiosqlite://")


@pytest_asyncio.fixture()
async def database():
    db = Database(TEST_DB_URL)
    await db.create_all()
    try:
        yield db
    finally:
        async with db.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        await db.dispose()


@pytest_asyncio.fixture()
async def db_session(database):
    async with database.session_factory() as session:
        yield session


@pytest_asyncio.fixture()
async def app(database):
    application = create_app()
    application.state.database = database
    return application


@pytest_asyncio.fixture()
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def register_user(client, name="User", email=None, password="password_123"):
    """Register through the API and return {user, token, headers}."""
    email = email or f"user-{uuid.uuid4().hex[:8]}@example.com"
    r = await client.post(
        "/api/users/register",
        json={"name": name, "email": email, "password": password},
    )
    assert r.status_code == 201, r.text
    body = r.json()
    return {
        "user": body["user"],
        "token": body["token"],
        "headers": {"Authorization": f"Bearer {body['token']}"},
        "password": password,
    }


@pytest_asyncio.fixture()
async def alice(client):
    return await register_user(client, name="Alice", email="alice@example.com")


@pytest_asyncio.fixture()
async def bob(client):
    return await register_user(client, name="Bob", email="bob@example.com")


def employee_payload(**overrides):
    data = {
        "name": "Bob Tester",
        "address": "Rua T, 1",
        "role": "QA",
        "salary": 5000,
        "contractDate": "2025-01-15",
    }
    data.update(overrides)
    return data
