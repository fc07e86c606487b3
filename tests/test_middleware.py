"""Middleware tests — security headers, request IDs, rate limiting.

Learn: Rate limiting needs Redis, which tests don't have, so a tiny
in-memory stand-in with the two commands the middleware uses is put on
app.state.redis.
"""

import pytest

from roster.config import settings


class FakeRedis:
    def __init__(self):
        self.counters = {}

    async def incr(self, key):
        self.counters[key] = self.counters.get(key, 0) + 1
        return self.counters[key]

    async def expire(self, key, seconds):
        return True

    async def ping(self):
        return True


@pytest.mark.asyncio
async def test_security_headers(client):
    r = await client.get("/api/health")
    assert r.status_code == 200
    assert r.headers["X-Content-Type-Options"] == "nosniff"
    assert r.headers["X-Frame-Options"] == "DENY"
    assert r.headers["Referrer-Policy"] == "strict-origin-when-cross-origin"
    assert r.headers["Cache-Control"] == "no-store"


@pytest.mark.asyncio
async def test_no_hsts_on_http(client):
    r = await client.get("/api/health")
    assert "Strict-Transport-Security" not in r.headers


@pytest.mark.asyncio
async def test_request_id_generated(client):
    r1 = await client.get("/api/health")
    r2 = await client.get("/api/health")
    assert r1.headers["X-Request-ID"] != r2.headers["X-Request-ID"]


@pytest.mark.asyncio
async def test_request_id_propagated(client):
    r = await client.get("/api/health", headers={"X-Request-ID": "trace-12345"})
    assert r.headers["X-Request-ID"] == "trace-12345"


@pytest.mark.asyncio
async def test_rate_limit_on_login(app, client):
    app.state.redis = FakeRedis()
    body = {"email": "nobody@x.com", "password": "whatever"}

    for _ in range(settings.rate_limit_auth_rpm):
        r = await client.post("/api/users/login", json=body)
        assert r.status_code == 401

    r = await client.post("/api/users/login", json=body)
    assert r.status_code == 429
    assert r.headers["Retry-After"] == "60"


@pytest.mark.asyncio
async def test_rate_limit_headers_on_api(app, client):
    app.state.redis = FakeRedis()
    r = await client.get("/api/health")
    assert r.headers["X-RateLimit-Limit"] == str(settings.rate_limit_rpm)
    assert r.headers["X-RateLimit-Remaining"] == str(settings.rate_limit_rpm - 1)
