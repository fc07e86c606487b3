"""FastAPI application factory.

Learn: App factory pattern — create_app() returns a configured FastAPI
instance. The lifespan owns the long-lived resources: it opens the
Database and (optionally) Redis at startup, parks them on app.state,
and closes them at shutdown. Request handlers reach them through
dependencies, never through module globals.
"""

from contextlib import asynccontextmanager

import redis.asyncio as aioredis
import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from roster import __version__
from roster.api import api_router
from roster.api.error_handlers import register_error_handlers
from roster.config import settings
from roster.db.engine import Database
from roster.middleware.rate_limit import RateLimitMiddleware
from roster.middleware.request_context import RequestContextMiddleware
from roster.middleware.security import SecurityHeadersMiddleware

logger = structlog.get_logger()


async def connect_redis(url: str):
    """Return a connected Redis client, or None if Redis is unreachable."""
    client = aioredis.from_url(url, encoding="utf-8", decode_responses=True)
    try:
        await client.ping()
    except Exception as e:
        logger.warning("roster.redis_unavailable", error=type(e).__name__)
        await client.aclose()
        return None
    logger.info("roster.redis_connected")
    return client


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle.

    Anything before `yield` runs at startup, after `yield` at shutdown.
    """
    logger.info(
        "roster.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
    )

    database = Database(settings.database_url, echo=settings.debug)
    app.state.database = database
    # Redis is optional — without it there is no rate limiting.
    app.state.redis = await connect_redis(settings.redis_url)

    yield

    logger.info("roster.shutdown")
    if app.state.redis is not None:
        await app.state.redis.aclose()
        app.state.redis = None
    await database.dispose()


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    app = FastAPI(
        title="Roster",
        description="Multi-tenant employee directory",
        version=__version__,
        lifespan=lifespan,
    )

    # ── Middleware stack ──────────────────────────────────────
    # Starlette runs middleware in reverse order of registration.
    # Request flow: RequestContext → Security → RateLimit → CORS → handler
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(
        RateLimitMiddleware,
        default_rpm=settings.rate_limit_rpm,
        auth_rpm=settings.rate_limit_auth_rpm,
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestContextMiddleware)

    register_error_handlers(app)
    app.include_router(api_router)
    return app


# Default app instance (used by uvicorn: roster.main:app)
app = create_app()
