"""Health check endpoint.

Learn: Open GET endpoint that reports whether the server is up and its
dependencies (database, Redis) are reachable. Redis only backs rate
limiting, so "not configured" counts as fine.
"""

from fastapi import APIRouter, Request

from roster import __version__
from roster.db.engine import get_database

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """Check server health and dependency connectivity."""
    checks = {"server": "ok", "version": __version__}

    try:
        await get_database(request).ping()
        checks["database"] = "ok"
    except Exception as e:
        checks["database"] = f"error: {type(e).__name__}"

    redis = getattr(request.app.state, "redis", None)
    if redis is None:
        checks["redis"] = "disabled"
    else:
        try:
            await redis.ping()
            checks["redis"] = "ok"
        except Exception as e:
            checks["redis"] = f"error: {type(e).__name__}"

    healthy = checks["database"] == "ok" and checks["redis"] in ("ok", "disabled")
    return {"status": "healthy" if healthy else "degraded", **checks}
