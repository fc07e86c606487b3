"""Rate limiting middleware — Redis fixed-window counters.

Learn: One counter per (client IP, bucket, minute), stored in Redis
under "roster:rl:{ip}:{bucket}:{minute}". Login and register share a
stricter "auth" bucket to slow down password guessing.

Redis lives on app.state.redis (set up in the lifespan). When it's
missing or erroring, requests pass through unlimited.
"""

import time

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

logger = structlog.get_logger()

AUTH_PATHS = ("/api/users/login", "/api/users/register")


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Per-IP per-minute request limits."""

    def __init__(self, app, default_rpm: int = 100, auth_rpm: int = 10):
        super().__init__(app)
        self.default_rpm = default_rpm
        self.auth_rpm = auth_rpm

    async def dispatch(self, request: Request, call_next) -> Response:
        redis = getattr(request.app.state, "redis", None)
        if redis is None:
            return await call_next(request)

        is_auth = request.url.path.startswith(AUTH_PATHS)
        bucket = "auth" if is_auth else "api"
        rpm = self.auth_rpm if is_auth else self.default_rpm
        client_ip = request.client.host if request.client else "unknown"
        key = f"roster:rl:{client_ip}:{bucket}:{int(time.time() // 60)}"

        try:
            count = await redis.incr(key)
            if count == 1:
                await redis.expire(key, 120)
        except Exception as e:
            logger.warning("roster.rate_limit_unavailable", error=type(e).__name__)
            return await call_next(request)

        if count > rpm:
            logger.info("roster.rate_limited", bucket=bucket, client_ip=client_ip)
            return JSONResponse(
                status_code=429,
                content={"detail": "Rate limit exceeded. Try again later."},
                headers={"Retry-After": "60"},
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(rpm)
        response.headers["X-RateLimit-Remaining"] = str(max(0, rpm - count))
        return response
