"""Request context middleware — request ID + access log.

Learn: Every request gets an ID, either from the incoming X-Request-ID
header (so a caller's trace continues) or a fresh UUID. It is bound to
structlog's contextvars so every log line for the request carries it,
then echoed back in the response header.

One "roster.request" line per request with method, path, status and
duration. The line is written even when the handler raises, with
status 500. Query strings and bodies are never logged.
"""

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = structlog.get_logger()


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind a request ID and log one access line per request."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        started = time.perf_counter()
        status = 500
        try:
            response: Response = await call_next(request)
            status = response.status_code
        finally:
            logger.info(
                "roster.request",
                method=request.method,
                path=request.url.path,
                status=status,
                duration_ms=round((time.perf_counter() - started) * 1000, 1),
            )
        response.headers["X-Request-ID"] = request_id
        return response
