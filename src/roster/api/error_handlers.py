"""Global exception handlers.

Learn: Three layers, most specific first:
- RosterError → its own status + {"detail": message}
- RequestValidationError → 400 with field-level messages
- Exception (catch-all) → 500, never leaks internal details

FastAPI parses the request body before it resolves dependencies, so a
broken body on a protected route would otherwise be reported before the
missing token. The validation handler checks the bearer token first on
those routes, so unauthenticated callers always get the 401.

Validation errors list the field and the problem but never echo the
submitted value, so a password can't come back in an error body.
"""

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from roster.auth.dependencies import resolve_principal
from roster.errors import InternalError, RosterError, ValidationFailed

logger = structlog.get_logger()

PROTECTED_PREFIXES = ("/api/employees",)


def error_response(exc: RosterError) -> JSONResponse:
    headers = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
        headers=headers,
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(RosterError)
    async def roster_error_handler(request: Request, exc: RosterError):
        return error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ):
        if request.url.path.startswith(PROTECTED_PREFIXES):
            try:
                resolve_principal(request.headers.get("Authorization"))
            except RosterError as auth_error:
                return error_response(auth_error)

        errors = [
            {
                "field": ".".join(str(part) for part in err["loc"][1:]) or None,
                "message": err["msg"],
            }
            for err in exc.errors()
        ]
        logger.info(
            "roster.validation_failed",
            path=request.url.path,
            fields=[e["field"] for e in errors],
        )
        return JSONResponse(
            status_code=ValidationFailed.status_code,
            content={"detail": ValidationFailed.message, "errors": errors},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(
            "roster.unhandled_error",
            path=request.url.path,
            method=request.method,
        )
        return JSONResponse(
            status_code=InternalError.status_code,
            content={"detail": InternalError.message},
        )
