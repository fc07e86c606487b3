"""Error taxonomy for the directory API.

Learn: Services and repositories raise these instead of HTTPException,
so the same rules apply whether a call comes from a route, the CLI, or
a test. api/error_handlers.py turns them into JSON responses.

Messages here are public. Never put a password, hash, or token in one.
"""


class RosterError(Exception):
    """Base class. Subclasses fix the HTTP status."""

    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str | None = None):
        if message:
            self.message = message
        super().__init__(self.message)


class ValidationFailed(RosterError):
    status_code = 400
    message = "Validation failed"


class Conflict(RosterError):
    """Duplicate unique value (e.g. email). Reported as 400."""

    status_code = 400
    message = "Email already in use"


class Unauthenticated(RosterError):
    """Missing, malformed, expired, or forged bearer token."""

    status_code = 401
    message = "Authentication required"


class InvalidCredentials(Unauthenticated):
    """Login failure. Wrong password and unknown email look the same."""

    message = "Invalid credentials"


class NotFoundOrForbidden(RosterError):
    """Entity missing or owned by someone else. Deliberately one outcome."""

    status_code = 404
    message = "Not found"


class InternalError(RosterError):
    pass
