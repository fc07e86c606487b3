"""JWT bearer token creation and verification.

Learn: Tokens are stateless. A token carries {sub, email, iat, exp} and
is valid for settings.token_expire_hours (24h) from issue. There is no
server-side revocation list; validity is signature + expiry only.

verify_token() reports failures as TokenError subclasses so callers can
log the reason. The HTTP layer collapses them all into a single 401.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from roster.config import settings


@dataclass(frozen=True)
class Principal:
    """The authenticated identity for one request. Never persisted."""

    user_id: uuid.UUID
    email: str


class TokenError(Exception):
    """Raised when token verification fails."""

    reason = "invalid"


class TokenExpired(TokenError):
    reason = "expired"


class TokenMalformed(TokenError):
    reason = "malformed"


class TokenSignatureInvalid(TokenError):
    reason = "signature_invalid"


def create_access_token(
    principal: Principal,
    secret: Optional[str] = None,
    ttl: Optional[timedelta] = None,
) -> str:
    """Issue a signed token for the principal."""
    issued_at = datetime.now(timezone.utc)
    expires = issued_at + (ttl or timedelta(hours=settings.token_expire_hours))
    payload = {
        "sub": str(principal.user_id),
        "email": principal.email,
        "iat": issued_at,
        "exp": expires,
    }
    return jwt.encode(
        payload, secret or settings.jwt_secret, algorithm=settings.jwt_algorithm
    )


def verify_token(token: str, secret: Optional[str] = None) -> Principal:
    """Verify a token and rebuild the Principal it was issued for.

    Raises TokenExpired, TokenSignatureInvalid or TokenMalformed.
    """
    try:
        payload = jwt.decode(
            token,
            secret or settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "email", "exp", "iat"]},
        )
    except jwt.ExpiredSignatureError:
        raise TokenExpired("Token has expired")
    except jwt.InvalidSignatureError:
        raise TokenSignatureInvalid("Token signature is invalid")
    except jwt.InvalidTokenError as e:
        raise TokenMalformed(f"Invalid token: {e}")

    try:
        user_id = uuid.UUID(str(payload["sub"]))
    except ValueError:
        raise TokenMalformed("Invalid token: subject is not a user id")
    if not isinstance(payload["email"], str):
        raise TokenMalformed("Invalid token: email claim is not a string")

    return Principal(user_id=user_id, email=payload["email"])
