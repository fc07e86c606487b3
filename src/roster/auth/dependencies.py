"""FastAPI auth dependency — the identity resolver.

Learn: get_current_principal is used as Depends() by every protected
route. It returns a typed Principal that the route passes on explicitly
to the repository, instead of stashing the identity on the request.

Policy:
1. No header, or not "Bearer <token>" → 401
2. Token expired / malformed / bad signature → 401, same body for all
   three so callers can't learn why validation failed
3. Otherwise → Principal
"""

from typing import Optional

import structlog
from fastapi import Header

from roster.auth.jwt import Principal, TokenError, verify_token
from roster.errors import Unauthenticated

logger = structlog.get_logger()

_SCHEME = "bearer"


def resolve_principal(authorization: Optional[str]) -> Principal:
    """Turn a raw Authorization header value into a Principal."""
    if not authorization:
        raise Unauthenticated()

    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme.lower() != _SCHEME or not token or " " in token:
        raise Unauthenticated()

    try:
        return verify_token(token)
    except TokenError as e:
        logger.info("roster.auth.token_rejected", reason=e.reason)
        raise Unauthenticated("Invalid or expired token")


async def get_current_principal(
    authorization: Optional[str] = Header(None),
) -> Principal:
    """Required auth — raises Unauthenticated (401) when absent or invalid."""
    return resolve_principal(authorization)
