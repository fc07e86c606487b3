"""Account service — registration, login and profile lookup.

Learn: Service layer separates business logic from HTTP routing.
Routes translate HTTP to service calls; the service talks to the
repository and the credential helpers.

Login failures are deliberately uniform. An unknown email still pays
for one bcrypt check (against a throwaway hash), so response time and
body don't reveal whether the email is registered.
"""

import asyncio
from functools import lru_cache

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from roster.auth.jwt import Principal, create_access_token
from roster.auth.password import (
    hash_password,
    hash_password_async,
    verify_password_async,
)
from roster.db.models import User
from roster.errors import Conflict, InvalidCredentials, NotFoundOrForbidden
from roster.repositories.users import UserRepository
from roster.schemas.user import LoginRequest, RegisterRequest

logger = structlog.get_logger()


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    return hash_password("roster-timing-equalizer")


def issue_token_for(user: User) -> str:
    return create_access_token(Principal(user_id=user.id, email=user.email))


class AccountService:
    """Business logic for user accounts."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.users = UserRepository(db)

    async def register(self, body: RegisterRequest) -> tuple[User, str]:
        if await self.users.get_by_email(body.email):
            raise Conflict()

        password_hash = await hash_password_async(body.password)
        user = await self.users.create(
            name=body.name, email=body.email, password_hash=password_hash
        )
        logger.info("roster.user_registered", user_id=str(user.id))
        return user, issue_token_for(user)

    async def login(self, body: LoginRequest) -> tuple[User, str]:
        user = await self.users.get_by_email(body.email)
        if user is not None:
            stored_hash = user.password_hash
        else:
            stored_hash = await asyncio.to_thread(_dummy_hash)

        valid = await verify_password_async(body.password, stored_hash)
        if user is None or not valid:
            logger.info("roster.login_failed")
            raise InvalidCredentials()

        logger.info("roster.login_succeeded", user_id=str(user.id))
        return user, issue_token_for(user)

    async def profile(self, principal: Principal) -> User:
        user = await self.users.get_by_id(principal.user_id)
        if user is None:
            raise NotFoundOrForbidden("User not found")
        return user
