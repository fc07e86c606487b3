"""Users API — registration, login, profile.

- POST /users/register → create account, returns {user, token}
- POST /users/login → email/password → {user, token}
- GET /users/profile → current user (bearer token required)
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from roster.auth.dependencies import get_current_principal
from roster.auth.jwt import Principal
from roster.db.engine import get_db
from roster.schemas.user import AuthResponse, LoginRequest, RegisterRequest, UserRead
from roster.services.account_service import AccountService

router = APIRouter(prefix="/users")


def _svc(db: AsyncSession = Depends(get_db)) -> AccountService:
    return AccountService(db)


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(body: RegisterRequest, svc: AccountService = Depends(_svc)):
    """Create a new user account and log it in."""
    user, token = await svc.register(body)
    return AuthResponse(user=UserRead.model_validate(user), token=token)


@router.post("/login", response_model=AuthResponse)
async def login(body: LoginRequest, svc: AccountService = Depends(_svc)):
    user, token = await svc.login(body)
    return AuthResponse(user=UserRead.model_validate(user), token=token)


@router.get("/profile", response_model=UserRead)
async def profile(
    principal: Principal = Depends(get_current_principal),
    svc: AccountService = Depends(_svc),
):
    """Get the current authenticated user's info."""
    return await svc.profile(principal)
