"""API route aggregation.

All routers registered here get mounted in main.py under /api.

Learn: Auth is applied at the include_router level for the employees
router, so no employee route can be added without it. Handlers also
take the Principal as a parameter because they need its user_id;
FastAPI resolves the dependency once per request either way.
"""

from fastapi import APIRouter, Depends

from roster.api.employees import router as employees_router
from roster.api.health import router as health_router
from roster.api.users import router as users_router
from roster.auth.dependencies import get_current_principal

_auth = [Depends(get_current_principal)]

api_router = APIRouter(prefix="/api")

# Open routes (profile enforces auth itself)
api_router.include_router(health_router, tags=["health"])
api_router.include_router(users_router, tags=["users"])

# Protected routes
api_router.include_router(employees_router, tags=["employees"], dependencies=_auth)
