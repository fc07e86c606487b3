"""Employee API routes.

Learn: Routes only dispatch and map outcomes. The Principal comes from
the auth dependency and is handed to the repository explicitly; the
repository does the owner scoping. A None / 0 result from the
repository always becomes the same 404, whether the id doesn't exist or
belongs to another user.

- GET /employees?name=&role= → list (name substring, exact role)
- GET /employees/:id
- POST /employees → 201
- PUT /employees/:id → partial update
- DELETE /employees/:id → 204
"""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from roster.auth.dependencies import get_current_principal
from roster.auth.jwt import Principal
from roster.db.engine import get_db
from roster.errors import NotFoundOrForbidden
from roster.repositories.employees import EmployeeRepository
from roster.schemas.employee import EmployeeCreate, EmployeeRead, EmployeeUpdate

router = APIRouter(prefix="/employees")


def _repo(db: AsyncSession = Depends(get_db)) -> EmployeeRepository:
    return EmployeeRepository(db)


def _parse_id(employee_id: str) -> uuid.UUID:
    # A malformed id can't match anything, so it gets the usual 404.
    try:
        return uuid.UUID(employee_id)
    except ValueError:
        raise NotFoundOrForbidden()


@router.get("", response_model=list[EmployeeRead])
async def list_employees(
    name: Optional[str] = Query(None, description="Substring of the name"),
    role: Optional[str] = Query(None, description="Exact role"),
    principal: Principal = Depends(get_current_principal),
    repo: EmployeeRepository = Depends(_repo),
):
    """List the caller's employees, optionally filtered."""
    owner_id = principal.user_id
    if role:
        return await repo.list_by_name_and_role(owner_id, name or "", role)
    if name:
        return await repo.list_by_name(owner_id, name)
    return await repo.list_all(owner_id)


@router.get("/{employee_id}", response_model=EmployeeRead)
async def get_employee(
    employee_id: str,
    principal: Principal = Depends(get_current_principal),
    repo: EmployeeRepository = Depends(_repo),
):
    employee = await repo.get_by_id(principal.user_id, _parse_id(employee_id))
    if not employee:
        raise NotFoundOrForbidden()
    return employee


@router.post("", response_model=EmployeeRead, status_code=201)
async def create_employee(
    body: EmployeeCreate,
    principal: Principal = Depends(get_current_principal),
    repo: EmployeeRepository = Depends(_repo),
):
    """Create an employee owned by the caller. Any ownerId in the body is ignored."""
    return await repo.create(body, owner_id=principal.user_id)


@router.put("/{employee_id}", response_model=EmployeeRead)
async def update_employee(
    employee_id: str,
    body: EmployeeUpdate,
    principal: Principal = Depends(get_current_principal),
    repo: EmployeeRepository = Depends(_repo),
):
    """Partially update an employee. Fields not in the body keep their values."""
    employee = await repo.update(principal.user_id, _parse_id(employee_id), body)
    if not employee:
        raise NotFoundOrForbidden()
    return employee


@router.delete("/{employee_id}", status_code=204)
async def delete_employee(
    employee_id: str,
    principal: Principal = Depends(get_current_principal),
    repo: EmployeeRepository = Depends(_repo),
):
    matched = await repo.remove(principal.user_id, _parse_id(employee_id))
    if matched == 0:
        raise NotFoundOrForbidden()
    return Response(status_code=204)
