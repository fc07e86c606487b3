"""Ownership-scoped employee repository.

Learn: Every method takes owner_id as an explicit argument and every
statement it builds filters on it. There is no "get any employee"
path. Reads, updates and deletes match on (id, owner_id) together, so a
row owned by someone else is indistinguishable from a row that does not
exist: both come back as None / 0.

owner_id always comes from the authenticated Principal, never from the
request body. EmployeeCreate has no owner field to begin with.
"""

import uuid
from typing import Optional

import structlog
from sqlalchemy import Select, delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from roster.db.models import Employee, utcnow
from roster.schemas.employee import EmployeeCreate, EmployeeUpdate

logger = structlog.get_logger()


class EmployeeRepository:
    """Data access for Employee, always constrained to one owner."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ─── Reads ──────────────────────────────────────────

    async def list_all(self, owner_id: uuid.UUID) -> list[Employee]:
        return await self._fetch(self._owned(owner_id))

    async def list_by_name(
        self, owner_id: uuid.UUID, name: str
    ) -> list[Employee]:
        """Case-insensitive substring match on name. % and _ match literally."""
        q = self._owned(owner_id).where(
            Employee.name.icontains(name, autoescape=True)
        )
        return await self._fetch(q)

    async def list_by_name_and_role(
        self, owner_id: uuid.UUID, name: str, role: str
    ) -> list[Employee]:
        """Name substring AND exact role."""
        q = self._owned(owner_id).where(
            Employee.name.icontains(name, autoescape=True),
            Employee.role == role,
        )
        return await self._fetch(q)

    async def get_by_id(
        self, owner_id: uuid.UUID, employee_id: uuid.UUID
    ) -> Optional[Employee]:
        result = await self.db.execute(
            self._owned(owner_id).where(Employee.id == employee_id)
        )
        return result.scalars().first()

    # ─── Writes ─────────────────────────────────────────

    async def create(self, data: EmployeeCreate, owner_id: uuid.UUID) -> Employee:
        _require_owner(owner_id)
        employee = Employee(**data.model_dump(by_alias=False), owner_id=owner_id)
        self.db.add(employee)
        await self.db.flush()
        await self.db.commit()

        logger.info(
            "roster.employee_created",
            employee_id=str(employee.id),
            owner_id=str(owner_id),
        )
        return employee

    async def update(
        self,
        owner_id: uuid.UUID,
        employee_id: uuid.UUID,
        data: EmployeeUpdate,
    ) -> Optional[Employee]:
        """Conditional write on (id, owner_id). None when nothing matched.

        Only fields present in `data` change. id and owner_id are not
        fields of EmployeeUpdate, so they can't be written here.
        """
        _require_owner(owner_id)
        changes = data.changes()
        if not changes:
            return await self.get_by_id(owner_id, employee_id)

        result = await self.db.execute(
            update(Employee)
            .where(Employee.id == employee_id, Employee.owner_id == owner_id)
            .values(**changes, updated_at=utcnow())
            .returning(Employee)
        )
        employee = result.scalars().first()
        await self.db.commit()

        if employee is not None:
            logger.info(
                "roster.employee_updated",
                employee_id=str(employee_id),
                fields=sorted(changes),
            )
        return employee

    async def remove(self, owner_id: uuid.UUID, employee_id: uuid.UUID) -> int:
        """Conditional delete on (id, owner_id). Returns rows matched."""
        _require_owner(owner_id)
        result = await self.db.execute(
            delete(Employee)
            .where(Employee.id == employee_id, Employee.owner_id == owner_id)
        )
        await self.db.commit()

        matched = result.rowcount or 0
        if matched:
            logger.info("roster.employee_deleted", employee_id=str(employee_id))
        return matched

    # ─── Helpers ────────────────────────────────────────

    def _owned(self, owner_id: uuid.UUID) -> Select:
        _require_owner(owner_id)
        return (
            select(Employee)
            .where(Employee.owner_id == owner_id)
            .order_by(Employee.created_at, Employee.id)
        )

    async def _fetch(self, q: Select) -> list[Employee]:
        result = await self.db.execute(q)
        return list(result.scalars().all())


def _require_owner(owner_id: Optional[uuid.UUID]) -> None:
    if owner_id is None:
        raise ValueError("owner_id is required for every employee query")
