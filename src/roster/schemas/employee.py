"""Pydantic schemas for employees.

Learn: EmployeeCreate and EmployeeUpdate only declare the fields a client
is allowed to set. Anything else in the body (ownerId, id, timestamps) is
dropped during validation, so the owner can only ever come from the
authenticated principal.

Salary is quantized to cents on the way in, so the value returned by
POST is the same value every later GET reads back from the column.
"""

import uuid
from datetime import date
from typing import Optional

from pydantic import Field, model_validator

from roster.schemas.base import CamelModel, Money, UtcDatetime


class EmployeeCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    address: str = Field(..., min_length=1, max_length=300)
    neighborhood: Optional[str] = Field(None, max_length=120)
    zip_code: Optional[str] = Field(None, max_length=20)
    phone: Optional[str] = Field(None, max_length=40)
    role: str = Field(..., min_length=1, max_length=100)
    salary: Money = Field(..., ge=0, max_digits=12, decimal_places=2)
    contract_date: date


class EmployeeUpdate(CamelModel):
    """Partial update. Only fields present in the body are written."""

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    address: Optional[str] = Field(None, min_length=1, max_length=300)
    neighborhood: Optional[str] = Field(None, max_length=120)
    zip_code: Optional[str] = Field(None, max_length=20)
    phone: Optional[str] = Field(None, max_length=40)
    role: Optional[str] = Field(None, min_length=1, max_length=100)
    salary: Optional[Money] = Field(None, ge=0, max_digits=12, decimal_places=2)
    contract_date: Optional[date] = None

    @model_validator(mode="after")
    def required_fields_not_null(self):
        for name in ("name", "address", "role", "salary", "contract_date"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict:
        """Column → value for every field the client actually sent."""
        return self.model_dump(exclude_unset=True, by_alias=False)


class EmployeeRead(CamelModel):
    id: uuid.UUID
    name: str
    address: str
    neighborhood: Optional[str] = None
    zip_code: Optional[str] = None
    phone: Optional[str] = None
    role: str
    salary: Money
    contract_date: date
    owner_id: uuid.UUID
    created_at: UtcDatetime
    updated_at: UtcDatetime

