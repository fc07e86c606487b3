"""Pydantic schemas for registration, login and profile.

UserRead has no password field at all, so a hash can't be serialized
by accident.
"""

import uuid

from pydantic import Field

from roster.schemas.base import CamelModel, UtcDatetime

_EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+$"


class RegisterRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=255, pattern=_EMAIL_PATTERN)
    password: str = Field(..., min_length=1, max_length=128)


class LoginRequest(CamelModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserRead(CamelModel):
    id: uuid.UUID
    name: str
    email: str
    created_at: UtcDatetime
    updated_at: UtcDatetime


class AuthResponse(CamelModel):
    user: UserRead
    token: str
