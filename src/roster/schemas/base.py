"""Shared pydantic config for API schemas.

Learn: The single-page client speaks camelCase (zipCode, ownerId,
createdAt). Models keep snake_case attribute names, emit camelCase
aliases, and accept either spelling on input.

Timestamps are stored in UTC. Some drivers (SQLite) hand them back
without an offset, so read models re-attach UTC before serializing.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

CENTS = Decimal("0.01")


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        extra="ignore",
    )


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_cents(value: Decimal) -> Decimal:
    """Fix money at two decimal places, the same scale as the column."""
    return value.quantize(CENTS)


Money = Annotated[Decimal, AfterValidator(to_cents)]
UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]
