"""Building schemas."""

from datetime import datetime
from typing import ClassVar

from pydantic import Field

from property_office.schemas.common import ApiModel, Money, PatchModel


class Building(ApiModel):
    id: str
    name: str
    address: str
    total_flats: int
    monthly_fee: Money
    manager_id: str | None = None
    created_at: datetime


class BuildingCreate(ApiModel):
    name: str = Field(..., min_length=1, max_length=255)
    address: str = Field(..., min_length=1, max_length=500)
    total_flats: int = Field(..., ge=0)
    monthly_fee: Money
    manager_id: str | None = None


class BuildingUpdate(PatchModel):
    NON_NULLABLE: ClassVar[frozenset[str]] = frozenset(
        {"name", "address", "total_flats", "monthly_fee"}
    )

    name: str | None = Field(None, min_length=1, max_length=255)
    address: str | None = Field(None, min_length=1, max_length=500)
    total_flats: int | None = Field(None, ge=0)
    monthly_fee: Money | None = None
    manager_id: str | None = None
