"""Fee payment (monthly dues) schemas."""

from datetime import datetime
from typing import ClassVar

from pydantic import Field

from property_office.schemas.common import ApiModel, Money, PatchModel, UtcDatetime


class FeePayment(ApiModel):
    id: str
    flat_id: str
    amount: Money
    month: int
    year: int
    is_paid: bool = False
    paid_at: datetime | None = None
    created_at: datetime


class FeePaymentCreate(ApiModel):
    flat_id: str = Field(..., min_length=1)
    amount: Money
    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=1900, le=9999)
    is_paid: bool = False
    paid_at: UtcDatetime | None = None


class FeePaymentUpdate(PatchModel):
    NON_NULLABLE: ClassVar[frozenset[str]] = frozenset(
        {"flat_id", "amount", "month", "year", "is_paid"}
    )

    flat_id: str | None = Field(None, min_length=1)
    amount: Money | None = None
    month: int | None = Field(None, ge=1, le=12)
    year: int | None = Field(None, ge=1900, le=9999)
    is_paid: bool | None = None
    paid_at: UtcDatetime | None = None
