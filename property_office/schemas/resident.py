"""Resident schemas."""

from datetime import datetime
from typing import ClassVar

from pydantic import EmailStr, Field, field_validator

from property_office.schemas.common import ApiModel, PatchModel, blank_to_none


class Resident(ApiModel):
    id: str
    name: str
    email: str | None = None
    phone: str | None = None
    created_at: datetime


class ResidentCreate(ApiModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=50)

    @field_validator("email", "phone", mode="before")
    @classmethod
    def empty_as_missing(cls, v):
        """The admin form posts "" for fields left blank."""
        return blank_to_none(v)


class ResidentUpdate(PatchModel):
    NON_NULLABLE: ClassVar[frozenset[str]] = frozenset({"name"})

    name: str | None = Field(None, min_length=1, max_length=255)
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=50)

    @field_validator("email", "phone", mode="before")
    @classmethod
    def empty_as_missing(cls, v):
        return blank_to_none(v)
