"""Flat schemas."""

from datetime import datetime
from typing import ClassVar

from pydantic import Field, field_validator

from property_office.schemas.common import ApiModel, PatchModel, blank_to_none


class Flat(ApiModel):
    id: str
    building_id: str
    flat_number: str
    block: str | None = None
    size: int | None = None  # square meters
    resident_id: str | None = None
    created_at: datetime

    @property
    def is_occupied(self) -> bool:
        return self.resident_id is not None


class FlatCreate(ApiModel):
    building_id: str = Field(..., min_length=1)
    flat_number: str = Field(..., min_length=1, max_length=50)
    block: str | None = Field(None, max_length=50)
    size: int | None = Field(None, ge=0)
    resident_id: str | None = None

    @field_validator("block", "resident_id", mode="before")
    @classmethod
    def empty_as_missing(cls, v):
        return blank_to_none(v)


class FlatUpdate(PatchModel):
    NON_NULLABLE: ClassVar[frozenset[str]] = frozenset({"building_id", "flat_number"})

    building_id: str | None = Field(None, min_length=1)
    flat_number: str | None = Field(None, min_length=1, max_length=50)
    block: str | None = Field(None, max_length=50)
    size: int | None = Field(None, ge=0)
    resident_id: str | None = None

    @field_validator("block", "resident_id", mode="before")
    @classmethod
    def empty_as_missing(cls, v):
        return blank_to_none(v)
