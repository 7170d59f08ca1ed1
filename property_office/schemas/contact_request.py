"""Contact form schemas."""

from datetime import datetime

from pydantic import EmailStr, Field, field_validator

from property_office.db.enums import DEFAULT_CONTACT_STATUS, ContactStatus
from property_office.schemas.common import ApiModel, PatchModel, blank_to_none


class ContactRequest(ApiModel):
    id: str
    name: str
    email: str
    phone: str | None = None
    service_type: str | None = None
    message: str
    status: ContactStatus = DEFAULT_CONTACT_STATUS
    created_at: datetime


class ContactRequestCreate(ApiModel):
    """Public contact form body. Status is always set server-side."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: str | None = Field(None, max_length=50)
    service_type: str | None = Field(None, max_length=100)
    message: str = Field(..., min_length=1, max_length=5000)

    @field_validator("phone", "service_type", mode="before")
    @classmethod
    def empty_as_missing(cls, v):
        return blank_to_none(v)


class ContactStatusUpdate(PatchModel):
    """Back-office triage of a contact request."""

    status: ContactStatus
