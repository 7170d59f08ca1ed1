"""User-related Pydantic schemas."""

from datetime import datetime

from pydantic import EmailStr, Field, field_validator

from property_office.db.enums import Role
from property_office.schemas.common import ApiModel, blank_to_none

USERNAME_MIN = 3
USERNAME_MAX = 50
PASSWORD_MIN = 6
PASSWORD_MAX = 100


class User(ApiModel):
    """Stored user record. Holds the password hash: never return it from a route."""

    id: str
    username: str | None = None
    password: str | None = None
    role: Role = Role.USER
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    profile_image_url: str | None = None
    created_at: datetime
    updated_at: datetime


class PublicUser(ApiModel):
    """Response schema for a user (no password field)."""

    id: str
    username: str | None
    role: Role
    email: str | None
    first_name: str | None
    last_name: str | None
    profile_image_url: str | None
    created_at: datetime
    updated_at: datetime


class UserCreate(ApiModel):
    """Storage insert shape. `password` is already hashed."""

    username: str | None = None
    password: str | None = None
    role: Role = Role.USER
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    profile_image_url: str | None = None


class UserUpsert(ApiModel):
    """
    Create-or-merge by id, as used by identity-provider flows.

    None means "leave as is" when the user already exists.
    """

    id: str
    username: str | None = None
    password: str | None = None
    role: Role | None = None
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    profile_image_url: str | None = None


class AdminUserCreate(ApiModel):
    """Request schema for POST /api/admin/users."""

    username: str = Field(..., min_length=USERNAME_MIN, max_length=USERNAME_MAX)
    password: str = Field(..., min_length=PASSWORD_MIN, max_length=PASSWORD_MAX)
    role: Role = Role.USER
    email: EmailStr | None = None
    first_name: str | None = Field(None, max_length=255)
    last_name: str | None = Field(None, max_length=255)

    @field_validator("email", "first_name", "last_name", mode="before")
    @classmethod
    def empty_as_missing(cls, v):
        return blank_to_none(v)


class PasswordUpdate(ApiModel):
    """Request schema for PUT /api/admin/users/{id}/password."""

    password: str = Field(..., min_length=PASSWORD_MIN, max_length=PASSWORD_MAX)


def to_public_user(user: User) -> PublicUser:
    """Strip the password hash before a user leaves the process."""
    return PublicUser.model_validate(user.model_dump(exclude={"password"}))

