"""Authentication-related Pydantic schemas."""

from pydantic import Field

from property_office.schemas.common import ApiModel
from property_office.schemas.user import (
    PASSWORD_MAX,
    PASSWORD_MIN,
    USERNAME_MAX,
    USERNAME_MIN,
)


class RegisterRequest(ApiModel):
    """
    Self-registration body.

    Only username and password are read; anything else the client sends
    (notably "role") is ignored.
    """

    username: str = Field(..., min_length=USERNAME_MIN, max_length=USERNAME_MAX)
    password: str = Field(..., min_length=PASSWORD_MIN, max_length=PASSWORD_MAX)


class LoginRequest(ApiModel):
    username: str
    password: str
