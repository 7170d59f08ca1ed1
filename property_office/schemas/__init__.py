"""Pydantic schemas for API request/response models."""

from property_office.schemas.auth import LoginRequest, RegisterRequest
from property_office.schemas.blog_post import BlogPost, BlogPostCreate, BlogPostUpdate
from property_office.schemas.building import Building, BuildingCreate, BuildingUpdate
from property_office.schemas.common import ApiModel, Money, PatchModel, SuccessResponse
from property_office.schemas.contact_request import (
    ContactRequest,
    ContactRequestCreate,
    ContactStatusUpdate,
)
from property_office.schemas.dashboard import DashboardStats
from property_office.schemas.fee_payment import (
    FeePayment,
    FeePaymentCreate,
    FeePaymentUpdate,
)
from property_office.schemas.flat import Flat, FlatCreate, FlatUpdate
from property_office.schemas.maintenance_request import (
    MaintenanceRequest,
    MaintenanceRequestCreate,
    MaintenanceRequestUpdate,
)
from property_office.schemas.resident import Resident, ResidentCreate, ResidentUpdate
from property_office.schemas.user import (
    AdminUserCreate,
    PasswordUpdate,
    PublicUser,
    User,
    UserCreate,
    UserUpsert,
    to_public_user,
)

__all__ = [
    "AdminUserCreate",
    "ApiModel",
    "BlogPost",
    "BlogPostCreate",
    "BlogPostUpdate",
    "Building",
    "BuildingCreate",
    "BuildingUpdate",
    "ContactRequest",
    "ContactRequestCreate",
    "ContactStatusUpdate",
    "DashboardStats",
    "FeePayment",
    "FeePaymentCreate",
    "FeePaymentUpdate",
    "Flat",
    "FlatCreate",
    "FlatUpdate",
    "LoginRequest",
    "MaintenanceRequest",
    "MaintenanceRequestCreate",
    "MaintenanceRequestUpdate",
    "Money",
    "PatchModel",
    "PasswordUpdate",
    "PublicUser",
    "RegisterRequest",
    "Resident",
    "ResidentCreate",
    "ResidentUpdate",
    "SuccessResponse",
    "User",
    "UserCreate",
    "UserUpsert",
    "to_public_user",
]
