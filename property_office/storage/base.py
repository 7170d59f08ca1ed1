"""
Persistence contract shared by every storage backend.

Routers and services only talk to `Storage`; `MemStorage` and
`SqlStorage` are interchangeable behind it.
"""

import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone

from property_office.schemas import (
    BlogPost,
    BlogPostCreate,
    BlogPostUpdate,
    Building,
    BuildingCreate,
    BuildingUpdate,
    ContactRequest,
    ContactRequestCreate,
    ContactStatusUpdate,
    FeePayment,
    FeePaymentCreate,
    FeePaymentUpdate,
    Flat,
    FlatCreate,
    FlatUpdate,
    MaintenanceRequest,
    MaintenanceRequestCreate,
    MaintenanceRequestUpdate,
    Resident,
    ResidentCreate,
    ResidentUpdate,
    User,
    UserCreate,
    UserUpsert,
)


class StorageError(Exception):
    """Base exception for storage errors."""

    pass


class UserAlreadyExistsError(StorageError):
    """Username or email already taken by another user."""

    def __init__(self, field: str, value: str):
        self.field = field
        self.value = value
        super().__init__(f"{field} '{value}' already exists")


class ReferenceNotFoundError(StorageError):
    """A foreign key points at a record that does not exist."""

    def __init__(self, field: str, value: str):
        self.field = field
        self.value = value
        super().__init__(f"{field} '{value}' does not reference an existing record")


def new_id() -> str:
    """Opaque record id. Random, so concurrent writers never collide."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Storage(ABC):
    """
    CRUD plus the handful of filtered queries the API needs.

    - create_* assigns id/timestamps and fills declared defaults
    - get_* returns None when absent
    - update_* merges only the fields present in the patch, None when absent
    - delete_* returns whether a record was removed
    """

    # Users
    @abstractmethod
    def get_user(self, user_id: str) -> User | None: ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> User | None: ...

    @abstractmethod
    def list_users(self) -> list[User]: ...

    @abstractmethod
    def create_user(self, data: UserCreate) -> User: ...

    @abstractmethod
    def upsert_user(self, data: UserUpsert) -> User: ...

    @abstractmethod
    def delete_user(self, user_id: str) -> bool: ...

    # Buildings
    @abstractmethod
    def list_buildings(self) -> list[Building]: ...

    @abstractmethod
    def get_building(self, building_id: str) -> Building | None: ...

    @abstractmethod
    def create_building(self, data: BuildingCreate) -> Building: ...

    @abstractmethod
    def update_building(self, building_id: str, patch: BuildingUpdate) -> Building | None: ...

    @abstractmethod
    def delete_building(self, building_id: str) -> bool: ...

    # Flats
    @abstractmethod
    def list_flats(self) -> list[Flat]: ...

    @abstractmethod
    def list_flats_by_building(self, building_id: str) -> list[Flat]: ...

    @abstractmethod
    def get_flat(self, flat_id: str) -> Flat | None: ...

    @abstractmethod
    def create_flat(self, data: FlatCreate) -> Flat: ...

    @abstractmethod
    def update_flat(self, flat_id: str, patch: FlatUpdate) -> Flat | None: ...

    @abstractmethod
    def delete_flat(self, flat_id: str) -> bool: ...

    # Residents
    @abstractmethod
    def list_residents(self) -> list[Resident]: ...

    @abstractmethod
    def get_resident(self, resident_id: str) -> Resident | None: ...

    @abstractmethod
    def create_resident(self, data: ResidentCreate) -> Resident: ...

    @abstractmethod
    def update_resident(self, resident_id: str, patch: ResidentUpdate) -> Resident | None: ...

    @abstractmethod
    def delete_resident(self, resident_id: str) -> bool: ...

    # Fee payments
    @abstractmethod
    def list_fee_payments(self) -> list[FeePayment]: ...

    @abstractmethod
    def list_fee_payments_by_flat(self, flat_id: str) -> list[FeePayment]: ...

    @abstractmethod
    def get_fee_payment(self, payment_id: str) -> FeePayment | None: ...

    @abstractmethod
    def create_fee_payment(self, data: FeePaymentCreate) -> FeePayment: ...

    @abstractmethod
    def update_fee_payment(self, payment_id: str, patch: FeePaymentUpdate) -> FeePayment | None: ...

    # Maintenance requests
    @abstractmethod
    def list_maintenance_requests(self) -> list[MaintenanceRequest]: ...

    @abstractmethod
    def get_maintenance_request(self, request_id: str) -> MaintenanceRequest | None: ...

    @abstractmethod
    def create_maintenance_request(self, data: MaintenanceRequestCreate) -> MaintenanceRequest: ...

    @abstractmethod
    def update_maintenance_request(
        self, request_id: str, patch: MaintenanceRequestUpdate
    ) -> MaintenanceRequest | None: ...

    # Contact requests
    @abstractmethod
    def list_contact_requests(self) -> list[ContactRequest]: ...

    @abstractmethod
    def create_contact_request(self, data: ContactRequestCreate) -> ContactRequest: ...

    @abstractmethod
    def update_contact_request(
        self, request_id: str, patch: ContactStatusUpdate
    ) -> ContactRequest | None: ...

    # Blog posts
    @abstractmethod
    def list_blog_posts(self) -> list[BlogPost]: ...

    @abstractmethod
    def list_published_blog_posts(self) -> list[BlogPost]: ...

    @abstractmethod
    def get_blog_post(self, post_id: str) -> BlogPost | None: ...

    @abstractmethod
    def create_blog_post(self, data: BlogPostCreate) -> BlogPost: ...

    @abstractmethod
    def update_blog_post(self, post_id: str, patch: BlogPostUpdate) -> BlogPost | None: ...

    @abstractmethod
    def delete_blog_post(self, post_id: str) -> bool: ...

    def close(self) -> None:
        """Release backend resources. Called once at shutdown."""
        return None

    def ping(self) -> None:
        """Raise if the backend is unreachable (used by /health)."""
        return None
