"""In-process storage backend (dict per entity type)."""

import threading
from typing import Any, Callable, Generic, TypeVar

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from property_office.db.enums import Role
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
from property_office.storage.base import (
    ReferenceNotFoundError,
    Storage,
    UserAlreadyExistsError,
    new_id,
    utcnow,
)

RecordT = TypeVar("RecordT", bound=BaseModel)


class _Table(Generic[RecordT]):
    """
    Map of id -> record for one entity type.

    Records handed out are copies, so callers cannot change stored state
    without going through the storage API. Not locked on its own; the
    owning MemStorage holds its lock around every call.
    """

    def __init__(self, record_type: type[RecordT]):
        self.record_type = record_type
        self.rows: dict[str, RecordT] = {}

    def insert(self, values: dict[str, Any], record_id: str | None = None) -> RecordT:
        record = self.record_type.model_validate(
            {"id": record_id or new_id(), "created_at": utcnow(), **values}
        )
        self.rows[record.id] = record
        return record.model_copy()

    def get(self, record_id: str) -> RecordT | None:
        record = self.rows.get(record_id)
        return record.model_copy() if record is not None else None

    def all(self) -> list[RecordT]:
        return [r.model_copy() for r in self.rows.values()]

    def where(self, predicate: Callable[[RecordT], bool]) -> list[RecordT]:
        return [r.model_copy() for r in self.rows.values() if predicate(r)]

    def merge(self, record_id: str, patch: dict[str, Any]) -> RecordT | None:
        current = self.rows.get(record_id)
        if current is None:
            return None
        updated = current.model_copy(update=patch)
        self.rows[record_id] = updated
        return updated.model_copy()

    def remove(self, record_id: str) -> bool:
        return self.rows.pop(record_id, None) is not None


class MemStorage(Storage):
    """
    Storage kept in process memory; contents are lost on restart.

    Sync route handlers run on a thread pool, so every read-modify-write
    happens under one re-entrant lock.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self.users: _Table[User] = _Table(User)
        self.buildings: _Table[Building] = _Table(Building)
        self.flats: _Table[Flat] = _Table(Flat)
        self.residents: _Table[Resident] = _Table(Resident)
        self.fee_payments: _Table[FeePayment] = _Table(FeePayment)
        self.maintenance_requests: _Table[MaintenanceRequest] = _Table(MaintenanceRequest)
        self.contact_requests: _Table[ContactRequest] = _Table(ContactRequest)
        self.blog_posts: _Table[BlogPost] = _Table(BlogPost)

        # Foreign key column -> table it points into
        self._references: dict[str, _Table] = {
            "manager_id": self.users,
            "building_id": self.buildings,
            "resident_id": self.residents,
            "flat_id": self.flats,
        }

    def _check_references(self, values: dict[str, Any]) -> None:
        for field, table in self._references.items():
            ref = values.get(field)
            if ref is not None and ref not in table.rows:
                raise ReferenceNotFoundError(to_camel(field), ref)

    def _ensure_unique_user(
        self, username: str | None, email: str | None, exclude_id: str | None = None
    ) -> None:
        for user in self.users.rows.values():
            if user.id == exclude_id:
                continue
            if username is not None and user.username == username:
                raise UserAlreadyExistsError("username", username)
            if email is not None and user.email == email:
                raise UserAlreadyExistsError("email", email)

    # =========================================================================
    # Users
    # =========================================================================

    def get_user(self, user_id: str) -> User | None:
        with self._lock:
            return self.users.get(user_id)

    def get_user_by_username(self, username: str) -> User | None:
        with self._lock:
            matches = self.users.where(lambda u: u.username == username)
            return matches[0] if matches else None

    def list_users(self) -> list[User]:
        with self._lock:
            return self.users.all()

    def create_user(self, data: UserCreate) -> User:
        with self._lock:
            self._ensure_unique_user(data.username, data.email)
            now = utcnow()
            return self.users.insert(
                {**data.model_dump(), "created_at": now, "updated_at": now}
            )

    def upsert_user(self, data: UserUpsert) -> User:
        fields = data.model_dump(exclude={"id"}, exclude_none=True)
        with self._lock:
            self._ensure_unique_user(
                fields.get("username"), fields.get("email"), exclude_id=data.id
            )
            now = utcnow()
            if data.id in self.users.rows:
                return self.users.merge(data.id, {**fields, "updated_at": now})
            fields.setdefault("role", Role.USER)
            return self.users.insert(
                {**fields, "created_at": now, "updated_at": now}, record_id=data.id
            )

    def delete_user(self, user_id: str) -> bool:
        with self._lock:
            if not self.users.remove(user_id):
                return False
            for building in self.buildings.where(lambda b: b.manager_id == user_id):
                self.buildings.merge(building.id, {"manager_id": None})
            return True

    # =========================================================================
    # Buildings
    # =========================================================================

    def list_buildings(self) -> list[Building]:
        with self._lock:
            return self.buildings.all()

    def get_building(self, building_id: str) -> Building | None:
        with self._lock:
            return self.buildings.get(building_id)

    def create_building(self, data: BuildingCreate) -> Building:
        values = data.model_dump()
        with self._lock:
            self._check_references(values)
            return self.buildings.insert(values)

    def update_building(self, building_id: str, patch: BuildingUpdate) -> Building | None:
        fields = patch.to_patch()
        with self._lock:
            if building_id not in self.buildings.rows:
                return None
            self._check_references(fields)
            return self.buildings.merge(building_id, fields)

    def delete_building(self, building_id: str) -> bool:
        with self._lock:
            if not self.buildings.remove(building_id):
                return False
            for flat in self.flats.where(lambda f: f.building_id == building_id):
                self._remove_flat(flat.id)
            return True

    # =========================================================================
    # Flats
    # =========================================================================

    def list_flats(self) -> list[Flat]:
        with self._lock:
            return self.flats.all()

    def list_flats_by_building(self, building_id: str) -> list[Flat]:
        with self._lock:
            return self.flats.where(lambda f: f.building_id == building_id)

    def get_flat(self, flat_id: str) -> Flat | None:
        with self._lock:
            return self.flats.get(flat_id)

    def create_flat(self, data: FlatCreate) -> Flat:
        values = data.model_dump()
        with self._lock:
            self._check_references(values)
            return self.flats.insert(values)

    def update_flat(self, flat_id: str, patch: FlatUpdate) -> Flat | None:
        fields = patch.to_patch()
        with self._lock:
            if flat_id not in self.flats.rows:
                return None
            self._check_references(fields)
            return self.flats.merge(flat_id, fields)

    def delete_flat(self, flat_id: str) -> bool:
        with self._lock:
            return self._remove_flat(flat_id)

    def _remove_flat(self, flat_id: str) -> bool:
        if not self.flats.remove(flat_id):
            return False
        for payment in self.fee_payments.where(lambda p: p.flat_id == flat_id):
            self.fee_payments.remove(payment.id)
        for request in self.maintenance_requests.where(lambda r: r.flat_id == flat_id):
            self.maintenance_requests.remove(request.id)
        return True

    # =========================================================================
    # Residents
    # =========================================================================

    def list_residents(self) -> list[Resident]:
        with self._lock:
            return self.residents.all()

    def get_resident(self, resident_id: str) -> Resident | None:
        with self._lock:
            return self.residents.get(resident_id)

    def create_resident(self, data: ResidentCreate) -> Resident:
        with self._lock:
            return self.residents.insert(data.model_dump())

    def update_resident(self, resident_id: str, patch: ResidentUpdate) -> Resident | None:
        with self._lock:
            return self.residents.merge(resident_id, patch.to_patch())

    def delete_resident(self, resident_id: str) -> bool:
        with self._lock:
            if not self.residents.remove(resident_id):
                return False
            for flat in self.flats.where(lambda f: f.resident_id == resident_id):
                self.flats.merge(flat.id, {"resident_id": None})
            return True

    # =========================================================================
    # Fee payments
    # =========================================================================

    def list_fee_payments(self) -> list[FeePayment]:
        with self._lock:
            return self.fee_payments.all()

    def list_fee_payments_by_flat(self, flat_id: str) -> list[FeePayment]:
        with self._lock:
            return self.fee_payments.where(lambda p: p.flat_id == flat_id)

    def get_fee_payment(self, payment_id: str) -> FeePayment | None:
        with self._lock:
            return self.fee_payments.get(payment_id)

    def create_fee_payment(self, data: FeePaymentCreate) -> FeePayment:
        values = data.model_dump()
        with self._lock:
            self._check_references(values)
            return self.fee_payments.insert(values)

    def update_fee_payment(self, payment_id: str, patch: FeePaymentUpdate) -> FeePayment | None:
        fields = patch.to_patch()
        with self._lock:
            if payment_id not in self.fee_payments.rows:
                return None
            self._check_references(fields)
            return self.fee_payments.merge(payment_id, fields)

    # =========================================================================
    # Maintenance requests
    # =========================================================================

    def list_maintenance_requests(self) -> list[MaintenanceRequest]:
        with self._lock:
            return self.maintenance_requests.all()

    def get_maintenance_request(self, request_id: str) -> MaintenanceRequest | None:
        with self._lock:
            return self.maintenance_requests.get(request_id)

    def create_maintenance_request(self, data: MaintenanceRequestCreate) -> MaintenanceRequest:
        values = data.model_dump()
        with self._lock:
            self._check_references(values)
            return self.maintenance_requests.insert({**values, "resolved_at": None})

    def update_maintenance_request(
        self, request_id: str, patch: MaintenanceRequestUpdate
    ) -> MaintenanceRequest | None:
        fields = patch.to_patch()
        with self._lock:
            if request_id not in self.maintenance_requests.rows:
                return None
            self._check_references(fields)
            return self.maintenance_requests.merge(request_id, fields)

    # =========================================================================
    # Contact requests
    # =========================================================================

    def list_contact_requests(self) -> list[ContactRequest]:
        with self._lock:
            return self.contact_requests.all()

    def create_contact_request(self, data: ContactRequestCreate) -> ContactRequest:
        with self._lock:
            return self.contact_requests.insert(data.model_dump())

    def update_contact_request(
        self, request_id: str, patch: ContactStatusUpdate
    ) -> ContactRequest | None:
        with self._lock:
            return self.contact_requests.merge(request_id, patch.to_patch())

    # =========================================================================
    # Blog posts
    # =========================================================================

    def list_blog_posts(self) -> list[BlogPost]:
        with self._lock:
            return self.blog_posts.all()

    def list_published_blog_posts(self) -> list[BlogPost]:
        with self._lock:
            return self.blog_posts.where(lambda p: p.published)

    def get_blog_post(self, post_id: str) -> BlogPost | None:
        with self._lock:
            return self.blog_posts.get(post_id)

    def create_blog_post(self, data: BlogPostCreate) -> BlogPost:
        with self._lock:
            return self.blog_posts.insert(data.model_dump())

    def update_blog_post(self, post_id: str, patch: BlogPostUpdate) -> BlogPost | None:
        with self._lock:
            return self.blog_posts.merge(post_id, patch.to_patch())

    def delete_blog_post(self, post_id: str) -> bool:
        with self._lock:
            return self.blog_posts.remove(post_id)
