"""Relational storage backend (SQLAlchemy)."""

from contextlib import contextmanager
from decimal import Decimal
from enum import Enum
from typing import Any, Iterator, TypeVar

from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from property_office.db import models
from property_office.db.base import Base
from property_office.db.enums import Role
from property_office.db.session import create_db_engine, create_session_factory
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

MONEY_COLUMNS = frozenset({"amount", "monthly_fee"})

# Foreign key column -> table it points into
REFERENCES: dict[str, type[Base]] = {
    "manager_id": models.User,
    "building_id": models.Building,
    "resident_id": models.Resident,
    "flat_id": models.Flat,
}


def _column_values(values: dict[str, Any]) -> dict[str, Any]:
    """Schema values -> column values (enum members to str, money to Decimal)."""
    out: dict[str, Any] = {}
    for key, value in values.items():
        if isinstance(value, Enum):
            value = value.value
        elif key in MONEY_COLUMNS and value is not None:
            value = Decimal(value)
        out[key] = value
    return out


class SqlStorage(Storage):
    """
    Storage on any SQLAlchemy-supported database.

    Each call runs in its own short-lived session and commits on success.
    ON DELETE rules on the foreign keys give the same cleanup behaviour
    as MemStorage.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self.SessionLocal = create_session_factory(engine)

    @classmethod
    def from_url(cls, database_url: str) -> "SqlStorage":
        return cls(create_db_engine(database_url))

    def create_schema(self) -> None:
        """Create missing tables (tests and local SQLite; use Alembic elsewhere)."""
        Base.metadata.create_all(self.engine)

    def close(self) -> None:
        self.engine.dispose()

    def ping(self) -> None:
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    @contextmanager
    def _session(self) -> Iterator[Session]:
        db = self.SessionLocal()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    # =========================================================================
    # Generic helpers
    # =========================================================================

    def _check_references(self, db: Session, values: dict[str, Any]) -> None:
        for field, model in REFERENCES.items():
            ref = values.get(field)
            if ref is not None and db.get(model, ref) is None:
                raise ReferenceNotFoundError(to_camel(field), ref)

    def _get(self, model: type[Base], record_type: type[RecordT], record_id: str) -> RecordT | None:
        with self._session() as db:
            row = db.get(model, record_id)
            return record_type.model_validate(row) if row is not None else None

    def _list(self, model: type[Base], record_type: type[RecordT], *criteria) -> list[RecordT]:
        with self._session() as db:
            rows = db.query(model).filter(*criteria).order_by(model.created_at).all()
            return [record_type.model_validate(row) for row in rows]

    def _insert(
        self, model: type[Base], record_type: type[RecordT], values: dict[str, Any]
    ) -> RecordT:
        with self._session() as db:
            self._check_references(db, values)
            row = model(id=new_id(), created_at=utcnow(), **_column_values(values))
            db.add(row)
            db.flush()
            return record_type.model_validate(row)

    def _merge(
        self,
        model: type[Base],
        record_type: type[RecordT],
        record_id: str,
        fields: dict[str, Any],
    ) -> RecordT | None:
        with self._session() as db:
            row = db.get(model, record_id)
            if row is None:
                return None
            self._check_references(db, fields)
            for key, value in _column_values(fields).items():
                setattr(row, key, value)
            db.flush()
            return record_type.model_validate(row)

    def _delete(self, model: type[Base], record_id: str) -> bool:
        with self._session() as db:
            row = db.get(model, record_id)
            if row is None:
                return False
            db.delete(row)
            return True

    # =========================================================================
    # Users
    # =========================================================================

    def _ensure_unique_user(
        self,
        db: Session,
        username: str | None,
        email: str | None,
        exclude_id: str | None = None,
    ) -> None:
        for field, value in (("username", username), ("email", email)):
            if value is None:
                continue
            column = getattr(models.User, field)
            query = db.query(models.User).filter(column == value)
            if exclude_id is not None:
                query = query.filter(models.User.id != exclude_id)
            if query.first() is not None:
                raise UserAlreadyExistsError(field, value)

    def get_user(self, user_id: str) -> User | None:
        return self._get(models.User, User, user_id)

    def get_user_by_username(self, username: str) -> User | None:
        with self._session() as db:
            row = db.query(models.User).filter(models.User.username == username).first()
            return User.model_validate(row) if row is not None else None

    def list_users(self) -> list[User]:
        return self._list(models.User, User)

    def create_user(self, data: UserCreate) -> User:
        with self._session() as db:
            self._ensure_unique_user(db, data.username, data.email)
            now = utcnow()
            row = models.User(
                id=new_id(),
                created_at=now,
                updated_at=now,
                **_column_values(data.model_dump()),
            )
            db.add(row)
            db.flush()
            return User.model_validate(row)

    def upsert_user(self, data: UserUpsert) -> User:
        fields = _column_values(data.model_dump(exclude={"id"}, exclude_none=True))
        with self._session() as db:
            self._ensure_unique_user(
                db, fields.get("username"), fields.get("email"), exclude_id=data.id
            )
            now = utcnow()
            row = db.get(models.User, data.id)
            if row is None:
                fields.setdefault("role", Role.USER.value)
                row = models.User(id=data.id, created_at=now, updated_at=now, **fields)
                db.add(row)
            else:
                for key, value in fields.items():
                    setattr(row, key, value)
                row.updated_at = now
            db.flush()
            return User.model_validate(row)

    def delete_user(self, user_id: str) -> bool:
        return self._delete(models.User, user_id)

    # =========================================================================
    # Buildings
    # =========================================================================

    def list_buildings(self) -> list[Building]:
        return self._list(models.Building, Building)

    def get_building(self, building_id: str) -> Building | None:
        return self._get(models.Building, Building, building_id)

    def create_building(self, data: BuildingCreate) -> Building:
        return self._insert(models.Building, Building, data.model_dump())

    def update_building(self, building_id: str, patch: BuildingUpdate) -> Building | None:
        return self._merge(models.Building, Building, building_id, patch.to_patch())

    def delete_building(self, building_id: str) -> bool:
        return self._delete(models.Building, building_id)

    # =========================================================================
    # Flats
    # =========================================================================

    def list_flats(self) -> list[Flat]:
        return self._list(models.Flat, Flat)

    def list_flats_by_building(self, building_id: str) -> list[Flat]:
        return self._list(models.Flat, Flat, models.Flat.building_id == building_id)

    def get_flat(self, flat_id: str) -> Flat | None:
        return self._get(models.Flat, Flat, flat_id)

    def create_flat(self, data: FlatCreate) -> Flat:
        return self._insert(models.Flat, Flat, data.model_dump())

    def update_flat(self, flat_id: str, patch: FlatUpdate) -> Flat | None:
        return self._merge(models.Flat, Flat, flat_id, patch.to_patch())

    def delete_flat(self, flat_id: str) -> bool:
        return self._delete(models.Flat, flat_id)

    # =========================================================================
    # Residents
    # =========================================================================

    def list_residents(self) -> list[Resident]:
        return self._list(models.Resident, Resident)

    def get_resident(self, resident_id: str) -> Resident | None:
        return self._get(models.Resident, Resident, resident_id)

    def create_resident(self, data: ResidentCreate) -> Resident:
        return self._insert(models.Resident, Resident, data.model_dump())

    def update_resident(self, resident_id: str, patch: ResidentUpdate) -> Resident | None:
        return self._merge(models.Resident, Resident, resident_id, patch.to_patch())

    def delete_resident(self, resident_id: str) -> bool:
        return self._delete(models.Resident, resident_id)

    # =========================================================================
    # Fee payments
    # =========================================================================

    def list_fee_payments(self) -> list[FeePayment]:
        return self._list(models.FeePayment, FeePayment)

    def list_fee_payments_by_flat(self, flat_id: str) -> list[FeePayment]:
        return self._list(models.FeePayment, FeePayment, models.FeePayment.flat_id == flat_id)

    def get_fee_payment(self, payment_id: str) -> FeePayment | None:
        return self._get(models.FeePayment, FeePayment, payment_id)

    def create_fee_payment(self, data: FeePaymentCreate) -> FeePayment:
        return self._insert(models.FeePayment, FeePayment, data.model_dump())

    def update_fee_payment(self, payment_id: str, patch: FeePaymentUpdate) -> FeePayment | None:
        return self._merge(models.FeePayment, FeePayment, payment_id, patch.to_patch())

    # =========================================================================
    # Maintenance requests
    # =========================================================================

    def list_maintenance_requests(self) -> list[MaintenanceRequest]:
        return self._list(models.MaintenanceRequest, MaintenanceRequest)

    def get_maintenance_request(self, request_id: str) -> MaintenanceRequest | None:
        return self._get(models.MaintenanceRequest, MaintenanceRequest, request_id)

    def create_maintenance_request(self, data: MaintenanceRequestCreate) -> MaintenanceRequest:
        return self._insert(models.MaintenanceRequest, MaintenanceRequest, data.model_dump())

    def update_maintenance_request(
        self, request_id: str, patch: MaintenanceRequestUpdate
    ) -> MaintenanceRequest | None:
        return self._merge(
            models.MaintenanceRequest, MaintenanceRequest, request_id, patch.to_patch()
        )

    # =========================================================================
    # Contact requests
    # =========================================================================

    def list_contact_requests(self) -> list[ContactRequest]:
        return self._list(models.ContactRequest, ContactRequest)

    def create_contact_request(self, data: ContactRequestCreate) -> ContactRequest:
        return self._insert(models.ContactRequest, ContactRequest, data.model_dump())

    def update_contact_request(
        self, request_id: str, patch: ContactStatusUpdate
    ) -> ContactRequest | None:
        return self._merge(models.ContactRequest, ContactRequest, request_id, patch.to_patch())

    # =========================================================================
    # Blog posts
    # =========================================================================

    def list_blog_posts(self) -> list[BlogPost]:
        return self._list(models.BlogPost, BlogPost)

    def list_published_blog_posts(self) -> list[BlogPost]:
        return self._list(models.BlogPost, BlogPost, models.BlogPost.published.is_(True))

    def get_blog_post(self, post_id: str) -> BlogPost | None:
        return self._get(models.BlogPost, BlogPost, post_id)

    def create_blog_post(self, data: BlogPostCreate) -> BlogPost:
        return self._insert(models.BlogPost, BlogPost, data.model_dump())

    def update_blog_post(self, post_id: str, patch: BlogPostUpdate) -> BlogPost | None:
        return self._merge(models.BlogPost, BlogPost, post_id, patch.to_patch())

    def delete_blog_post(self, post_id: str) -> bool:
        return self._delete(models.BlogPost, post_id)
