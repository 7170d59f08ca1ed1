"""SQLAlchemy ORM models for the SQL storage backend."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from property_office.db.base import Base
from property_office.db.enums import (
    DEFAULT_CONTACT_STATUS,
    DEFAULT_MAINTENANCE_PRIORITY,
    DEFAULT_MAINTENANCE_STATUS,
    DEFAULT_ROLE,
)

ID_LENGTH = 36  # UUID4 string


class User(Base):
    """
    Back-office account.

    username/password are used by local login; email and name fields
    are filled for accounts provisioned by an external identity provider.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(ID_LENGTH), primary_key=True)
    username: Mapped[str | None] = mapped_column(Text, unique=True, nullable=True)
    password: Mapped[str | None] = mapped_column(Text, nullable=True)
    role: Mapped[str] = mapped_column(
        String(20),
        default=DEFAULT_ROLE.value,
        server_default=text(f"'{DEFAULT_ROLE.value}'"),
        nullable=False,
    )
    email: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    first_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    profile_image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    created_at: Mapped[datetime] = mapped_column(nullable=False)
    updated_at: Mapped[datetime] = mapped_column(nullable=False)


class Building(Base):
    __tablename__ = "buildings"
    __table_args__ = (
        CheckConstraint("total_flats >= 0", name="ck_buildings_total_flats_nonnegative"),
    )

    id: Mapped[str] = mapped_column(String(ID_LENGTH), primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    total_flats: Mapped[int] = mapped_column(Integer, nullable=False)
    monthly_fee: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    manager_id: Mapped[str | None] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(nullable=False)


class Resident(Base):
    __tablename__ = "residents"

    id: Mapped[str] = mapped_column(String(ID_LENGTH), primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str | None] = mapped_column(Text, nullable=True)
    phone: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(nullable=False)


class Flat(Base):
    """A unit inside a building; occupied when resident_id is set."""

    __tablename__ = "flats"
    __table_args__ = (Index("ix_flats_building_id", "building_id"),)

    id: Mapped[str] = mapped_column(String(ID_LENGTH), primary_key=True)
    building_id: Mapped[str] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("buildings.id", ondelete="CASCADE"),
        nullable=False,
    )
    flat_number: Mapped[str] = mapped_column(Text, nullable=False)
    block: Mapped[str | None] = mapped_column(Text, nullable=True)
    size: Mapped[int | None] = mapped_column(Integer, nullable=True)  # square meters
    resident_id: Mapped[str | None] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("residents.id", ondelete="SET NULL"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(nullable=False)


class FeePayment(Base):
    __tablename__ = "fee_payments"
    __table_args__ = (
        Index("ix_fee_payments_flat_id", "flat_id"),
        CheckConstraint("month BETWEEN 1 AND 12", name="ck_fee_payments_month_range"),
    )

    id: Mapped[str] = mapped_column(String(ID_LENGTH), primary_key=True)
    flat_id: Mapped[str] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("flats.id", ondelete="CASCADE"),
        nullable=False,
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    month: Mapped[int] = mapped_column(Integer, nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    is_paid: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=text("false"), nullable=False
    )
    paid_at: Mapped[datetime | None] = mapped_column(nullable=True)
    created_at: Mapped[datetime] = mapped_column(nullable=False)


class MaintenanceRequest(Base):
    __tablename__ = "maintenance_requests"
    __table_args__ = (Index("ix_maintenance_requests_status", "status"),)

    id: Mapped[str] = mapped_column(String(ID_LENGTH), primary_key=True)
    flat_id: Mapped[str] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("flats.id", ondelete="CASCADE"),
        nullable=False,
    )
    description: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20),
        default=DEFAULT_MAINTENANCE_STATUS.value,
        server_default=text(f"'{DEFAULT_MAINTENANCE_STATUS.value}'"),
        nullable=False,
    )
    priority: Mapped[str] = mapped_column(
        String(20),
        default=DEFAULT_MAINTENANCE_PRIORITY.value,
        server_default=text(f"'{DEFAULT_MAINTENANCE_PRIORITY.value}'"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(nullable=False)
    resolved_at: Mapped[datetime | None] = mapped_column(nullable=True)


class ContactRequest(Base):
    __tablename__ = "contact_requests"

    id: Mapped[str] = mapped_column(String(ID_LENGTH), primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, nullable=False)
    phone: Mapped[str | None] = mapped_column(Text, nullable=True)
    service_type: Mapped[str | None] = mapped_column(Text, nullable=True)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20),
        default=DEFAULT_CONTACT_STATUS.value,
        server_default=text(f"'{DEFAULT_CONTACT_STATUS.value}'"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(nullable=False)


class BlogPost(Base):
    __tablename__ = "blog_posts"
    __table_args__ = (Index("ix_blog_posts_published", "published"),)

    id: Mapped[str] = mapped_column(String(ID_LENGTH), primary_key=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    excerpt: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str | None] = mapped_column(Text, nullable=True)
    published: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=text("false"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(nullable=False)


class AuthSession(Base):
    """Server-side login session; the cookie only carries the signed sid."""

    __tablename__ = "sessions"
    __table_args__ = (Index("ix_sessions_expire", "expire"),)

    sid: Mapped[str] = mapped_column(String(128), primary_key=True)
    user_id: Mapped[str] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    expire: Mapped[datetime] = mapped_column(nullable=False)
