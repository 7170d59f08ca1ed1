"""Enum definitions for application constants."""

from enum import Enum


class Role(str, Enum):
    """
    User roles.

    - USER: self-registered account, no back-office access
    - ADMIN: full back-office access (created server-side or by another admin)
    """
    USER = "user"
    ADMIN = "admin"


class MaintenanceStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class MaintenancePriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class ContactStatus(str, Enum):
    """Lifecycle of a contact form submission in the back-office inbox."""
    NEW = "new"
    IN_PROGRESS = "in-progress"
    RESOLVED = "resolved"


DEFAULT_ROLE = Role.USER
DEFAULT_MAINTENANCE_STATUS = MaintenanceStatus.PENDING
DEFAULT_MAINTENANCE_PRIORITY = MaintenancePriority.MEDIUM
DEFAULT_CONTACT_STATUS = ContactStatus.NEW
