"""Maintenance request schemas."""

from datetime import datetime
from typing import ClassVar

from pydantic import Field

from property_office.db.enums import (
    DEFAULT_MAINTENANCE_PRIORITY,
    DEFAULT_MAINTENANCE_STATUS,
    MaintenancePriority,
    MaintenanceStatus,
)
from property_office.schemas.common import ApiModel, PatchModel, UtcDatetime


class MaintenanceRequest(ApiModel):
    id: str
    flat_id: str
    description: str
    status: MaintenanceStatus = DEFAULT_MAINTENANCE_STATUS
    priority: MaintenancePriority = DEFAULT_MAINTENANCE_PRIORITY
    created_at: datetime
    resolved_at: datetime | None = None


class MaintenanceRequestCreate(ApiModel):
    flat_id: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1, max_length=5000)
    status: MaintenanceStatus = DEFAULT_MAINTENANCE_STATUS
    priority: MaintenancePriority = DEFAULT_MAINTENANCE_PRIORITY


class MaintenanceRequestUpdate(PatchModel):
    """
    resolved_at is stored as given; it is not derived from status
    changes.
    """

    NON_NULLABLE: ClassVar[frozenset[str]] = frozenset(
        {"flat_id", "description", "status", "priority"}
    )

    flat_id: str | None = Field(None, min_length=1)
    description: str | None = Field(None, min_length=1, max_length=5000)
    status: MaintenanceStatus | None = None
    priority: MaintenancePriority | None = None
    resolved_at: UtcDatetime | None = None
