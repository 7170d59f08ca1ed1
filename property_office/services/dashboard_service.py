"""Dashboard service - aggregate back-office statistics."""

import math
from decimal import Decimal

from property_office.db.enums import MaintenanceStatus
from property_office.schemas import DashboardStats
from property_office.storage import Storage


def payment_rate(paid: int, unpaid: int) -> int:
    """Percent of fee payments marked paid, rounded half up; 0 with no payments."""
    total = paid + unpaid
    if total == 0:
        return 0
    return math.floor(paid / total * 100 + 0.5)


def get_stats(storage: Storage) -> DashboardStats:
    buildings = storage.list_buildings()
    flats = storage.list_flats()
    payments = storage.list_fee_payments()
    requests = storage.list_maintenance_requests()

    paid = [p for p in payments if p.is_paid]
    revenue = sum((Decimal(p.amount) for p in paid), Decimal("0"))

    return DashboardStats(
        total_buildings=len(buildings),
        total_flats=len(flats),
        payment_rate=payment_rate(len(paid), len(payments) - len(paid)),
        pending_maintenance=sum(1 for r in requests if r.status == MaintenanceStatus.PENDING),
        total_revenue=float(revenue),
    )
