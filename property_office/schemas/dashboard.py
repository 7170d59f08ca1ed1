"""Dashboard schemas."""

from property_office.schemas.common import ApiModel


class DashboardStats(ApiModel):
    """Response for GET /api/dashboard/stats."""

    total_buildings: int
    total_flats: int
    payment_rate: int  # percent of fee payments marked paid
    pending_maintenance: int
    total_revenue: float
