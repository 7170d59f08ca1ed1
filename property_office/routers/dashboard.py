"""Back-office dashboard endpoint."""

from fastapi import APIRouter, Depends

from property_office.core.deps import get_storage, require_admin
from property_office.schemas import DashboardStats
from property_office.services import dashboard_service
from property_office.storage import Storage

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("/stats", response_model=DashboardStats)
def get_dashboard_stats(storage: Storage = Depends(get_storage)):
    return dashboard_service.get_stats(storage)
