"""Maintenance request endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from property_office.core.deps import get_storage, require_admin
from property_office.schemas import (
    MaintenanceRequest,
    MaintenanceRequestCreate,
    MaintenanceRequestUpdate,
)
from property_office.storage import Storage

router = APIRouter()


@router.get("", response_model=list[MaintenanceRequest])
def list_maintenance_requests(storage: Storage = Depends(get_storage)):
    return storage.list_maintenance_requests()


@router.post(
    "",
    response_model=MaintenanceRequest,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_maintenance_request(
    data: MaintenanceRequestCreate,
    storage: Storage = Depends(get_storage),
):
    return storage.create_maintenance_request(data)


@router.get("/{request_id}", response_model=MaintenanceRequest)
def get_maintenance_request(request_id: str, storage: Storage = Depends(get_storage)):
    maintenance_request = storage.get_maintenance_request(request_id)
    if not maintenance_request:
        raise HTTPException(status_code=404, detail="Maintenance request not found")
    return maintenance_request


@router.put(
    "/{request_id}",
    response_model=MaintenanceRequest,
    dependencies=[Depends(require_admin)],
)
def update_maintenance_request(
    request_id: str,
    data: MaintenanceRequestUpdate,
    storage: Storage = Depends(get_storage),
):
    maintenance_request = storage.update_maintenance_request(request_id, data)
    if not maintenance_request:
        raise HTTPException(status_code=404, detail="Maintenance request not found")
    return maintenance_request
