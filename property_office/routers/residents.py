"""Resident endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from property_office.core.deps import get_storage, require_admin
from property_office.schemas import (
    Resident,
    ResidentCreate,
    ResidentUpdate,
    SuccessResponse,
)
from property_office.storage import Storage

router = APIRouter()


@router.get("", response_model=list[Resident])
def list_residents(storage: Storage = Depends(get_storage)):
    return storage.list_residents()


@router.post(
    "",
    response_model=Resident,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_resident(data: ResidentCreate, storage: Storage = Depends(get_storage)):
    return storage.create_resident(data)


@router.get("/{resident_id}", response_model=Resident)
def get_resident(resident_id: str, storage: Storage = Depends(get_storage)):
    resident = storage.get_resident(resident_id)
    if not resident:
        raise HTTPException(status_code=404, detail="Resident not found")
    return resident


@router.put("/{resident_id}", response_model=Resident, dependencies=[Depends(require_admin)])
def update_resident(
    resident_id: str,
    data: ResidentUpdate,
    storage: Storage = Depends(get_storage),
):
    resident = storage.update_resident(resident_id, data)
    if not resident:
        raise HTTPException(status_code=404, detail="Resident not found")
    return resident


@router.delete(
    "/{resident_id}",
    response_model=SuccessResponse,
    dependencies=[Depends(require_admin)],
)
def delete_resident(resident_id: str, storage: Storage = Depends(get_storage)):
    """Flats the resident occupied become vacant."""
    if not storage.delete_resident(resident_id):
        raise HTTPException(status_code=404, detail="Resident not found")
    return SuccessResponse()
