"""Building endpoints. Reads are public, writes are admin-only."""

from fastapi import APIRouter, Depends, HTTPException, status

from property_office.core.deps import get_storage, require_admin
from property_office.schemas import (
    Building,
    BuildingCreate,
    BuildingUpdate,
    SuccessResponse,
)
from property_office.storage import Storage

router = APIRouter()


@router.get("", response_model=list[Building])
def list_buildings(storage: Storage = Depends(get_storage)):
    return storage.list_buildings()


@router.post(
    "",
    response_model=Building,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_building(data: BuildingCreate, storage: Storage = Depends(get_storage)):
    return storage.create_building(data)


@router.get("/{building_id}", response_model=Building)
def get_building(building_id: str, storage: Storage = Depends(get_storage)):
    building = storage.get_building(building_id)
    if not building:
        raise HTTPException(status_code=404, detail="Building not found")
    return building


@router.put("/{building_id}", response_model=Building, dependencies=[Depends(require_admin)])
def update_building(
    building_id: str,
    data: BuildingUpdate,
    storage: Storage = Depends(get_storage),
):
    building = storage.update_building(building_id, data)
    if not building:
        raise HTTPException(status_code=404, detail="Building not found")
    return building


@router.delete(
    "/{building_id}",
    response_model=SuccessResponse,
    dependencies=[Depends(require_admin)],
)
def delete_building(building_id: str, storage: Storage = Depends(get_storage)):
    """Also removes the building's flats and everything attached to them."""
    if not storage.delete_building(building_id):
        raise HTTPException(status_code=404, detail="Building not found")
    return SuccessResponse()
