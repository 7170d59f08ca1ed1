"""Flat endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from property_office.core.deps import get_storage, require_admin
from property_office.schemas import Flat, FlatCreate, FlatUpdate, SuccessResponse
from property_office.storage import Storage

router = APIRouter()


@router.get("", response_model=list[Flat])
def list_flats(
    building_id: str | None = Query(None, alias="buildingId"),
    storage: Storage = Depends(get_storage),
):
    if building_id:
        return storage.list_flats_by_building(building_id)
    return storage.list_flats()


@router.post(
    "",
    response_model=Flat,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_flat(data: FlatCreate, storage: Storage = Depends(get_storage)):
    return storage.create_flat(data)


@router.get("/{flat_id}", response_model=Flat)
def get_flat(flat_id: str, storage: Storage = Depends(get_storage)):
    flat = storage.get_flat(flat_id)
    if not flat:
        raise HTTPException(status_code=404, detail="Flat not found")
    return flat


@router.put("/{flat_id}", response_model=Flat, dependencies=[Depends(require_admin)])
def update_flat(flat_id: str, data: FlatUpdate, storage: Storage = Depends(get_storage)):
    flat = storage.update_flat(flat_id, data)
    if not flat:
        raise HTTPException(status_code=404, detail="Flat not found")
    return flat


@router.delete("/{flat_id}", response_model=SuccessResponse, dependencies=[Depends(require_admin)])
def delete_flat(flat_id: str, storage: Storage = Depends(get_storage)):
    if not storage.delete_flat(flat_id):
        raise HTTPException(status_code=404, detail="Flat not found")
    return SuccessResponse()
