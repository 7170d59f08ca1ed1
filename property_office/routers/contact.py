"""Contact form endpoints: public submission, admin triage."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from property_office.core.deps import get_storage, require_admin
from property_office.schemas import (
    ContactRequest,
    ContactRequestCreate,
    ContactStatusUpdate,
)
from property_office.storage import Storage

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=ContactRequest, status_code=status.HTTP_201_CREATED)
def submit_contact_request(
    data: ContactRequestCreate,
    storage: Storage = Depends(get_storage),
):
    contact = storage.create_contact_request(data)
    logger.info("Contact request received: %s", contact.id)
    return contact


@router.get("", response_model=list[ContactRequest], dependencies=[Depends(require_admin)])
def list_contact_requests(storage: Storage = Depends(get_storage)):
    return storage.list_contact_requests()


@router.put(
    "/{contact_id}",
    response_model=ContactRequest,
    dependencies=[Depends(require_admin)],
)
def update_contact_request(
    contact_id: str,
    data: ContactStatusUpdate,
    storage: Storage = Depends(get_storage),
):
    contact = storage.update_contact_request(contact_id, data)
    if not contact:
        raise HTTPException(status_code=404, detail="Contact request not found")
    return contact
