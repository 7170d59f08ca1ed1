"""User management for administrators."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from property_office.core.deps import get_storage, require_admin
from property_office.schemas import (
    AdminUserCreate,
    PasswordUpdate,
    PublicUser,
    SuccessResponse,
    User,
    to_public_user,
)
from property_office.services import auth_service
from property_office.services.auth_service import UsernameTakenError
from property_office.storage import Storage, UserAlreadyExistsError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=list[PublicUser])
def list_users(
    _: User = Depends(require_admin),
    storage: Storage = Depends(get_storage),
):
    return [to_public_user(u) for u in storage.list_users()]


@router.post("", response_model=PublicUser, status_code=status.HTTP_201_CREATED)
def create_user(
    data: AdminUserCreate,
    admin: User = Depends(require_admin),
    storage: Storage = Depends(get_storage),
):
    try:
        user = auth_service.create_user_account(storage, data)
    except UsernameTakenError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except UserAlreadyExistsError as e:
        raise HTTPException(status_code=400, detail=f"{e.field.capitalize()} already exists")
    logger.info("Admin %s created user %s (%s)", admin.id, user.id, user.role.value)
    return to_public_user(user)


@router.put("/{user_id}/password", response_model=PublicUser)
def update_password(
    user_id: str,
    data: PasswordUpdate,
    admin: User = Depends(require_admin),
    storage: Storage = Depends(get_storage),
):
    user = auth_service.set_password(storage, user_id, data.password)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    logger.info("Admin %s reset password for user %s", admin.id, user_id)
    return to_public_user(user)


@router.delete("/{user_id}", response_model=SuccessResponse)
def delete_user(
    user_id: str,
    admin: User = Depends(require_admin),
    storage: Storage = Depends(get_storage),
):
    if user_id == admin.id:
        raise HTTPException(status_code=400, detail="Cannot delete your own account")
    if not storage.delete_user(user_id):
        raise HTTPException(status_code=404, detail="User not found")
    logger.info("Admin %s deleted user %s", admin.id, user_id)
    return SuccessResponse()
