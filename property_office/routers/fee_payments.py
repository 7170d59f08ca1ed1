"""Monthly fee (aidat) payment endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from property_office.core.deps import get_storage, require_admin
from property_office.schemas import FeePayment, FeePaymentCreate, FeePaymentUpdate
from property_office.services import fee_payment_service
from property_office.storage import Storage

router = APIRouter()


@router.get("", response_model=list[FeePayment])
def list_fee_payments(
    flat_id: str | None = Query(None, alias="flatId"),
    storage: Storage = Depends(get_storage),
):
    if flat_id:
        return storage.list_fee_payments_by_flat(flat_id)
    return storage.list_fee_payments()


@router.post(
    "",
    response_model=FeePayment,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_fee_payment(data: FeePaymentCreate, storage: Storage = Depends(get_storage)):
    return fee_payment_service.create_payment(storage, data)


@router.get("/{payment_id}", response_model=FeePayment)
def get_fee_payment(payment_id: str, storage: Storage = Depends(get_storage)):
    payment = storage.get_fee_payment(payment_id)
    if not payment:
        raise HTTPException(status_code=404, detail="Fee payment not found")
    return payment


@router.put("/{payment_id}", response_model=FeePayment, dependencies=[Depends(require_admin)])
def update_fee_payment(
    payment_id: str,
    data: FeePaymentUpdate,
    storage: Storage = Depends(get_storage),
):
    payment = fee_payment_service.update_payment(storage, payment_id, data)
    if not payment:
        raise HTTPException(status_code=404, detail="Fee payment not found")
    return payment
