"""Fee payment service - keeps paid_at in step with is_paid."""

from datetime import datetime, timezone

from property_office.schemas import (
    FeePayment,
    FeePaymentCreate,
    FeePaymentUpdate,
)
from property_office.storage import Storage


def create_payment(storage: Storage, data: FeePaymentCreate) -> FeePayment:
    """Record a payment; one created as already paid gets paid_at if missing."""
    if data.is_paid and data.paid_at is None:
        data = data.model_copy(update={"paid_at": datetime.now(timezone.utc)})
    elif not data.is_paid and data.paid_at is not None:
        data = data.model_copy(update={"paid_at": None})
    return storage.create_fee_payment(data)


def update_payment(
    storage: Storage, payment_id: str, patch: FeePaymentUpdate
) -> FeePayment | None:
    """
    Apply a partial update, keeping paid_at consistent with the resulting is_paid.

    - unpaid after the patch: paid_at cleared, whatever the patch sent
    - paid after the patch: an explicit paid_at wins, otherwise the stored one
      is kept, otherwise stamped now
    """
    # Read and write are separate storage calls; concurrent updates of one
    # payment are last-write-wins.
    current = storage.get_fee_payment(payment_id)
    if current is None:
        return None

    fields = patch.to_patch()
    if fields.get("is_paid", current.is_paid):
        paid_at = fields.get("paid_at") or current.paid_at
        fields["paid_at"] = paid_at or datetime.now(timezone.utc)
    else:
        fields["paid_at"] = None
    patch = FeePaymentUpdate.model_validate(fields)

    return storage.update_fee_payment(payment_id, patch)
