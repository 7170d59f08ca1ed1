"""Shared schema building blocks: camelCase wire format, patches, money."""

from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Annotated, Any, ClassVar

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

MONEY_QUANTUM = Decimal("0.01")
MONEY_MAX = Decimal("99999999.99")  # numeric(10, 2)


class ApiModel(BaseModel):
    """
    Base for every request/response schema.

    Python attributes are snake_case, JSON is camelCase. Both spellings
    are accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PatchModel(ApiModel):
    """
    Partial update: every field optional, only fields present in the
    request are applied (see `to_patch`).

    Fields listed in NON_NULLABLE may be omitted but not set to null.
    """

    NON_NULLABLE: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def reject_null_for_required_fields(self):
        for name in self.model_fields_set & self.NON_NULLABLE:
            if getattr(self, name) is None:
                raise ValueError(f"{to_camel(name)} cannot be null")
        return self

    def to_patch(self) -> dict[str, Any]:
        """Fields the caller actually supplied, keyed by attribute name."""
        return self.model_dump(exclude_unset=True)


def _to_money(value: Any) -> Any:
    """Normalize a decimal amount to a two-place string ("850" -> "850.00")."""
    if isinstance(value, bool) or value is None:
        return value
    if isinstance(value, (int, float, Decimal)):
        amount = Decimal(str(value))
    elif isinstance(value, str):
        try:
            amount = Decimal(value.strip())
        except InvalidOperation:
            raise ValueError("must be a decimal amount such as 850.00")
    else:
        return value
    if not amount.is_finite():
        raise ValueError("must be a decimal amount such as 850.00")
    if amount < 0:
        raise ValueError("must not be negative")
    if amount != amount.quantize(MONEY_QUANTUM):
        raise ValueError("must have at most 2 decimal places")
    if amount > MONEY_MAX:
        raise ValueError(f"must not exceed {MONEY_MAX}")
    return str(amount.quantize(MONEY_QUANTUM))


Money = Annotated[str, BeforeValidator(_to_money)]


def blank_to_none(value: Any) -> Any:
    """Treat empty/whitespace strings from HTML forms as absent."""
    if isinstance(value, str) and value.strip() == "":
        return None
    return value


class SuccessResponse(ApiModel):
    success: bool = True


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]
