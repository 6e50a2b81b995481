"""Validation rules shared by stock-in and stock-out."""

from datetime import datetime
from decimal import Decimal

from src.core.entities.ledger import MovementType
from src.core.entities.money import MAX_PRICE, to_money
from src.core.exceptions import ValidationError

MAX_MOVEMENT_QUANTITY = 100_000

_VERBS = {MovementType.IN: "receive", MovementType.OUT: "remove"}


def validate_quantity(
    quantity: object,
    direction: MovementType,
    max_quantity: int = MAX_MOVEMENT_QUANTITY,
) -> int:
    """
    Reject quantities that are not integers in [1, max_quantity].

    Out-of-range values are never clamped.
    """
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise ValidationError("quantity", "Quantity must be a whole number", quantity)
    if quantity < 1:
        raise ValidationError("quantity", "Quantity must be at least 1", quantity)
    if quantity > max_quantity:
        raise ValidationError(
            "quantity",
            f"Cannot {_VERBS[direction]} more than {max_quantity:,} units at once",
            quantity,
        )
    return quantity


def validate_price(field: str, price: Decimal | None) -> Decimal:
    """Unit price in [0, MAX_PRICE], quantized to cents."""
    label = field.replace("_", " ").capitalize()
    if price is None:
        raise ValidationError(field, f"{label} is required")
    if not price.is_finite():
        raise ValidationError(field, f"{label} is not a valid amount", price)
    if price < 0:
        raise ValidationError(field, f"{label} cannot be negative", price)
    if price > MAX_PRICE:
        raise ValidationError(field, f"{label} cannot exceed {MAX_PRICE:,}", price)
    try:
        return to_money(price)
    except ValueError as e:
        raise ValidationError(field, f"{label} is not a valid amount", price) from e


def normalize_movement_date(value: datetime | None, now: datetime | None = None) -> datetime:
    """
    Movement dates are naive server-local time.

    Aware datetimes are converted to local time first.
    """
    if value is None:
        return now or datetime.now()
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


def fiscal_year_for(value: datetime) -> int:
    return value.year
