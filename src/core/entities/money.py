"""Fixed-precision money helpers."""

from decimal import ROUND_HALF_UP, Context, Decimal, InvalidOperation

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

# Unit prices are decimal(10,2)
MAX_PRICE = Decimal("99999999.99")
PRICE_DIGITS = 10

# Wide enough for stock x price totals; the default context stops at 28 digits
_TOTALS = Context(prec=60)


def to_money(value: Decimal | int | float | str | None) -> Decimal:
    """Coerce a value to a 2-decimal Decimal, rounding half up.

    Floats go through ``str`` so 0.1 becomes Decimal("0.10"), not the
    binary expansion.
    """
    if value is None:
        return ZERO
    if isinstance(value, float):
        value = str(value)
    try:
        return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP, context=_TOTALS)
    except (InvalidOperation, ValueError) as e:
        raise ValueError(f"Invalid money amount: {value!r}") from e
