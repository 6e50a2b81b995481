"""Tests for shared stock movement validation."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from src.core.entities.ledger import MovementType
from src.core.exceptions import ValidationError
from src.core.services.movement_rules import (
    MAX_MOVEMENT_QUANTITY,
    fiscal_year_for,
    normalize_movement_date,
    validate_price,
    validate_quantity,
)


class TestValidateQuantity:
    @pytest.mark.parametrize("quantity", [1, 500, MAX_MOVEMENT_QUANTITY])
    def test_accepts_range(self, quantity):
        assert validate_quantity(quantity, MovementType.IN) == quantity

    @pytest.mark.parametrize("quantity", [0, -5])
    def test_rejects_below_one(self, quantity):
        with pytest.raises(ValidationError, match="at least 1"):
            validate_quantity(quantity, MovementType.OUT)

    def test_rejects_above_max_without_clamping(self):
        with pytest.raises(ValidationError, match="Cannot remove more than 100,000"):
            validate_quantity(MAX_MOVEMENT_QUANTITY + 1, MovementType.OUT)

    def test_receipt_wording(self):
        with pytest.raises(ValidationError, match="Cannot receive more than 10"):
            validate_quantity(11, MovementType.IN, max_quantity=10)

    @pytest.mark.parametrize("quantity", [1.5, "3", True, None])
    def test_rejects_non_integers(self, quantity):
        with pytest.raises(ValidationError, match="whole number"):
            validate_quantity(quantity, MovementType.IN)


class TestValidatePrice:
    def test_zero_allowed(self):
        assert validate_price("purchase_price", Decimal("0")) == Decimal("0")

    def test_negative_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            validate_price("selling_price", Decimal("-0.01"))

    def test_missing_rejected(self):
        with pytest.raises(ValidationError, match="Purchase price is required"):
            validate_price("purchase_price", None)

    def test_cap_is_inclusive(self):
        assert validate_price("purchase_price", Decimal("99999999.99")) == Decimal("99999999.99")

    @pytest.mark.parametrize("price", [Decimal("100000000"), Decimal("1E+30")])
    def test_above_cap_rejected(self, price):
        with pytest.raises(ValidationError, match="cannot exceed"):
            validate_price("purchase_price", price)

    @pytest.mark.parametrize("price", [Decimal("NaN"), Decimal("Infinity")])
    def test_non_finite_rejected(self, price):
        with pytest.raises(ValidationError, match="not a valid amount"):
            validate_price("selling_price", price)

    def test_quantized_to_cents(self):
        assert str(validate_price("selling_price", Decimal("0.5"))) == "0.50"
        assert validate_price("selling_price", Decimal("1.005")) == Decimal("1.01")


class TestMovementDate:
    def test_defaults_to_now(self):
        now = datetime(2024, 7, 1, 12, 0)
        assert normalize_movement_date(None, now=now) == now

    def test_naive_kept(self):
        value = datetime(2024, 7, 1, 12, 0)
        assert normalize_movement_date(value) == value

    def test_aware_becomes_naive_local(self):
        value = datetime(2024, 7, 1, 12, 0, tzinfo=timezone.utc)
        result = normalize_movement_date(value)
        assert result.tzinfo is None
        assert result == value.astimezone().replace(tzinfo=None)

    def test_fiscal_year_is_calendar_year(self):
        assert fiscal_year_for(datetime(2024, 12, 31, 23, 59)) == 2024
