"""Ledger entities: immutable stock movements."""

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from src.core.entities.money import ZERO, to_money


class MovementType(str, Enum):
    """Direction of a stock movement."""

    IN = "in"
    OUT = "out"


class DispatchReason(str, Enum):
    """Why stock left the shelf."""

    SALE = "sale"
    USAGE = "usage"
    DAMAGE = "damage"
    RETURN = "return"
    OTHER = "other"


class StockReceipt(BaseModel):
    """Stock received into inventory. Append-only ledger entry of type "in"."""

    id: int | None = None
    product_id: int  # FK → products.id
    supplier_id: int | None = None  # weak reference → suppliers.id
    quantity: int
    purchase_price: Decimal = ZERO
    date: datetime | None = None  # server assigns now() when absent
    expiry_date: datetime | None = None
    notes: str | None = None
    recorded_by: int  # FK → users.id
    fiscal_year: int | None = None
    created_at: datetime | None = None

    @field_validator("purchase_price", mode="before")
    @classmethod
    def quantize_price(cls, v: object) -> Decimal:
        return to_money(v)  # type: ignore[arg-type]

    @property
    def movement_type(self) -> MovementType:
        return MovementType.IN


class StockDispatch(BaseModel):
    """Stock leaving inventory. Append-only ledger entry of type "out"."""

    id: int | None = None
    product_id: int  # FK → products.id
    quantity: int
    selling_price: Decimal = ZERO
    date: datetime | None = None
    reason: DispatchReason = DispatchReason.SALE
    notes: str | None = None
    recorded_by: int  # FK → users.id
    fiscal_year: int | None = None
    created_at: datetime | None = None

    @field_validator("selling_price", mode="before")
    @classmethod
    def quantize_price(cls, v: object) -> Decimal:
        return to_money(v)  # type: ignore[arg-type]

    @property
    def movement_type(self) -> MovementType:
        return MovementType.OUT


class Movement(BaseModel):
    """Read model over both ledger tables, tagged with its direction."""

    id: int
    type: MovementType
    product_id: int
    quantity: int
    date: datetime
    recorded_by: int
    fiscal_year: int | None = None
    created_at: datetime | None = None
    product_name: str | None = None
    user_name: str | None = None
    details: str | None = None  # "Purchase" for receipts, reason for dispatches

    @property
    def signed_quantity(self) -> int:
        """Quantity with the sign it contributes to current stock."""
        return self.quantity if self.type == MovementType.IN else -self.quantity


class ProductLedger(BaseModel):
    """All movements of one product plus the stock they derive."""

    product_id: int
    movements: list[Movement] = Field(default_factory=list)
    current_stock: int = 0
    min_stock_level: int = 0
    is_low_stock: bool = False
