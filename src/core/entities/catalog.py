"""Catalog entities: categories, suppliers and products."""

from decimal import Decimal

from pydantic import BaseModel, Field, computed_field, field_validator

from src.core.entities.money import ZERO, to_money


class Category(BaseModel):
    """Product grouping. Names are unique."""

    id: int | None = None
    name: str


class Supplier(BaseModel):
    """Source of stock receipts."""

    id: int | None = None
    name: str
    contact: str | None = None
    email: str | None = None
    address: str | None = None
    notes: str | None = None
    active: bool = True


class Product(BaseModel):
    """
    A stocked item.

    Current stock is deliberately absent; see ProductWithStock.
    """

    id: int | None = None
    category_id: int | None = None  # weak reference → categories.id
    name: str
    barcode: str | None = None
    description: str | None = None
    min_stock_level: int = Field(default=10, ge=0)
    default_purchase_price: Decimal = Field(default=ZERO, ge=0)
    default_selling_price: Decimal = Field(default=ZERO, ge=0)
    unit: str = "pcs"
    expiry_days_default: int | None = Field(default=None, ge=0)
    active: bool = True

    @field_validator("default_purchase_price", "default_selling_price", mode="before")
    @classmethod
    def quantize_prices(cls, v: object) -> Decimal:
        return to_money(v)  # type: ignore[arg-type]


class ProductWithStock(Product):
    """Product joined with its category name and ledger totals."""

    category_name: str | None = None
    total_in: int = 0
    total_out: int = 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def current_stock(self) -> int:
        """Receipts minus dispatches; never stored."""
        return self.total_in - self.total_out

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_low_stock(self) -> bool:
        return self.current_stock <= self.min_stock_level

    @property
    def stock_value(self) -> Decimal:
        """Current stock valued at the default purchase price."""
        return to_money(self.current_stock * self.default_purchase_price)
