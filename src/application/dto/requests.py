"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.

JSON field names are camelCase; snake_case names are accepted too.
Quantities are deliberately unbounded here so the use cases can reject
them with the ledger's own messages. Prices are decimal(10,2); a sign
check on movement prices is left to the use cases for the same reason.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.core.entities.ledger import DispatchReason
from src.core.entities.money import PRICE_DIGITS
from src.core.entities.user import UserRole


class CamelRequest(BaseModel):
    """Base for request bodies with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Auth ---


class LoginRequest(CamelRequest):
    """Credentials for POST /api/auth/login."""

    username: str = Field(..., description="Login email", examples=["admin@ics.com"])
    password: str = Field(..., description="Plain-text password")


# --- Catalog ---


class CreateCategoryRequest(CamelRequest):
    name: str = Field(..., min_length=1, max_length=100, description="Unique name")


class CreateSupplierRequest(CamelRequest):
    """Request to register a supplier."""

    name: str = Field(..., min_length=1, max_length=200)
    contact: str | None = Field(default=None, description="Contact person or phone")
    email: str | None = None
    address: str | None = None
    notes: str | None = None
    active: bool = True


class UpdateSupplierRequest(CamelRequest):
    """Partial supplier update; omitted fields are left unchanged."""

    name: str | None = Field(default=None, min_length=1, max_length=200)
    contact: str | None = None
    email: str | None = None
    address: str | None = None
    notes: str | None = None
    active: bool | None = None


class CreateProductRequest(CamelRequest):
    """Request to add a product to the catalog."""

    name: str = Field(..., min_length=1, max_length=200, description="Product name")
    category_id: int | None = Field(default=None, description="Category ID")
    barcode: str | None = Field(default=None, description="Barcode / SKU")
    description: str | None = None
    min_stock_level: int | None = Field(
        default=None,
        ge=0,
        description="Low-stock threshold (defaults to the configured minimum)",
    )
    default_purchase_price: Decimal = Field(
        default=Decimal("0"), ge=0, max_digits=PRICE_DIGITS, decimal_places=2
    )
    default_selling_price: Decimal = Field(
        default=Decimal("0"), ge=0, max_digits=PRICE_DIGITS, decimal_places=2
    )
    unit: str | None = Field(default=None, description="Unit of measure", examples=["pcs", "can"])
    expiry_days_default: int | None = Field(default=None, ge=0)
    active: bool = True


class UpdateProductRequest(CamelRequest):
    """Partial product update; omitted fields are left unchanged."""

    name: str | None = Field(default=None, min_length=1, max_length=200)
    category_id: int | None = None
    barcode: str | None = None
    description: str | None = None
    min_stock_level: int | None = Field(default=None, ge=0)
    default_purchase_price: Decimal | None = Field(
        default=None, ge=0, max_digits=PRICE_DIGITS, decimal_places=2
    )
    default_selling_price: Decimal | None = Field(
        default=None, ge=0, max_digits=PRICE_DIGITS, decimal_places=2
    )
    unit: str | None = None
    expiry_days_default: int | None = Field(default=None, ge=0)
    active: bool | None = None


# --- Users ---


class CreateUserRequest(CamelRequest):
    """Request to create a user (admin only)."""

    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=8, description="Plain-text password, hashed on receipt")
    name: str = Field(..., min_length=1, max_length=200)
    role: UserRole = UserRole.VIEWER
    telegram_chat_id: str | None = Field(
        default=None, description="Chat id for low-stock alerts"
    )


# --- Inventory ---


class StockInRequest(CamelRequest):
    """Request to record stock received."""

    product_id: int = Field(..., description="Product ID")
    supplier_id: int | None = Field(default=None, description="Supplier ID")
    quantity: int = Field(..., description="Units received (1..100000)")
    purchase_price: Decimal | None = Field(
        default=None,
        max_digits=PRICE_DIGITS,
        decimal_places=2,
        description="Unit purchase price (defaults to the product's default)",
    )
    date: datetime | None = Field(default=None, description="Receipt date (defaults to now)")
    expiry_date: datetime | None = None
    notes: str | None = Field(default=None, description="Additional notes")


class StockOutRequest(CamelRequest):
    """Request to record stock dispatched."""

    product_id: int = Field(..., description="Product ID")
    quantity: int = Field(..., description="Units removed (1..100000)")
    selling_price: Decimal | None = Field(
        default=None,
        max_digits=PRICE_DIGITS,
        decimal_places=2,
        description="Unit selling price (defaults to the product's default)",
    )
    reason: DispatchReason = Field(default=DispatchReason.SALE, description="Why stock left")
    date: datetime | None = Field(default=None, description="Dispatch date (defaults to now)")
    notes: str | None = Field(default=None, description="Additional notes")
