"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.core.entities.catalog import Category, ProductWithStock, Supplier
from src.core.entities.ledger import Movement, StockDispatch, StockReceipt
from src.core.entities.reports import (
    DashboardStats,
    FiscalYearSummary,
    PeriodBucket,
)
from src.core.entities.user import User


class CamelResponse(BaseModel):
    """Base for response bodies serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Auth / Users ---


class UserResponse(CamelResponse):
    """User without credentials."""

    id: int
    email: str
    name: str
    role: str
    telegram_chat_id: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,  # type: ignore[arg-type]
            email=user.email,
            name=user.name,
            role=user.role.value,
            telegram_chat_id=user.telegram_chat_id,
            created_at=user.created_at,
        )


class LoginResponse(CamelResponse):
    user: UserResponse
    access_token: str = Field(..., description="Bearer token for the Authorization header")
    token_type: str = "bearer"


class MessageResponse(CamelResponse):
    message: str


# --- Catalog ---


class CategoryResponse(CamelResponse):
    id: int
    name: str

    @classmethod
    def from_entity(cls, category: Category) -> "CategoryResponse":
        return cls(id=category.id, name=category.name)  # type: ignore[arg-type]


class SupplierResponse(CamelResponse):
    id: int
    name: str
    contact: str | None = None
    email: str | None = None
    address: str | None = None
    notes: str | None = None
    active: bool = True

    @classmethod
    def from_entity(cls, supplier: Supplier) -> "SupplierResponse":
        return cls.model_validate(supplier.model_dump())


class ProductResponse(CamelResponse):
    """Product with its derived stock figures."""

    id: int
    category_id: int | None = None
    category_name: str | None = None
    name: str
    barcode: str | None = None
    description: str | None = None
    min_stock_level: int
    default_purchase_price: Decimal
    default_selling_price: Decimal
    unit: str
    expiry_days_default: int | None = None
    active: bool
    current_stock: int = Field(..., description="Receipts minus dispatches")
    is_low_stock: bool = Field(..., description="current_stock <= min_stock_level")

    @classmethod
    def from_entity(cls, product: ProductWithStock) -> "ProductResponse":
        return cls(
            id=product.id,  # type: ignore[arg-type]
            category_id=product.category_id,
            category_name=product.category_name,
            name=product.name,
            barcode=product.barcode,
            description=product.description,
            min_stock_level=product.min_stock_level,
            default_purchase_price=product.default_purchase_price,
            default_selling_price=product.default_selling_price,
            unit=product.unit,
            expiry_days_default=product.expiry_days_default,
            active=product.active,
            current_stock=product.current_stock,
            is_low_stock=product.is_low_stock,
        )


# --- Inventory ---


class StockReceiptResponse(CamelResponse):
    """Recorded stock-in entry."""

    id: int
    product_id: int
    supplier_id: int | None = None
    quantity: int
    purchase_price: Decimal
    date: datetime
    expiry_date: datetime | None = None
    notes: str | None = None
    recorded_by: int
    fiscal_year: int
    created_at: datetime

    @classmethod
    def from_entity(cls, receipt: StockReceipt) -> "StockReceiptResponse":
        return cls.model_validate(receipt.model_dump())


class StockDispatchResponse(CamelResponse):
    """Recorded stock-out entry."""

    id: int
    product_id: int
    quantity: int
    selling_price: Decimal
    date: datetime
    reason: str
    notes: str | None = None
    recorded_by: int
    fiscal_year: int
    created_at: datetime

    @classmethod
    def from_entity(cls, dispatch: StockDispatch) -> "StockDispatchResponse":
        data = dispatch.model_dump()
        data["reason"] = dispatch.reason.value
        return cls.model_validate(data)


class MovementResponse(CamelResponse):
    """One entry of the merged transaction feed."""

    id: int
    type: str = Field(..., description='"in" or "out"')
    product_id: int
    product_name: str | None = None
    quantity: int
    date: datetime
    recorded_by: int
    user_name: str | None = None
    details: str | None = Field(default=None, description='"Purchase" or the dispatch reason')

    @classmethod
    def from_entity(cls, movement: Movement) -> "MovementResponse":
        return cls(
            id=movement.id,
            type=movement.type.value,
            product_id=movement.product_id,
            product_name=movement.product_name,
            quantity=movement.quantity,
            date=movement.date,
            recorded_by=movement.recorded_by,
            user_name=movement.user_name,
            details=movement.details,
        )


class ProductMovementsResponse(CamelResponse):
    """A product's full ledger with the stock it derives."""

    product: ProductResponse
    movements: list[MovementResponse]
    current_stock: int
    is_low_stock: bool


# --- Reports ---


class DashboardStatsResponse(CamelResponse):
    total_products: int
    low_stock_count: int
    total_value: Decimal
    today_in: int
    today_out: int

    @classmethod
    def from_entity(cls, stats: DashboardStats) -> "DashboardStatsResponse":
        return cls.model_validate(stats.model_dump())


class PeriodBucketResponse(CamelResponse):
    period: date = Field(..., description="Bucket start: day, Sunday of the week, or 1st of month")
    label: str
    in_quantity: int
    out_quantity: int
    net_quantity: int

    @classmethod
    def from_entity(cls, bucket: PeriodBucket) -> "PeriodBucketResponse":
        return cls(
            period=bucket.key,
            label=bucket.label,
            in_quantity=bucket.in_quantity,
            out_quantity=bucket.out_quantity,
            net_quantity=bucket.net_quantity,
        )


class MovementReportResponse(CamelResponse):
    period: str
    user_id: int | None = None
    buckets: list[PeriodBucketResponse]


class FiscalYearResponse(CamelResponse):
    fiscal_year: int
    in_quantity: int
    out_quantity: int
    receipt_count: int
    dispatch_count: int

    @classmethod
    def from_entity(cls, summary: FiscalYearSummary) -> "FiscalYearResponse":
        return cls.model_validate(summary.model_dump())


# --- System ---


class HealthResponse(BaseModel):
    """Liveness response."""

    status: str = Field(..., description="Overall status: healthy, degraded, or unhealthy")
    version: str = Field(..., description="Application version")
    environment: str = Field(..., description="Runtime environment")
    database: str = Field(..., description="Database status")
    timestamp: datetime = Field(default_factory=datetime.now)


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. INSUFFICIENT_STOCK)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)
