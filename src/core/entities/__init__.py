"""Core domain entities."""

from src.core.entities.catalog import (
    Category,
    Product,
    ProductWithStock,
    Supplier,
)
from src.core.entities.ledger import (
    DispatchReason,
    Movement,
    MovementType,
    ProductLedger,
    StockDispatch,
    StockReceipt,
)
from src.core.entities.money import to_money
from src.core.entities.reports import (
    DashboardStats,
    FiscalYearSummary,
    LowStockAlert,
    PeriodBucket,
    ReportPeriod,
)
from src.core.entities.user import Actor, User, UserRole

__all__ = [
    # Catalog entities
    "Category",
    "Supplier",
    "Product",
    "ProductWithStock",
    # Ledger entities
    "StockReceipt",
    "StockDispatch",
    "Movement",
    "MovementType",
    "DispatchReason",
    "ProductLedger",
    # Report entities
    "DashboardStats",
    "PeriodBucket",
    "ReportPeriod",
    "FiscalYearSummary",
    "LowStockAlert",
    # User entities
    "User",
    "UserRole",
    "Actor",
    # Helpers
    "to_money",
]
