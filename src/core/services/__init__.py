"""
Core business logic services.

Layer-pure services that depend only on:
- src/core/entities/*
- src/core/interfaces/*
- src/core/exceptions.py

NO infrastructure imports.
"""

from src.core.services.access_policy import (
    ALERT_ROLES,
    ROLE_PERMISSIONS,
    Permission,
    ensure_permission,
    has_permission,
)
from src.core.services.ledger_reports import (
    dashboard_stats,
    day_bounds,
    fiscal_year_summary,
    low_stock_products,
    merge_transaction_feed,
    period_buckets,
)
from src.core.services.movement_rules import (
    MAX_MOVEMENT_QUANTITY,
    fiscal_year_for,
    normalize_movement_date,
    validate_price,
    validate_quantity,
)
from src.core.services.stock_derivation import (
    build_product_ledger,
    count_low_stock,
    current_stock,
    is_low_stock,
    stock_from_totals,
)

__all__ = [
    # Stock derivation
    "current_stock",
    "stock_from_totals",
    "is_low_stock",
    "count_low_stock",
    "build_product_ledger",
    # Movement rules
    "MAX_MOVEMENT_QUANTITY",
    "validate_quantity",
    "validate_price",
    "normalize_movement_date",
    "fiscal_year_for",
    # Reports
    "dashboard_stats",
    "day_bounds",
    "merge_transaction_feed",
    "period_buckets",
    "low_stock_products",
    "fiscal_year_summary",
    # Access policy
    "Permission",
    "ROLE_PERMISSIONS",
    "ALERT_ROLES",
    "has_permission",
    "ensure_permission",
]
