"""Derived report shapes. Computed on demand, never persisted."""

from datetime import date
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel

from src.core.entities.money import ZERO


class ReportPeriod(str, Enum):
    """Bucket width for movement reports."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class DashboardStats(BaseModel):
    """Headline numbers for the dashboard."""

    total_products: int = 0
    low_stock_count: int = 0
    total_value: Decimal = ZERO
    today_in: int = 0
    today_out: int = 0


class PeriodBucket(BaseModel):
    """In/out quantities for one day, week (Sunday-anchored) or month."""

    key: date
    label: str
    in_quantity: int = 0
    out_quantity: int = 0

    @property
    def net_quantity(self) -> int:
        return self.in_quantity - self.out_quantity


class FiscalYearSummary(BaseModel):
    """Ledger totals for one fiscal year."""

    fiscal_year: int
    in_quantity: int = 0
    out_quantity: int = 0
    receipt_count: int = 0
    dispatch_count: int = 0


class LowStockAlert(BaseModel):
    """Message published when a dispatch leaves a product at or below minimum."""

    product_id: int
    product_name: str
    current_stock: int
    min_stock_level: int
    unit: str = "pcs"

    @property
    def text(self) -> str:
        return (
            f"LOW STOCK ALERT: {self.product_name} is down to "
            f"{self.current_stock} {self.unit}. Min level: {self.min_stock_level}"
        )
