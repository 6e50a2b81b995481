"""
Ledger aggregation for dashboards and reports.

Layer-pure: every function takes already-loaded products or movements
and returns a fresh summary. Nothing is persisted, so repeated calls
with no intervening writes return identical results.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Literal

from src.core.entities.catalog import ProductWithStock
from src.core.entities.ledger import Movement, MovementType
from src.core.entities.money import ZERO, to_money
from src.core.entities.reports import (
    DashboardStats,
    FiscalYearSummary,
    PeriodBucket,
    ReportPeriod,
)
from src.core.services.stock_derivation import count_low_stock, is_low_stock

FeedType = Literal["in", "out", "all"]


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """Local midnight of ``day`` and of the following day."""
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)


def dashboard_stats(
    products: list[ProductWithStock],
    today_in: int,
    today_out: int,
) -> DashboardStats:
    """
    Headline dashboard figures.

    total_value only counts active products; total_products and
    low_stock_count cover the whole catalog.
    """
    total_value: Decimal = ZERO
    for product in products:
        if product.active:
            total_value += product.current_stock * product.default_purchase_price

    return DashboardStats(
        total_products=len(products),
        low_stock_count=count_low_stock(products),
        total_value=to_money(total_value),
        today_in=today_in,
        today_out=today_out,
    )


def low_stock_products(products: Iterable[ProductWithStock]) -> list[ProductWithStock]:
    """Products at or below their minimum, lowest stock first."""
    low = [p for p in products if is_low_stock(p.current_stock, p.min_stock_level)]
    return sorted(low, key=lambda p: p.current_stock)


def merge_transaction_feed(
    receipts: list[Movement],
    dispatches: list[Movement],
    limit: int,
    type_filter: FeedType = "all",
) -> list[Movement]:
    """
    Merge receipts and dispatches into one newest-first feed.

    The sort is stable, so entries with equal dates keep receipts
    before dispatches and each source's own order.
    """
    entries: list[Movement] = []
    if type_filter in ("in", "all"):
        entries.extend(receipts)
    if type_filter in ("out", "all"):
        entries.extend(dispatches)

    entries = sorted(entries, key=lambda m: m.date, reverse=True)
    return entries[: max(limit, 0)]


def bucket_key(day: date, period: ReportPeriod) -> date:
    """Calendar day, the Sunday starting its week, or the first of its month."""
    if period == ReportPeriod.DAILY:
        return day
    if period == ReportPeriod.WEEKLY:
        # weekday(): Monday=0 .. Sunday=6
        return day - timedelta(days=(day.weekday() + 1) % 7)
    return day.replace(day=1)


def bucket_label(key: date, period: ReportPeriod) -> str:
    if period == ReportPeriod.MONTHLY:
        return key.strftime("%Y-%m")
    if period == ReportPeriod.WEEKLY:
        return f"Week of {key.isoformat()}"
    return key.isoformat()


def period_buckets(
    movements: Iterable[Movement],
    period: ReportPeriod,
    user_id: int | None = None,
) -> list[PeriodBucket]:
    """
    Group movements into period buckets summing in and out quantities.

    Args:
        movements: Ledger entries in any order.
        period: Bucket width.
        user_id: Only count movements recorded by this user.

    Returns:
        Buckets in ascending date order; empty periods are omitted.
    """
    buckets: dict[date, PeriodBucket] = {}

    for movement in movements:
        if user_id is not None and movement.recorded_by != user_id:
            continue

        key = bucket_key(movement.date.date(), period)
        bucket = buckets.get(key)
        if bucket is None:
            bucket = PeriodBucket(key=key, label=bucket_label(key, period))
            buckets[key] = bucket

        if movement.type == MovementType.IN:
            bucket.in_quantity += movement.quantity
        else:
            bucket.out_quantity += movement.quantity

    return [buckets[k] for k in sorted(buckets)]


def fiscal_year_summary(movements: Iterable[Movement]) -> list[FiscalYearSummary]:
    """Per-fiscal-year quantities and movement counts, oldest year first."""
    years: dict[int, FiscalYearSummary] = {}

    for movement in movements:
        year = movement.fiscal_year or movement.date.year
        summary = years.setdefault(year, FiscalYearSummary(fiscal_year=year))
        if movement.type == MovementType.IN:
            summary.in_quantity += movement.quantity
            summary.receipt_count += 1
        else:
            summary.out_quantity += movement.quantity
            summary.dispatch_count += 1

    return [years[y] for y in sorted(years)]
