"""Tests for SQLite ledger store."""

import asyncio
from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from src.core.entities.ledger import (
    DispatchReason,
    MovementType,
    StockDispatch,
    StockReceipt,
)
from src.core.exceptions import InsufficientStockError, MissingReferenceError
from src.infrastructure.storage.sqlite.ledger_store import SQLiteLedgerStore


def _receipt(refs, quantity: int, **kwargs) -> StockReceipt:
    return StockReceipt(
        product_id=refs.product_id,
        supplier_id=kwargs.pop("supplier_id", refs.supplier_id),
        quantity=quantity,
        purchase_price=Decimal("0.50"),
        recorded_by=kwargs.pop("recorded_by", refs.admin_id),
        **kwargs,
    )


def _dispatch(refs, quantity: int, **kwargs) -> StockDispatch:
    return StockDispatch(
        product_id=refs.product_id,
        quantity=quantity,
        selling_price=Decimal("1.00"),
        recorded_by=kwargs.pop("recorded_by", refs.admin_id),
        **kwargs,
    )


@pytest.fixture
def store() -> SQLiteLedgerStore:
    return SQLiteLedgerStore()


class TestAppendReceipt:
    async def test_assigns_id_and_server_fields(self, seeded, store):
        receipt = await store.append_receipt(_receipt(seeded, 30))

        assert receipt.id is not None
        assert receipt.date is not None
        assert receipt.created_at is not None
        assert receipt.fiscal_year == receipt.date.year
        assert await store.current_stock(seeded.product_id) == 30

    async def test_unknown_product(self, seeded, store):
        receipt = _receipt(seeded, 5)
        receipt.product_id = 999

        with pytest.raises(MissingReferenceError) as exc_info:
            await store.append_receipt(receipt)
        assert exc_info.value.entity == "product"

    async def test_unknown_supplier(self, seeded, store):
        with pytest.raises(MissingReferenceError) as exc_info:
            await store.append_receipt(_receipt(seeded, 5, supplier_id=999))
        assert exc_info.value.entity == "supplier"

    async def test_supplier_optional(self, seeded, store):
        receipt = await store.append_receipt(_receipt(seeded, 5, supplier_id=None))
        assert receipt.supplier_id is None


class TestAppendDispatch:
    async def test_dispatch_within_stock(self, seeded, store):
        await store.append_receipt(_receipt(seeded, 30))

        dispatch = await store.append_dispatch(
            _dispatch(seeded, 15, reason=DispatchReason.DAMAGE)
        )

        assert dispatch.id is not None
        assert await store.current_stock(seeded.product_id) == 15

    async def test_dispatch_exactly_to_zero(self, seeded, store):
        await store.append_receipt(_receipt(seeded, 10))
        await store.append_dispatch(_dispatch(seeded, 10))

        assert await store.current_stock(seeded.product_id) == 0

    async def test_insufficient_stock_writes_nothing(self, seeded, store):
        await store.append_receipt(_receipt(seeded, 10))

        with pytest.raises(InsufficientStockError) as exc_info:
            await store.append_dispatch(_dispatch(seeded, 11))

        assert exc_info.value.requested == 11
        assert exc_info.value.available == 10
        assert await store.count_movements(seeded.product_id) == 1
        assert await store.current_stock(seeded.product_id) == 10

    async def test_dispatch_with_no_history(self, seeded, store):
        with pytest.raises(InsufficientStockError) as exc_info:
            await store.append_dispatch(_dispatch(seeded, 1))
        assert exc_info.value.available == 0

    async def test_unknown_user(self, seeded, store):
        await store.append_receipt(_receipt(seeded, 10))

        with pytest.raises(MissingReferenceError) as exc_info:
            await store.append_dispatch(_dispatch(seeded, 1, recorded_by=999))
        assert exc_info.value.entity == "user"

    async def test_concurrent_dispatches_never_oversell(self, seeded, store):
        """Two dispatches racing for the last units: exactly one wins."""
        await store.append_receipt(_receipt(seeded, 10))

        results = await asyncio.gather(
            store.append_dispatch(_dispatch(seeded, 10)),
            store.append_dispatch(_dispatch(seeded, 10, recorded_by=seeded.clerk_id)),
            return_exceptions=True,
        )

        successes = [r for r in results if isinstance(r, StockDispatch)]
        failures = [r for r in results if isinstance(r, InsufficientStockError)]
        assert len(successes) == 1
        assert len(failures) == 1
        assert await store.current_stock(seeded.product_id) == 0


class TestReads:
    async def test_list_movements_in_insertion_order(self, seeded, store):
        await store.append_receipt(_receipt(seeded, 30))
        await store.append_dispatch(_dispatch(seeded, 5))
        await store.append_receipt(_receipt(seeded, 2))

        movements = await store.list_movements(product_id=seeded.product_id)

        assert [(m.type, m.quantity) for m in movements] == [
            (MovementType.IN, 30),
            (MovementType.OUT, 5),
            (MovementType.IN, 2),
        ]
        assert movements[0].details == "Purchase"
        assert movements[1].details == "sale"
        assert movements[0].product_name == "Cola 330ml"
        assert movements[0].user_name == "Admin"

    async def test_list_movements_filters(self, seeded, store):
        yesterday = datetime.now() - timedelta(days=1)
        await store.append_receipt(_receipt(seeded, 30, date=yesterday))
        await store.append_receipt(_receipt(seeded, 7, recorded_by=seeded.clerk_id))

        by_clerk = await store.list_movements(recorded_by=seeded.clerk_id)
        today_only = await store.list_movements(
            since=datetime.combine(datetime.now().date(), datetime.min.time())
        )

        assert [m.quantity for m in by_clerk] == [7]
        assert [m.quantity for m in today_only] == [7]

    async def test_stock_totals(self, seeded, store):
        await store.append_receipt(_receipt(seeded, 30))
        await store.append_receipt(_receipt(seeded, 10))
        await store.append_dispatch(_dispatch(seeded, 15))

        assert await store.stock_totals(seeded.product_id) == (40, 15)
        assert await store.current_stock(seeded.product_id) == 25

    async def test_recent_receipts_newest_first(self, seeded, store):
        now = datetime.now()
        await store.append_receipt(_receipt(seeded, 1, date=now - timedelta(days=2)))
        await store.append_receipt(_receipt(seeded, 2, date=now))
        await store.append_receipt(_receipt(seeded, 3, date=now - timedelta(days=1)))

        recent = await store.recent_receipts(limit=2)

        assert [m.quantity for m in recent] == [2, 3]

    async def test_recent_dispatches(self, seeded, store):
        await store.append_receipt(_receipt(seeded, 10))
        await store.append_dispatch(_dispatch(seeded, 4, reason=DispatchReason.USAGE))

        recent = await store.recent_dispatches()

        assert len(recent) == 1
        assert recent[0].type == MovementType.OUT
        assert recent[0].details == "usage"

    async def test_quantity_totals_between_is_half_open(self, seeded, store):
        day = datetime(2024, 3, 10)
        await store.append_receipt(_receipt(seeded, 5, date=day))
        await store.append_receipt(_receipt(seeded, 7, date=day + timedelta(days=1)))
        await store.append_dispatch(_dispatch(seeded, 3, date=day + timedelta(hours=23)))

        totals = await store.quantity_totals_between(day, day + timedelta(days=1))

        assert totals == (5, 3)

    async def test_count_movements_by_user(self, seeded, store):
        await store.append_receipt(_receipt(seeded, 5, recorded_by=seeded.clerk_id))

        assert await store.count_movements_by_user(seeded.clerk_id) == 1
        assert await store.count_movements_by_user(seeded.admin_id) == 0
