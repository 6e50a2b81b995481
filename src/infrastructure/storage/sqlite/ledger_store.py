"""SQLite implementation of the append-only stock ledger."""

from datetime import datetime

import aiosqlite

from src.config import get_logger
from src.core.entities.ledger import (
    Movement,
    MovementType,
    StockDispatch,
    StockReceipt,
)
from src.core.exceptions import InsufficientStockError, MissingReferenceError
from src.core.interfaces.ledger_store import ILedgerStore
from src.core.services.movement_rules import fiscal_year_for
from src.infrastructure.storage.sqlite.connection import (
    get_connection,
    get_write_transaction,
)

logger = get_logger(__name__)

_STOCK_EXPR = """
    COALESCE((SELECT SUM(quantity) FROM stock_in WHERE product_id = ?), 0)
    - COALESCE((SELECT SUM(quantity) FROM stock_out WHERE product_id = ?), 0)
"""

_RECEIPT_SELECT = """
    SELECT si.id, 'in' AS type, si.product_id, si.quantity, si.date,
           si.recorded_by, si.fiscal_year, si.created_at,
           p.name AS product_name, u.name AS user_name,
           'Purchase' AS details
    FROM stock_in si
    LEFT JOIN products p ON p.id = si.product_id
    LEFT JOIN users u ON u.id = si.recorded_by
"""

_DISPATCH_SELECT = """
    SELECT so.id, 'out' AS type, so.product_id, so.quantity, so.date,
           so.recorded_by, so.fiscal_year, so.created_at,
           p.name AS product_name, u.name AS user_name,
           so.reason AS details
    FROM stock_out so
    LEFT JOIN products p ON p.id = so.product_id
    LEFT JOIN users u ON u.id = so.recorded_by
"""


def _ts(value: datetime) -> str:
    # Fixed width so lexical order in SQLite matches chronological order
    return value.isoformat(timespec="microseconds")


class SQLiteLedgerStore(ILedgerStore):
    """SQLite implementation of stock receipts and dispatches."""

    async def append_receipt(self, receipt: StockReceipt) -> StockReceipt:
        """Insert a receipt after checking its references."""
        now = datetime.now()
        receipt.date = receipt.date or now
        receipt.fiscal_year = receipt.fiscal_year or fiscal_year_for(receipt.date)
        receipt.created_at = now

        async with get_write_transaction() as conn:
            await self._require(conn, "products", "product", receipt.product_id)
            if receipt.supplier_id is not None:
                await self._require(conn, "suppliers", "supplier", receipt.supplier_id)
            await self._require(conn, "users", "user", receipt.recorded_by)

            cursor = await conn.execute(
                """
                INSERT INTO stock_in (
                    product_id, supplier_id, quantity, purchase_price, date,
                    expiry_date, notes, recorded_by, fiscal_year, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    receipt.product_id,
                    receipt.supplier_id,
                    receipt.quantity,
                    str(receipt.purchase_price),
                    _ts(receipt.date),
                    _ts(receipt.expiry_date) if receipt.expiry_date else None,
                    receipt.notes,
                    receipt.recorded_by,
                    receipt.fiscal_year,
                    _ts(receipt.created_at),
                ),
            )
            receipt.id = cursor.lastrowid

        logger.info(
            "stock_in_recorded",
            receipt_id=receipt.id,
            product_id=receipt.product_id,
            qty=receipt.quantity,
            recorded_by=receipt.recorded_by,
        )
        return receipt

    async def append_dispatch(self, dispatch: StockDispatch) -> StockDispatch:
        """
        Insert a dispatch only when current stock covers it.

        The write lock is taken before the stock is read, and the check is
        part of the INSERT itself, so two dispatches of the same product can
        never both pass against the same balance.
        """
        now = datetime.now()
        dispatch.date = dispatch.date or now
        dispatch.fiscal_year = dispatch.fiscal_year or fiscal_year_for(dispatch.date)
        dispatch.created_at = now

        async with get_write_transaction() as conn:
            await self._require(conn, "products", "product", dispatch.product_id)
            await self._require(conn, "users", "user", dispatch.recorded_by)

            cursor = await conn.execute(
                f"""
                INSERT INTO stock_out (
                    product_id, quantity, selling_price, date, reason,
                    notes, recorded_by, fiscal_year, created_at
                )
                SELECT ?, ?, ?, ?, ?, ?, ?, ?, ?
                WHERE ({_STOCK_EXPR}) >= ?
                """,
                (
                    dispatch.product_id,
                    dispatch.quantity,
                    str(dispatch.selling_price),
                    _ts(dispatch.date),
                    dispatch.reason.value,
                    dispatch.notes,
                    dispatch.recorded_by,
                    dispatch.fiscal_year,
                    _ts(dispatch.created_at),
                    dispatch.product_id,
                    dispatch.product_id,
                    dispatch.quantity,
                ),
            )

            if cursor.rowcount == 0:
                available = await self._stock(conn, dispatch.product_id)
                logger.info(
                    "stock_out_rejected",
                    product_id=dispatch.product_id,
                    requested=dispatch.quantity,
                    available=available,
                )
                raise InsufficientStockError(
                    dispatch.product_id, dispatch.quantity, available
                )

            dispatch.id = cursor.lastrowid

        logger.info(
            "stock_out_recorded",
            dispatch_id=dispatch.id,
            product_id=dispatch.product_id,
            qty=dispatch.quantity,
            reason=dispatch.reason.value,
            recorded_by=dispatch.recorded_by,
        )
        return dispatch

    async def list_movements(
        self,
        product_id: int | None = None,
        recorded_by: int | None = None,
        since: datetime | None = None,
        until: datetime | None = None,
    ) -> list[Movement]:
        """List receipts and dispatches in insertion order."""
        in_where, in_params = self._filters("si", product_id, recorded_by, since, until)
        out_where, out_params = self._filters("so", product_id, recorded_by, since, until)

        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT * FROM (
                    {_RECEIPT_SELECT} {in_where}
                    UNION ALL
                    {_DISPATCH_SELECT} {out_where}
                )
                ORDER BY created_at, type, id
                """,
                in_params + out_params,
            )
            rows = await cursor.fetchall()
            return [self._row_to_movement(row) for row in rows]

    async def stock_totals(self, product_id: int) -> tuple[int, int]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT
                    COALESCE((SELECT SUM(quantity) FROM stock_in WHERE product_id = ?), 0),
                    COALESCE((SELECT SUM(quantity) FROM stock_out WHERE product_id = ?), 0)
                """,
                (product_id, product_id),
            )
            row = await cursor.fetchone()
            return int(row[0]), int(row[1])

    async def current_stock(self, product_id: int) -> int:
        async with get_connection() as conn:
            return await self._stock(conn, product_id)

    async def recent_receipts(self, limit: int = 50) -> list[Movement]:
        """Newest receipts first."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"{_RECEIPT_SELECT} ORDER BY si.date DESC, si.id DESC LIMIT ?",
                (limit,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_movement(row) for row in rows]

    async def recent_dispatches(self, limit: int = 50) -> list[Movement]:
        """Newest dispatches first."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"{_DISPATCH_SELECT} ORDER BY so.date DESC, so.id DESC LIMIT ?",
                (limit,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_movement(row) for row in rows]

    async def quantity_totals_between(
        self, start: datetime, end: datetime
    ) -> tuple[int, int]:
        """Sum receipt and dispatch quantities dated in [start, end)."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT
                    COALESCE((SELECT SUM(quantity) FROM stock_in
                              WHERE date >= ? AND date < ?), 0),
                    COALESCE((SELECT SUM(quantity) FROM stock_out
                              WHERE date >= ? AND date < ?), 0)
                """,
                (_ts(start), _ts(end), _ts(start), _ts(end)),
            )
            row = await cursor.fetchone()
            return int(row[0]), int(row[1])

    async def count_movements(self, product_id: int) -> int:
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT (SELECT COUNT(*) FROM stock_in WHERE product_id = ?)
                     + (SELECT COUNT(*) FROM stock_out WHERE product_id = ?)
                """,
                (product_id, product_id),
            )
            row = await cursor.fetchone()
            return int(row[0])

    async def count_movements_by_user(self, user_id: int) -> int:
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT (SELECT COUNT(*) FROM stock_in WHERE recorded_by = ?)
                     + (SELECT COUNT(*) FROM stock_out WHERE recorded_by = ?)
                """,
                (user_id, user_id),
            )
            row = await cursor.fetchone()
            return int(row[0])

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    async def _require(
        conn: aiosqlite.Connection, table: str, entity: str, entity_id: int
    ) -> None:
        cursor = await conn.execute(f"SELECT 1 FROM {table} WHERE id = ?", (entity_id,))
        if await cursor.fetchone() is None:
            raise MissingReferenceError(entity, entity_id)

    @staticmethod
    async def _stock(conn: aiosqlite.Connection, product_id: int) -> int:
        cursor = await conn.execute(f"SELECT {_STOCK_EXPR}", (product_id, product_id))
        row = await cursor.fetchone()
        return int(row[0])

    @staticmethod
    def _filters(
        alias: str,
        product_id: int | None,
        recorded_by: int | None,
        since: datetime | None,
        until: datetime | None,
    ) -> tuple[str, list]:
        clauses: list[str] = []
        params: list = []
        if product_id is not None:
            clauses.append(f"{alias}.product_id = ?")
            params.append(product_id)
        if recorded_by is not None:
            clauses.append(f"{alias}.recorded_by = ?")
            params.append(recorded_by)
        if since is not None:
            clauses.append(f"{alias}.date >= ?")
            params.append(_ts(since))
        if until is not None:
            clauses.append(f"{alias}.date < ?")
            params.append(_ts(until))
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        return where, params

    @staticmethod
    def _row_to_movement(row: aiosqlite.Row) -> Movement:
        return Movement(
            id=row["id"],
            type=MovementType(row["type"]),
            product_id=row["product_id"],
            quantity=row["quantity"],
            date=datetime.fromisoformat(row["date"]),
            recorded_by=row["recorded_by"],
            fiscal_year=row["fiscal_year"],
            created_at=(
                datetime.fromisoformat(row["created_at"]) if row["created_at"] else None
            ),
            product_name=row["product_name"],
            user_name=row["user_name"],
            details=row["details"],
        )
