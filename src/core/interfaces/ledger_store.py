"""Abstract interface for the append-only stock ledger."""

from abc import ABC, abstractmethod
from datetime import datetime

from src.core.entities.ledger import Movement, StockDispatch, StockReceipt


class ILedgerStore(ABC):
    """
    Interface for stock receipt and dispatch persistence.

    Movements are insert-only: there is deliberately no update or delete.
    """

    @abstractmethod
    async def append_receipt(self, receipt: StockReceipt) -> StockReceipt:
        """
        Insert a receipt and return it with id, date and fiscal_year assigned.

        Raises:
            MissingReferenceError: product, supplier or recording user absent.
        """
        pass

    @abstractmethod
    async def append_dispatch(self, dispatch: StockDispatch) -> StockDispatch:
        """
        Insert a dispatch only if current stock covers its quantity.

        The sufficiency check and the insert happen in one write
        transaction, so concurrent dispatches of the same product are
        serialized.

        Raises:
            MissingReferenceError: product or recording user absent.
            InsufficientStockError: quantity exceeds current stock.
        """
        pass

    @abstractmethod
    async def list_movements(
        self,
        product_id: int | None = None,
        recorded_by: int | None = None,
        since: datetime | None = None,
        until: datetime | None = None,
    ) -> list[Movement]:
        """List receipts and dispatches in insertion order."""
        pass

    @abstractmethod
    async def stock_totals(self, product_id: int) -> tuple[int, int]:
        """Return (sum of receipt quantities, sum of dispatch quantities)."""
        pass

    @abstractmethod
    async def current_stock(self, product_id: int) -> int:
        """Derived stock: receipts minus dispatches."""
        pass

    @abstractmethod
    async def recent_receipts(self, limit: int = 50) -> list[Movement]:
        """Newest receipts first, with product and user names."""
        pass

    @abstractmethod
    async def recent_dispatches(self, limit: int = 50) -> list[Movement]:
        """Newest dispatches first, with product and user names."""
        pass

    @abstractmethod
    async def quantity_totals_between(
        self, start: datetime, end: datetime
    ) -> tuple[int, int]:
        """Return (in, out) quantities dated in [start, end)."""
        pass

    @abstractmethod
    async def count_movements(self, product_id: int) -> int:
        """Number of receipts and dispatches referencing a product."""
        pass

    @abstractmethod
    async def count_movements_by_user(self, user_id: int) -> int:
        """Number of receipts and dispatches recorded by a user."""
        pass
