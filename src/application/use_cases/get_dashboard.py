"""Get Dashboard Use Case."""

from datetime import date

from src.application.dto.responses import DashboardStatsResponse
from src.core.entities.reports import DashboardStats
from src.core.interfaces import ICatalogStore, ILedgerStore
from src.core.services.ledger_reports import dashboard_stats, day_bounds


class GetDashboardUseCase:
    """Headline stock figures, recomputed from the ledger on every call."""

    def __init__(
        self,
        catalog_store: ICatalogStore | None = None,
        ledger_store: ILedgerStore | None = None,
    ):
        self._catalog_store = catalog_store
        self._ledger_store = ledger_store

    async def _get_catalog_store(self) -> ICatalogStore:
        if self._catalog_store is None:
            from src.infrastructure.storage.sqlite import get_catalog_store

            self._catalog_store = await get_catalog_store()
        return self._catalog_store

    async def _get_ledger_store(self) -> ILedgerStore:
        if self._ledger_store is None:
            from src.infrastructure.storage.sqlite import get_ledger_store

            self._ledger_store = await get_ledger_store()
        return self._ledger_store

    async def execute(self, today: date | None = None) -> DashboardStats:
        """
        Args:
            today: Calendar day for today_in / today_out (server-local).
        """
        catalog = await self._get_catalog_store()
        ledger = await self._get_ledger_store()

        products = await catalog.list_products()
        start, end = day_bounds(today or date.today())
        today_in, today_out = await ledger.quantity_totals_between(start, end)

        return dashboard_stats(products, today_in, today_out)

    def to_response(self, stats: DashboardStats) -> DashboardStatsResponse:
        return DashboardStatsResponse.from_entity(stats)
