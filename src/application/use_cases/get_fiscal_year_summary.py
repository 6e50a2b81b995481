"""Get Fiscal Year Summary Use Case."""

from src.application.dto.responses import FiscalYearResponse
from src.core.entities.reports import FiscalYearSummary
from src.core.interfaces import ILedgerStore
from src.core.services.ledger_reports import fiscal_year_summary


class GetFiscalYearSummaryUseCase:
    """Ledger quantities and entry counts grouped by fiscal year."""

    def __init__(self, ledger_store: ILedgerStore | None = None):
        self._ledger_store = ledger_store

    async def _get_ledger_store(self) -> ILedgerStore:
        if self._ledger_store is None:
            from src.infrastructure.storage.sqlite import get_ledger_store

            self._ledger_store = await get_ledger_store()
        return self._ledger_store

    async def execute(self) -> list[FiscalYearSummary]:
        ledger = await self._get_ledger_store()
        return fiscal_year_summary(await ledger.list_movements())

    def to_response(self, summaries: list[FiscalYearSummary]) -> list[FiscalYearResponse]:
        return [FiscalYearResponse.from_entity(s) for s in summaries]
