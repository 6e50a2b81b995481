"""Get Movement Report Use Case: in/out quantities per period bucket."""

from datetime import datetime

from src.application.dto.responses import MovementReportResponse, PeriodBucketResponse
from src.core.entities.reports import PeriodBucket, ReportPeriod
from src.core.interfaces import ILedgerStore
from src.core.services.ledger_reports import period_buckets


class GetMovementReportUseCase:
    """Daily, weekly (Sunday-anchored) or monthly movement totals."""

    def __init__(self, ledger_store: ILedgerStore | None = None):
        self._ledger_store = ledger_store

    async def _get_ledger_store(self) -> ILedgerStore:
        if self._ledger_store is None:
            from src.infrastructure.storage.sqlite import get_ledger_store

            self._ledger_store = await get_ledger_store()
        return self._ledger_store

    async def execute(
        self,
        period: ReportPeriod = ReportPeriod.DAILY,
        user_id: int | None = None,
        since: datetime | None = None,
        until: datetime | None = None,
    ) -> list[PeriodBucket]:
        ledger = await self._get_ledger_store()
        movements = await ledger.list_movements(
            recorded_by=user_id, since=since, until=until
        )
        return period_buckets(movements, period, user_id=user_id)

    def to_response(
        self,
        buckets: list[PeriodBucket],
        period: ReportPeriod,
        user_id: int | None = None,
    ) -> MovementReportResponse:
        return MovementReportResponse(
            period=period.value,
            user_id=user_id,
            buckets=[PeriodBucketResponse.from_entity(b) for b in buckets],
        )
