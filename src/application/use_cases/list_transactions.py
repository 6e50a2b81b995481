"""List Transactions Use Case: merged newest-first feed."""

from src.application.dto.responses import MovementResponse
from src.config import get_logger, get_settings
from src.core.entities.ledger import Movement
from src.core.interfaces import ILedgerStore
from src.core.services.ledger_reports import FeedType, merge_transaction_feed

logger = get_logger(__name__)


class ListTransactionsUseCase:
    """Merge recent receipts and dispatches into one feed."""

    def __init__(self, ledger_store: ILedgerStore | None = None):
        self._ledger_store = ledger_store

    async def _get_ledger_store(self) -> ILedgerStore:
        if self._ledger_store is None:
            from src.infrastructure.storage.sqlite import get_ledger_store

            self._ledger_store = await get_ledger_store()
        return self._ledger_store

    async def execute(
        self, limit: int | None = None, type_filter: FeedType = "all"
    ) -> list[Movement]:
        settings = get_settings().inventory
        limit = min(limit or settings.default_feed_limit, settings.max_feed_limit)

        ledger = await self._get_ledger_store()

        # Each side contributes at most `limit`, so the merged top `limit` is exact
        receipts = await ledger.recent_receipts(limit) if type_filter != "out" else []
        dispatches = await ledger.recent_dispatches(limit) if type_filter != "in" else []

        feed = merge_transaction_feed(receipts, dispatches, limit, type_filter)
        logger.debug("transactions_listed", count=len(feed), type=type_filter)
        return feed

    def to_response(self, feed: list[Movement]) -> list[MovementResponse]:
        return [MovementResponse.from_entity(m) for m in feed]
