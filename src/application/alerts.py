"""
Low-stock alert dispatch.

Recording a dispatch only enqueues an alert; a background worker owned
by the application lifespan delivers it. Delivery problems are logged
and never reach the request that triggered the alert.
"""

import asyncio

from src.config import get_logger, get_settings
from src.core.entities.reports import LowStockAlert
from src.core.exceptions import InventoryError, NotificationError
from src.core.interfaces import INotifier, IUserStore
from src.core.services.access_policy import ALERT_ROLES

logger = get_logger(__name__)


class AlertDispatcher:
    """Bounded queue of low-stock alerts drained by one worker task."""

    def __init__(
        self,
        notifier: INotifier,
        user_store: IUserStore,
        default_chat_id: str | None = None,
        queue_size: int = 1000,
    ):
        self.notifier = notifier
        self.user_store = user_store
        self.default_chat_id = default_chat_id
        self._queue: asyncio.Queue[LowStockAlert] = asyncio.Queue(maxsize=queue_size)
        self._worker: asyncio.Task | None = None

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    @property
    def running(self) -> bool:
        return self._worker is not None and not self._worker.done()

    def publish(self, alert: LowStockAlert) -> bool:
        """
        Enqueue an alert without waiting.

        Returns False when the queue is full and the alert was dropped.
        """
        try:
            self._queue.put_nowait(alert)
        except asyncio.QueueFull:
            logger.warning(
                "low_stock_alert_dropped",
                product_id=alert.product_id,
                queue_size=self._queue.maxsize,
            )
            return False

        logger.info(
            "low_stock_alert_queued",
            product_id=alert.product_id,
            current_stock=alert.current_stock,
            min_stock_level=alert.min_stock_level,
        )
        return True

    async def start(self) -> None:
        if self.running:
            return
        self._worker = asyncio.create_task(self._run(), name="low-stock-alerts")
        logger.info("alert_dispatcher_started", channel=self.notifier.channel)

    async def stop(self, drain_timeout: float = 5.0) -> None:
        """Deliver what is queued (bounded by ``drain_timeout``), then stop."""
        if self._worker is None:
            return
        try:
            await asyncio.wait_for(self._queue.join(), timeout=drain_timeout)
        except asyncio.TimeoutError:
            logger.warning("alert_dispatcher_drain_timeout", pending=self.pending)

        self._worker.cancel()
        try:
            await self._worker
        except asyncio.CancelledError:
            pass
        self._worker = None
        logger.info("alert_dispatcher_stopped")

    async def _run(self) -> None:
        while True:
            alert = await self._queue.get()
            try:
                await self.deliver(alert)
            except Exception as e:
                # Keep the worker alive whatever a single delivery does
                logger.error(
                    "alert_delivery_failed",
                    product_id=alert.product_id,
                    error=str(e),
                    error_type=type(e).__name__,
                )
            finally:
                self._queue.task_done()

    async def recipients(self) -> list[str | None]:
        """Chat ids of admins and managers, plus the configured default chat."""
        chat_ids: list[str | None] = []
        try:
            users = await self.user_store.list_alert_recipients(ALERT_ROLES)
        except InventoryError as e:
            logger.error("alert_recipients_lookup_failed", error=str(e))
            users = []

        for user in users:
            if user.telegram_chat_id and user.telegram_chat_id not in chat_ids:
                chat_ids.append(user.telegram_chat_id)
        if self.default_chat_id and self.default_chat_id not in chat_ids:
            chat_ids.append(self.default_chat_id)

        # Nobody to notify: the notifier still records the alert
        return chat_ids or [None]

    async def deliver(self, alert: LowStockAlert) -> int:
        """Send one alert to every recipient; returns how many sends succeeded."""
        delivered = 0
        for chat_id in await self.recipients():
            try:
                await self.notifier.send(chat_id, alert.text)
                delivered += 1
            except NotificationError as e:
                logger.warning(
                    "alert_delivery_failed",
                    product_id=alert.product_id,
                    chat_id=chat_id,
                    channel=self.notifier.channel,
                    error=e.message,
                )
        return delivered


# Singleton dispatcher owned by the API lifespan
_alert_dispatcher: AlertDispatcher | None = None


async def get_alert_dispatcher() -> AlertDispatcher:
    """Get or create the process-wide alert dispatcher."""
    global _alert_dispatcher
    if _alert_dispatcher is None:
        # Lazy import infrastructure to avoid circular imports
        from src.infrastructure.notifications import get_notifier
        from src.infrastructure.storage.sqlite import get_user_store

        settings = get_settings()
        _alert_dispatcher = AlertDispatcher(
            notifier=get_notifier(),
            user_store=await get_user_store(),
            default_chat_id=settings.notify.default_chat_id,
            queue_size=settings.notify.queue_size,
        )
    return _alert_dispatcher


def reset_alert_dispatcher() -> None:
    """Forget the singleton (for testing)."""
    global _alert_dispatcher
    _alert_dispatcher = None
