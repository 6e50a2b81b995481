"""Notifier that only writes alerts to the application log."""

from src.config import get_logger
from src.core.interfaces import INotifier

logger = get_logger(__name__)


class LogNotifier(INotifier):
    """Used when no Telegram bot is configured."""

    channel = "log"

    def __init__(self) -> None:
        self.sent: list[tuple[str | None, str]] = []

    async def send(self, chat_id: str | None, text: str) -> None:
        self.sent.append((chat_id, text))
        logger.warning("low_stock_alert", chat_id=chat_id, text=text)
