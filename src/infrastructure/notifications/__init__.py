"""
Outbound alert channels.

Creates the notifier matching configuration.
"""

from src.config import get_logger, get_settings
from src.core.interfaces import INotifier
from src.infrastructure.notifications.log_notifier import LogNotifier
from src.infrastructure.notifications.telegram import TelegramNotifier

logger = get_logger(__name__)


def get_notifier() -> INotifier:
    """Telegram when a bot token is configured, otherwise the log."""
    settings = get_settings()
    if settings.notify.telegram_bot_token:
        return TelegramNotifier()

    logger.info("telegram_not_configured", fallback="log")
    return LogNotifier()


__all__ = [
    "LogNotifier",
    "TelegramNotifier",
    "get_notifier",
]
