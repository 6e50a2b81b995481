"""
Telegram Bot API notifier.

Sends plain-text messages through the sendMessage method. Transport
errors are retried with exponential backoff; HTTP error statuses are not.
"""

from typing import Any

import httpx
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from src.config import get_logger, get_settings
from src.core.exceptions import NotificationError
from src.core.interfaces import INotifier

logger = get_logger(__name__)


class TelegramNotifier(INotifier):
    """HTTP client for the Telegram Bot API."""

    channel = "telegram"

    def __init__(
        self,
        bot_token: str | None = None,
        api_base: str | None = None,
        timeout: int | None = None,
        max_retries: int | None = None,
        retry_delay: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        settings = get_settings()
        self.bot_token = bot_token or settings.notify.telegram_bot_token
        self.api_base = (api_base or settings.notify.telegram_api_base).rstrip("/")
        self.timeout = timeout or settings.notify.timeout
        self.max_retries = max_retries or settings.notify.max_retries
        self.retry_delay = (
            settings.notify.retry_delay if retry_delay is None else retry_delay
        )
        self._transport = transport

    @property
    def send_url(self) -> str:
        return f"{self.api_base}/bot{self.bot_token}/sendMessage"

    def _get_retry_decorator(self) -> Any:
        return retry(
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(
                multiplier=self.retry_delay,
                min=self.retry_delay,
                max=self.retry_delay * 8,
            ),
            retry=retry_if_exception_type(httpx.TransportError),
            before_sleep=self._log_retry,
            reraise=True,
        )

    @staticmethod
    def _log_retry(retry_state: RetryCallState) -> None:
        logger.warning(
            "telegram_retry",
            attempt=retry_state.attempt_number,
            error=str(retry_state.outcome.exception()) if retry_state.outcome else None,
        )

    async def _post(self, payload: dict[str, str]) -> httpx.Response:
        async with httpx.AsyncClient(
            timeout=self.timeout, transport=self._transport
        ) as client:
            return await client.post(self.send_url, json=payload)

    async def send(self, chat_id: str | None, text: str) -> None:
        """Post one message to one chat."""
        if not self.bot_token:
            raise NotificationError(self.channel, "bot token not configured")
        if not chat_id:
            raise NotificationError(self.channel, "chat id missing")

        payload = {"chat_id": chat_id, "text": text}

        try:
            response = await self._get_retry_decorator()(self._post)(payload)
        except httpx.HTTPError as e:
            raise NotificationError(self.channel, str(e)) from e

        if response.status_code != 200:
            raise NotificationError(
                self.channel, f"HTTP {response.status_code}: {response.text[:200]}"
            )

        logger.info("telegram_message_sent", chat_id=chat_id, text_len=len(text))
