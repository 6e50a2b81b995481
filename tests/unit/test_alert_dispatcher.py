"""Tests for the low-stock alert dispatcher."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from src.application.alerts import AlertDispatcher
from src.core.entities.reports import LowStockAlert
from src.core.entities.user import User, UserRole
from src.core.exceptions import NotificationError
from src.infrastructure.notifications import LogNotifier


def _alert(product_id: int = 1) -> LowStockAlert:
    return LowStockAlert(
        product_id=product_id,
        product_name="Cola 330ml",
        current_stock=15,
        min_stock_level=20,
        unit="can",
    )


def _manager(chat_id: str | None) -> User:
    return User(
        id=2,
        email="manager@ics.com",
        password_hash="x",
        name="Manager",
        role=UserRole.MANAGER,
        telegram_chat_id=chat_id,
    )


@pytest.fixture
def mock_user_store():
    store = AsyncMock()
    store.list_alert_recipients.return_value = [_manager("100"), _manager("100")]
    return store


@pytest.fixture
def notifier() -> LogNotifier:
    return LogNotifier()


class TestPublish:
    def test_queues_alert(self, notifier, mock_user_store):
        dispatcher = AlertDispatcher(notifier, mock_user_store)

        assert dispatcher.publish(_alert()) is True
        assert dispatcher.pending == 1

    def test_full_queue_drops_without_raising(self, notifier, mock_user_store):
        dispatcher = AlertDispatcher(notifier, mock_user_store, queue_size=1)

        assert dispatcher.publish(_alert(1)) is True
        assert dispatcher.publish(_alert(2)) is False
        assert dispatcher.pending == 1


class TestDeliver:
    async def test_recipients_deduplicated_plus_default(self, notifier, mock_user_store):
        dispatcher = AlertDispatcher(notifier, mock_user_store, default_chat_id="999")

        assert await dispatcher.recipients() == ["100", "999"]

    async def test_no_recipients_still_notifies(self, notifier, mock_user_store):
        mock_user_store.list_alert_recipients.return_value = []
        dispatcher = AlertDispatcher(notifier, mock_user_store)

        delivered = await dispatcher.deliver(_alert())

        assert delivered == 1
        assert notifier.sent == [(None, _alert().text)]

    async def test_failed_send_is_counted_not_raised(self, mock_user_store):
        failing = AsyncMock()
        failing.channel = "telegram"
        failing.send.side_effect = NotificationError("telegram", "HTTP 500")
        dispatcher = AlertDispatcher(failing, mock_user_store, default_chat_id="999")

        assert await dispatcher.deliver(_alert()) == 0
        assert failing.send.await_count == 2


class TestWorker:
    async def test_start_drains_and_stops(self, notifier, mock_user_store):
        dispatcher = AlertDispatcher(notifier, mock_user_store)
        await dispatcher.start()
        assert dispatcher.running

        dispatcher.publish(_alert(1))
        dispatcher.publish(_alert(2))
        await dispatcher.stop(drain_timeout=2.0)

        assert not dispatcher.running
        assert len(notifier.sent) == 2

    async def test_worker_survives_unexpected_errors(self, notifier, mock_user_store):
        mock_user_store.list_alert_recipients.side_effect = [RuntimeError("boom"), []]
        dispatcher = AlertDispatcher(notifier, mock_user_store)
        await dispatcher.start()

        dispatcher.publish(_alert(1))
        dispatcher.publish(_alert(2))
        await dispatcher.stop(drain_timeout=2.0)

        assert [text for _, text in notifier.sent] == [_alert(2).text]

    async def test_stop_without_start(self, notifier, mock_user_store):
        await AlertDispatcher(notifier, mock_user_store).stop()

    async def test_stop_times_out_on_slow_channel(self, mock_user_store):
        async def hang(chat_id, text):
            await asyncio.sleep(10)

        slow = AsyncMock()
        slow.channel = "slow"
        slow.send.side_effect = hang
        dispatcher = AlertDispatcher(slow, mock_user_store)
        await dispatcher.start()
        dispatcher.publish(_alert())

        await dispatcher.stop(drain_timeout=0.05)

        assert not dispatcher.running
