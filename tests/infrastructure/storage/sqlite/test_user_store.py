"""Tests for SQLite user store."""

from unittest.mock import AsyncMock

import pytest

from src.core.entities.ledger import StockReceipt
from src.core.entities.user import User, UserRole
from src.core.exceptions import DuplicateEntityError, EntityInUseError, NotFoundError
from src.infrastructure.storage.sqlite.ledger_store import SQLiteLedgerStore
from src.infrastructure.storage.sqlite.user_store import SQLiteUserStore


@pytest.fixture
def store() -> SQLiteUserStore:
    return SQLiteUserStore()


def _user(email: str, role: UserRole = UserRole.VIEWER, chat_id: str | None = None) -> User:
    return User(
        email=email,
        password_hash="hash",
        name=email.split("@")[0],
        role=role,
        telegram_chat_id=chat_id,
    )


class TestSQLiteUserStore:
    async def test_create_sets_id_and_created_at(self, sqlite_db, store):
        user = await store.create_user(_user("viewer@ics.com"))

        assert user.id is not None
        assert user.created_at is not None
        fetched = await store.get_user(user.id)
        assert fetched.email == "viewer@ics.com"
        assert fetched.role == UserRole.VIEWER

    async def test_email_lookup_ignores_case(self, sqlite_db, store):
        await store.create_user(_user("manager@ics.com", UserRole.MANAGER))

        user = await store.get_user_by_email("Manager@ICS.com")

        assert user is not None
        assert user.role == UserRole.MANAGER

    async def test_duplicate_email(self, sqlite_db, store):
        await store.create_user(_user("dup@ics.com"))

        with pytest.raises(DuplicateEntityError):
            await store.create_user(_user("dup@ics.com"))

    async def test_delete_user(self, sqlite_db, store):
        user = await store.create_user(_user("gone@ics.com"))

        await store.delete_user(user.id)

        assert await store.get_user(user.id) is None

    async def test_delete_missing_user(self, sqlite_db, store):
        with pytest.raises(NotFoundError):
            await store.delete_user(999)

    async def test_delete_refused_with_history(self, seeded, store):
        await SQLiteLedgerStore().append_receipt(
            StockReceipt(product_id=seeded.product_id, quantity=3, recorded_by=seeded.clerk_id)
        )

        with pytest.raises(EntityInUseError):
            await store.delete_user(seeded.clerk_id)

    async def test_entry_after_count_still_blocks_delete(self, seeded, store, monkeypatch):
        await SQLiteLedgerStore().append_receipt(
            StockReceipt(product_id=seeded.product_id, quantity=3, recorded_by=seeded.clerk_id)
        )
        monkeypatch.setattr(store, "_count_recorded", AsyncMock(return_value=0))

        with pytest.raises(EntityInUseError):
            await store.delete_user(seeded.clerk_id)
        assert await store.get_user(seeded.clerk_id) is not None

    async def test_alert_recipients_need_chat_id(self, sqlite_db, store):
        await store.create_user(_user("a@ics.com", UserRole.ADMIN, chat_id="100"))
        await store.create_user(_user("m@ics.com", UserRole.MANAGER, chat_id=""))
        await store.create_user(_user("v@ics.com", UserRole.VIEWER, chat_id="300"))

        recipients = await store.list_alert_recipients([UserRole.ADMIN, UserRole.MANAGER])

        assert [u.telegram_chat_id for u in recipients] == ["100"]
