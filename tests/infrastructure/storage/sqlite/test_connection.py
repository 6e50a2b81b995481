"""Tests for the ledger connection pool."""

import asyncio
from pathlib import Path
from unittest.mock import patch

import aiosqlite
import pytest

import src.infrastructure.storage.sqlite.connection as conn_module
from src.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
    get_write_transaction,
)


async def _category_names(pool: ConnectionPool) -> list[str]:
    async with pool.acquire() as conn:
        cursor = await conn.execute("SELECT name FROM categories ORDER BY name")
        return [row["name"] for row in await cursor.fetchall()]


@pytest.fixture
async def pool(initialized_db: Path):
    pool = ConnectionPool(initialized_db, pool_size=2, busy_timeout=5000)
    yield pool
    await pool.close()


class TestOpening:
    def test_not_opened_until_used(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path)

        assert (pool.pool_size, pool.busy_timeout) == (5, 30000)
        assert pool._initialized is False

    async def test_creates_missing_directory(self, tmp_path: Path):
        pool = ConnectionPool(tmp_path / "a" / "b" / "ledger.db", pool_size=1)

        await pool.initialize()

        assert (tmp_path / "a" / "b").is_dir()
        await pool.close()

    async def test_initialize_twice_keeps_size(self, pool: ConnectionPool):
        await pool.initialize()
        await pool.initialize()

        assert len(pool._connections) == 2
        assert pool._pool.qsize() == 2

    async def test_pragmas(self, temp_db_path: Path):
        conn = await ConnectionPool(temp_db_path, busy_timeout=1234)._create_connection()
        try:
            results = {}
            for pragma in ("journal_mode", "foreign_keys", "busy_timeout"):
                cursor = await conn.execute(f"PRAGMA {pragma}")
                results[pragma] = (await cursor.fetchone())[0]
            assert conn.row_factory is aiosqlite.Row
        finally:
            await conn.close()

        assert results == {"journal_mode": "wal", "foreign_keys": 1, "busy_timeout": 1234}

    async def test_close_then_reuse(self, pool: ConnectionPool):
        await pool.initialize()
        await pool.close()

        assert pool._connections == []
        assert await _category_names(pool) == []


class TestBorrowing:
    async def test_connection_returned_after_error(self, pool: ConnectionPool):
        with pytest.raises(KeyError):
            async with pool.acquire():
                raise KeyError("boom")

        assert pool._pool.qsize() == 2

    async def test_waits_when_exhausted(self, initialized_db: Path):
        single = ConnectionPool(initialized_db, pool_size=1)

        async with single.acquire():
            with pytest.raises(asyncio.TimeoutError):
                await asyncio.wait_for(single.acquire().__aenter__(), timeout=0.1)

        await single.close()


class TestTransactions:
    async def test_commit(self, pool: ConnectionPool):
        async with pool.transaction() as conn:
            await conn.execute("INSERT INTO categories (name) VALUES ('Snacks')")

        assert await _category_names(pool) == ["Snacks"]

    async def test_rollback(self, pool: ConnectionPool):
        with pytest.raises(ValueError):
            async with pool.transaction() as conn:
                await conn.execute("INSERT INTO categories (name) VALUES ('Gone')")
                raise ValueError("abort")

        assert await _category_names(pool) == []

    async def test_write_rollback(self, pool: ConnectionPool):
        with pytest.raises(RuntimeError):
            async with pool.write_transaction() as conn:
                await conn.execute("INSERT INTO categories (name) VALUES ('X')")
                raise RuntimeError("abort")

        assert await _category_names(pool) == []

    async def test_writers_take_turns(self, pool: ConnectionPool):
        order: list[str] = []

        async def first() -> None:
            async with pool.write_transaction() as conn:
                await conn.execute("INSERT INTO categories (name) VALUES ('A')")
                order.append("first-inserted")
                await asyncio.sleep(0.2)
                order.append("first-committing")

        async def second() -> None:
            await asyncio.sleep(0.05)
            async with pool.write_transaction() as conn:
                order.append("second-locked")
                await conn.execute("INSERT INTO categories (name) VALUES ('B')")

        await asyncio.gather(first(), second())

        assert order == ["first-inserted", "first-committing", "second-locked"]
        assert await _category_names(pool) == ["A", "B"]

    async def test_reader_not_blocked_by_writer(self, pool: ConnectionPool):
        async with pool.write_transaction() as conn:
            await conn.execute("INSERT INTO categories (name) VALUES ('Pending')")
            # WAL: a reader sees the last committed state
            assert await asyncio.wait_for(_category_names(pool), timeout=1) == []


class TestProcessPool:
    async def test_singleton_from_settings(self, mock_settings):
        conn_module._pool = None

        with patch.object(conn_module, "get_settings", return_value=mock_settings):
            first = await get_pool()
            assert await get_pool() is first
            assert first.pool_size == 2
            await close_pool()

        assert conn_module._pool is None

    async def test_close_without_pool(self):
        conn_module._pool = None
        await close_pool()

    async def test_helpers(self, mock_settings, initialized_db: Path):
        conn_module._pool = None
        mock_settings.storage.db_path = initialized_db

        with patch.object(conn_module, "get_settings", return_value=mock_settings):
            try:
                async with get_transaction() as conn:
                    await conn.execute("INSERT INTO categories (name) VALUES ('T')")
                async with get_write_transaction() as conn:
                    await conn.execute("INSERT INTO categories (name) VALUES ('W')")
                async with get_connection() as conn:
                    cursor = await conn.execute("SELECT COUNT(*) FROM categories")
                    assert (await cursor.fetchone())[0] == 2
            finally:
                await close_pool()
