"""SQLite-backed catalog, ledger and user stores."""

from src.infrastructure.storage.sqlite.catalog_store import SQLiteCatalogStore
from src.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
    get_write_transaction,
)
from src.infrastructure.storage.sqlite.ledger_store import SQLiteLedgerStore
from src.infrastructure.storage.sqlite.user_store import SQLiteUserStore

# Stores hold no state of their own; one instance each per process
_catalog_store: SQLiteCatalogStore | None = None
_ledger_store: SQLiteLedgerStore | None = None
_user_store: SQLiteUserStore | None = None


async def get_catalog_store() -> SQLiteCatalogStore:
    global _catalog_store
    if _catalog_store is None:
        _catalog_store = SQLiteCatalogStore()
    return _catalog_store


async def get_ledger_store() -> SQLiteLedgerStore:
    global _ledger_store
    if _ledger_store is None:
        _ledger_store = SQLiteLedgerStore()
    return _ledger_store


async def get_user_store() -> SQLiteUserStore:
    global _user_store
    if _user_store is None:
        _user_store = SQLiteUserStore()
    return _user_store


__all__ = [
    "ConnectionPool",
    "SQLiteCatalogStore",
    "SQLiteLedgerStore",
    "SQLiteUserStore",
    "close_pool",
    "get_catalog_store",
    "get_connection",
    "get_ledger_store",
    "get_pool",
    "get_transaction",
    "get_user_store",
    "get_write_transaction",
]
