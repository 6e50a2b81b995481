"""Core interfaces (ports) for dependency injection."""

from src.core.interfaces.catalog_store import ICatalogStore
from src.core.interfaces.ledger_store import ILedgerStore
from src.core.interfaces.notifier import INotifier
from src.core.interfaces.user_store import IUserStore

__all__ = [
    # Storage interfaces
    "ICatalogStore",
    "ILedgerStore",
    "IUserStore",
    # Notification interfaces
    "INotifier",
]
