"""Fixtures for tests that drive SQLite directly, without the global pool."""

from pathlib import Path
from types import SimpleNamespace

import pytest

from src.infrastructure.storage.sqlite.migrations.migrator import initialize_database


@pytest.fixture
async def initialized_db(temp_db_path: Path) -> Path:
    await initialize_database(temp_db_path, create_backup_before=False)
    return temp_db_path


@pytest.fixture
def mock_settings(temp_db_path: Path) -> SimpleNamespace:
    """Just the storage section the pool reads."""
    storage = SimpleNamespace(db_path=temp_db_path, pool_size=2, busy_timeout=5000)
    return SimpleNamespace(storage=storage)
