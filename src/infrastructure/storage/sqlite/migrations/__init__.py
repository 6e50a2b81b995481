"""Schema versioning for the ledger database."""

from src.infrastructure.storage.sqlite.migrations.migrator import (
    get_migration_status,
    run_migrations,
    verify_schema_integrity,
)

__all__ = ["get_migration_status", "run_migrations", "verify_schema_integrity"]
