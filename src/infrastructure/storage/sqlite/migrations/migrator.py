"""
Versioned SQL migrations for the ledger database.

Migration files live next to this module as ``vNNN_name.sql`` and are
applied in version order. Each applied version is recorded with a
checksum in ``schema_migrations``; the database file is copied aside
before a run and restored if the run blows up.

Usage:
    python -m src.infrastructure.storage.sqlite.migrations.migrator [--status | --verify]
"""

import argparse
import asyncio
import hashlib
import re
import shutil
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

import aiosqlite

from src.config import configure_logging, get_logger, get_settings

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).parent

MIGRATION_FILE = re.compile(r"^v(\d+)_(\w+)\.sql$")

REQUIRED_TABLES = [
    "users",
    "categories",
    "suppliers",
    "products",
    "stock_in",
    "stock_out",
    "schema_migrations",
]

# Products whose receipts minus dispatches went below zero
NEGATIVE_STOCK_SQL = """
    SELECT id FROM (
        SELECT p.id,
               (SELECT COALESCE(SUM(quantity), 0) FROM stock_in WHERE product_id = p.id)
             - (SELECT COALESCE(SUM(quantity), 0) FROM stock_out WHERE product_id = p.id)
               AS stock
        FROM products p
    )
    WHERE stock < 0
"""


@dataclass
class MigrationInfo:
    """One migration file on disk."""

    version: str
    name: str
    path: Path
    checksum: str

    @classmethod
    def from_file(cls, path: Path) -> "MigrationInfo":
        match = MIGRATION_FILE.match(path.name)
        if match is None:
            raise ValueError(f"Invalid migration filename: {path.name}")

        digest = hashlib.sha256(path.read_bytes()).hexdigest()
        return cls(
            version=match.group(1),
            name=match.group(2),
            path=path,
            checksum=digest[:16],
        )


@dataclass
class MigrationResult:
    version: str
    name: str
    success: bool
    execution_time_ms: int
    error: str | None = None


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


async def ensure_migrations_table(conn: aiosqlite.Connection) -> None:
    await conn.execute(
        """
        CREATE TABLE IF NOT EXISTS schema_migrations (
            version TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            checksum TEXT,
            applied_at TEXT DEFAULT (datetime('now')),
            execution_time_ms INTEGER
        )
        """
    )
    await conn.commit()


async def get_applied_migrations(conn: aiosqlite.Connection) -> dict[str, str]:
    """Applied version -> checksum; empty before the tracking table exists."""
    try:
        cursor = await conn.execute("SELECT version, checksum FROM schema_migrations")
    except aiosqlite.OperationalError:
        return {}
    return {version: checksum for version, checksum in await cursor.fetchall()}


async def get_current_version(conn: aiosqlite.Connection) -> str | None:
    applied = await get_applied_migrations(conn)
    return max(applied) if applied else None


def discover_migrations() -> list[MigrationInfo]:
    """Migration files in version order; badly named files are skipped."""
    found = []
    for path in MIGRATIONS_DIR.glob("v*.sql"):
        try:
            found.append(MigrationInfo.from_file(path))
        except ValueError as e:
            logger.warning("migration_file_skipped", path=str(path), error=str(e))
    return sorted(found, key=lambda m: int(m.version))


async def apply_migration(
    conn: aiosqlite.Connection,
    migration: MigrationInfo,
) -> MigrationResult:
    """Run one migration script and record it; failures are returned, not raised."""
    started = time.perf_counter()
    log = logger.bind(version=migration.version, migration=migration.name)
    log.info("migration_started")

    try:
        await conn.executescript(migration.path.read_text(encoding="utf-8"))
        await conn.execute(
            "INSERT OR REPLACE INTO schema_migrations "
            "(version, name, checksum, execution_time_ms) VALUES (?, ?, ?, ?)",
            (migration.version, migration.name, migration.checksum, _elapsed_ms(started)),
        )
        await conn.commit()
    except aiosqlite.Error as e:
        await conn.rollback()
        log.error("migration_failed", error=str(e))
        return MigrationResult(
            version=migration.version,
            name=migration.name,
            success=False,
            execution_time_ms=_elapsed_ms(started),
            error=str(e),
        )

    elapsed = _elapsed_ms(started)
    log.info("migration_applied", execution_time_ms=elapsed)
    return MigrationResult(
        version=migration.version,
        name=migration.name,
        success=True,
        execution_time_ms=elapsed,
    )


async def _foreign_key_violations(conn: aiosqlite.Connection) -> int:
    cursor = await conn.execute("PRAGMA foreign_key_check")
    return len(await cursor.fetchall())


def create_backup(db_path: Path) -> Path:
    """Copy the database file aside; returns the copy's path."""
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    backup_path = db_path.with_name(f"{db_path.stem}.backup_{stamp}{db_path.suffix}")
    shutil.copy2(db_path, backup_path)
    logger.info("database_backup_created", backup_path=str(backup_path))
    return backup_path


def restore_backup(db_path: Path, backup_path: Path) -> None:
    shutil.copy2(backup_path, db_path)
    logger.warning("database_restored_from_backup", backup_path=str(backup_path))


async def _apply_pending(conn: aiosqlite.Connection) -> list[MigrationResult]:
    applied = await get_applied_migrations(conn)
    results: list[MigrationResult] = []

    for migration in discover_migrations():
        if migration.version in applied:
            if applied[migration.version] != migration.checksum:
                logger.warning("migration_checksum_changed", version=migration.version)
            continue

        result = await apply_migration(conn, migration)
        results.append(result)
        if not result.success:
            break

        violations = await _foreign_key_violations(conn)
        if violations:
            logger.error(
                "migration_left_fk_violations",
                version=migration.version,
                violations=violations,
            )
            break

    return results


async def initialize_database(
    db_path: Path | None = None,
    create_backup_before: bool = True,
) -> list[MigrationResult]:
    """
    Bring the database schema up to date.

    Args:
        db_path: Database file (default from settings).
        create_backup_before: Copy an existing file aside first.

    Returns:
        One result per migration attempted; empty when already current.
    """
    db_path = db_path or get_settings().storage.db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)

    backup_path = create_backup(db_path) if create_backup_before and db_path.exists() else None

    try:
        async with aiosqlite.connect(db_path) as conn:
            await conn.execute("PRAGMA journal_mode=WAL")
            await conn.execute("PRAGMA foreign_keys=ON")
            await ensure_migrations_table(conn)
            results = await _apply_pending(conn)
    except Exception as e:
        logger.error("database_migration_aborted", db_path=str(db_path), error=str(e))
        if backup_path is not None:
            restore_backup(db_path, backup_path)
        raise

    if backup_path is not None and all(r.success for r in results):
        backup_path.unlink()

    logger.info(
        "database_ready",
        db_path=str(db_path),
        applied=[r.version for r in results if r.success],
    )
    return results


# Name used by the API lifespan
run_migrations = initialize_database


async def get_migration_status(db_path: Path | None = None) -> dict:
    """Applied and pending versions for a database file."""
    db_path = db_path or get_settings().storage.db_path
    discovered = [m.version for m in discover_migrations()]

    if not db_path.exists():
        return {
            "exists": False,
            "current_version": None,
            "applied_migrations": [],
            "pending_migrations": discovered,
        }

    async with aiosqlite.connect(db_path) as conn:
        applied = await get_applied_migrations(conn)

    return {
        "exists": True,
        "current_version": max(applied) if applied else None,
        "applied_migrations": sorted(applied),
        "pending_migrations": [v for v in discovered if v not in applied],
        "total_migrations": len(discovered),
    }


async def verify_schema_integrity(db_path: Path | None = None) -> list[dict]:
    """
    Health checks for an existing database.

    Besides SQLite's own checks this confirms the ledger tables exist and
    that no product's derived stock is negative.
    """
    db_path = db_path or get_settings().storage.db_path

    async with aiosqlite.connect(db_path) as conn:
        violations = await _foreign_key_violations(conn)

        cursor = await conn.execute("PRAGMA integrity_check")
        integrity = (await cursor.fetchone())[0]

        cursor = await conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
        tables = {row[0] for row in await cursor.fetchall()}
        missing = [t for t in REQUIRED_TABLES if t not in tables]

        negative: list[int] = []
        if not missing:
            cursor = await conn.execute(NEGATIVE_STOCK_SQL)
            negative = [row[0] for row in await cursor.fetchall()]

    def status(ok: bool) -> str:
        return "PASS" if ok else "FAIL"

    return [
        {"check": "foreign_keys", "status": status(violations == 0), "violations": violations},
        {"check": "integrity", "status": status(integrity == "ok"), "result": integrity},
        {"check": "required_tables", "status": status(not missing), "missing": missing},
        {"check": "non_negative_stock", "status": status(not negative), "product_ids": negative},
    ]


def _print_status(status: dict) -> None:
    print(f"Database exists:    {status['exists']}")
    print(f"Current version:    {status['current_version'] or 'none'}")
    print(f"Applied migrations: {', '.join(status['applied_migrations']) or 'none'}")
    print(f"Pending migrations: {', '.join(status['pending_migrations']) or 'none'}")


def _print_checks(checks: list[dict]) -> None:
    for check in checks:
        print(f"[{check['status']}] {check['check']}")
        if check["status"] != "PASS":
            for key, value in check.items():
                if key not in ("check", "status"):
                    print(f"       {key}: {value}")


def _print_results(results: list[MigrationResult]) -> None:
    if not results:
        print("Schema is up to date")
    for result in results:
        outcome = "OK" if result.success else "FAILED"
        print(f"[{outcome}] v{result.version} {result.name} ({result.execution_time_ms}ms)")
        if result.error:
            print(f"       {result.error}")


def main() -> None:
    """CLI entry point for the migrator."""
    parser = argparse.ArgumentParser(description="Inventory ledger database migrator")
    parser.add_argument("--db-path", type=Path, help="Database file (default from settings)")
    action = parser.add_mutually_exclusive_group()
    action.add_argument("--status", action="store_true", help="Show applied and pending versions")
    action.add_argument("--verify", action="store_true", help="Run integrity checks")
    parser.add_argument("--no-backup", action="store_true", help="Do not copy the file first")
    args = parser.parse_args()

    configure_logging()

    if args.status:
        _print_status(asyncio.run(get_migration_status(args.db_path)))
    elif args.verify:
        _print_checks(asyncio.run(verify_schema_integrity(args.db_path)))
    else:
        _print_results(
            asyncio.run(
                initialize_database(args.db_path, create_backup_before=not args.no_backup)
            )
        )


if __name__ == "__main__":
    main()
