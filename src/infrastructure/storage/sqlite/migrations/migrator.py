"""
Versioned schema migrator.

Migrations are plain SQL files named ``v001_name.sql`` in this directory,
applied in order and recorded in ``schema_migrations`` with a checksum.
The database file is backed up first and restored if a migration fails.
"""

import asyncio
import hashlib
import re
import shutil
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

import aiosqlite

from src.config import get_logger, get_settings

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).parent
_FILENAME_RE = re.compile(r"v(\d+)_(.+)\.sql")

REQUIRED_TABLES = (
    "schema_migrations",
    "customers",
    "vendors",
    "employees",
    "payslips",
    "vehicles",
    "vehicle_transactions",
    "expense_categories",
    "quotes",
    "quote_items",
    "invoices",
    "invoice_items",
    "purchase_orders",
    "purchase_order_items",
)


@dataclass
class MigrationInfo:
    """A migration file on disk."""

    version: str
    name: str
    path: Path
    checksum: str

    @classmethod
    def from_file(cls, path: Path) -> "MigrationInfo":
        match = _FILENAME_RE.fullmatch(path.name)
        if not match:
            raise ValueError(f"Invalid migration filename: {path.name}")

        content = path.read_text(encoding="utf-8")
        return cls(
            version=match.group(1),
            name=match.group(2),
            path=path,
            checksum=hashlib.sha256(content.encode()).hexdigest()[:16],
        )


@dataclass
class MigrationResult:
    """Outcome of applying one migration."""

    version: str
    name: str
    success: bool
    execution_time_ms: int
    error: str | None = None


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


async def get_applied_migrations(conn: aiosqlite.Connection) -> dict[str, str]:
    """Map of applied version to checksum; empty on a fresh database."""
    try:
        cursor = await conn.execute(
            "SELECT version, checksum FROM schema_migrations ORDER BY version"
        )
    except aiosqlite.OperationalError:
        return {}
    return {row[0]: row[1] for row in await cursor.fetchall()}


async def get_current_version(conn: aiosqlite.Connection) -> str | None:
    try:
        cursor = await conn.execute(
            "SELECT version FROM schema_migrations ORDER BY version DESC LIMIT 1"
        )
    except aiosqlite.OperationalError:
        return None
    row = await cursor.fetchone()
    return row[0] if row else None


def discover_migrations() -> list[MigrationInfo]:
    """All migration files, ordered by version."""
    migrations = []
    for path in sorted(MIGRATIONS_DIR.glob("v*.sql")):
        try:
            migrations.append(MigrationInfo.from_file(path))
        except ValueError as e:
            logger.warning("skipping_invalid_migration", path=str(path), error=str(e))
    return migrations


async def find_integrity_problems(conn: aiosqlite.Connection) -> list[str]:
    """Foreign key and page-level problems, as readable messages."""
    problems = []

    cursor = await conn.execute("PRAGMA foreign_key_check")
    violations = await cursor.fetchall()
    if violations:
        problems.append(f"Foreign key violations found: {len(violations)}")

    cursor = await conn.execute("PRAGMA integrity_check")
    row = await cursor.fetchone()
    if row and row[0] != "ok":
        problems.append(f"Integrity check failed: {row[0]}")

    return problems


async def apply_migration(
    conn: aiosqlite.Connection,
    migration: MigrationInfo,
) -> MigrationResult:
    """Run one migration script and record it."""
    logger.info("applying_migration", version=migration.version, name=migration.name)
    start = time.perf_counter()

    try:
        await conn.executescript(migration.path.read_text(encoding="utf-8"))
        await conn.execute(
            """
            INSERT OR REPLACE INTO schema_migrations
                (version, name, checksum, execution_time_ms)
            VALUES (?, ?, ?, ?)
            """,
            (migration.version, migration.name, migration.checksum, _elapsed_ms(start)),
        )
        await conn.commit()
    except aiosqlite.Error as e:
        await conn.rollback()
        logger.error(
            "migration_failed",
            version=migration.version,
            name=migration.name,
            error=str(e),
        )
        return MigrationResult(
            version=migration.version,
            name=migration.name,
            success=False,
            execution_time_ms=_elapsed_ms(start),
            error=str(e),
        )

    elapsed = _elapsed_ms(start)
    logger.info(
        "migration_applied",
        version=migration.version,
        name=migration.name,
        execution_time_ms=elapsed,
    )
    return MigrationResult(
        version=migration.version,
        name=migration.name,
        success=True,
        execution_time_ms=elapsed,
    )


def create_backup(db_path: Path) -> Path:
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    backup_path = db_path.with_suffix(f".backup_{timestamp}.db")
    shutil.copy2(db_path, backup_path)
    logger.info("database_backup_created", backup_path=str(backup_path))
    return backup_path


def restore_backup(db_path: Path, backup_path: Path) -> None:
    shutil.copy2(backup_path, db_path)
    logger.info("database_restored_from_backup", backup_path=str(backup_path))


async def initialize_database(
    db_path: Path | None = None,
    create_backup_before: bool = True,
) -> list[MigrationResult]:
    """
    Apply every pending migration.

    A migration whose checksum differs from the recorded one stops the run;
    edited migrations are never re-applied silently.

    Args:
        db_path: Database file (default from settings)
        create_backup_before: Copy an existing file aside first

    Returns:
        Results for the migrations that were attempted
    """
    db_path = db_path or get_settings().storage.db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)
    logger.info("initializing_database", db_path=str(db_path))

    backup_path = None
    if create_backup_before and db_path.exists():
        backup_path = create_backup(db_path)

    results: list[MigrationResult] = []

    try:
        async with aiosqlite.connect(db_path) as conn:
            await conn.execute("PRAGMA journal_mode=WAL")
            await conn.execute("PRAGMA foreign_keys=ON")

            applied = await get_applied_migrations(conn)
            for migration in discover_migrations():
                recorded = applied.get(migration.version)
                if recorded == migration.checksum:
                    logger.debug("migration_already_applied", version=migration.version)
                    continue
                if recorded is not None:
                    logger.error("migration_checksum_changed", version=migration.version)
                    break

                result = await apply_migration(conn, migration)
                results.append(result)
                if not result.success:
                    break

                problems = await find_integrity_problems(conn)
                if problems:
                    logger.error(
                        "post_migration_validation_failed",
                        version=migration.version,
                        problems=problems,
                    )
                    break

        if backup_path and all(r.success for r in results):
            backup_path.unlink()
            logger.info("backup_cleaned_up")

    except Exception as e:
        logger.error("database_initialization_failed", error=str(e))
        if backup_path and backup_path.exists():
            restore_backup(db_path, backup_path)
        raise

    if backup_path and backup_path.exists() and not all(r.success for r in results):
        restore_backup(db_path, backup_path)

    return results


# Name used by the API lifespan
run_migrations = initialize_database


async def get_migration_status(db_path: Path | None = None) -> dict:
    """Applied and pending migration versions."""
    db_path = db_path or get_settings().storage.db_path
    discovered = discover_migrations()

    if not db_path.exists():
        return {
            "exists": False,
            "current_version": None,
            "applied_migrations": [],
            "pending_migrations": [m.version for m in discovered],
            "total_migrations": len(discovered),
        }

    async with aiosqlite.connect(db_path) as conn:
        current = await get_current_version(conn)
        applied = await get_applied_migrations(conn)

    return {
        "exists": True,
        "current_version": current,
        "applied_migrations": list(applied),
        "pending_migrations": [m.version for m in discovered if m.version not in applied],
        "total_migrations": len(discovered),
    }


async def verify_schema_integrity(db_path: Path | None = None) -> list[dict]:
    """
    Check foreign keys, page integrity and that every table exists.

    Returns:
        One dict per check with ``check`` and ``status`` (PASS/FAIL)
    """
    db_path = db_path or get_settings().storage.db_path

    async with aiosqlite.connect(db_path) as conn:
        problems = await find_integrity_problems(conn)
        cursor = await conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
        existing = {row[0] for row in await cursor.fetchall()}

    missing = [t for t in REQUIRED_TABLES if t not in existing]
    return [
        {
            "check": "integrity",
            "status": "FAIL" if problems else "PASS",
            "problems": problems,
        },
        {
            "check": "required_tables",
            "status": "FAIL" if missing else "PASS",
            "missing": missing,
        },
    ]


def main() -> None:
    """Entry point for ``fleetdesk-migrate``."""
    import argparse

    parser = argparse.ArgumentParser(description="Fleetdesk database migrator")
    parser.add_argument("--db-path", type=Path, help="Database path (default from settings)")
    parser.add_argument("--status", action="store_true", help="Show migration status")
    parser.add_argument("--verify", action="store_true", help="Verify schema integrity")
    parser.add_argument("--no-backup", action="store_true", help="Skip backup before migrations")
    args = parser.parse_args()

    async def run() -> int:
        if args.status:
            status = await get_migration_status(args.db_path)
            print(f"Database exists: {status['exists']}")
            print(f"Current version: {status['current_version'] or 'N/A'}")
            print(f"Applied migrations: {status['applied_migrations']}")
            print(f"Pending migrations: {status['pending_migrations']}")
            return 0

        if args.verify:
            checks = await verify_schema_integrity(args.db_path)
            for check in checks:
                print(f"[{check['status']}] {check['check']}")
                for key, value in check.items():
                    if key not in ("check", "status") and value:
                        print(f"       {key}: {value}")
            return 0 if all(c["status"] == "PASS" for c in checks) else 1

        results = await initialize_database(
            args.db_path,
            create_backup_before=not args.no_backup,
        )
        if not results:
            print("Database is up to date")
        for result in results:
            status = "SUCCESS" if result.success else "FAILED"
            print(f"[{status}] v{result.version}: {result.name} ({result.execution_time_ms}ms)")
            if result.error:
                print(f"         Error: {result.error}")
        return 0 if all(r.success for r in results) else 1

    raise SystemExit(asyncio.run(run()))


if __name__ == "__main__":
    main()
