"""Unit tests for database migrator."""

from pathlib import Path
from unittest.mock import patch

import aiosqlite
import pytest

from src.infrastructure.storage.sqlite.migrations import migrator
from src.infrastructure.storage.sqlite.migrations.migrator import (
    REQUIRED_TABLES,
    MigrationInfo,
    MigrationResult,
    create_backup,
    discover_migrations,
    get_applied_migrations,
    get_current_version,
    get_migration_status,
    initialize_database,
    restore_backup,
    verify_schema_integrity,
)


class TestMigrationInfo:
    """Tests for MigrationInfo dataclass."""

    def test_from_file_parses_filename(self, tmp_path: Path):
        migration_file = tmp_path / "v001_initial_schema.sql"
        migration_file.write_text("-- Test migration\nSELECT 1;")

        info = MigrationInfo.from_file(migration_file)

        assert info.version == "001"
        assert info.name == "initial_schema"
        assert info.path == migration_file
        assert len(info.checksum) == 16

    def test_different_content_different_checksum(self, tmp_path: Path):
        file1 = tmp_path / "v001_a.sql"
        file1.write_text("SELECT 1;")
        file2 = tmp_path / "v002_b.sql"
        file2.write_text("SELECT 2;")

        assert MigrationInfo.from_file(file1).checksum != MigrationInfo.from_file(file2).checksum

    @pytest.mark.parametrize("filename", ["invalid_migration.sql", "v_no_number.sql"])
    def test_invalid_filename_raises(self, tmp_path: Path, filename: str):
        path = tmp_path / filename
        path.write_text("SELECT 1;")

        with pytest.raises(ValueError, match="Invalid migration filename"):
            MigrationInfo.from_file(path)


def test_failed_result_keeps_error():
    result = MigrationResult(version="001", name="x", success=False, execution_time_ms=5, error="boom")
    assert result.error == "boom"


class TestAppliedMigrations:
    async def test_empty_without_table(self, temp_db_path: Path):
        async with aiosqlite.connect(temp_db_path) as conn:
            assert await get_applied_migrations(conn) == {}
            assert await get_current_version(conn) is None


def test_discover_finds_initial_schema():
    versions = [m.version for m in discover_migrations()]
    assert versions[0] == "001"
    assert "002" in versions
    assert versions == sorted(versions)


class TestInitializeDatabase:
    async def test_creates_schema(self, temp_db_path: Path):
        results = await initialize_database(temp_db_path, create_backup_before=False)

        assert results and all(r.success for r in results)
        checks = await verify_schema_integrity(temp_db_path)
        assert {c["check"]: c["status"] for c in checks} == {
            "integrity": "PASS",
            "required_tables": "PASS",
        }

    async def test_second_run_is_noop(self, temp_db_path: Path):
        await initialize_database(temp_db_path, create_backup_before=False)

        assert await initialize_database(temp_db_path) == []
        assert not list(temp_db_path.parent.glob("*.backup_*"))

    async def test_changed_checksum_stops(self, temp_db_path: Path):
        await initialize_database(temp_db_path, create_backup_before=False)
        async with aiosqlite.connect(temp_db_path) as conn:
            await conn.execute("UPDATE schema_migrations SET checksum = 'edited' WHERE version = '001'")
            await conn.commit()

        assert await initialize_database(temp_db_path, create_backup_before=False) == []

    async def test_failed_migration_restores_backup(self, temp_db_path: Path, tmp_path: Path):
        await initialize_database(temp_db_path, create_backup_before=False)
        broken = tmp_path / "migrations"
        broken.mkdir()
        for migration in discover_migrations():
            (broken / migration.path.name).write_text(migration.path.read_text())
        (broken / "v999_broken.sql").write_text("CREATE TABLE customers (id TEXT);")

        with patch.object(migrator, "MIGRATIONS_DIR", broken):
            results = await initialize_database(temp_db_path)

        assert results[-1].version == "999"
        assert results[-1].success is False
        status = await get_migration_status(temp_db_path)
        assert "999" not in status["applied_migrations"]


class TestMigrationStatus:
    async def test_missing_database(self, tmp_path: Path):
        status = await get_migration_status(tmp_path / "absent.db")

        assert status["exists"] is False
        assert "001" in status["pending_migrations"]

    async def test_migrated_database(self, temp_db_path: Path):
        await initialize_database(temp_db_path, create_backup_before=False)

        status = await get_migration_status(temp_db_path)

        assert status["exists"] is True
        assert status["pending_migrations"] == []
        assert status["current_version"] == status["applied_migrations"][-1]

    async def test_verify_reports_missing_tables(self, temp_db_path: Path):
        async with aiosqlite.connect(temp_db_path) as conn:
            await conn.execute("CREATE TABLE customers (id TEXT)")
            await conn.commit()

        checks = {c["check"]: c for c in await verify_schema_integrity(temp_db_path)}

        assert checks["required_tables"]["status"] == "FAIL"
        assert set(checks["required_tables"]["missing"]) == set(REQUIRED_TABLES) - {"customers"}


def test_backup_and_restore(temp_db_path: Path):
    temp_db_path.write_bytes(b"original")
    backup = create_backup(temp_db_path)
    temp_db_path.write_bytes(b"changed")

    restore_backup(temp_db_path, backup)

    assert temp_db_path.read_bytes() == b"original"
