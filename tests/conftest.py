"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

import src.infrastructure.storage.sqlite.connection as conn_module
from src.infrastructure.storage.sqlite.migrations.migrator import initialize_database


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
async def migrated_db(temp_db_path: Path) -> AsyncGenerator[Path, None]:
    """A fully migrated temporary database behind the global connection pool.

    The pool holds a single connection, so a store that tried to use two
    at once would deadlock here rather than pass silently.
    """
    await initialize_database(temp_db_path, create_backup_before=False)

    mock_settings = MagicMock()
    mock_settings.storage.db_path = temp_db_path
    mock_settings.storage.pool_size = 1
    mock_settings.storage.busy_timeout = 5000

    conn_module._pool = None
    with patch.object(conn_module, "get_settings", return_value=mock_settings):
        try:
            yield temp_db_path
        finally:
            await conn_module.close_pool()
