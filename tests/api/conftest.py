"""Fixtures for API tests against a migrated temporary database."""

from collections.abc import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.api.main import app


@pytest_asyncio.fixture
async def async_client(migrated_db) -> AsyncGenerator[AsyncClient, None]:
    """Async client; the app lifespan is not run, the fixture owns the pool."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
