"""Shared doubles for service tests."""

from unittest.mock import AsyncMock

import pytest

from src.core.interfaces.storage import IReferenceStore
from src.core.services.reference_guard import ReferenceGuard


@pytest.fixture
def reference_store() -> AsyncMock:
    """A reference store where every key is free and every id exists."""
    store = AsyncMock(spec=IReferenceStore)
    store.find_id_by_value.return_value = None
    store.exists.return_value = True
    store.find_reference_numbers.return_value = []
    return store


@pytest.fixture
def guard(reference_store: AsyncMock) -> ReferenceGuard:
    return ReferenceGuard(reference_store)
