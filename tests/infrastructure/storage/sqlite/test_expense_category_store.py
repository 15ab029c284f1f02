"""Tests for the expense category store."""

import pytest

from src.core.entities.vehicle import ExpenseCategory
from src.core.exceptions import ConstraintViolationError
from src.infrastructure.storage.sqlite import SQLiteExpenseCategoryStore

PREDEFINED = [
    "Driver Salary",
    "Fuel",
    "Insurance",
    "Maintenance",
    "Other",
    "Purchase",
    "Registration",
]


class TestExpenseCategoryStore:
    async def test_predefined_seeded(self, migrated_db):
        categories = await SQLiteExpenseCategoryStore().list_categories()

        assert [c.name for c in categories] == PREDEFINED
        assert not any(c.is_custom for c in categories)
        assert all(c.created_at is not None for c in categories)

    async def test_custom_listed_after_predefined(self, migrated_db):
        store = SQLiteExpenseCategoryStore()
        await store.create_category(ExpenseCategory(name="Adblue"))

        names = [c.name for c in await store.list_categories()]

        assert names[-1] == "Adblue"
        assert names[:-1] == PREDEFINED

    async def test_crud(self, migrated_db):
        store = SQLiteExpenseCategoryStore()
        created = await store.create_category(ExpenseCategory(name="Tolls"))

        await store.update_category(created.model_copy(update={"name": "Road Tolls"}))
        loaded = await store.get_category(created.id)

        assert loaded.name == "Road Tolls"
        assert loaded.is_custom is True
        assert await store.delete_category(created.id) is True
        assert await store.get_category(created.id) is None
        assert await store.delete_category(created.id) is False

    @pytest.mark.parametrize("name", ["fuel", "FUEL"])
    async def test_name_unique_regardless_of_case(self, migrated_db, name):
        with pytest.raises(ConstraintViolationError) as exc_info:
            await SQLiteExpenseCategoryStore().create_category(ExpenseCategory(name=name))

        assert exc_info.value.table == "expense_categories"
        assert "expense_categories.name" in exc_info.value.message
