"""Expense categories offered for vehicle transactions."""

from collections.abc import Mapping
from typing import Any

from src.config import get_logger
from src.core.entities.vehicle import ExpenseCategory
from src.core.exceptions import (
    BlockedDeleteError,
    ConstraintViolationError,
    NotFoundError,
    ValidationError,
)
from src.core.interfaces.storage import IExpenseCategoryStore
from src.core.services.partial_update import merge_changes
from src.core.services.reference_guard import ReferenceGuard

logger = get_logger(__name__)

ENTITY = "Expense Category"


class ExpenseCategoryService:
    """CRUD over expense categories.

    The seven predefined categories ship with the schema and cannot be
    deleted. Names are unique regardless of case. A category still named
    by a vehicle transaction cannot be deleted either.
    """

    def __init__(self, store: IExpenseCategoryStore, guard: ReferenceGuard):
        self._store = store
        self._guard = guard

    async def get(self, category_id: str) -> ExpenseCategory:
        category = await self._store.get_category(category_id)
        if category is None:
            raise NotFoundError(ENTITY, category_id)
        return category

    async def list_categories(self) -> list[ExpenseCategory]:
        return await self._store.list_categories()

    async def create(self, category: ExpenseCategory) -> ExpenseCategory:
        category = category.model_copy(update={"is_custom": True})
        await self._check_name(category.name)
        try:
            created = await self._store.create_category(category)
        except ConstraintViolationError as e:
            raise await self._guard.translate_violation(
                e, entity=ENTITY, natural_key=("name", "name", category.name)
            ) from e
        logger.info("expense_category_created", category_id=created.id, name=created.name)
        return created

    async def update(self, category_id: str, changes: Mapping[str, Any]) -> ExpenseCategory:
        """Rename a custom category. Transactions already booked keep the old name."""
        existing = await self.get(category_id)
        merged = merge_changes(existing, {k: v for k, v in changes.items() if k == "name"})
        if merged.name != existing.name:
            if not existing.is_custom:
                raise ValidationError("Predefined Expense Category cannot be renamed", field="name")
            await self._check_name(merged.name, exclude_id=category_id)
        try:
            return await self._store.update_category(merged)
        except ConstraintViolationError as e:
            raise await self._guard.translate_violation(
                e, entity=ENTITY, natural_key=("name", "name", merged.name)
            ) from e

    async def delete(self, category_id: str) -> None:
        category = await self.get(category_id)
        if not category.is_custom:
            logger.info("expense_category_predefined_delete", category_id=category_id)
            raise BlockedDeleteError(ENTITY, f'Cannot delete predefined Expense Category "{category.name}"')
        await self._guard.ensure_deletable(ENTITY, category.name)
        await self._store.delete_category(category_id)
        logger.info("expense_category_deleted", category_id=category_id)

    async def _check_name(self, name: str | None, exclude_id: str | None = None) -> None:
        if not name or not name.strip():
            raise ValidationError("Category name is required", field="name")
        await self._guard.ensure_unique(
            "expense_categories",
            "name",
            name,
            entity=ENTITY,
            field_label="name",
            exclude_id=exclude_id,
        )
