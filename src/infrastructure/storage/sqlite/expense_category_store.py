"""SQLite implementation of expense category storage."""

from src.core.entities.vehicle import ExpenseCategory
from src.core.interfaces.storage import IExpenseCategoryStore
from src.infrastructure.storage.sqlite.connection import (
    constraint_errors,
    get_connection,
    get_transaction,
    new_id,
    utc_now,
)
from src.infrastructure.storage.sqlite.rows import column_values, from_row


class SQLiteExpenseCategoryStore(IExpenseCategoryStore):
    """expense_categories table; ``name`` is unique without regard to case."""

    async def create_category(self, category: ExpenseCategory) -> ExpenseCategory:
        category = category.model_copy(update={"id": new_id(), "created_at": utc_now()})
        columns = ("id", "name", "is_custom", "created_at")
        with constraint_errors("expense_categories", "create"):
            async with get_transaction() as conn:
                await conn.execute(
                    "INSERT INTO expense_categories (id, name, is_custom, created_at) "
                    "VALUES (?, ?, ?, ?)",
                    column_values(category, columns),
                )
        return category

    async def get_category(self, category_id: str) -> ExpenseCategory | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM expense_categories WHERE id = ?",
                (category_id,),
            )
            row = await cursor.fetchone()
            return from_row(ExpenseCategory, row) if row else None

    async def list_categories(self) -> list[ExpenseCategory]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM expense_categories ORDER BY is_custom, name COLLATE NOCASE, id"
            )
            return [from_row(ExpenseCategory, row) for row in await cursor.fetchall()]

    async def update_category(self, category: ExpenseCategory) -> ExpenseCategory:
        with constraint_errors("expense_categories", "update"):
            async with get_transaction() as conn:
                await conn.execute(
                    "UPDATE expense_categories SET name = ? WHERE id = ?",
                    (category.name, category.id),
                )
        return category

    async def delete_category(self, category_id: str) -> bool:
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "DELETE FROM expense_categories WHERE id = ?",
                (category_id,),
            )
            return cursor.rowcount > 0
