"""SQLite storage for quotes, invoices and purchase orders.

One class serves all three kinds; the DocumentDefinition supplies the
table names, the parent column on the items table and the header fields
specific to the kind.
"""

import aiosqlite
from pydantic import ValidationError as PydanticValidationError

from src.config import get_logger
from src.core.entities.financial_document import (
    DocumentDefinition,
    FinancialDocument,
    LineItem,
)
from src.core.interfaces.storage import IFinancialDocumentStore
from src.infrastructure.storage.sqlite.connection import (
    constraint_errors,
    get_connection,
    get_transaction,
    new_id,
    utc_now,
)
from src.infrastructure.storage.sqlite.rows import column_values, from_row, identifier

logger = get_logger(__name__)

_COMMON_HEADER_COLUMNS = (
    "number",
    "date",
    "sub_total",
    "total_tax",
    "total",
    "notes",
    "terms",
)

ITEM_COLUMNS = (
    "serial_number",
    "vehicle_type_id",
    "vehicle_type_label",
    "vehicle_number",
    "description",
    "rental_basis",
    "quantity",
    "unit_price",
    "tax_percent",
    "gross_amount",
    "line_tax_amount",
    "line_total",
)


class SQLiteFinancialDocumentStore(IFinancialDocumentStore):
    """Header and items of one document kind, always written together."""

    def __init__(self, definition: DocumentDefinition):
        self.definition = definition
        self._table = identifier(definition.table)
        self._items_table = identifier(definition.items_table)
        self._parent_column = identifier(definition.parent_column)
        self._header_columns = tuple(
            identifier(c) for c in _COMMON_HEADER_COLUMNS + definition.header_fields
        )

    async def create_document(self, document: FinancialDocument) -> FinancialDocument:
        """Insert header and items in one transaction."""
        now = utc_now()
        document = document.model_copy(
            update={"id": new_id(), "created_at": now, "updated_at": now}
        )
        columns = ("id", *self._header_columns, "created_at", "updated_at")
        placeholders = ", ".join("?" for _ in columns)

        with constraint_errors(self._table, "create"):
            async with get_transaction() as conn:
                await conn.execute(
                    f"INSERT INTO {self._table} ({', '.join(columns)}) VALUES ({placeholders})",
                    column_values(document, columns),
                )
                items = await self._insert_items(conn, document.id, document.items)

        logger.info(
            "financial_document_stored",
            table=self._table,
            document_id=document.id,
            items=len(items),
        )
        return document.model_copy(update={"items": items})

    async def get_document(self, document_id: str) -> FinancialDocument | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"SELECT * FROM {self._table} WHERE id = ?",
                (document_id,),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            items = await self._load_items(conn, document_id)
            return from_row(self.definition.model, row, items=items)

    async def list_documents(self, limit: int = 100, offset: int = 0) -> list[FinancialDocument]:
        """
        List documents, newest first.

        A document whose items cannot be read is still listed, with no
        items, so one bad row does not hide the rest.
        """
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT * FROM {self._table}
                ORDER BY date DESC, created_at DESC, id DESC
                LIMIT ? OFFSET ?
                """,
                (limit, offset),
            )
            rows = await cursor.fetchall()

            documents = []
            for row in rows:
                try:
                    items = await self._load_items(conn, row["id"])
                except (aiosqlite.Error, PydanticValidationError) as e:
                    logger.warning(
                        "document_items_unreadable",
                        table=self._table,
                        document_id=row["id"],
                        error=str(e),
                    )
                    items = []
                documents.append(from_row(self.definition.model, row, items=items))
            return documents

    async def update_document(
        self,
        document: FinancialDocument,
        replace_items: bool,
    ) -> FinancialDocument:
        """Rewrite the header; optionally swap the whole item set."""
        document = document.model_copy(update={"updated_at": utc_now()})
        columns = (*self._header_columns, "updated_at")
        assignments = ", ".join(f"{c} = ?" for c in columns)

        with constraint_errors(self._table, "update"):
            async with get_transaction() as conn:
                await conn.execute(
                    f"UPDATE {self._table} SET {assignments} WHERE id = ?",
                    [*column_values(document, columns), document.id],
                )
                if replace_items:
                    await conn.execute(
                        f"DELETE FROM {self._items_table} WHERE {self._parent_column} = ?",
                        (document.id,),
                    )
                    items = await self._insert_items(conn, document.id, document.items)
                    document = document.model_copy(update={"items": items})

        return document

    async def delete_document(self, document_id: str) -> bool:
        with constraint_errors(self._table, "delete"):
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    f"DELETE FROM {self._table} WHERE id = ?",
                    (document_id,),
                )
                return cursor.rowcount > 0

    # ------------------------------------------------------------------

    async def _insert_items(
        self,
        conn: aiosqlite.Connection,
        document_id: str,
        items: list[LineItem],
    ) -> list[LineItem]:
        columns = ("id", self._parent_column, *ITEM_COLUMNS)
        sql = (
            f"INSERT INTO {self._items_table} ({', '.join(columns)}) "
            f"VALUES ({', '.join('?' for _ in columns)})"
        )
        stored = []
        for item in items:
            item = item.model_copy(update={"id": new_id()})
            await conn.execute(sql, [item.id, document_id, *column_values(item, ITEM_COLUMNS)])
            stored.append(item)
        return stored

    async def _load_items(self, conn: aiosqlite.Connection, document_id: str) -> list[LineItem]:
        cursor = await conn.execute(
            f"""
            SELECT * FROM {self._items_table}
            WHERE {self._parent_column} = ?
            ORDER BY serial_number, id
            """,
            (document_id,),
        )
        return [from_row(LineItem, row) for row in await cursor.fetchall()]
