"""SQLite lookups backing the reference integrity guard."""

from src.config import get_logger
from src.core.interfaces.storage import IReferenceStore, ReferenceRule
from src.infrastructure.storage.sqlite.connection import get_connection
from src.infrastructure.storage.sqlite.rows import identifier

logger = get_logger(__name__)


class SQLiteReferenceStore(IReferenceStore):
    """
    Generic existence and reference queries.

    Table and column names come from code (reference rules and document
    definitions), never from requests, and are still checked against a
    strict identifier pattern before use.
    """

    async def find_id_by_value(
        self,
        table: str,
        field: str,
        value: str,
        exclude_id: str | None = None,
    ) -> str | None:
        sql = f"SELECT id FROM {identifier(table)} WHERE {identifier(field)} = ?"
        params: list[str] = [value]
        if exclude_id is not None:
            sql += " AND id != ?"
            params.append(exclude_id)

        async with get_connection() as conn:
            cursor = await conn.execute(sql + " LIMIT 1", params)
            row = await cursor.fetchone()
            return row["id"] if row else None

    async def exists(self, table: str, entity_id: str) -> bool:
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"SELECT 1 FROM {identifier(table)} WHERE id = ? LIMIT 1",
                (entity_id,),
            )
            return await cursor.fetchone() is not None

    async def find_reference_numbers(self, rule: ReferenceRule, entity_id: str) -> list[str]:
        """
        Display numbers of the rows citing ``entity_id``.

        For line-item tables the number comes from the parent document, so a
        quote with two lines for the same vehicle is reported twice here and
        de-duplicated by the guard.
        """
        number = identifier(rule.number_column)
        column = identifier(rule.column)

        if rule.via_table and rule.via_column:
            parent = identifier(rule.via_table)
            sql = (
                f"SELECT COALESCE(NULLIF(p.{number}, ''), p.id) AS ref "
                f"FROM {identifier(rule.table)} c "
                f"JOIN {parent} p ON p.id = c.{identifier(rule.via_column)} "
                f"WHERE c.{column} = ? "
                f"ORDER BY p.created_at, p.id"
            )
        else:
            sql = (
                f"SELECT COALESCE(NULLIF({number}, ''), id) AS ref "
                f"FROM {identifier(rule.table)} "
                f"WHERE {column} = ? "
                f"ORDER BY created_at, id"
            )

        async with get_connection() as conn:
            cursor = await conn.execute(sql, (entity_id,))
            rows = await cursor.fetchall()

        refs = [row["ref"] for row in rows]
        if refs:
            logger.debug(
                "references_found",
                table=rule.table,
                column=rule.column,
                entity_id=entity_id,
                count=len(refs),
            )
        return refs
