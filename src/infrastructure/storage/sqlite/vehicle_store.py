"""SQLite implementation of vehicle and vehicle transaction storage."""

from src.config import get_logger
from src.core.entities.vehicle import Vehicle, VehicleTransaction
from src.core.interfaces.storage import IVehicleStore, IVehicleTransactionStore
from src.infrastructure.storage.sqlite.connection import (
    constraint_errors,
    get_connection,
    get_transaction,
    new_id,
    utc_now,
)
from src.infrastructure.storage.sqlite.rows import column_values, from_row

logger = get_logger(__name__)

VEHICLE_COLUMNS = (
    "vehicle_number",
    "vehicle_type",
    "make",
    "model",
    "year",
    "status",
    "fuel_type",
    "notes",
)

TRANSACTION_COLUMNS = (
    "vehicle_id",
    "transaction_type",
    "amount",
    "date",
    "month",
    "category",
    "description",
    "employee_id",
    "invoice_id",
    "purchase_order_id",
    "quote_id",
)


class SQLiteVehicleStore(IVehicleStore):
    """Vehicles table."""

    async def create_vehicle(self, vehicle: Vehicle) -> Vehicle:
        now = utc_now()
        vehicle = vehicle.model_copy(update={"id": new_id(), "created_at": now, "updated_at": now})
        columns = ("id", *VEHICLE_COLUMNS, "created_at", "updated_at")

        with constraint_errors("vehicles", "create"):
            async with get_transaction() as conn:
                await conn.execute(
                    f"INSERT INTO vehicles ({', '.join(columns)}) "
                    f"VALUES ({', '.join('?' for _ in columns)})",
                    column_values(vehicle, columns),
                )
        return vehicle

    async def get_vehicle(self, vehicle_id: str) -> Vehicle | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM vehicles WHERE id = ?", (vehicle_id,))
            row = await cursor.fetchone()
            return from_row(Vehicle, row) if row else None

    async def list_vehicles(self, limit: int = 500, offset: int = 0) -> list[Vehicle]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM vehicles ORDER BY vehicle_number LIMIT ? OFFSET ?",
                (limit, offset),
            )
            return [from_row(Vehicle, row) for row in await cursor.fetchall()]

    async def update_vehicle(self, vehicle: Vehicle) -> Vehicle:
        vehicle = vehicle.model_copy(update={"updated_at": utc_now()})
        columns = (*VEHICLE_COLUMNS, "updated_at")

        with constraint_errors("vehicles", "update"):
            async with get_transaction() as conn:
                await conn.execute(
                    f"UPDATE vehicles SET {', '.join(f'{c} = ?' for c in columns)} WHERE id = ?",
                    [*column_values(vehicle, columns), vehicle.id],
                )
        return vehicle

    async def delete_vehicle(self, vehicle_id: str) -> bool:
        with constraint_errors("vehicles", "delete"):
            async with get_transaction() as conn:
                cursor = await conn.execute("DELETE FROM vehicles WHERE id = ?", (vehicle_id,))
                deleted = cursor.rowcount > 0
        if deleted:
            logger.info("vehicle_row_deleted", vehicle_id=vehicle_id)
        return deleted


class SQLiteVehicleTransactionStore(IVehicleTransactionStore):
    """Revenue and expense rows per vehicle."""

    async def create_transaction(self, transaction: VehicleTransaction) -> VehicleTransaction:
        now = utc_now()
        transaction = transaction.model_copy(
            update={"id": new_id(), "created_at": now, "updated_at": now}
        )
        columns = ("id", *TRANSACTION_COLUMNS, "created_at", "updated_at")

        with constraint_errors("vehicle_transactions", "create"):
            async with get_transaction() as conn:
                await conn.execute(
                    f"INSERT INTO vehicle_transactions ({', '.join(columns)}) "
                    f"VALUES ({', '.join('?' for _ in columns)})",
                    column_values(transaction, columns),
                )
        return transaction

    async def get_transaction(self, transaction_id: str) -> VehicleTransaction | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM vehicle_transactions WHERE id = ?",
                (transaction_id,),
            )
            row = await cursor.fetchone()
            return from_row(VehicleTransaction, row) if row else None

    async def list_transactions(
        self,
        vehicle_id: str | None = None,
        month: str | None = None,
    ) -> list[VehicleTransaction]:
        """Newest first. Filtering by month uses the stored month key."""
        clauses = []
        params = []
        if vehicle_id is not None:
            clauses.append("vehicle_id = ?")
            params.append(vehicle_id)
        if month is not None:
            clauses.append("month = ?")
            params.append(month)
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        async with get_connection() as conn:
            cursor = await conn.execute(
                f"SELECT * FROM vehicle_transactions {where} "
                f"ORDER BY date DESC, created_at DESC",
                params,
            )
            return [from_row(VehicleTransaction, row) for row in await cursor.fetchall()]

    async def update_transaction(self, transaction: VehicleTransaction) -> VehicleTransaction:
        transaction = transaction.model_copy(update={"updated_at": utc_now()})
        columns = (*TRANSACTION_COLUMNS, "updated_at")

        with constraint_errors("vehicle_transactions", "update"):
            async with get_transaction() as conn:
                await conn.execute(
                    f"UPDATE vehicle_transactions "
                    f"SET {', '.join(f'{c} = ?' for c in columns)} WHERE id = ?",
                    [*column_values(transaction, columns), transaction.id],
                )
        return transaction

    async def delete_transaction(self, transaction_id: str) -> bool:
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "DELETE FROM vehicle_transactions WHERE id = ?",
                (transaction_id,),
            )
            return cursor.rowcount > 0
