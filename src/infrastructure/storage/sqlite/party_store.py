"""SQLite implementation of customer and vendor storage."""

from src.core.entities.party import Customer, Vendor
from src.core.interfaces.storage import ICustomerStore, IVendorStore
from src.infrastructure.storage.sqlite.connection import (
    constraint_errors,
    get_connection,
    get_transaction,
    new_id,
    utc_now,
)
from src.infrastructure.storage.sqlite.rows import column_values, from_row

CUSTOMER_COLUMNS = ("name", "company", "email", "phone", "address")
VENDOR_COLUMNS = (
    "name",
    "contact_person",
    "email",
    "phone",
    "address",
    "bank_details",
    "payment_terms",
)


class SQLiteCustomerStore(ICustomerStore):
    """Customers table."""

    async def create_customer(self, customer: Customer) -> Customer:
        now = utc_now()
        customer = customer.model_copy(update={"id": new_id(), "created_at": now, "updated_at": now})
        columns = ("id", *CUSTOMER_COLUMNS, "created_at", "updated_at")
        async with get_transaction() as conn:
            await conn.execute(
                f"INSERT INTO customers ({', '.join(columns)}) "
                f"VALUES ({', '.join('?' for _ in columns)})",
                column_values(customer, columns),
            )
        return customer

    async def get_customer(self, customer_id: str) -> Customer | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM customers WHERE id = ?", (customer_id,))
            row = await cursor.fetchone()
            return from_row(Customer, row) if row else None

    async def list_customers(self) -> list[Customer]:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM customers ORDER BY name, id")
            return [from_row(Customer, row) for row in await cursor.fetchall()]

    async def update_customer(self, customer: Customer) -> Customer:
        customer = customer.model_copy(update={"updated_at": utc_now()})
        columns = (*CUSTOMER_COLUMNS, "updated_at")
        async with get_transaction() as conn:
            await conn.execute(
                f"UPDATE customers SET {', '.join(f'{c} = ?' for c in columns)} WHERE id = ?",
                [*column_values(customer, columns), customer.id],
            )
        return customer

    async def delete_customer(self, customer_id: str) -> bool:
        with constraint_errors("customers", "delete"):
            async with get_transaction() as conn:
                cursor = await conn.execute("DELETE FROM customers WHERE id = ?", (customer_id,))
                return cursor.rowcount > 0


class SQLiteVendorStore(IVendorStore):
    """Vendors table."""

    async def create_vendor(self, vendor: Vendor) -> Vendor:
        now = utc_now()
        vendor = vendor.model_copy(update={"id": new_id(), "created_at": now, "updated_at": now})
        columns = ("id", *VENDOR_COLUMNS, "created_at", "updated_at")
        async with get_transaction() as conn:
            await conn.execute(
                f"INSERT INTO vendors ({', '.join(columns)}) "
                f"VALUES ({', '.join('?' for _ in columns)})",
                column_values(vendor, columns),
            )
        return vendor

    async def get_vendor(self, vendor_id: str) -> Vendor | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM vendors WHERE id = ?", (vendor_id,))
            row = await cursor.fetchone()
            return from_row(Vendor, row) if row else None

    async def list_vendors(self) -> list[Vendor]:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM vendors ORDER BY name, id")
            return [from_row(Vendor, row) for row in await cursor.fetchall()]

    async def update_vendor(self, vendor: Vendor) -> Vendor:
        vendor = vendor.model_copy(update={"updated_at": utc_now()})
        columns = (*VENDOR_COLUMNS, "updated_at")
        async with get_transaction() as conn:
            await conn.execute(
                f"UPDATE vendors SET {', '.join(f'{c} = ?' for c in columns)} WHERE id = ?",
                [*column_values(vendor, columns), vendor.id],
            )
        return vendor

    async def delete_vendor(self, vendor_id: str) -> bool:
        with constraint_errors("vendors", "delete"):
            async with get_transaction() as conn:
                cursor = await conn.execute("DELETE FROM vendors WHERE id = ?", (vendor_id,))
                return cursor.rowcount > 0
