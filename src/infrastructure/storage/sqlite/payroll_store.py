"""SQLite implementation of employee and payslip storage."""

from src.config import get_logger
from src.core.entities.payroll import Employee, Payslip
from src.core.interfaces.storage import IEmployeeStore, IPayslipStore
from src.infrastructure.storage.sqlite.connection import (
    constraint_errors,
    get_connection,
    get_transaction,
    new_id,
    utc_now,
)
from src.infrastructure.storage.sqlite.rows import column_values, from_row

logger = get_logger(__name__)

EMPLOYEE_COLUMNS = (
    "name",
    "employee_code",
    "role",
    "payment_type",
    "hourly_rate",
    "salary",
    "overtime_rate",
    "bank_details",
)

PAYSLIP_COLUMNS = (
    "employee_id",
    "month",
    "base_salary",
    "overtime_hours",
    "overtime_rate",
    "overtime_pay",
    "deductions",
    "net_pay",
    "status",
    "notes",
)


class SQLiteEmployeeStore(IEmployeeStore):
    """Employees table."""

    async def create_employee(self, employee: Employee) -> Employee:
        now = utc_now()
        employee = employee.model_copy(update={"id": new_id(), "created_at": now, "updated_at": now})
        columns = ("id", *EMPLOYEE_COLUMNS, "created_at", "updated_at")
        async with get_transaction() as conn:
            await conn.execute(
                f"INSERT INTO employees ({', '.join(columns)}) "
                f"VALUES ({', '.join('?' for _ in columns)})",
                column_values(employee, columns),
            )
        return employee

    async def get_employee(self, employee_id: str) -> Employee | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM employees WHERE id = ?", (employee_id,))
            row = await cursor.fetchone()
            return from_row(Employee, row) if row else None

    async def list_employees(self) -> list[Employee]:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM employees ORDER BY name, id")
            return [from_row(Employee, row) for row in await cursor.fetchall()]

    async def update_employee(self, employee: Employee) -> Employee:
        employee = employee.model_copy(update={"updated_at": utc_now()})
        columns = (*EMPLOYEE_COLUMNS, "updated_at")
        async with get_transaction() as conn:
            await conn.execute(
                f"UPDATE employees SET {', '.join(f'{c} = ?' for c in columns)} WHERE id = ?",
                [*column_values(employee, columns), employee.id],
            )
        return employee

    async def delete_employee(self, employee_id: str) -> bool:
        # Payslips have no cascade: the FK refuses the delete while any exist
        with constraint_errors("employees", "delete"):
            async with get_transaction() as conn:
                cursor = await conn.execute("DELETE FROM employees WHERE id = ?", (employee_id,))
                return cursor.rowcount > 0


class SQLitePayslipStore(IPayslipStore):
    """Payslips table."""

    async def create_payslip(self, payslip: Payslip) -> Payslip:
        now = utc_now()
        payslip = payslip.model_copy(update={"id": new_id(), "created_at": now, "updated_at": now})
        columns = ("id", *PAYSLIP_COLUMNS, "created_at", "updated_at")

        with constraint_errors("payslips", "create"):
            async with get_transaction() as conn:
                await conn.execute(
                    f"INSERT INTO payslips ({', '.join(columns)}) "
                    f"VALUES ({', '.join('?' for _ in columns)})",
                    column_values(payslip, columns),
                )
        logger.debug("payslip_stored", payslip_id=payslip.id, month=payslip.month)
        return payslip

    async def get_payslip(self, payslip_id: str) -> Payslip | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM payslips WHERE id = ?", (payslip_id,))
            row = await cursor.fetchone()
            return from_row(Payslip, row) if row else None

    async def list_payslips(
        self,
        employee_id: str | None = None,
        month: str | None = None,
    ) -> list[Payslip]:
        clauses = []
        params = []
        if employee_id is not None:
            clauses.append("employee_id = ?")
            params.append(employee_id)
        if month is not None:
            clauses.append("month = ?")
            params.append(month)
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        async with get_connection() as conn:
            cursor = await conn.execute(
                f"SELECT * FROM payslips {where} ORDER BY month DESC, created_at DESC",
                params,
            )
            return [from_row(Payslip, row) for row in await cursor.fetchall()]

    async def update_payslip(self, payslip: Payslip) -> Payslip:
        payslip = payslip.model_copy(update={"updated_at": utc_now()})
        columns = (*PAYSLIP_COLUMNS, "updated_at")

        with constraint_errors("payslips", "update"):
            async with get_transaction() as conn:
                await conn.execute(
                    f"UPDATE payslips SET {', '.join(f'{c} = ?' for c in columns)} WHERE id = ?",
                    [*column_values(payslip, columns), payslip.id],
                )
        return payslip

    async def delete_payslip(self, payslip_id: str) -> bool:
        async with get_transaction() as conn:
            cursor = await conn.execute("DELETE FROM payslips WHERE id = ?", (payslip_id,))
            return cursor.rowcount > 0
