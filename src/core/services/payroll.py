"""Employees and payslips."""

from collections.abc import Mapping
from typing import Any

from src.config import get_logger
from src.core.entities.payroll import Employee, Payslip
from src.core.exceptions import ConstraintViolationError, NotFoundError, ValidationError
from src.core.interfaces.storage import IEmployeeStore, IPayslipStore
from src.core.month_keys import is_month_key
from src.core.services.partial_update import merge_changes
from src.core.services.reference_guard import ReferenceGuard

logger = get_logger(__name__)


def _require_month(month: str) -> None:
    if not is_month_key(month):
        raise ValidationError("Month must be in YYYY-MM format", field="month", value=month)


class PayrollService:
    """Employee records and their monthly payslips."""

    def __init__(
        self,
        employee_store: IEmployeeStore,
        payslip_store: IPayslipStore,
        guard: ReferenceGuard,
    ):
        self._employees = employee_store
        self._payslips = payslip_store
        self._guard = guard

    # Employees
    async def get_employee(self, employee_id: str) -> Employee:
        employee = await self._employees.get_employee(employee_id)
        if employee is None:
            raise NotFoundError("Employee", employee_id)
        return employee

    async def list_employees(self) -> list[Employee]:
        return await self._employees.list_employees()

    async def create_employee(self, employee: Employee) -> Employee:
        if not employee.name.strip():
            raise ValidationError("Employee name is required", field="name")
        created = await self._employees.create_employee(employee)
        logger.info("employee_created", employee_id=created.id)
        return created

    async def update_employee(self, employee_id: str, changes: Mapping[str, Any]) -> Employee:
        merged = merge_changes(await self.get_employee(employee_id), changes)
        if not merged.name.strip():
            raise ValidationError("Employee name is required", field="name")
        return await self._employees.update_employee(merged)

    async def delete_employee(self, employee_id: str) -> None:
        """Refused while payslips exist; vehicle transactions only lose the link."""
        await self.get_employee(employee_id)
        await self._guard.ensure_deletable("Employee", employee_id)
        try:
            await self._employees.delete_employee(employee_id)
        except ConstraintViolationError as e:
            raise await self._guard.translate_violation(e, entity="Employee", deleting_id=employee_id) from e
        logger.info("employee_deleted", employee_id=employee_id)

    # Payslips
    async def get_payslip(self, payslip_id: str) -> Payslip:
        payslip = await self._payslips.get_payslip(payslip_id)
        if payslip is None:
            raise NotFoundError("Payslip", payslip_id)
        return payslip

    async def list_payslips(
        self,
        employee_id: str | None = None,
        month: str | None = None,
    ) -> list[Payslip]:
        if month is not None:
            _require_month(month)
        return await self._payslips.list_payslips(employee_id=employee_id, month=month)

    async def create_payslip(self, payslip: Payslip) -> Payslip:
        _require_month(payslip.month)
        await self._guard.ensure_exists("employees", payslip.employee_id, entity="Employee")
        try:
            created = await self._payslips.create_payslip(payslip)
        except ConstraintViolationError as e:
            raise await self._translate(e, payslip) from e
        logger.info(
            "payslip_created",
            payslip_id=created.id,
            employee_id=created.employee_id,
            month=created.month,
            net_pay=str(created.net_pay),
        )
        return created

    async def update_payslip(self, payslip_id: str, changes: Mapping[str, Any]) -> Payslip:
        existing = await self.get_payslip(payslip_id)
        # overtime_pay and net_pay are recomputed from the inputs
        merged = merge_changes(
            existing,
            changes,
            read_only={"id", "created_at", "updated_at", "overtime_pay", "net_pay"},
        )
        _require_month(merged.month)
        if merged.employee_id != existing.employee_id:
            await self._guard.ensure_exists("employees", merged.employee_id, entity="Employee")
        try:
            return await self._payslips.update_payslip(merged)
        except ConstraintViolationError as e:
            raise await self._translate(e, merged) from e

    async def delete_payslip(self, payslip_id: str) -> None:
        if not await self._payslips.delete_payslip(payslip_id):
            raise NotFoundError("Payslip", payslip_id)
        logger.info("payslip_deleted", payslip_id=payslip_id)

    async def _translate(self, error: ConstraintViolationError, payslip: Payslip):
        return await self._guard.translate_violation(
            error,
            entity="Payslip",
            foreign_keys=[("employees", payslip.employee_id, "Employee")],
        )
