"""Unit tests for VehicleService, DirectoryService and PayrollService."""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from src.core.entities.party import Customer, Vendor
from src.core.entities.payroll import Employee, Payslip
from src.core.entities.vehicle import Vehicle
from src.core.exceptions import (
    BlockedDeleteError,
    ConstraintViolationError,
    DuplicateKeyError,
    MissingReferenceError,
    NotFoundError,
    ValidationError,
)
from src.core.interfaces.storage import (
    ICustomerStore,
    IEmployeeStore,
    IPayslipStore,
    IVehicleStore,
    IVendorStore,
)
from src.core.services import DirectoryService, PayrollService, VehicleService


class TestVehicleService:
    @pytest.fixture
    def store(self) -> AsyncMock:
        store = AsyncMock(spec=IVehicleStore)
        store.create_vehicle.side_effect = lambda v: v.model_copy(update={"id": "v1"})
        store.update_vehicle.side_effect = lambda v: v
        store.get_vehicle.return_value = Vehicle(id="v1", vehicle_number="DXB-1")
        store.delete_vehicle.return_value = True
        return store

    @pytest.fixture
    def service(self, store, guard) -> VehicleService:
        return VehicleService(store, guard)

    async def test_create(self, service):
        vehicle = await service.create(Vehicle(vehicle_number=" DXB-9 "))
        assert vehicle.id == "v1"
        assert vehicle.vehicle_number == "DXB-9"

    async def test_blank_number(self, service):
        with pytest.raises(ValidationError):
            await service.create(Vehicle(vehicle_number="  "))

    async def test_duplicate_number(self, service, reference_store):
        reference_store.find_id_by_value.return_value = "v2"
        with pytest.raises(DuplicateKeyError, match='Vehicle Number "DXB-9" already exists'):
            await service.create(Vehicle(vehicle_number="DXB-9"))

    async def test_race_on_unique_translated(self, service, store):
        store.create_vehicle.side_effect = ConstraintViolationError(
            "UNIQUE constraint failed: vehicles.vehicle_number",
            table="vehicles",
            operation="create",
        )
        with pytest.raises(DuplicateKeyError):
            await service.create(Vehicle(vehicle_number="DXB-9"))

    async def test_update_same_number_skips_check(self, service, reference_store):
        await service.update("v1", {"vehicle_number": "DXB-1", "make": "Toyota"})
        reference_store.find_id_by_value.assert_not_awaited()

    async def test_update_new_number_checked(self, service, reference_store):
        await service.update("v1", {"vehicle_number": "DXB-2"})
        reference_store.find_id_by_value.assert_awaited_once_with(
            "vehicles", "vehicle_number", "DXB-2", "v1"
        )

    async def test_delete_blocked_by_quote(self, service, store, reference_store):
        reference_store.find_reference_numbers.return_value = ["Q-001"]

        with pytest.raises(BlockedDeleteError, match="Cannot delete Vehicle as it is referenced in Quote Q-001"):
            await service.delete("v1")
        store.delete_vehicle.assert_not_awaited()

    async def test_delete_unknown(self, service, store):
        store.get_vehicle.return_value = None
        with pytest.raises(NotFoundError):
            await service.delete("v9")


class TestDirectoryService:
    @pytest.fixture
    def customers(self) -> AsyncMock:
        store = AsyncMock(spec=ICustomerStore)
        store.get_customer.return_value = Customer(id="c1", name="Ali")
        store.create_customer.side_effect = lambda c: c.model_copy(update={"id": "c1"})
        store.update_customer.side_effect = lambda c: c
        return store

    @pytest.fixture
    def vendors(self) -> AsyncMock:
        store = AsyncMock(spec=IVendorStore)
        store.get_vendor.return_value = Vendor(id="vn1", name="Fuel Co")
        return store

    @pytest.fixture
    def service(self, customers, vendors, guard) -> DirectoryService:
        return DirectoryService(customers, vendors, guard)

    async def test_create_customer(self, service):
        assert (await service.create_customer(Customer(name="Sara"))).id == "c1"

    async def test_blank_name_rejected(self, service):
        with pytest.raises(ValidationError):
            await service.create_customer(Customer(name=" "))

    async def test_partial_update(self, service):
        updated = await service.update_customer("c1", {"phone": "050"})
        assert updated.name == "Ali"
        assert updated.phone == "050"

    async def test_customer_on_documents_not_deletable(self, service, customers, reference_store):
        reference_store.find_reference_numbers.return_value = ["Q-001"]

        with pytest.raises(BlockedDeleteError) as exc_info:
            await service.delete_customer("c1")

        assert "Quote Q-001" in str(exc_info.value)
        assert "Invoice Q-001" in str(exc_info.value)
        customers.delete_customer.assert_not_awaited()

    async def test_vendor_deleted(self, service, vendors):
        await service.delete_vendor("vn1")
        vendors.delete_vendor.assert_awaited_once_with("vn1")

    async def test_unknown_vendor(self, service, vendors):
        vendors.get_vendor.return_value = None
        with pytest.raises(NotFoundError, match="Vendor not found: vn9"):
            await service.get_vendor("vn9")


class TestPayrollService:
    @pytest.fixture
    def employees(self) -> AsyncMock:
        store = AsyncMock(spec=IEmployeeStore)
        store.get_employee.return_value = Employee(id="e1", name="Omar")
        return store

    @pytest.fixture
    def payslips(self) -> AsyncMock:
        store = AsyncMock(spec=IPayslipStore)
        store.create_payslip.side_effect = lambda p: p.model_copy(update={"id": "p1"})
        store.update_payslip.side_effect = lambda p: p
        store.list_payslips.return_value = []
        return store

    @pytest.fixture
    def service(self, employees, payslips, guard) -> PayrollService:
        return PayrollService(employees, payslips, guard)

    async def test_create_payslip_computes_pay(self, service):
        payslip = Payslip(
            employee_id="e1",
            month="2025-02",
            base_salary=Decimal("3000"),
            overtime_hours=Decimal("10"),
            overtime_rate=Decimal("25"),
            deductions=Decimal("50"),
        )

        created = await service.create_payslip(payslip)

        assert created.overtime_pay == Decimal("250")
        assert created.net_pay == Decimal("3200")

    async def test_payslip_month_format(self, service):
        with pytest.raises(ValidationError, match="YYYY-MM"):
            await service.create_payslip(Payslip(employee_id="e1", month="2025-2"))

    async def test_payslip_for_unknown_employee(self, service, reference_store):
        reference_store.exists.return_value = False
        with pytest.raises(MissingReferenceError):
            await service.create_payslip(Payslip(employee_id="e9", month="2025-02"))

    async def test_list_by_month_validates(self, service):
        with pytest.raises(ValidationError):
            await service.list_payslips(month="02-2025")

    async def test_update_recomputes_net_pay(self, service, payslips):
        payslips.get_payslip.return_value = Payslip(
            id="p1", employee_id="e1", month="2025-02", base_salary=Decimal("3000")
        )

        updated = await service.update_payslip(
            "p1", {"deductions": Decimal("500"), "net_pay": Decimal("1")}
        )

        assert updated.net_pay == Decimal("2500")

    async def test_employee_with_payslips_not_deletable(self, service, employees, reference_store):
        reference_store.find_reference_numbers.return_value = ["2025-01"]

        with pytest.raises(BlockedDeleteError, match="Payslip 2025-01"):
            await service.delete_employee("e1")
        employees.delete_employee.assert_not_awaited()
