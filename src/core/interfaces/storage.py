"""
Abstract interfaces for storage providers.

Defines contracts for the financial document, fleet, expense category,
directory, payroll and reference-lookup stores.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from src.core.entities.financial_document import DocumentDefinition, FinancialDocument
from src.core.entities.party import Customer, Vendor
from src.core.entities.payroll import Employee, Payslip
from src.core.entities.vehicle import ExpenseCategory, Vehicle, VehicleTransaction


@dataclass(frozen=True)
class ReferenceRule:
    """Where to look for rows citing an entity, and how to name them.

    Rows of ``table`` whose ``column`` equals the entity id are referencing
    records. Their display number is ``number_column`` (falling back to the
    row id when empty), read from ``via_table`` through ``via_column`` when
    the citing row is a line item of some parent document.
    """

    type_label: str
    table: str
    column: str
    number_column: str = "number"
    via_table: str | None = None
    via_column: str | None = None


class IReferenceStore(ABC):
    """Lookups used by the reference integrity guard."""

    @abstractmethod
    async def find_id_by_value(
        self,
        table: str,
        field: str,
        value: str,
        exclude_id: str | None = None,
    ) -> str | None:
        """Return the id of a row in ``table`` whose ``field`` equals ``value``."""
        pass

    @abstractmethod
    async def exists(self, table: str, entity_id: str) -> bool:
        """Check whether ``table`` holds a row with this id."""
        pass

    @abstractmethod
    async def find_reference_numbers(self, rule: ReferenceRule, entity_id: str) -> list[str]:
        """Display numbers of rows matching ``rule`` for ``entity_id``, oldest first."""
        pass


class IFinancialDocumentStore(ABC):
    """
    Abstract interface for quote, invoice and purchase order storage.

    Header and items are always written together in one transaction.
    """

    definition: DocumentDefinition

    @abstractmethod
    async def create_document(self, document: FinancialDocument) -> FinancialDocument:
        """Insert header and items, assigning ids."""
        pass

    @abstractmethod
    async def get_document(self, document_id: str) -> FinancialDocument | None:
        """Get document by ID with items."""
        pass

    @abstractmethod
    async def list_documents(self, limit: int = 100, offset: int = 0) -> list[FinancialDocument]:
        """List documents, newest first."""
        pass

    @abstractmethod
    async def update_document(
        self,
        document: FinancialDocument,
        replace_items: bool,
    ) -> FinancialDocument:
        """Update the header; when ``replace_items`` delete all items and insert the new set."""
        pass

    @abstractmethod
    async def delete_document(self, document_id: str) -> bool:
        """Delete header (items cascade). Returns False if nothing was deleted."""
        pass


class IVehicleStore(ABC):
    """Abstract interface for vehicle storage."""

    @abstractmethod
    async def create_vehicle(self, vehicle: Vehicle) -> Vehicle:
        pass

    @abstractmethod
    async def get_vehicle(self, vehicle_id: str) -> Vehicle | None:
        pass

    @abstractmethod
    async def list_vehicles(self, limit: int = 500, offset: int = 0) -> list[Vehicle]:
        pass

    @abstractmethod
    async def update_vehicle(self, vehicle: Vehicle) -> Vehicle:
        pass

    @abstractmethod
    async def delete_vehicle(self, vehicle_id: str) -> bool:
        """Delete vehicle; its transactions cascade."""
        pass


class IVehicleTransactionStore(ABC):
    """Abstract interface for vehicle transaction storage."""

    @abstractmethod
    async def create_transaction(self, transaction: VehicleTransaction) -> VehicleTransaction:
        pass

    @abstractmethod
    async def get_transaction(self, transaction_id: str) -> VehicleTransaction | None:
        pass

    @abstractmethod
    async def list_transactions(
        self,
        vehicle_id: str | None = None,
        month: str | None = None,
    ) -> list[VehicleTransaction]:
        """List transactions, optionally for one vehicle and one month."""
        pass

    @abstractmethod
    async def update_transaction(self, transaction: VehicleTransaction) -> VehicleTransaction:
        pass

    @abstractmethod
    async def delete_transaction(self, transaction_id: str) -> bool:
        pass


class IExpenseCategoryStore(ABC):
    """Abstract interface for expense category storage."""

    @abstractmethod
    async def create_category(self, category: ExpenseCategory) -> ExpenseCategory:
        pass

    @abstractmethod
    async def get_category(self, category_id: str) -> ExpenseCategory | None:
        pass

    @abstractmethod
    async def list_categories(self) -> list[ExpenseCategory]:
        """Predefined categories first, then by name."""
        pass

    @abstractmethod
    async def update_category(self, category: ExpenseCategory) -> ExpenseCategory:
        pass

    @abstractmethod
    async def delete_category(self, category_id: str) -> bool:
        pass


class ICustomerStore(ABC):
    """Abstract interface for customer storage."""

    @abstractmethod
    async def create_customer(self, customer: Customer) -> Customer:
        pass

    @abstractmethod
    async def get_customer(self, customer_id: str) -> Customer | None:
        pass

    @abstractmethod
    async def list_customers(self) -> list[Customer]:
        pass

    @abstractmethod
    async def update_customer(self, customer: Customer) -> Customer:
        pass

    @abstractmethod
    async def delete_customer(self, customer_id: str) -> bool:
        pass


class IVendorStore(ABC):
    """Abstract interface for vendor storage."""

    @abstractmethod
    async def create_vendor(self, vendor: Vendor) -> Vendor:
        pass

    @abstractmethod
    async def get_vendor(self, vendor_id: str) -> Vendor | None:
        pass

    @abstractmethod
    async def list_vendors(self) -> list[Vendor]:
        pass

    @abstractmethod
    async def update_vendor(self, vendor: Vendor) -> Vendor:
        pass

    @abstractmethod
    async def delete_vendor(self, vendor_id: str) -> bool:
        pass


class IEmployeeStore(ABC):
    """Abstract interface for employee storage."""

    @abstractmethod
    async def create_employee(self, employee: Employee) -> Employee:
        pass

    @abstractmethod
    async def get_employee(self, employee_id: str) -> Employee | None:
        pass

    @abstractmethod
    async def list_employees(self) -> list[Employee]:
        pass

    @abstractmethod
    async def update_employee(self, employee: Employee) -> Employee:
        pass

    @abstractmethod
    async def delete_employee(self, employee_id: str) -> bool:
        pass


class IPayslipStore(ABC):
    """Abstract interface for payslip storage."""

    @abstractmethod
    async def create_payslip(self, payslip: Payslip) -> Payslip:
        pass

    @abstractmethod
    async def get_payslip(self, payslip_id: str) -> Payslip | None:
        pass

    @abstractmethod
    async def list_payslips(
        self,
        employee_id: str | None = None,
        month: str | None = None,
    ) -> list[Payslip]:
        pass

    @abstractmethod
    async def update_payslip(self, payslip: Payslip) -> Payslip:
        pass

    @abstractmethod
    async def delete_payslip(self, payslip_id: str) -> bool:
        pass
