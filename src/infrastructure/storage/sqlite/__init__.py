"""SQLite storage implementations."""

from src.core.entities.financial_document import DOCUMENT_DEFINITIONS, DocumentKind
from src.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)
from src.infrastructure.storage.sqlite.expense_category_store import SQLiteExpenseCategoryStore
from src.infrastructure.storage.sqlite.financial_document_store import (
    SQLiteFinancialDocumentStore,
)
from src.infrastructure.storage.sqlite.party_store import SQLiteCustomerStore, SQLiteVendorStore
from src.infrastructure.storage.sqlite.payroll_store import (
    SQLiteEmployeeStore,
    SQLitePayslipStore,
)
from src.infrastructure.storage.sqlite.reference_store import SQLiteReferenceStore
from src.infrastructure.storage.sqlite.vehicle_store import (
    SQLiteVehicleStore,
    SQLiteVehicleTransactionStore,
)

# Singleton instances
_document_stores: dict[DocumentKind, SQLiteFinancialDocumentStore] = {}
_reference_store: SQLiteReferenceStore | None = None
_vehicle_store: SQLiteVehicleStore | None = None
_transaction_store: SQLiteVehicleTransactionStore | None = None
_expense_category_store: SQLiteExpenseCategoryStore | None = None
_customer_store: SQLiteCustomerStore | None = None
_vendor_store: SQLiteVendorStore | None = None
_employee_store: SQLiteEmployeeStore | None = None
_payslip_store: SQLitePayslipStore | None = None


async def get_document_store(kind: DocumentKind) -> SQLiteFinancialDocumentStore:
    """Get the singleton store for one document kind."""
    if kind not in _document_stores:
        _document_stores[kind] = SQLiteFinancialDocumentStore(DOCUMENT_DEFINITIONS[kind])
    return _document_stores[kind]


async def get_reference_store() -> SQLiteReferenceStore:
    global _reference_store
    if _reference_store is None:
        _reference_store = SQLiteReferenceStore()
    return _reference_store


async def get_vehicle_store() -> SQLiteVehicleStore:
    global _vehicle_store
    if _vehicle_store is None:
        _vehicle_store = SQLiteVehicleStore()
    return _vehicle_store


async def get_vehicle_transaction_store() -> SQLiteVehicleTransactionStore:
    global _transaction_store
    if _transaction_store is None:
        _transaction_store = SQLiteVehicleTransactionStore()
    return _transaction_store


async def get_expense_category_store() -> SQLiteExpenseCategoryStore:
    global _expense_category_store
    if _expense_category_store is None:
        _expense_category_store = SQLiteExpenseCategoryStore()
    return _expense_category_store


async def get_customer_store() -> SQLiteCustomerStore:
    global _customer_store
    if _customer_store is None:
        _customer_store = SQLiteCustomerStore()
    return _customer_store


async def get_vendor_store() -> SQLiteVendorStore:
    global _vendor_store
    if _vendor_store is None:
        _vendor_store = SQLiteVendorStore()
    return _vendor_store


async def get_employee_store() -> SQLiteEmployeeStore:
    global _employee_store
    if _employee_store is None:
        _employee_store = SQLiteEmployeeStore()
    return _employee_store


async def get_payslip_store() -> SQLitePayslipStore:
    global _payslip_store
    if _payslip_store is None:
        _payslip_store = SQLitePayslipStore()
    return _payslip_store


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    # Store classes
    "SQLiteCustomerStore",
    "SQLiteEmployeeStore",
    "SQLiteExpenseCategoryStore",
    "SQLiteFinancialDocumentStore",
    "SQLitePayslipStore",
    "SQLiteReferenceStore",
    "SQLiteVehicleStore",
    "SQLiteVehicleTransactionStore",
    "SQLiteVendorStore",
    # Factory functions
    "get_document_store",
    "get_reference_store",
    "get_vehicle_store",
    "get_vehicle_transaction_store",
    "get_expense_category_store",
    "get_customer_store",
    "get_vendor_store",
    "get_employee_store",
    "get_payslip_store",
]
