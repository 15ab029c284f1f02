"""Storage infrastructure implementations."""

from src.infrastructure.storage.sqlite import (
    SQLiteCustomerStore,
    SQLiteEmployeeStore,
    SQLiteFinancialDocumentStore,
    SQLitePayslipStore,
    SQLiteReferenceStore,
    SQLiteVehicleStore,
    SQLiteVehicleTransactionStore,
    SQLiteVendorStore,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)

__all__ = [
    # SQLite stores
    "SQLiteCustomerStore",
    "SQLiteEmployeeStore",
    "SQLiteFinancialDocumentStore",
    "SQLitePayslipStore",
    "SQLiteReferenceStore",
    "SQLiteVehicleStore",
    "SQLiteVehicleTransactionStore",
    "SQLiteVendorStore",
    # Connection pool
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
]
