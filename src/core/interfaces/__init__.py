"""Core interfaces (ports) for dependency injection."""

from src.core.interfaces.storage import (
    ICustomerStore,
    IEmployeeStore,
    IExpenseCategoryStore,
    IFinancialDocumentStore,
    IPayslipStore,
    IReferenceStore,
    IVehicleStore,
    IVehicleTransactionStore,
    IVendorStore,
    ReferenceRule,
)

__all__ = [
    "IReferenceStore",
    "ReferenceRule",
    "IFinancialDocumentStore",
    "IVehicleStore",
    "IVehicleTransactionStore",
    "IExpenseCategoryStore",
    "ICustomerStore",
    "IVendorStore",
    "IEmployeeStore",
    "IPayslipStore",
]
