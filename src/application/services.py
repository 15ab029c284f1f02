"""
Service factory functions for dependency injection.

This module wires the SQLite stores and settings into the core services.
Route dependencies and use cases import from here.

Clean Architecture: Application layer orchestrates DI, not core layer.
"""

from src.config import get_settings
from src.core.entities.financial_document import DocumentKind
from src.core.services import (
    DirectoryService,
    DocumentRepository,
    ExpenseCategoryService,
    PayrollService,
    ProfitabilityAggregator,
    ReferenceGuard,
    VehicleService,
    VehicleTransactionService,
)


async def get_reference_guard() -> ReferenceGuard:
    """Guard over the shared reference-lookup store."""
    # Lazy import infrastructure to avoid circular imports
    from src.infrastructure.storage.sqlite import get_reference_store

    return ReferenceGuard(await get_reference_store())


async def get_document_repository(kind: DocumentKind) -> DocumentRepository:
    """Repository for quotes, invoices or purchase orders."""
    from src.infrastructure.storage.sqlite import get_document_store

    return DocumentRepository(
        store=await get_document_store(kind),
        guard=await get_reference_guard(),
        default_currency=get_settings().business.default_currency,
    )


async def get_vehicle_service() -> VehicleService:
    from src.infrastructure.storage.sqlite import get_vehicle_store

    return VehicleService(await get_vehicle_store(), await get_reference_guard())


async def get_vehicle_transaction_service() -> VehicleTransactionService:
    from src.infrastructure.storage.sqlite import get_vehicle_transaction_store

    return VehicleTransactionService(
        await get_vehicle_transaction_store(),
        await get_reference_guard(),
        lookback_months=get_settings().business.transaction_lookback_months,
    )


async def get_profitability_aggregator() -> ProfitabilityAggregator:
    from src.infrastructure.storage.sqlite import (
        get_vehicle_store,
        get_vehicle_transaction_store,
    )

    return ProfitabilityAggregator(
        await get_vehicle_store(),
        await get_vehicle_transaction_store(),
    )


async def get_directory_service() -> DirectoryService:
    from src.infrastructure.storage.sqlite import get_customer_store, get_vendor_store

    return DirectoryService(
        await get_customer_store(),
        await get_vendor_store(),
        await get_reference_guard(),
    )


async def get_payroll_service() -> PayrollService:
    from src.infrastructure.storage.sqlite import get_employee_store, get_payslip_store

    return PayrollService(
        await get_employee_store(),
        await get_payslip_store(),
        await get_reference_guard(),
    )


async def get_expense_category_service() -> ExpenseCategoryService:
    from src.infrastructure.storage.sqlite import get_expense_category_store

    return ExpenseCategoryService(await get_expense_category_store(), await get_reference_guard())
