"""
Dependency injection container for FastAPI.

Provides service instances to route handlers.
"""

from functools import lru_cache

from src.application.services import (
    get_directory_service,
    get_document_repository,
    get_expense_category_service,
    get_payroll_service,
    get_profitability_aggregator,
    get_vehicle_service,
    get_vehicle_transaction_service,
)
from src.application.use_cases import (
    BuildDashboardUseCase,
    BuildFleetMetricsUseCase,
    GenerateDocumentPdfUseCase,
)
from src.config import Settings, get_settings
from src.core.entities.financial_document import DocumentKind
from src.core.services import (
    DirectoryService,
    DocumentRepository,
    ExpenseCategoryService,
    PayrollService,
    ProfitabilityAggregator,
    VehicleService,
    VehicleTransactionService,
)


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


# Document repositories
async def get_quote_repository() -> DocumentRepository:
    return await get_document_repository(DocumentKind.QUOTE)


async def get_invoice_repository() -> DocumentRepository:
    return await get_document_repository(DocumentKind.INVOICE)


async def get_purchase_order_repository() -> DocumentRepository:
    return await get_document_repository(DocumentKind.PURCHASE_ORDER)


DOCUMENT_REPOSITORY_PROVIDERS = {
    DocumentKind.QUOTE: get_quote_repository,
    DocumentKind.INVOICE: get_invoice_repository,
    DocumentKind.PURCHASE_ORDER: get_purchase_order_repository,
}


# Fleet
async def get_vehicles() -> VehicleService:
    """Get vehicle service."""
    return await get_vehicle_service()


async def get_vehicle_transactions() -> VehicleTransactionService:
    """Get vehicle transaction service."""
    return await get_vehicle_transaction_service()


async def get_profitability() -> ProfitabilityAggregator:
    """Get profitability aggregator."""
    return await get_profitability_aggregator()


async def get_expense_categories() -> ExpenseCategoryService:
    return await get_expense_category_service()


# Directory and payroll
async def get_directory() -> DirectoryService:
    return await get_directory_service()


async def get_payroll() -> PayrollService:
    return await get_payroll_service()


# Use case dependencies
def get_quote_pdf_use_case() -> GenerateDocumentPdfUseCase:
    return GenerateDocumentPdfUseCase(DocumentKind.QUOTE)


def get_invoice_pdf_use_case() -> GenerateDocumentPdfUseCase:
    return GenerateDocumentPdfUseCase(DocumentKind.INVOICE)


def get_purchase_order_pdf_use_case() -> GenerateDocumentPdfUseCase:
    return GenerateDocumentPdfUseCase(DocumentKind.PURCHASE_ORDER)


DOCUMENT_PDF_PROVIDERS = {
    DocumentKind.QUOTE: get_quote_pdf_use_case,
    DocumentKind.INVOICE: get_invoice_pdf_use_case,
    DocumentKind.PURCHASE_ORDER: get_purchase_order_pdf_use_case,
}


def get_build_dashboard_use_case() -> BuildDashboardUseCase:
    """Get business dashboard use case."""
    return BuildDashboardUseCase()


def get_build_fleet_metrics_use_case() -> BuildFleetMetricsUseCase:
    """Get fleet metrics use case."""
    return BuildFleetMetricsUseCase()
