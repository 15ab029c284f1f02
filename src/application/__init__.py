"""
Application layer - Use cases, DTOs, and service factories.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API contracts
2. Implementing use cases that span several stores
3. Providing factory functions for dependency injection
"""

from src.application.services import (
    get_directory_service,
    get_document_repository,
    get_expense_category_service,
    get_payroll_service,
    get_profitability_aggregator,
    get_reference_guard,
    get_vehicle_service,
    get_vehicle_transaction_service,
)
from src.application.use_cases import (
    BuildDashboardUseCase,
    BuildFleetMetricsUseCase,
    DocumentPdfResult,
    GenerateDocumentPdfUseCase,
)

__all__ = [
    # Use cases
    "BuildDashboardUseCase",
    "BuildFleetMetricsUseCase",
    "DocumentPdfResult",
    "GenerateDocumentPdfUseCase",
    # Service factories
    "get_reference_guard",
    "get_document_repository",
    "get_vehicle_service",
    "get_vehicle_transaction_service",
    "get_profitability_aggregator",
    "get_directory_service",
    "get_payroll_service",
    "get_expense_category_service",
]
