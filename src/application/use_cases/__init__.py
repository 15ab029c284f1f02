"""Application use cases."""

from src.application.use_cases.build_dashboard import BuildDashboardUseCase
from src.application.use_cases.build_fleet_metrics import BuildFleetMetricsUseCase
from src.application.use_cases.generate_document_pdf import (
    DocumentPdfResult,
    GenerateDocumentPdfUseCase,
)

__all__ = [
    "BuildDashboardUseCase",
    "BuildFleetMetricsUseCase",
    "DocumentPdfResult",
    "GenerateDocumentPdfUseCase",
]
