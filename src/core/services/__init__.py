"""
Core business logic services.

Layer-pure services that depend only on:
- src/core/entities/*
- src/core/interfaces/*
- src/core/exceptions.py

NO infrastructure imports. All dependencies injected via constructor.
"""

from src.core.services.dashboard import DashboardInputs, build_dashboard
from src.core.services.directory import DirectoryService
from src.core.services.document_repository import DocumentRepository
from src.core.services.expense_categories import ExpenseCategoryService
from src.core.services.fleet import VehicleService
from src.core.services.fleet_metrics import build_fleet_metrics
from src.core.services.line_item_calculator import CalculatedItems, compute_line, compute_totals
from src.core.services.payroll import PayrollService
from src.core.services.profitability import (
    ProfitabilityAggregator,
    group_by_month,
    summarize_transactions,
)
from src.core.services.reference_guard import (
    REFERENCE_RULES,
    CheckResult,
    CheckStatus,
    Reference,
    ReferenceGuard,
    format_reference_error,
)
from src.core.services.vehicle_transactions import VehicleTransactionService

__all__ = [
    # Line items
    "CalculatedItems",
    "compute_line",
    "compute_totals",
    # Reference guard
    "REFERENCE_RULES",
    "CheckResult",
    "CheckStatus",
    "Reference",
    "ReferenceGuard",
    "format_reference_error",
    # Documents
    "DocumentRepository",
    # Fleet
    "VehicleService",
    "VehicleTransactionService",
    "ExpenseCategoryService",
    "ProfitabilityAggregator",
    "group_by_month",
    "summarize_transactions",
    "build_fleet_metrics",
    # Directory and payroll
    "DirectoryService",
    "PayrollService",
    # Dashboard
    "DashboardInputs",
    "build_dashboard",
]
