"""Core domain entities."""

from src.core.entities.dashboard import (
    ActivityEntry,
    CategoryTotal,
    CustomerRanking,
    CustomerRevenue,
    DashboardSummary,
    FleetMetrics,
    FleetOperationalMetrics,
    FleetOverview,
    FleetTimeMetrics,
    FleetVehicleMetrics,
    PartyBalance,
    PeriodTotals,
    VehicleRanking,
)
from src.core.entities.financial_document import (
    DOCUMENT_DEFINITIONS,
    INVOICE_DEFINITION,
    PURCHASE_ORDER_DEFINITION,
    QUOTE_DEFINITION,
    DocumentDefinition,
    DocumentKind,
    DocumentTotals,
    FinancialDocument,
    ForeignKey,
    Invoice,
    InvoiceStatus,
    LineItem,
    PurchaseOrder,
    PurchaseOrderStatus,
    Quote,
    RentalBasis,
)
from src.core.entities.party import Customer, Vendor
from src.core.entities.payroll import Employee, PaymentType, Payslip, PayslipStatus
from src.core.entities.vehicle import (
    ExpenseCategory,
    MonthlyProfitability,
    ProfitabilitySummary,
    TransactionType,
    Vehicle,
    VehicleStatus,
    VehicleTransaction,
)

__all__ = [
    # Financial documents
    "DocumentKind",
    "DocumentDefinition",
    "DocumentTotals",
    "DOCUMENT_DEFINITIONS",
    "QUOTE_DEFINITION",
    "INVOICE_DEFINITION",
    "PURCHASE_ORDER_DEFINITION",
    "FinancialDocument",
    "ForeignKey",
    "Invoice",
    "InvoiceStatus",
    "LineItem",
    "PurchaseOrder",
    "PurchaseOrderStatus",
    "Quote",
    "RentalBasis",
    # Parties
    "Customer",
    "Vendor",
    # Payroll
    "Employee",
    "PaymentType",
    "Payslip",
    "PayslipStatus",
    # Fleet
    "ExpenseCategory",
    "Vehicle",
    "VehicleStatus",
    "VehicleTransaction",
    "TransactionType",
    "MonthlyProfitability",
    "ProfitabilitySummary",
    # Dashboards
    "ActivityEntry",
    "CategoryTotal",
    "CustomerRanking",
    "CustomerRevenue",
    "DashboardSummary",
    "FleetMetrics",
    "FleetOperationalMetrics",
    "FleetOverview",
    "FleetTimeMetrics",
    "FleetVehicleMetrics",
    "PartyBalance",
    "PeriodTotals",
    "VehicleRanking",
]
