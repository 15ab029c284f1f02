"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.

Amounts leave the core as Decimal and are serialized as JSON numbers.
Every model reads straight from the matching entity via ``from_entity``.
"""

import datetime as dt
from datetime import datetime
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field

from src.core.entities.financial_document import (
    InvoiceStatus,
    PurchaseOrderStatus,
    RentalBasis,
)
from src.core.entities.payroll import PaymentType, PayslipStatus
from src.core.entities.vehicle import TransactionType, VehicleStatus


class EntityResponse(BaseModel):
    """Base for responses built from core entities by attribute access."""

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_entity(cls, entity: Any) -> Self:
        return cls.model_validate(entity)


# --- Financial documents ---


class LineItemResponse(EntityResponse):
    """Line item with its derived amounts."""

    id: str | None = None
    serial_number: int
    vehicle_type_id: str | None = None
    vehicle_type_label: str | None = None
    vehicle_number: str | None = None
    description: str | None = None
    rental_basis: RentalBasis | None = None
    quantity: float | None = None
    unit_price: float | None = None
    tax_percent: float | None = None
    gross_amount: float
    line_tax_amount: float
    line_total: float


class _DocumentResponse(EntityResponse):
    id: str
    number: str
    date: dt.date
    items: list[LineItemResponse] = Field(default_factory=list)
    sub_total: float = Field(..., description="Sum of gross amounts")
    total_tax: float = Field(..., description="Sum of line tax amounts")
    total: float = Field(..., description="sub_total + total_tax")
    notes: str | None = None
    terms: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class QuoteResponse(_DocumentResponse):
    customer_id: str | None = None
    valid_until: dt.date | None = None
    currency: str | None = None


class InvoiceResponse(_DocumentResponse):
    customer_id: str | None = None
    vendor_id: str | None = None
    quote_id: str | None = None
    purchase_order_id: str | None = None
    due_date: dt.date | None = None
    amount_received: float = 0.0
    balance_due: float = Field(0.0, description="What is still owed, never negative")
    status: InvoiceStatus


class PurchaseOrderResponse(_DocumentResponse):
    vendor_id: str | None = None
    currency: str | None = None
    status: PurchaseOrderStatus


# --- Fleet ---


class VehicleResponse(EntityResponse):
    id: str
    vehicle_number: str
    vehicle_type: str | None = None
    make: str | None = None
    model: str | None = None
    year: int | None = None
    status: VehicleStatus
    fuel_type: str | None = None
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class VehicleTransactionResponse(EntityResponse):
    id: str
    vehicle_id: str
    transaction_type: TransactionType
    amount: float
    date: dt.date | None = None
    month: str | None = None
    category: str | None = None
    description: str | None = None
    employee_id: str | None = None
    invoice_id: str | None = None
    purchase_order_id: str | None = None
    quote_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class MonthlyProfitabilityResponse(EntityResponse):
    month: str
    total_revenue: float
    total_expenses: float
    profit: float
    transaction_count: int


class ProfitabilitySummaryResponse(EntityResponse):
    """Monthly and all-time profitability of one vehicle."""

    vehicle_id: str
    months: list[MonthlyProfitabilityResponse]
    all_time_revenue: float
    all_time_expenses: float
    all_time_profit: float
    transaction_count: int
    current_month: MonthlyProfitabilityResponse | None = None
    last_month: MonthlyProfitabilityResponse | None = None
    trailing_months: list[MonthlyProfitabilityResponse] = Field(
        default_factory=list,
        description="Zero-filled 12 months ending at the current month",
    )


# --- Directory and payroll ---


class CustomerResponse(EntityResponse):
    id: str
    name: str
    company: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class VendorResponse(EntityResponse):
    id: str
    name: str
    contact_person: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    bank_details: str | None = None
    payment_terms: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ExpenseCategoryResponse(EntityResponse):
    id: str
    name: str
    is_custom: bool
    created_at: datetime | None = None


class EmployeeResponse(EntityResponse):
    id: str
    name: str
    employee_code: str | None = None
    role: str | None = None
    payment_type: PaymentType
    hourly_rate: float | None = None
    salary: float | None = None
    overtime_rate: float | None = None
    bank_details: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PayslipResponse(EntityResponse):
    id: str
    employee_id: str
    month: str
    base_salary: float
    overtime_hours: float
    overtime_rate: float
    overtime_pay: float
    deductions: float
    net_pay: float
    status: PayslipStatus
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


# --- Dashboards ---


class PeriodTotalsResponse(EntityResponse):
    count: int
    value: float


class CustomerRankingResponse(EntityResponse):
    customer_id: str
    name: str
    invoice_value: float
    quote_value: float
    total_value: float
    outstanding: float


class PartyBalanceResponse(EntityResponse):
    party_id: str
    name: str
    amount: float


class ActivityEntryResponse(EntityResponse):
    kind: str
    reference_id: str
    description: str
    occurred_at: datetime


class DashboardResponse(EntityResponse):
    """Business KPIs for the current month."""

    month: str
    quotes_this_month: PeriodTotalsResponse
    invoices_this_month: PeriodTotalsResponse
    outstanding: float
    paid_invoices: int
    pending_invoices: int
    top_customers: list[CustomerRankingResponse]
    receivables: list[PartyBalanceResponse]
    payables: list[PartyBalanceResponse]
    recent_activity: list[ActivityEntryResponse]


class FleetOverviewResponse(EntityResponse):
    total_revenue: float
    total_expenses: float
    net_profit: float
    profit_margin: float
    vehicle_count: int
    transaction_count: int
    average_revenue_per_vehicle: float
    average_profit_per_vehicle: float
    average_transaction_value: float


class FleetTimeMetricsResponse(EntityResponse):
    current_month: MonthlyProfitabilityResponse
    last_month: MonthlyProfitabilityResponse
    revenue_growth: float | None = None
    profit_growth: float | None = None
    year_to_date: MonthlyProfitabilityResponse
    trend: list[MonthlyProfitabilityResponse]


class VehicleRankingResponse(EntityResponse):
    vehicle_id: str
    vehicle_number: str
    revenue: float
    expenses: float
    profit: float
    transaction_count: int


class FleetVehicleMetricsResponse(EntityResponse):
    profitable: int
    loss_making: int
    no_data: int
    top_by_revenue: list[VehicleRankingResponse]
    top_by_profit: list[VehicleRankingResponse]
    bottom_by_profit: list[VehicleRankingResponse]


class CategoryTotalResponse(EntityResponse):
    category: str
    transaction_type: str
    amount: float
    transaction_count: int


class CustomerRevenueResponse(EntityResponse):
    customer_id: str
    name: str
    revenue: float
    transaction_count: int


class FleetOperationalMetricsResponse(EntityResponse):
    expense_ratio: float
    most_active_vehicle: VehicleRankingResponse | None = None


class FleetMetricsResponse(EntityResponse):
    """Fleet-wide finance dashboard."""

    overview: FleetOverviewResponse
    time_based: FleetTimeMetricsResponse
    vehicles: FleetVehicleMetricsResponse
    categories: list[CategoryTotalResponse]
    customers: list[CustomerRevenueResponse]
    operational: FleetOperationalMetricsResponse


# --- Health and errors ---


class ComponentHealthResponse(BaseModel):
    """Health of one backing component."""

    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: ComponentHealthResponse | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    - timestamp: when the error was produced
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)
