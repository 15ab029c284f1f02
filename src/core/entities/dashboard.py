"""Read models for the business dashboard and the fleet finance dashboard."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from src.core.entities.vehicle import MonthlyProfitability

ZERO = Decimal("0")


# Business dashboard
class PeriodTotals(BaseModel):
    count: int = 0
    value: Decimal = ZERO


class CustomerRanking(BaseModel):
    customer_id: str
    name: str
    invoice_value: Decimal = ZERO
    quote_value: Decimal = ZERO
    total_value: Decimal = ZERO
    outstanding: Decimal = ZERO


class PartyBalance(BaseModel):
    """Amount owed by a customer or to a vendor."""

    party_id: str
    name: str
    amount: Decimal = ZERO


class ActivityEntry(BaseModel):
    kind: str  # quote | invoice | payslip | employee | customer
    reference_id: str
    description: str
    occurred_at: datetime


class DashboardSummary(BaseModel):
    month: str
    quotes_this_month: PeriodTotals = Field(default_factory=PeriodTotals)
    invoices_this_month: PeriodTotals = Field(default_factory=PeriodTotals)
    outstanding: Decimal = ZERO
    paid_invoices: int = 0
    pending_invoices: int = 0
    top_customers: list[CustomerRanking] = Field(default_factory=list)
    receivables: list[PartyBalance] = Field(default_factory=list)
    payables: list[PartyBalance] = Field(default_factory=list)
    recent_activity: list[ActivityEntry] = Field(default_factory=list)


# Fleet finance dashboard
class FleetOverview(BaseModel):
    total_revenue: Decimal = ZERO
    total_expenses: Decimal = ZERO
    net_profit: Decimal = ZERO
    profit_margin: Decimal = ZERO  # percent of revenue
    vehicle_count: int = 0
    transaction_count: int = 0
    average_revenue_per_vehicle: Decimal = ZERO
    average_profit_per_vehicle: Decimal = ZERO
    average_transaction_value: Decimal = ZERO


class FleetTimeMetrics(BaseModel):
    current_month: MonthlyProfitability
    last_month: MonthlyProfitability
    revenue_growth: Decimal | None = None  # percent, None when last month had none
    profit_growth: Decimal | None = None
    year_to_date: MonthlyProfitability
    trend: list[MonthlyProfitability] = Field(default_factory=list)


class VehicleRanking(BaseModel):
    vehicle_id: str
    vehicle_number: str
    revenue: Decimal = ZERO
    expenses: Decimal = ZERO
    profit: Decimal = ZERO
    transaction_count: int = 0


class FleetVehicleMetrics(BaseModel):
    profitable: int = 0
    loss_making: int = 0
    no_data: int = 0
    top_by_revenue: list[VehicleRanking] = Field(default_factory=list)
    top_by_profit: list[VehicleRanking] = Field(default_factory=list)
    bottom_by_profit: list[VehicleRanking] = Field(default_factory=list)


class CategoryTotal(BaseModel):
    category: str
    transaction_type: str
    amount: Decimal = ZERO
    transaction_count: int = 0


class CustomerRevenue(BaseModel):
    customer_id: str
    name: str
    revenue: Decimal = ZERO
    transaction_count: int = 0


class FleetOperationalMetrics(BaseModel):
    expense_ratio: Decimal = ZERO  # percent of revenue spent
    most_active_vehicle: VehicleRanking | None = None


class FleetMetrics(BaseModel):
    overview: FleetOverview = Field(default_factory=FleetOverview)
    time_based: FleetTimeMetrics
    vehicles: FleetVehicleMetrics = Field(default_factory=FleetVehicleMetrics)
    categories: list[CategoryTotal] = Field(default_factory=list)
    customers: list[CustomerRevenue] = Field(default_factory=list)
    operational: FleetOperationalMetrics = Field(default_factory=FleetOperationalMetrics)
