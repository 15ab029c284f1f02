"""Vehicle, vehicle transaction and profitability entities."""

import datetime as dt
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field, field_validator

ZERO = Decimal("0")


class VehicleStatus(str, Enum):
    ACTIVE = "active"
    MAINTENANCE = "maintenance"
    SOLD = "sold"
    RETIRED = "retired"


class TransactionType(str, Enum):
    REVENUE = "revenue"
    EXPENSE = "expense"


class Vehicle(BaseModel):
    """A rentable vehicle, identified to people by its plate number."""

    id: str | None = None
    vehicle_number: str
    vehicle_type: str | None = None
    make: str | None = None
    model: str | None = None
    year: int | None = None
    status: VehicleStatus = VehicleStatus.ACTIVE
    fuel_type: str | None = None
    notes: str | None = None
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None

    @field_validator("vehicle_number")
    @classmethod
    def strip_number(cls, v: str) -> str:
        return v.strip()


class ExpenseCategory(BaseModel):
    """A category offered for vehicle expenses.

    The seven predefined categories ship with the schema and cannot be
    deleted; categories added through the API are custom.
    """

    id: str | None = None
    name: str
    is_custom: bool = True
    created_at: dt.datetime | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()


class VehicleTransaction(BaseModel):
    """A single revenue or expense booked against a vehicle.

    ``month`` may be missing on rows that predate it; grouping then falls
    back to the date.
    """

    id: str | None = None
    vehicle_id: str
    transaction_type: TransactionType
    amount: Decimal
    date: dt.date | None = None
    month: str | None = None
    category: str | None = None
    description: str | None = None
    employee_id: str | None = None
    invoice_id: str | None = None
    purchase_order_id: str | None = None
    quote_id: str | None = None
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None


class MonthlyProfitability(BaseModel):
    """Revenue and expenses of one vehicle for one month."""

    month: str
    total_revenue: Decimal = ZERO
    total_expenses: Decimal = ZERO
    profit: Decimal = ZERO
    transaction_count: int = 0


class ProfitabilitySummary(BaseModel):
    """Monthly and all-time profitability of one vehicle."""

    vehicle_id: str
    months: list[MonthlyProfitability] = Field(default_factory=list)
    all_time_revenue: Decimal = ZERO
    all_time_expenses: Decimal = ZERO
    all_time_profit: Decimal = ZERO
    transaction_count: int = 0
    current_month: MonthlyProfitability | None = None
    last_month: MonthlyProfitability | None = None
    trailing_months: list[MonthlyProfitability] = Field(default_factory=list)
