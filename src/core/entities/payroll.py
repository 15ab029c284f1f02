"""Employee and payslip domain entities."""

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, model_validator

ZERO = Decimal("0")


class PaymentType(str, Enum):
    HOURLY = "hourly"
    MONTHLY = "monthly"


class PayslipStatus(str, Enum):
    DRAFT = "draft"
    PROCESSED = "processed"
    PAID = "paid"


class Employee(BaseModel):
    """A driver or staff member on the payroll."""

    id: str | None = None
    name: str
    employee_code: str | None = None
    role: str | None = None
    payment_type: PaymentType = PaymentType.MONTHLY
    hourly_rate: Decimal | None = None
    salary: Decimal | None = None
    overtime_rate: Decimal | None = None
    bank_details: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Payslip(BaseModel):
    """Monthly pay statement for one employee."""

    id: str | None = None
    employee_id: str
    month: str  # YYYY-MM
    base_salary: Decimal = ZERO
    overtime_hours: Decimal = ZERO
    overtime_rate: Decimal = ZERO
    overtime_pay: Decimal = ZERO
    deductions: Decimal = ZERO
    net_pay: Decimal = ZERO
    status: PayslipStatus = PayslipStatus.DRAFT
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @model_validator(mode="after")
    def compute_pay(self) -> "Payslip":
        """Compute overtime_pay and net_pay from the salary inputs."""
        self.overtime_pay = self.overtime_hours * self.overtime_rate
        self.net_pay = self.base_salary + self.overtime_pay - self.deductions
        return self
