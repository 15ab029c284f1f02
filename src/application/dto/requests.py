"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.

Create requests carry every field the caller may set. Update requests make
every field optional and are read with ``to_changes()``, which keeps only
the fields actually present in the body: an omitted field stays as stored,
an explicit null clears it.
"""

import datetime as dt
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field

from src.core.entities.financial_document import (
    InvoiceStatus,
    LineItem,
    PurchaseOrderStatus,
    RentalBasis,
)
from src.core.entities.payroll import PaymentType, PayslipStatus
from src.core.entities.vehicle import TransactionType, VehicleStatus


class PartialUpdateRequest(BaseModel):
    """Base for PUT bodies applied as partial updates."""

    def to_changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


# --- Financial documents ---


class LineItemRequest(BaseModel):
    """A line item as sent by a client.

    Derived amounts and the serial number are recomputed server-side, so
    they are not accepted here.
    """

    vehicle_type_id: str | None = Field(default=None, description="Quoted vehicle ID")
    vehicle_type_label: str | None = Field(default=None, description="Vehicle type as shown")
    vehicle_number: str | None = Field(default=None, description="Plate number")
    description: str | None = Field(default=None, description="Line description")
    rental_basis: RentalBasis | None = Field(default=None, description="hourly or monthly")
    quantity: Decimal | None = Field(default=None, allow_inf_nan=True, description="Hours or months")
    unit_price: Decimal | None = Field(default=None, allow_inf_nan=True, description="Rate per unit")
    tax_percent: Decimal | None = Field(default=None, allow_inf_nan=True, description="Flat tax percentage")


class _DocumentFields(BaseModel):
    notes: str | None = Field(default=None, description="Free-text notes")
    terms: str | None = Field(default=None, description="Terms and conditions")
    items: list[LineItemRequest] = Field(default_factory=list, description="Line items")


class CreateQuoteRequest(_DocumentFields):
    """Request to create a quote."""

    number: str = Field(..., description="Unique quote number", examples=["Q-001"])
    date: dt.date = Field(..., description="Quote date")
    customer_id: str | None = Field(default=None, description="Customer ID")
    valid_until: dt.date | None = Field(default=None, description="Offer expiry date")
    currency: str | None = Field(default=None, description="Currency (default AED)")


class CreateInvoiceRequest(_DocumentFields):
    """Request to create an invoice."""

    number: str = Field(..., description="Unique invoice number", examples=["INV-001"])
    date: dt.date = Field(..., description="Invoice date")
    customer_id: str | None = None
    vendor_id: str | None = None
    quote_id: str | None = Field(default=None, description="Quote this invoice bills")
    purchase_order_id: str | None = None
    due_date: dt.date | None = None
    amount_received: Decimal = Field(default=Decimal("0"), description="Payment received")
    status: InvoiceStatus = InvoiceStatus.DRAFT


class CreatePurchaseOrderRequest(_DocumentFields):
    """Request to create a purchase order."""

    number: str = Field(..., description="Unique PO number", examples=["PO-001"])
    date: dt.date = Field(..., description="Order date")
    vendor_id: str | None = Field(default=None, description="Vendor ID")
    currency: str | None = None
    status: PurchaseOrderStatus = PurchaseOrderStatus.DRAFT


class _DocumentUpdate(PartialUpdateRequest):
    number: str | None = None
    date: dt.date | None = None
    notes: str | None = None
    terms: str | None = None
    items: list[LineItemRequest] | None = Field(
        default=None,
        description="Replaces every line item when present; null clears them",
    )

    def to_changes(self) -> dict[str, Any]:
        changes = super().to_changes()
        if changes.get("items") is not None:
            changes["items"] = [LineItem.model_validate(i) for i in changes["items"]]
        return changes


class UpdateQuoteRequest(_DocumentUpdate):
    customer_id: str | None = None
    valid_until: dt.date | None = None
    currency: str | None = None


class UpdateInvoiceRequest(_DocumentUpdate):
    customer_id: str | None = None
    vendor_id: str | None = None
    quote_id: str | None = None
    purchase_order_id: str | None = None
    due_date: dt.date | None = None
    amount_received: Decimal | None = None
    status: InvoiceStatus | None = None


class UpdatePurchaseOrderRequest(_DocumentUpdate):
    vendor_id: str | None = None
    currency: str | None = None
    status: PurchaseOrderStatus | None = None


# --- Fleet ---


class CreateVehicleRequest(BaseModel):
    """Request to register a vehicle."""

    vehicle_number: str = Field(..., description="Unique plate number", examples=["DXB-A-12345"])
    vehicle_type: str | None = Field(default=None, examples=["Bus", "Pickup"])
    make: str | None = None
    model: str | None = None
    year: int | None = Field(default=None, ge=1900, le=2100)
    status: VehicleStatus = VehicleStatus.ACTIVE
    fuel_type: str | None = None
    notes: str | None = None


class UpdateVehicleRequest(PartialUpdateRequest):
    vehicle_number: str | None = None
    vehicle_type: str | None = None
    make: str | None = None
    model: str | None = None
    year: int | None = Field(default=None, ge=1900, le=2100)
    status: VehicleStatus | None = None
    fuel_type: str | None = None
    notes: str | None = None


class CreateVehicleTransactionRequest(BaseModel):
    """Request to book revenue or an expense against a vehicle."""

    vehicle_id: str = Field(..., description="Vehicle ID")
    transaction_type: TransactionType
    amount: Decimal = Field(..., description="Positive amount")
    date: dt.date | None = Field(default=None, description="Transaction date")
    category: str | None = Field(default=None, examples=["Fuel", "Rental Income"])
    description: str | None = None
    employee_id: str | None = None
    invoice_id: str | None = None
    purchase_order_id: str | None = None
    quote_id: str | None = None


class UpdateVehicleTransactionRequest(PartialUpdateRequest):
    transaction_type: TransactionType | None = None
    amount: Decimal | None = None
    date: dt.date | None = None
    category: str | None = None
    description: str | None = None
    employee_id: str | None = None
    invoice_id: str | None = None
    purchase_order_id: str | None = None
    quote_id: str | None = None


# --- Directory ---


class CreateCustomerRequest(BaseModel):
    name: str = Field(..., description="Contact name")
    company: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None


class UpdateCustomerRequest(PartialUpdateRequest):
    name: str | None = None
    company: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None


class CreateVendorRequest(BaseModel):
    name: str = Field(..., description="Vendor name")
    contact_person: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    bank_details: str | None = None
    payment_terms: str | None = None


class UpdateVendorRequest(PartialUpdateRequest):
    name: str | None = None
    contact_person: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    bank_details: str | None = None
    payment_terms: str | None = None


class CreateExpenseCategoryRequest(BaseModel):
    name: str = Field(..., description="Category name, unique regardless of case", examples=["Tolls"])


class UpdateExpenseCategoryRequest(PartialUpdateRequest):
    name: str | None = None


# --- Payroll ---


class CreateEmployeeRequest(BaseModel):
    name: str = Field(..., description="Full name")
    employee_code: str | None = None
    role: str | None = Field(default=None, examples=["Driver"])
    payment_type: PaymentType = PaymentType.MONTHLY
    hourly_rate: Decimal | None = None
    salary: Decimal | None = None
    overtime_rate: Decimal | None = None
    bank_details: str | None = None


class UpdateEmployeeRequest(PartialUpdateRequest):
    name: str | None = None
    employee_code: str | None = None
    role: str | None = None
    payment_type: PaymentType | None = None
    hourly_rate: Decimal | None = None
    salary: Decimal | None = None
    overtime_rate: Decimal | None = None
    bank_details: str | None = None


class CreatePayslipRequest(BaseModel):
    """Request to generate a payslip; overtime and net pay are computed."""

    employee_id: str = Field(..., description="Employee ID")
    month: str = Field(..., description="Pay month as YYYY-MM", examples=["2025-01"])
    base_salary: Decimal = Decimal("0")
    overtime_hours: Decimal = Decimal("0")
    overtime_rate: Decimal = Decimal("0")
    deductions: Decimal = Decimal("0")
    status: PayslipStatus = PayslipStatus.DRAFT
    notes: str | None = None


class UpdatePayslipRequest(PartialUpdateRequest):
    month: str | None = None
    base_salary: Decimal | None = None
    overtime_hours: Decimal | None = None
    overtime_rate: Decimal | None = None
    deductions: Decimal | None = None
    status: PayslipStatus | None = None
    notes: str | None = None
