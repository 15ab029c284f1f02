"""Quote, invoice and purchase order domain entities."""

import datetime as dt
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field, field_validator

ZERO = Decimal("0")


class DocumentKind(str, Enum):
    """The three financial document types sharing the line-item shape."""

    QUOTE = "quote"
    INVOICE = "invoice"
    PURCHASE_ORDER = "purchase_order"


class RentalBasis(str, Enum):
    HOURLY = "hourly"
    MONTHLY = "monthly"


class InvoiceStatus(str, Enum):
    DRAFT = "draft"
    INVOICE_SENT = "invoice_sent"
    PAYMENT_RECEIVED = "payment_received"


class PurchaseOrderStatus(str, Enum):
    DRAFT = "draft"
    SENT = "sent"
    ACCEPTED = "accepted"


class LineItem(BaseModel):
    """One row of a financial document.

    ``gross_amount``, ``line_tax_amount``, ``line_total`` and
    ``serial_number`` are derived by the line-item calculator; whatever a
    caller puts there is overwritten.
    """

    id: str | None = None
    serial_number: int = 0
    vehicle_type_id: str | None = None  # soft reference → vehicles.id
    vehicle_type_label: str | None = None
    vehicle_number: str | None = None
    description: str | None = None
    rental_basis: RentalBasis | None = None
    quantity: Decimal | None = Field(default=None, allow_inf_nan=True)
    unit_price: Decimal | None = Field(default=None, allow_inf_nan=True)
    tax_percent: Decimal | None = Field(default=None, allow_inf_nan=True)
    gross_amount: Decimal = ZERO
    line_tax_amount: Decimal = ZERO
    line_total: Decimal = ZERO

    @field_validator("quantity", "unit_price", "tax_percent")
    @classmethod
    def drop_non_finite(cls, v: Decimal | None) -> Decimal | None:
        # NaN and infinities count as not entered
        if v is None or v.is_finite():
            return v
        return None


class DocumentTotals(BaseModel):
    """Document-level sums over the line items."""

    sub_total: Decimal = ZERO
    total_tax: Decimal = ZERO
    total: Decimal = ZERO


class FinancialDocument(BaseModel):
    """Fields shared by quotes, invoices and purchase orders."""

    id: str | None = None
    number: str
    date: dt.date
    items: list[LineItem] = Field(default_factory=list)
    sub_total: Decimal = ZERO
    total_tax: Decimal = ZERO
    total: Decimal = ZERO
    notes: str | None = None
    terms: str | None = None
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None

    @property
    def counterparty_id(self) -> str | None:
        return None


class Quote(FinancialDocument):
    """A price offer sent to a customer."""

    customer_id: str | None = None
    valid_until: dt.date | None = None
    currency: str | None = None

    @property
    def counterparty_id(self) -> str | None:
        return self.customer_id


class Invoice(FinancialDocument):
    """A bill issued to a customer, optionally derived from a quote or PO."""

    customer_id: str | None = None
    vendor_id: str | None = None
    quote_id: str | None = None
    purchase_order_id: str | None = None
    due_date: dt.date | None = None
    amount_received: Decimal = ZERO
    status: InvoiceStatus = InvoiceStatus.DRAFT

    @property
    def counterparty_id(self) -> str | None:
        return self.customer_id

    @property
    def balance_due(self) -> Decimal:
        """What is still owed, never negative."""
        return max(self.total - self.amount_received, ZERO)


class PurchaseOrder(FinancialDocument):
    """An order placed with a vendor."""

    vendor_id: str | None = None
    currency: str | None = None
    status: PurchaseOrderStatus = PurchaseOrderStatus.DRAFT

    @property
    def counterparty_id(self) -> str | None:
        return self.vendor_id


@dataclass(frozen=True)
class ForeignKey:
    """A header attribute that must resolve to a row in ``table``."""

    field: str
    table: str
    entity: str


@dataclass(frozen=True)
class DocumentDefinition:
    """Storage and validation metadata for one document kind."""

    kind: DocumentKind
    label: str
    table: str
    items_table: str
    parent_column: str
    model: type[FinancialDocument]
    foreign_keys: tuple[ForeignKey, ...]
    header_fields: tuple[str, ...]


CUSTOMER_FK = ForeignKey("customer_id", "customers", "Customer")
VENDOR_FK = ForeignKey("vendor_id", "vendors", "Vendor")

QUOTE_DEFINITION = DocumentDefinition(
    kind=DocumentKind.QUOTE,
    label="Quote",
    table="quotes",
    items_table="quote_items",
    parent_column="quote_id",
    model=Quote,
    foreign_keys=(CUSTOMER_FK,),
    header_fields=("customer_id", "valid_until", "currency"),
)

INVOICE_DEFINITION = DocumentDefinition(
    kind=DocumentKind.INVOICE,
    label="Invoice",
    table="invoices",
    items_table="invoice_items",
    parent_column="invoice_id",
    model=Invoice,
    foreign_keys=(
        CUSTOMER_FK,
        VENDOR_FK,
        ForeignKey("quote_id", "quotes", "Quote"),
        ForeignKey("purchase_order_id", "purchase_orders", "Purchase Order"),
    ),
    header_fields=(
        "customer_id",
        "vendor_id",
        "quote_id",
        "purchase_order_id",
        "due_date",
        "amount_received",
        "status",
    ),
)

PURCHASE_ORDER_DEFINITION = DocumentDefinition(
    kind=DocumentKind.PURCHASE_ORDER,
    label="Purchase Order",
    table="purchase_orders",
    items_table="purchase_order_items",
    parent_column="purchase_order_id",
    model=PurchaseOrder,
    foreign_keys=(VENDOR_FK,),
    header_fields=("vendor_id", "currency", "status"),
)

DOCUMENT_DEFINITIONS: dict[DocumentKind, DocumentDefinition] = {
    d.kind: d
    for d in (QUOTE_DEFINITION, INVOICE_DEFINITION, PURCHASE_ORDER_DEFINITION)
}
