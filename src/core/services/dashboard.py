"""
Business dashboard rollup.

Derived view over quotes, invoices, purchase orders, payslips, employees
and customers. Everything is recomputed per request.
"""

from collections import defaultdict
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal

from src.core.entities.dashboard import (
    ActivityEntry,
    CustomerRanking,
    DashboardSummary,
    PartyBalance,
    PeriodTotals,
)
from src.core.entities.financial_document import (
    FinancialDocument,
    Invoice,
    InvoiceStatus,
    PurchaseOrder,
    PurchaseOrderStatus,
    Quote,
)
from src.core.entities.party import Customer, Vendor
from src.core.entities.payroll import Employee, Payslip
from src.core.month_keys import current_month_key, month_key, month_label, normalize_month_key

ZERO = Decimal("0")


@dataclass
class DashboardInputs:
    """Everything the rollup reads."""

    quotes: Sequence[Quote] = field(default_factory=list)
    invoices: Sequence[Invoice] = field(default_factory=list)
    purchase_orders: Sequence[PurchaseOrder] = field(default_factory=list)
    payslips: Sequence[Payslip] = field(default_factory=list)
    employees: Sequence[Employee] = field(default_factory=list)
    customers: Sequence[Customer] = field(default_factory=list)
    vendors: Sequence[Vendor] = field(default_factory=list)


def customer_display_name(customer: Customer | None) -> str:
    if customer is None:
        return "Unknown"
    return customer.company or customer.name or "Unknown"


def format_money(amount: Decimal, currency: str) -> str:
    return f"{currency} {amount:,.2f}"


def _period_totals(documents: Sequence[FinancialDocument], month: str) -> PeriodTotals:
    in_month = [d for d in documents if month_key(d.date) == month]
    return PeriodTotals(count=len(in_month), value=sum((d.total for d in in_month), ZERO))


def _document_timestamp(document: FinancialDocument) -> datetime:
    return document.created_at or datetime.combine(document.date, time.min)


def _strip_tz(value: datetime) -> datetime:
    return value.replace(tzinfo=None)


def build_recent_activity(
    inputs: DashboardInputs,
    currency: str,
    limit: int,
) -> list[ActivityEntry]:
    """Newest creations across documents, payroll and customers."""
    customers = {c.id: c for c in inputs.customers}
    employees = {e.id: e for e in inputs.employees}
    entries: list[ActivityEntry] = []

    for kind, documents in (("quote", inputs.quotes), ("invoice", inputs.invoices)):
        for document in documents:
            name = customer_display_name(customers.get(document.counterparty_id))
            entries.append(
                ActivityEntry(
                    kind=kind,
                    reference_id=document.id or "",
                    description=(
                        f"{document.number} created for {name}, "
                        f"value = {format_money(document.total, currency)}"
                    ),
                    occurred_at=_document_timestamp(document),
                )
            )

    for payslip in inputs.payslips:
        if payslip.created_at is None:
            continue
        employee = employees.get(payslip.employee_id)
        month = normalize_month_key(payslip.month)
        entries.append(
            ActivityEntry(
                kind="payslip",
                reference_id=payslip.id or "",
                description=(
                    f"Payslip generated for {employee.name if employee else 'Unknown'} "
                    f"({month_label(month) if month else 'Unknown Month'}), "
                    f"net pay = {format_money(payslip.net_pay, currency)}"
                ),
                occurred_at=payslip.created_at,
            )
        )

    for employee in inputs.employees:
        if employee.created_at is not None:
            entries.append(
                ActivityEntry(
                    kind="employee",
                    reference_id=employee.id or "",
                    description=f"Employee {employee.name} added",
                    occurred_at=employee.created_at,
                )
            )

    for customer in inputs.customers:
        if customer.created_at is not None:
            entries.append(
                ActivityEntry(
                    kind="customer",
                    reference_id=customer.id or "",
                    description=f"Customer {customer_display_name(customer)} added",
                    occurred_at=customer.created_at,
                )
            )

    entries.sort(key=lambda e: _strip_tz(e.occurred_at), reverse=True)
    return entries[:limit]


def build_dashboard(
    inputs: DashboardInputs,
    today: date | None = None,
    currency: str = "AED",
    top_n: int = 5,
    activity_limit: int = 5,
) -> DashboardSummary:
    """Compute the business dashboard for the month containing ``today``."""
    month = current_month_key(today)
    customers = {c.id: c for c in inputs.customers}
    vendors = {v.id: v for v in inputs.vendors}

    sent = [i for i in inputs.invoices if i.status is InvoiceStatus.INVOICE_SENT]
    paid = [i for i in inputs.invoices if i.status is InvoiceStatus.PAYMENT_RECEIVED]

    invoice_value: dict[str, Decimal] = defaultdict(lambda: ZERO)
    quote_value: dict[str, Decimal] = defaultdict(lambda: ZERO)
    outstanding: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for invoice in inputs.invoices:
        if invoice.customer_id in customers:
            invoice_value[invoice.customer_id] += invoice.total
    for quote in inputs.quotes:
        if quote.customer_id in customers:
            quote_value[quote.customer_id] += quote.total
    for invoice in sent:
        if invoice.customer_id in customers:
            outstanding[invoice.customer_id] += invoice.balance_due

    rankings = [
        CustomerRanking(
            customer_id=customer_id,
            name=customer_display_name(customers[customer_id]),
            invoice_value=invoice_value[customer_id],
            quote_value=quote_value[customer_id],
            total_value=invoice_value[customer_id] + quote_value[customer_id],
            outstanding=outstanding[customer_id],
        )
        for customer_id in set(invoice_value) | set(quote_value)
    ]
    rankings.sort(key=lambda r: (-r.total_value, r.name))

    receivables = [
        PartyBalance(party_id=cid, name=customer_display_name(customers[cid]), amount=amount)
        for cid, amount in outstanding.items()
        if amount > ZERO
    ]
    receivables.sort(key=lambda b: (-b.amount, b.name))

    payable: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for order in inputs.purchase_orders:
        if order.status is PurchaseOrderStatus.ACCEPTED and order.vendor_id in vendors:
            payable[order.vendor_id] += order.total
    payables = [
        PartyBalance(party_id=vid, name=vendors[vid].name, amount=amount)
        for vid, amount in payable.items()
        if amount > ZERO
    ]
    payables.sort(key=lambda b: (-b.amount, b.name))

    return DashboardSummary(
        month=month,
        quotes_this_month=_period_totals(inputs.quotes, month),
        invoices_this_month=_period_totals(inputs.invoices, month),
        outstanding=sum((i.balance_due for i in sent), ZERO),
        paid_invoices=len(paid),
        pending_invoices=len(sent),
        top_customers=rankings[:top_n],
        receivables=receivables,
        payables=payables,
        recent_activity=build_recent_activity(inputs, currency, activity_limit),
    )
