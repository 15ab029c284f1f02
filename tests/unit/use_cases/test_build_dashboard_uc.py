"""Unit tests for the dashboard use cases."""

import datetime as dt
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from src.application.use_cases.build_dashboard import SCAN_LIMIT, BuildDashboardUseCase
from src.application.use_cases.build_fleet_metrics import BuildFleetMetricsUseCase
from src.core.entities.financial_document import DocumentKind, Invoice, InvoiceStatus, Quote
from src.core.entities.party import Customer
from src.core.entities.vehicle import TransactionType, Vehicle, VehicleTransaction

TODAY = dt.date(2025, 3, 15)


def _store(method: str, rows) -> AsyncMock:
    store = AsyncMock()
    getattr(store, method).return_value = rows
    return store


@pytest.fixture
def customers():
    return _store("list_customers", [Customer(id="c1", name="Ali")])


class TestBuildDashboardUseCase:
    @pytest.fixture
    def document_stores(self):
        quote = Quote(id="q1", number="Q-1", date=TODAY, customer_id="c1", total=Decimal("500"))
        invoice = Invoice(
            id="i1",
            number="INV-1",
            date=TODAY,
            customer_id="c1",
            total=Decimal("1000"),
            amount_received=Decimal("400"),
            status=InvoiceStatus.INVOICE_SENT,
        )
        return {
            DocumentKind.QUOTE: _store("list_documents", [quote]),
            DocumentKind.INVOICE: _store("list_documents", [invoice]),
            DocumentKind.PURCHASE_ORDER: _store("list_documents", []),
        }

    async def test_execute(self, document_stores, customers):
        use_case = BuildDashboardUseCase(
            document_stores=document_stores,
            payslip_store=_store("list_payslips", []),
            employee_store=_store("list_employees", []),
            customer_store=customers,
            vendor_store=_store("list_vendors", []),
        )

        summary = await use_case.execute(today=TODAY)

        assert summary.month == "2025-03"
        assert summary.quotes_this_month.count == 1
        assert summary.invoices_this_month.value == Decimal("1000")
        assert summary.outstanding == Decimal("600")
        assert summary.pending_invoices == 1
        assert summary.top_customers[0].total_value == Decimal("1500")
        document_stores[DocumentKind.QUOTE].list_documents.assert_awaited_once_with(limit=SCAN_LIMIT)


class TestBuildFleetMetricsUseCase:
    async def test_execute(self, customers):
        vehicles = [Vehicle(id="v1", vehicle_number="DXB-1"), Vehicle(id="v2", vehicle_number="DXB-2")]
        transactions = [
            VehicleTransaction(
                id="t1",
                vehicle_id="v1",
                transaction_type=TransactionType.REVENUE,
                amount=Decimal("1000"),
                date=TODAY,
                month="2025-03",
            ),
            VehicleTransaction(
                id="t2",
                vehicle_id="v1",
                transaction_type=TransactionType.EXPENSE,
                amount=Decimal("250"),
                date=TODAY,
                month="2025-03",
            ),
        ]
        use_case = BuildFleetMetricsUseCase(
            vehicle_store=_store("list_vehicles", vehicles),
            transaction_store=_store("list_transactions", transactions),
            invoice_store=_store("list_documents", []),
            customer_store=customers,
        )

        metrics = await use_case.execute(today=TODAY)

        assert metrics.overview.total_revenue == Decimal("1000")
        assert metrics.overview.net_profit == Decimal("750")
        assert metrics.overview.vehicle_count == 2
        assert metrics.vehicles.profitable == 1
        assert metrics.vehicles.no_data == 1
        assert metrics.time_based.current_month.profit == Decimal("750")
