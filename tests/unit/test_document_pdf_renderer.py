"""Tests for the financial document PDF renderer."""

import datetime as dt
import zlib
from decimal import Decimal

import pytest

from src.config.settings import PdfSettings
from src.core.entities.financial_document import (
    INVOICE_DEFINITION,
    PURCHASE_ORDER_DEFINITION,
    QUOTE_DEFINITION,
    Invoice,
    LineItem,
    PurchaseOrder,
    Quote,
    RentalBasis,
)
from src.core.services import compute_totals
from src.infrastructure.pdf.document_pdf_renderer import (
    Fpdf2DocumentRenderer,
    format_amount,
    format_number,
    latin1,
)


def _extract_pdf_text(pdf_bytes: bytes) -> str:
    """Decompress the FlateDecode page streams and return their text."""
    texts = [pdf_bytes.decode("latin-1")]
    start_marker = b"stream\n"
    end_marker = b"\nendstream"
    idx = 0
    while (s := pdf_bytes.find(start_marker, idx)) != -1:
        s += len(start_marker)
        e = pdf_bytes.find(end_marker, s)
        if e == -1:
            break
        try:
            texts.append(zlib.decompress(pdf_bytes[s:e]).decode("latin-1"))
        except zlib.error:
            pass
        idx = e + len(end_marker)
    return "\n".join(texts)


@pytest.fixture
def pdf_settings() -> PdfSettings:
    return PdfSettings(
        company_name="Test Rentals",
        company_address="1 Test Street",
        company_phone="+971-4-000",
        company_email="info@test.example",
        footer_text="Test Footer",
        logo_path="",
    )


@pytest.fixture
def renderer(pdf_settings) -> Fpdf2DocumentRenderer:
    return Fpdf2DocumentRenderer(pdf_settings=pdf_settings, default_currency="AED")


def _items() -> list[LineItem]:
    calculated = compute_totals(
        [
            LineItem(
                description="Bus with driver",
                vehicle_number="DXB-1",
                rental_basis=RentalBasis.MONTHLY,
                quantity=Decimal("2"),
                unit_price=Decimal("500"),
                tax_percent=Decimal("5"),
            ),
            LineItem(vehicle_type_label="Pickup", quantity=Decimal("3"), unit_price=Decimal("100")),
        ]
    )
    return calculated.items


def _quote(**overrides) -> Quote:
    items = _items()
    calculated = compute_totals(items)
    data = {
        "id": "q1",
        "number": "Q-001",
        "date": dt.date(2025, 3, 1),
        "items": calculated.items,
        "sub_total": calculated.totals.sub_total,
        "total_tax": calculated.totals.total_tax,
        "total": calculated.totals.total,
        "terms": "Payment within 30 days",
    }
    return Quote(**(data | overrides))


class TestFormatting:
    def test_format_amount_rounds_half_up(self):
        assert format_amount(Decimal("1234.565")) == "1,234.57"

    def test_format_amount_none(self):
        assert format_amount(None) == ""

    def test_format_number_drops_trailing_zeros(self):
        assert format_number(Decimal("2.50")) == "2.5"
        assert format_number(Decimal("100")) == "100"

    def test_latin1_replaces_unsupported(self):
        assert latin1("Café") == "Café"
        assert latin1("شركة") == "????"
        assert latin1(None) == ""


class TestFpdf2DocumentRenderer:
    def test_quote_renders_pdf(self, renderer):
        pdf_bytes = renderer.render(_quote(), QUOTE_DEFINITION, party_name="Acme LLC")

        assert pdf_bytes.startswith(b"%PDF")
        text = _extract_pdf_text(pdf_bytes)
        assert "QUOTATION" in text
        assert "Q-001" in text
        assert "Acme LLC" in text
        assert "AED 1,350.00" in text

    def test_invoice_shows_balance(self, renderer):
        quote = _quote()
        invoice = Invoice(
            **quote.model_dump(exclude={"customer_id", "valid_until", "currency"}),
            amount_received=Decimal("1000"),
        )

        text = _extract_pdf_text(renderer.render(invoice, INVOICE_DEFINITION))

        assert "TAX INVOICE" in text
        assert "Balance Due:" in text
        assert "AED 350.00" in text

    def test_purchase_order_uses_own_currency(self, renderer):
        order = PurchaseOrder(
            id="po1",
            number="PO-7",
            date=dt.date(2025, 3, 2),
            currency="USD",
        )

        text = _extract_pdf_text(
            renderer.render(order, PURCHASE_ORDER_DEFINITION, party_name="Fuel Co")
        )

        assert "PURCHASE ORDER" in text
        assert "Vendor: Fuel Co" in text
        assert "USD 0.00" in text

    def test_many_items_paginate(self, renderer):
        items = compute_totals(
            [LineItem(description=f"Trip {n}", quantity=Decimal("1"), unit_price=Decimal("10")) for n in range(80)]
        ).items

        pdf_bytes = renderer.render(_quote(items=items), QUOTE_DEFINITION)

        assert "Page 2 of" in _extract_pdf_text(pdf_bytes)
