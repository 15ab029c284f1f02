"""
Financial document PDF renderer using fpdf2.

One layout serves quotes, invoices and purchase orders: company header with
logo, document metadata, the line-item table and a totals block. Amounts
are rounded to two decimals here and nowhere else.
"""

import os
from abc import ABC, abstractmethod
from datetime import UTC, datetime
from decimal import ROUND_HALF_UP, Decimal

from fpdf import FPDF
from fpdf.enums import XPos, YPos
from fpdf.errors import FPDFException

from src.config import get_logger
from src.config.settings import PdfSettings, get_settings
from src.core.entities.financial_document import (
    DocumentDefinition,
    DocumentKind,
    FinancialDocument,
    Invoice,
    LineItem,
)
from src.core.exceptions import RenderingError

logger = get_logger(__name__)

TITLES = {
    DocumentKind.QUOTE: "QUOTATION",
    DocumentKind.INVOICE: "TAX INVOICE",
    DocumentKind.PURCHASE_ORDER: "PURCHASE ORDER",
}

PARTY_LABELS = {
    DocumentKind.QUOTE: "Customer",
    DocumentKind.INVOICE: "Customer",
    DocumentKind.PURCHASE_ORDER: "Vendor",
}

# S.No | Description | Vehicle | Basis | Qty | Unit Price | Tax % | Amount
COLUMN_WIDTHS = (12, 58, 28, 20, 16, 22, 14, 20)
COLUMN_HEADERS = ("S.No", "Description", "Vehicle", "Basis", "Qty", "Unit Price", "Tax %", "Amount")

_CENT = Decimal("0.01")


def format_amount(value: Decimal | None) -> str:
    """Two-decimal, thousands-separated display of an amount."""
    if value is None:
        return ""
    return f"{value.quantize(_CENT, rounding=ROUND_HALF_UP):,.2f}"


def format_number(value: Decimal | None) -> str:
    """Quantities and percentages without trailing zeros."""
    if value is None:
        return ""
    return f"{value.normalize():f}"


def latin1(text: str | None) -> str:
    """Core PDF fonts are Latin-1 only; anything else prints as '?'."""
    return (text or "").encode("latin-1", "replace").decode("latin-1")


class IDocumentPdfRenderer(ABC):
    """Interface for financial document PDF rendering."""

    @abstractmethod
    def render(
        self,
        document: FinancialDocument,
        definition: DocumentDefinition,
        party_name: str | None = None,
    ) -> bytes:
        """Render ``document`` into PDF bytes."""
        ...


class _DocumentPdf(FPDF):
    """FPDF subclass with a footer on every page."""

    def __init__(self, pdf_settings: PdfSettings) -> None:
        super().__init__()
        self._pdf_settings = pdf_settings
        self._generated = datetime.now(UTC).strftime("%Y-%m-%d %H:%M UTC")

    def footer(self) -> None:
        self.set_y(-15)
        self.set_font("Helvetica", "I", 8)
        self.cell(0, 5, latin1(self._pdf_settings.footer_text), align="L")
        self.set_x(-60)
        self.cell(0, 5, f"Page {self.page_no()} of {{nb}} | {self._generated}", align="R")


class Fpdf2DocumentRenderer(IDocumentPdfRenderer):
    """Renders quotes, invoices and purchase orders with fpdf2."""

    def __init__(
        self,
        pdf_settings: PdfSettings | None = None,
        default_currency: str | None = None,
    ) -> None:
        settings = get_settings()
        self._settings = pdf_settings or settings.pdf
        self._default_currency = default_currency or settings.business.default_currency

    def render(
        self,
        document: FinancialDocument,
        definition: DocumentDefinition,
        party_name: str | None = None,
    ) -> bytes:
        currency = getattr(document, "currency", None) or self._default_currency
        try:
            pdf = _DocumentPdf(self._settings)
            pdf.alias_nb_pages()
            pdf.set_auto_page_break(auto=True, margin=20)
            pdf.add_page()

            self._render_header(pdf, document, definition, party_name)
            self._render_separator(pdf)
            self._render_items_table(pdf, document.items)
            self._render_totals(pdf, document, currency)
            self._render_notes(pdf, document)

            return bytes(pdf.output())
        except FPDFException as e:
            logger.error(
                "pdf_render_failed",
                kind=definition.kind.value,
                document_id=document.id,
                error=str(e),
            )
            raise RenderingError(f"{definition.label} {document.number}", str(e)) from e

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def _render_header(
        self,
        pdf: FPDF,
        document: FinancialDocument,
        definition: DocumentDefinition,
        party_name: str | None,
    ) -> None:
        logo_path = self._settings.logo_path
        if logo_path and os.path.isfile(logo_path):
            pdf.image(logo_path, x=10, y=10, w=40, h=20)
        else:
            self._draw_logo_placeholder(pdf)

        pdf.set_xy(55, 10)
        pdf.set_font("Helvetica", "B", 10)
        pdf.cell(0, 5, latin1(self._settings.company_name), new_x=XPos.LMARGIN, new_y=YPos.NEXT)

        pdf.set_font("Helvetica", "", 8)
        contact_lines = [
            self._settings.company_address,
            f"Tel: {self._settings.company_phone}" if self._settings.company_phone else "",
            f"Email: {self._settings.company_email}" if self._settings.company_email else "",
        ]
        for line in filter(None, contact_lines):
            pdf.set_x(55)
            pdf.cell(0, 4, latin1(line), new_x=XPos.LMARGIN, new_y=YPos.NEXT)

        if pdf.get_y() < 32:
            pdf.set_y(32)

        pdf.ln(4)
        pdf.set_font("Helvetica", "B", 18)
        pdf.cell(0, 12, TITLES[definition.kind], align="C", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.ln(3)

        pdf.set_font("Helvetica", "", 10)
        meta = [
            f"{definition.label} No: {document.number}",
            f"Date: {document.date.isoformat()}",
        ]
        valid_until = getattr(document, "valid_until", None)
        if valid_until:
            meta.append(f"Valid Until: {valid_until.isoformat()}")
        due_date = getattr(document, "due_date", None)
        if due_date:
            meta.append(f"Due Date: {due_date.isoformat()}")
        if party_name:
            meta.append(f"{PARTY_LABELS[definition.kind]}: {party_name}")
        for line in meta:
            pdf.cell(0, 6, latin1(line), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.ln(3)

    @staticmethod
    def _draw_logo_placeholder(pdf: FPDF) -> None:
        x, y, w, h = 10, 10, 40, 20
        pdf.set_draw_color(180, 180, 180)
        pdf.rect(x, y, w, h)
        pdf.set_font("Helvetica", "I", 10)
        pdf.set_text_color(180, 180, 180)
        pdf.set_xy(x, y + 6)
        pdf.cell(w, 8, "LOGO", align="C")
        pdf.set_draw_color(0, 0, 0)
        pdf.set_text_color(0, 0, 0)

    @staticmethod
    def _render_separator(pdf: FPDF) -> None:
        y = pdf.get_y()
        pdf.set_draw_color(100, 100, 100)
        pdf.line(10, y, 200, y)
        pdf.set_draw_color(0, 0, 0)
        pdf.ln(4)

    @staticmethod
    def _render_items_table(pdf: FPDF, items: list[LineItem]) -> None:
        """Items table with a dark header row and alternating shading."""
        pdf.set_font("Helvetica", "B", 8)
        pdf.set_fill_color(70, 70, 70)
        pdf.set_text_color(255, 255, 255)
        for width, header in zip(COLUMN_WIDTHS, COLUMN_HEADERS, strict=True):
            pdf.cell(width, 7, header, border=1, fill=True, align="C")
        pdf.ln()
        pdf.set_text_color(0, 0, 0)

        pdf.set_font("Helvetica", "", 8)
        pdf.set_fill_color(240, 240, 240)
        for item in items:
            fill = item.serial_number % 2 == 0
            description = item.description or item.vehicle_type_label or ""
            cells = (
                (str(item.serial_number), "C"),
                (latin1(description[:40]), "L"),
                (latin1(item.vehicle_number), "L"),
                (item.rental_basis.value.title() if item.rental_basis else "", "C"),
                (format_number(item.quantity), "R"),
                (format_amount(item.unit_price), "R"),
                (format_number(item.tax_percent), "R"),
                (format_amount(item.line_total), "R"),
            )
            for width, (text, align) in zip(COLUMN_WIDTHS, cells, strict=True):
                pdf.cell(width, 6, text, border=1, align=align, fill=fill)
            pdf.ln()

        pdf.ln(3)

    @staticmethod
    def _render_totals(pdf: FPDF, document: FinancialDocument, currency: str) -> None:
        rows = [
            ("Sub Total:", document.sub_total),
            ("Tax:", document.total_tax),
        ]
        pdf.set_font("Helvetica", "", 10)
        for label, amount in rows:
            pdf.cell(150, 6, label, align="R")
            pdf.cell(0, 6, f"{currency} {format_amount(amount)}", align="R",
                     new_x=XPos.LMARGIN, new_y=YPos.NEXT)

        pdf.set_font("Helvetica", "B", 12)
        pdf.cell(150, 8, "Total:", align="R")
        pdf.cell(0, 8, f"{currency} {format_amount(document.total)}", align="R",
                 new_x=XPos.LMARGIN, new_y=YPos.NEXT)

        if isinstance(document, Invoice) and document.amount_received:
            pdf.set_font("Helvetica", "", 10)
            for label, amount in (
                ("Amount Received:", document.amount_received),
                ("Balance Due:", document.balance_due),
            ):
                pdf.cell(150, 6, label, align="R")
                pdf.cell(0, 6, f"{currency} {format_amount(amount)}", align="R",
                         new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.ln(3)

    @staticmethod
    def _render_notes(pdf: FPDF, document: FinancialDocument) -> None:
        for heading, text in (("Terms & Conditions", document.terms), ("Notes", document.notes)):
            if not text:
                continue
            pdf.set_font("Helvetica", "B", 10)
            pdf.cell(0, 7, heading, new_x=XPos.LMARGIN, new_y=YPos.NEXT)
            pdf.set_font("Helvetica", "", 9)
            pdf.multi_cell(0, 5, latin1(text), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
            pdf.ln(2)
