"""PDF generation infrastructure."""

from src.infrastructure.pdf.document_pdf_renderer import (
    Fpdf2DocumentRenderer,
    IDocumentPdfRenderer,
)

__all__ = [
    "Fpdf2DocumentRenderer",
    "IDocumentPdfRenderer",
]
