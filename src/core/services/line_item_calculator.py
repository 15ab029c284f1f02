"""
Line-item arithmetic shared by quotes, invoices and purchase orders.

Amounts are Decimals and nothing is rounded here; rounding to two places
happens when a document is displayed or rendered.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal

from src.core.entities.financial_document import DocumentTotals, LineItem

ZERO = Decimal("0")
HUNDRED = Decimal("100")


@dataclass(frozen=True)
class CalculatedItems:
    """Recomputed copies of the input items plus the document totals."""

    items: list[LineItem]
    totals: DocumentTotals


def _amount(value: Decimal | None) -> Decimal:
    """Missing inputs count as zero."""
    return ZERO if value is None else value


def compute_line(item: LineItem, position: int) -> LineItem:
    """Return a copy of ``item`` with its derived amounts filled in.

    ``position`` is the zero-based index of the item in its document.
    Negative quantities, prices and out-of-range tax percents are carried
    through unchanged.
    """
    gross = _amount(item.quantity) * _amount(item.unit_price)
    tax = gross * _amount(item.tax_percent) / HUNDRED
    return item.model_copy(
        update={
            "serial_number": position + 1,
            "gross_amount": gross,
            "line_tax_amount": tax,
            "line_total": gross + tax,
        }
    )


def compute_totals(items: Sequence[LineItem]) -> CalculatedItems:
    """Compute per-item amounts and document totals.

    The input sequence and its items are left untouched; calling this twice
    on the same input gives identical results.
    """
    calculated = [compute_line(item, index) for index, item in enumerate(items)]

    sub_total = sum((item.gross_amount for item in calculated), ZERO)
    total_tax = sum((item.line_tax_amount for item in calculated), ZERO)

    return CalculatedItems(
        items=calculated,
        totals=DocumentTotals(
            sub_total=sub_total,
            total_tax=total_tax,
            total=sub_total + total_tax,
        ),
    )
