"""Tests for vehicle profitability aggregation."""

from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from src.core.entities.vehicle import TransactionType, Vehicle, VehicleTransaction
from src.core.exceptions import NotFoundError
from src.core.interfaces.storage import IVehicleStore, IVehicleTransactionStore
from src.core.services.profitability import (
    ProfitabilityAggregator,
    group_by_month,
    summarize_transactions,
    transaction_month,
)

TODAY = date(2025, 3, 15)


def tx(
    amount: str,
    kind: TransactionType = TransactionType.REVENUE,
    on: date | None = date(2025, 3, 1),
    month: str | None = None,
    vehicle_id: str = "v1",
) -> VehicleTransaction:
    return VehicleTransaction(
        vehicle_id=vehicle_id,
        transaction_type=kind,
        amount=Decimal(amount),
        date=on,
        month=month,
    )


class TestTransactionMonth:
    def test_stored_month_wins(self):
        assert transaction_month(tx("1", on=date(2025, 3, 1), month="2025-02")) == "2025-02"

    def test_falls_back_to_date(self):
        assert transaction_month(tx("1", on=date(2025, 3, 1))) == "2025-03"

    def test_unpadded_month_normalized(self):
        assert transaction_month(tx("1", month="2025-2")) == "2025-02"

    def test_malformed_month_uses_date(self):
        assert transaction_month(tx("1", on=date(2025, 3, 1), month="March")) == "2025-03"

    def test_no_month_no_date(self):
        assert transaction_month(tx("1", on=None)) is None


class TestGroupByMonth:
    def test_revenue_expense_and_profit(self):
        groups = group_by_month(
            [
                tx("1000"),
                tx("250", TransactionType.EXPENSE),
                tx("500", on=date(2025, 2, 10)),
            ]
        )

        march = groups["2025-03"]
        assert march.total_revenue == Decimal("1000")
        assert march.total_expenses == Decimal("250")
        assert march.profit == Decimal("750")
        assert march.transaction_count == 2
        assert groups["2025-02"].profit == Decimal("500")

    def test_rows_without_month_skipped(self):
        assert group_by_month([tx("10", on=None)]) == {}


class TestSummarizeTransactions:
    def test_current_and_last_month(self):
        summary = summarize_transactions(
            "v1",
            [tx("1000"), tx("400", on=date(2025, 2, 3)), tx("100", TransactionType.EXPENSE)],
            today=TODAY,
        )

        assert summary.current_month.month == "2025-03"
        assert summary.current_month.profit == Decimal("900")
        assert summary.last_month.month == "2025-02"
        assert summary.last_month.total_revenue == Decimal("400")

    def test_all_time_totals(self):
        summary = summarize_transactions(
            "v1",
            [tx("1000"), tx("300", TransactionType.EXPENSE, on=date(2024, 1, 5))],
            today=TODAY,
        )

        assert summary.all_time_revenue == Decimal("1000")
        assert summary.all_time_expenses == Decimal("300")
        assert summary.all_time_profit == Decimal("700")
        assert summary.transaction_count == 2

    def test_months_sorted_ascending(self):
        summary = summarize_transactions(
            "v1",
            [tx("1"), tx("1", on=date(2024, 12, 1)), tx("1", on=date(2025, 1, 1))],
            today=TODAY,
        )
        assert [m.month for m in summary.months] == ["2024-12", "2025-01", "2025-03"]

    def test_empty_months_are_null(self):
        summary = summarize_transactions("v1", [tx("50", on=date(2024, 6, 1))], today=TODAY)

        assert summary.current_month is None
        assert summary.last_month is None

    def test_trailing_twelve_zero_filled(self):
        summary = summarize_transactions("v1", [tx("50")], today=TODAY)

        assert len(summary.trailing_months) == 12
        assert summary.trailing_months[0].month == "2024-04"
        assert summary.trailing_months[-1].month == "2025-03"
        assert summary.trailing_months[-1].total_revenue == Decimal("50")
        assert summary.trailing_months[0].transaction_count == 0

    def test_other_vehicles_ignored(self):
        summary = summarize_transactions(
            "v1",
            [tx("100"), tx("999", vehicle_id="v2")],
            today=TODAY,
        )
        assert summary.all_time_revenue == Decimal("100")

    def test_no_transactions(self):
        summary = summarize_transactions("v1", [], today=TODAY)

        assert summary.months == []
        assert summary.all_time_profit == Decimal("0")
        assert summary.transaction_count == 0

    def test_loss_month(self):
        summary = summarize_transactions(
            "v1",
            [tx("100"), tx("400", TransactionType.EXPENSE)],
            today=TODAY,
        )
        assert summary.current_month.profit == Decimal("-300")


class TestProfitabilityAggregator:
    async def test_unknown_vehicle(self):
        vehicles = AsyncMock(spec=IVehicleStore)
        vehicles.get_vehicle.return_value = None

        aggregator = ProfitabilityAggregator(vehicles, AsyncMock(spec=IVehicleTransactionStore))

        with pytest.raises(NotFoundError):
            await aggregator.summarize("missing")

    async def test_loads_vehicle_transactions(self):
        vehicles = AsyncMock(spec=IVehicleStore)
        vehicles.get_vehicle.return_value = Vehicle(id="v1", vehicle_number="DXB-1")
        transactions = AsyncMock(spec=IVehicleTransactionStore)
        transactions.list_transactions.return_value = [tx("700")]

        summary = await ProfitabilityAggregator(vehicles, transactions).summarize("v1", TODAY)

        transactions.list_transactions.assert_awaited_once_with(vehicle_id="v1")
        assert summary.current_month.total_revenue == Decimal("700")
