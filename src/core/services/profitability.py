"""
Vehicle profitability aggregation.

Summaries are recomputed from the vehicle's transactions on every call;
nothing is cached or stored.
"""

from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from src.config import get_logger
from src.core.entities.vehicle import (
    MonthlyProfitability,
    ProfitabilitySummary,
    TransactionType,
    VehicleTransaction,
)
from src.core.exceptions import NotFoundError
from src.core.interfaces.storage import IVehicleStore, IVehicleTransactionStore
from src.core.month_keys import (
    current_month_key,
    month_key,
    normalize_month_key,
    previous_month_key,
    trailing_month_keys,
)

logger = get_logger(__name__)

ZERO = Decimal("0")
TRAILING_MONTHS = 12


def transaction_month(transaction: VehicleTransaction) -> str | None:
    """Grouping key: the stored month, else the month of the transaction date."""
    key = normalize_month_key(transaction.month)
    # Unparseable stored months group by date so every key stays canonical
    if key is None and transaction.date is not None:
        key = month_key(transaction.date)
    return key


def group_by_month(
    transactions: Iterable[VehicleTransaction],
) -> dict[str, MonthlyProfitability]:
    """Roll transactions up into one entry per month key.

    Rows without any usable month are left out and logged.
    """
    groups: dict[str, MonthlyProfitability] = {}
    for tx in transactions:
        key = transaction_month(tx)
        if key is None:
            logger.warning("transaction_without_month", transaction_id=tx.id, vehicle_id=tx.vehicle_id)
            continue

        entry = groups.setdefault(key, MonthlyProfitability(month=key))
        if tx.transaction_type is TransactionType.REVENUE:
            entry.total_revenue += tx.amount
        else:
            entry.total_expenses += tx.amount
        entry.transaction_count += 1

    for entry in groups.values():
        entry.profit = entry.total_revenue - entry.total_expenses
    return groups


def sum_by_type(transactions: Iterable[VehicleTransaction], kind: TransactionType) -> Decimal:
    return sum((tx.amount for tx in transactions if tx.transaction_type is kind), ZERO)


def summarize_transactions(
    vehicle_id: str,
    transactions: Iterable[VehicleTransaction],
    today: date | None = None,
) -> ProfitabilitySummary:
    """Build the profitability summary of one vehicle from its transactions.

    Transactions of other vehicles are ignored. ``current_month`` and
    ``last_month`` stay None when those months have no transactions.
    """
    own = [tx for tx in transactions if tx.vehicle_id == vehicle_id]
    groups = group_by_month(own)
    months = [groups[key] for key in sorted(groups)]

    revenue = sum_by_type(own, TransactionType.REVENUE)
    expenses = sum_by_type(own, TransactionType.EXPENSE)

    this_month = current_month_key(today)
    trailing = [
        groups.get(key, MonthlyProfitability(month=key))
        for key in trailing_month_keys(this_month, TRAILING_MONTHS)
    ]

    return ProfitabilitySummary(
        vehicle_id=vehicle_id,
        months=months,
        all_time_revenue=revenue,
        all_time_expenses=expenses,
        all_time_profit=revenue - expenses,
        transaction_count=len(own),
        current_month=groups.get(this_month),
        last_month=groups.get(previous_month_key(this_month)),
        trailing_months=trailing,
    )


class ProfitabilityAggregator:
    """Loads a vehicle's transactions and summarizes them."""

    def __init__(
        self,
        vehicle_store: IVehicleStore,
        transaction_store: IVehicleTransactionStore,
    ):
        self._vehicles = vehicle_store
        self._transactions = transaction_store

    async def summarize(self, vehicle_id: str, today: date | None = None) -> ProfitabilitySummary:
        if await self._vehicles.get_vehicle(vehicle_id) is None:
            raise NotFoundError("Vehicle", vehicle_id)

        transactions = await self._transactions.list_transactions(vehicle_id=vehicle_id)
        summary = summarize_transactions(vehicle_id, transactions, today)

        logger.debug(
            "profitability_summarized",
            vehicle_id=vehicle_id,
            transactions=summary.transaction_count,
            months=len(summary.months),
        )
        return summary
