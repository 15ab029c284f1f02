"""
Fleet-wide finance metrics built from every vehicle transaction.

Per-vehicle figures reuse the monthly grouping of the profitability
aggregator so both views agree on month assignment.
"""

from collections import Counter, defaultdict
from collections.abc import Sequence
from datetime import date
from decimal import Decimal

from src.core.entities.dashboard import (
    CategoryTotal,
    CustomerRevenue,
    FleetMetrics,
    FleetOperationalMetrics,
    FleetOverview,
    FleetTimeMetrics,
    FleetVehicleMetrics,
    VehicleRanking,
)
from src.core.entities.financial_document import Invoice
from src.core.entities.party import Customer
from src.core.entities.vehicle import (
    MonthlyProfitability,
    TransactionType,
    Vehicle,
    VehicleTransaction,
)
from src.core.month_keys import current_month_key, previous_month_key, trailing_month_keys
from src.core.services.dashboard import customer_display_name
from src.core.services.profitability import group_by_month, sum_by_type

ZERO = Decimal("0")
HUNDRED = Decimal("100")

DEFAULT_CATEGORIES = {
    TransactionType.REVENUE: "Rental Income",
    TransactionType.EXPENSE: "Other",
}


def _percent(part: Decimal, whole: Decimal) -> Decimal:
    return part / whole * HUNDRED if whole else ZERO


def _growth(current: Decimal, previous: Decimal) -> Decimal | None:
    """Percent change against ``previous``; None when there is no base."""
    if not previous:
        return None
    return (current - previous) / abs(previous) * HUNDRED


def _rank_vehicles(
    vehicles: Sequence[Vehicle],
    transactions: Sequence[VehicleTransaction],
) -> list[VehicleRanking]:
    by_vehicle: dict[str, list[VehicleTransaction]] = defaultdict(list)
    for tx in transactions:
        by_vehicle[tx.vehicle_id].append(tx)

    rankings = []
    for vehicle in vehicles:
        own = by_vehicle.get(vehicle.id or "", [])
        revenue = sum_by_type(own, TransactionType.REVENUE)
        expenses = sum_by_type(own, TransactionType.EXPENSE)
        rankings.append(
            VehicleRanking(
                vehicle_id=vehicle.id or "",
                vehicle_number=vehicle.vehicle_number,
                revenue=revenue,
                expenses=expenses,
                profit=revenue - expenses,
                transaction_count=len(own),
            )
        )
    return rankings


def _time_metrics(
    transactions: Sequence[VehicleTransaction],
    today: date | None,
) -> FleetTimeMetrics:
    groups = group_by_month(transactions)
    this_month = current_month_key(today)
    last_month = previous_month_key(this_month)

    current = groups.get(this_month, MonthlyProfitability(month=this_month))
    previous = groups.get(last_month, MonthlyProfitability(month=last_month))

    year_prefix = this_month[:5]
    ytd = MonthlyProfitability(month=this_month[:4])
    for key, entry in groups.items():
        if key.startswith(year_prefix) and key <= this_month:
            ytd.total_revenue += entry.total_revenue
            ytd.total_expenses += entry.total_expenses
            ytd.transaction_count += entry.transaction_count
    ytd.profit = ytd.total_revenue - ytd.total_expenses

    return FleetTimeMetrics(
        current_month=current,
        last_month=previous,
        revenue_growth=_growth(current.total_revenue, previous.total_revenue),
        profit_growth=_growth(current.profit, previous.profit),
        year_to_date=ytd,
        trend=[
            groups.get(key, MonthlyProfitability(month=key))
            for key in trailing_month_keys(this_month, 12)
        ],
    )


def _category_totals(transactions: Sequence[VehicleTransaction]) -> list[CategoryTotal]:
    totals: dict[tuple[str, TransactionType], CategoryTotal] = {}
    for tx in transactions:
        category = (tx.category or "").strip() or DEFAULT_CATEGORIES[tx.transaction_type]
        entry = totals.setdefault(
            (category, tx.transaction_type),
            CategoryTotal(category=category, transaction_type=tx.transaction_type.value),
        )
        entry.amount += tx.amount
        entry.transaction_count += 1
    return sorted(totals.values(), key=lambda c: (-c.amount, c.category))


def _customer_revenue(
    transactions: Sequence[VehicleTransaction],
    invoices: Sequence[Invoice],
    customers: Sequence[Customer],
) -> list[CustomerRevenue]:
    """Revenue attributed to customers through the transaction's invoice."""
    invoice_customer = {i.id: i.customer_id for i in invoices if i.customer_id}
    names = {c.id: customer_display_name(c) for c in customers}

    totals: dict[str, CustomerRevenue] = {}
    for tx in transactions:
        if tx.transaction_type is not TransactionType.REVENUE or not tx.invoice_id:
            continue
        customer_id = invoice_customer.get(tx.invoice_id)
        if customer_id is None:
            continue
        entry = totals.setdefault(
            customer_id,
            CustomerRevenue(customer_id=customer_id, name=names.get(customer_id, "Unknown")),
        )
        entry.revenue += tx.amount
        entry.transaction_count += 1
    return sorted(totals.values(), key=lambda c: (-c.revenue, c.name))


def build_fleet_metrics(
    vehicles: Sequence[Vehicle],
    transactions: Sequence[VehicleTransaction],
    invoices: Sequence[Invoice] = (),
    customers: Sequence[Customer] = (),
    today: date | None = None,
    top_n: int = 5,
) -> FleetMetrics:
    """Compute the fleet finance dashboard."""
    known = {v.id for v in vehicles}
    transactions = [tx for tx in transactions if tx.vehicle_id in known]

    revenue = sum_by_type(transactions, TransactionType.REVENUE)
    expenses = sum_by_type(transactions, TransactionType.EXPENSE)
    net = revenue - expenses
    vehicle_count = len(vehicles)

    rankings = _rank_vehicles(vehicles, transactions)
    active = [r for r in rankings if r.transaction_count]
    activity = Counter({r.vehicle_id: r.transaction_count for r in active})
    most_active_id = activity.most_common(1)[0][0] if activity else None

    overview = FleetOverview(
        total_revenue=revenue,
        total_expenses=expenses,
        net_profit=net,
        profit_margin=_percent(net, revenue),
        vehicle_count=vehicle_count,
        transaction_count=len(transactions),
        average_revenue_per_vehicle=revenue / vehicle_count if vehicle_count else ZERO,
        average_profit_per_vehicle=net / vehicle_count if vehicle_count else ZERO,
        average_transaction_value=(
            (revenue + expenses) / len(transactions) if transactions else ZERO
        ),
    )

    vehicle_metrics = FleetVehicleMetrics(
        profitable=sum(1 for r in active if r.profit > ZERO),
        loss_making=sum(1 for r in active if r.profit < ZERO),
        no_data=len(rankings) - len(active),
        top_by_revenue=sorted(active, key=lambda r: -r.revenue)[:top_n],
        top_by_profit=sorted(active, key=lambda r: -r.profit)[:top_n],
        bottom_by_profit=sorted(active, key=lambda r: r.profit)[:top_n],
    )

    return FleetMetrics(
        overview=overview,
        time_based=_time_metrics(transactions, today),
        vehicles=vehicle_metrics,
        categories=_category_totals(transactions),
        customers=_customer_revenue(transactions, invoices, customers),
        operational=FleetOperationalMetrics(
            expense_ratio=_percent(expenses, revenue),
            most_active_vehicle=next((r for r in active if r.vehicle_id == most_active_id), None),
        ),
    )
