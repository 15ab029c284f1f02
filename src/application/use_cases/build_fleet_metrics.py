"""
Build Fleet Metrics Use Case.

Fleet-wide finance dashboard over every vehicle and transaction.
"""

from datetime import date

from src.config import get_logger, get_settings
from src.core.entities.dashboard import FleetMetrics
from src.core.entities.financial_document import DocumentKind
from src.core.interfaces.storage import (
    ICustomerStore,
    IFinancialDocumentStore,
    IVehicleStore,
    IVehicleTransactionStore,
)
from src.core.services.fleet_metrics import build_fleet_metrics

logger = get_logger(__name__)

SCAN_LIMIT = 100_000


class BuildFleetMetricsUseCase:
    """Use case for the fleet finance dashboard."""

    def __init__(
        self,
        vehicle_store: IVehicleStore | None = None,
        transaction_store: IVehicleTransactionStore | None = None,
        invoice_store: IFinancialDocumentStore | None = None,
        customer_store: ICustomerStore | None = None,
    ):
        self._vehicle_store = vehicle_store
        self._transaction_store = transaction_store
        self._invoice_store = invoice_store
        self._customer_store = customer_store

    async def _load_stores(self) -> None:
        from src.infrastructure.storage.sqlite import (
            get_customer_store,
            get_document_store,
            get_vehicle_store,
            get_vehicle_transaction_store,
        )

        if self._vehicle_store is None:
            self._vehicle_store = await get_vehicle_store()
        if self._transaction_store is None:
            self._transaction_store = await get_vehicle_transaction_store()
        if self._invoice_store is None:
            self._invoice_store = await get_document_store(DocumentKind.INVOICE)
        if self._customer_store is None:
            self._customer_store = await get_customer_store()

    async def execute(self, today: date | None = None) -> FleetMetrics:
        await self._load_stores()

        vehicles = await self._vehicle_store.list_vehicles(limit=SCAN_LIMIT)
        transactions = await self._transaction_store.list_transactions()
        metrics = build_fleet_metrics(
            vehicles,
            transactions,
            invoices=await self._invoice_store.list_documents(limit=SCAN_LIMIT),
            customers=await self._customer_store.list_customers(),
            today=today,
            top_n=get_settings().business.dashboard_top_n,
        )

        logger.info(
            "fleet_metrics_built",
            vehicles=len(vehicles),
            transactions=len(transactions),
        )
        return metrics
