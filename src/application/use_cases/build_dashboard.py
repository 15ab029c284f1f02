"""
Build Dashboard Use Case.

Loads every quote, invoice, purchase order, payslip, employee, customer
and vendor and hands them to the dashboard rollup.
"""

from datetime import date

from src.config import get_logger, get_settings
from src.core.entities.dashboard import DashboardSummary
from src.core.entities.financial_document import DocumentKind
from src.core.interfaces.storage import (
    ICustomerStore,
    IEmployeeStore,
    IFinancialDocumentStore,
    IPayslipStore,
    IVendorStore,
)
from src.core.services.dashboard import DashboardInputs, build_dashboard

logger = get_logger(__name__)

# The rollup is a full scan; this only bounds a runaway table
SCAN_LIMIT = 100_000


class BuildDashboardUseCase:
    """
    Use case for the business dashboard.

    Recomputed on every request; nothing is cached.
    """

    def __init__(
        self,
        document_stores: dict[DocumentKind, IFinancialDocumentStore] | None = None,
        payslip_store: IPayslipStore | None = None,
        employee_store: IEmployeeStore | None = None,
        customer_store: ICustomerStore | None = None,
        vendor_store: IVendorStore | None = None,
    ):
        self._document_stores = document_stores
        self._payslip_store = payslip_store
        self._employee_store = employee_store
        self._customer_store = customer_store
        self._vendor_store = vendor_store

    async def _load_stores(self) -> None:
        from src.infrastructure.storage.sqlite import (
            get_customer_store,
            get_document_store,
            get_employee_store,
            get_payslip_store,
            get_vendor_store,
        )

        if self._document_stores is None:
            self._document_stores = {kind: await get_document_store(kind) for kind in DocumentKind}
        if self._payslip_store is None:
            self._payslip_store = await get_payslip_store()
        if self._employee_store is None:
            self._employee_store = await get_employee_store()
        if self._customer_store is None:
            self._customer_store = await get_customer_store()
        if self._vendor_store is None:
            self._vendor_store = await get_vendor_store()

    async def execute(self, today: date | None = None) -> DashboardSummary:
        await self._load_stores()
        stores = self._document_stores

        inputs = DashboardInputs(
            quotes=await stores[DocumentKind.QUOTE].list_documents(limit=SCAN_LIMIT),
            invoices=await stores[DocumentKind.INVOICE].list_documents(limit=SCAN_LIMIT),
            purchase_orders=await stores[DocumentKind.PURCHASE_ORDER].list_documents(
                limit=SCAN_LIMIT
            ),
            payslips=await self._payslip_store.list_payslips(),
            employees=await self._employee_store.list_employees(),
            customers=await self._customer_store.list_customers(),
            vendors=await self._vendor_store.list_vendors(),
        )

        business = get_settings().business
        summary = build_dashboard(
            inputs,
            today=today,
            currency=business.default_currency,
            top_n=business.dashboard_top_n,
            activity_limit=business.recent_activity_limit,
        )
        logger.info(
            "dashboard_built",
            month=summary.month,
            quotes=len(inputs.quotes),
            invoices=len(inputs.invoices),
        )
        return summary
