"""API route modules."""

from src.api.routes.dashboard import router as dashboard_router
from src.api.routes.directory import customers_router, vendors_router
from src.api.routes.expense_categories import router as expense_categories_router
from src.api.routes.documents import invoices_router, purchase_orders_router, quotes_router
from src.api.routes.health import router as health_router
from src.api.routes.payroll import employees_router, payslips_router
from src.api.routes.vehicles import router as vehicles_router
from src.api.routes.vehicles import transactions_router as vehicle_transactions_router

__all__ = [
    "health_router",
    "quotes_router",
    "invoices_router",
    "purchase_orders_router",
    "vehicles_router",
    "vehicle_transactions_router",
    "expense_categories_router",
    "customers_router",
    "vendors_router",
    "employees_router",
    "payslips_router",
    "dashboard_router",
]
