"""
FastAPI application factory.

Creates and configures the main application instance.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware, TimeoutMiddleware
from src.api.middleware.error_handler import setup_exception_handlers
from src.api.routes import (
    customers_router,
    dashboard_router,
    employees_router,
    expense_categories_router,
    health_router,
    invoices_router,
    payslips_router,
    purchase_orders_router,
    quotes_router,
    vehicle_transactions_router,
    vehicles_router,
    vendors_router,
)
from src.config import configure_logging, get_logger, get_settings

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.

    Migrates the database on startup and closes the pool on shutdown.
    """
    from src.infrastructure.storage.sqlite import close_pool, get_pool
    from src.infrastructure.storage.sqlite.migrations.migrator import run_migrations

    settings = get_settings()
    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        environment=settings.environment,
    )

    try:
        await run_migrations(settings.storage.db_path)
        await get_pool()
    except Exception as e:
        logger.error("database_init_failed", error=str(e))
        raise
    logger.info("application_started", db_path=str(settings.storage.db_path))

    yield

    logger.info("application_stopping")
    await close_pool()
    logger.info("application_stopped")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()
    configure_logging()

    app = FastAPI(
        title="Fleetdesk API",
        description="Quotes, invoices, purchase orders and fleet finances for a vehicle rental business",
        version=settings.app_version,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    # Last added runs outermost
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(TimeoutMiddleware, timeout_seconds=settings.api.request_timeout_seconds)
    app.add_middleware(LoggingMiddleware)

    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    setup_exception_handlers(app)

    for router in (
        health_router,
        quotes_router,
        invoices_router,
        purchase_orders_router,
        vehicles_router,
        vehicle_transactions_router,
        expense_categories_router,
        customers_router,
        vendors_router,
        employees_router,
        payslips_router,
        dashboard_router,
    ):
        app.include_router(router)

    return app


# Create app instance
app = create_app()


# Root health endpoint (for k8s/docker health checks)
@app.get("/health")
async def root_health() -> dict[str, str]:
    """Simple health check at root level."""
    return {"status": "healthy", "version": get_settings().app_version}


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "src.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )
