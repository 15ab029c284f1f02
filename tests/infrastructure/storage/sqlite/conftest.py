"""Pytest fixtures for SQLite storage tests."""

import datetime as dt
from decimal import Decimal

import pytest

from src.core.entities.financial_document import LineItem, Quote, RentalBasis
from src.core.entities.party import Customer, Vendor
from src.core.entities.vehicle import Vehicle
from src.core.services import compute_totals
from src.infrastructure.storage.sqlite import (
    SQLiteCustomerStore,
    SQLiteVehicleStore,
    SQLiteVendorStore,
)


@pytest.fixture
async def customer(migrated_db) -> Customer:
    return await SQLiteCustomerStore().create_customer(Customer(name="Ali", company="Acme LLC"))


@pytest.fixture
async def vendor(migrated_db) -> Vendor:
    return await SQLiteVendorStore().create_vendor(Vendor(name="Fuel Co"))


@pytest.fixture
async def vehicle(migrated_db) -> Vehicle:
    return await SQLiteVehicleStore().create_vehicle(Vehicle(vehicle_number="DXB-1", vehicle_type="Bus"))


def _make_quote(
    number: str = "Q-001",
    customer_id: str | None = None,
    vehicle_id: str | None = None,
) -> Quote:
    calculated = compute_totals(
        [
            LineItem(
                vehicle_type_id=vehicle_id,
                description="Bus with driver",
                rental_basis=RentalBasis.MONTHLY,
                quantity=Decimal("2"),
                unit_price=Decimal("1500.50"),
                tax_percent=Decimal("5"),
            ),
            LineItem(description="Fuel surcharge", quantity=Decimal("1"), unit_price=Decimal("99.99")),
        ]
    )
    return Quote(
        number=number,
        date=dt.date(2025, 3, 1),
        customer_id=customer_id,
        currency="AED",
        items=calculated.items,
        sub_total=calculated.totals.sub_total,
        total_tax=calculated.totals.total_tax,
        total=calculated.totals.total,
    )


@pytest.fixture
def make_quote():
    """Factory for a two-line quote with its totals already computed."""
    return _make_quote
