"""Unit tests for VehicleTransactionService."""

from datetime import date, timedelta
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from src.core.entities.vehicle import TransactionType, VehicleTransaction
from src.core.exceptions import MissingReferenceError, NotFoundError, ValidationError
from src.core.interfaces.storage import IVehicleTransactionStore
from src.core.services.vehicle_transactions import VehicleTransactionService

TODAY = date(2025, 3, 15)


@pytest.fixture
def store() -> AsyncMock:
    store = AsyncMock(spec=IVehicleTransactionStore)
    store.create_transaction.side_effect = lambda t: t.model_copy(update={"id": "t1"})
    store.update_transaction.side_effect = lambda t: t
    store.list_transactions.return_value = []
    return store


@pytest.fixture
def service(store, guard) -> VehicleTransactionService:
    return VehicleTransactionService(store, guard, lookback_months=12)


def _tx(**kwargs) -> VehicleTransaction:
    defaults = {
        "vehicle_id": "v1",
        "transaction_type": TransactionType.REVENUE,
        "amount": Decimal("500"),
        "date": date(2025, 3, 10),
    }
    return VehicleTransaction(**(defaults | kwargs))


class TestValidate:
    def test_valid(self, service):
        service.validate(_tx(), TODAY)

    @pytest.mark.parametrize("amount", ["0", "-5"])
    def test_amount_must_be_positive(self, service, amount):
        with pytest.raises(ValidationError, match="greater than 0"):
            service.validate(_tx(amount=Decimal(amount)), TODAY)

    def test_date_required(self, service):
        with pytest.raises(ValidationError, match="date is required"):
            service.validate(_tx(date=None), TODAY)

    def test_future_date_rejected(self, service):
        with pytest.raises(ValidationError, match="future"):
            service.validate(_tx(date=TODAY + timedelta(days=1)), TODAY)

    def test_today_allowed(self, service):
        service.validate(_tx(date=TODAY), TODAY)

    def test_lookback_boundary(self, service):
        service.validate(_tx(date=date(2024, 3, 15)), TODAY)
        with pytest.raises(ValidationError, match="12 months in the past"):
            service.validate(_tx(date=date(2024, 3, 14)), TODAY)


class TestCreate:
    async def test_month_derived_from_date(self, service, store):
        created = await service.create(_tx(date=date(2025, 2, 28), month="1999-01"), TODAY)

        assert created.month == "2025-02"
        store.create_transaction.assert_awaited_once()

    async def test_unknown_vehicle(self, service, reference_store, store):
        reference_store.exists.return_value = False

        with pytest.raises(MissingReferenceError, match='Vehicle with ID "v1" does not exist'):
            await service.create(_tx(), TODAY)
        store.create_transaction.assert_not_awaited()

    async def test_optional_links_checked_when_set(self, service, reference_store):
        await service.create(_tx(invoice_id="i1", employee_id="e1"), TODAY)

        tables = [c.args[0] for c in reference_store.exists.await_args_list]
        assert tables == ["vehicles", "employees", "invoices"]


class TestUpdate:
    async def test_date_change_moves_month(self, service, store):
        store.get_transaction.return_value = _tx(id="t1", month="2025-03")

        updated = await service.update("t1", {"date": date(2025, 1, 5)}, TODAY)

        assert updated.month == "2025-01"

    async def test_month_not_writable(self, service, store):
        store.get_transaction.return_value = _tx(id="t1", month="2025-03")

        updated = await service.update("t1", {"month": "2020-01", "amount": Decimal("9")}, TODAY)

        assert updated.month == "2025-03"
        assert updated.amount == Decimal("9")

    async def test_merged_row_revalidated(self, service, store):
        store.get_transaction.return_value = _tx(id="t1")
        with pytest.raises(ValidationError):
            await service.update("t1", {"amount": Decimal("0")}, TODAY)

    async def test_old_row_description_editable(self, service, store):
        store.get_transaction.return_value = _tx(id="t1", date=date(2024, 1, 10), month="2024-01")

        updated = await service.update("t1", {"description": "fix typo"}, TODAY)

        assert updated.description == "fix typo"
        assert updated.date == date(2024, 1, 10)
        assert updated.month == "2024-01"
        store.update_transaction.assert_awaited_once()

    async def test_old_row_amount_checked_without_date_window(self, service, store):
        store.get_transaction.return_value = _tx(id="t1", date=date(2024, 1, 10))

        updated = await service.update("t1", {"amount": Decimal("75")}, TODAY)
        assert updated.amount == Decimal("75")

        with pytest.raises(ValidationError, match="greater than 0"):
            await service.update("t1", {"amount": Decimal("-1")}, TODAY)

    async def test_new_date_checked_against_window(self, service, store):
        store.get_transaction.return_value = _tx(id="t1")

        with pytest.raises(ValidationError, match="12 months in the past"):
            await service.update("t1", {"date": date(2023, 12, 1)}, TODAY)
        store.update_transaction.assert_not_awaited()

    async def test_only_changed_references_checked(self, service, store, reference_store):
        store.get_transaction.return_value = _tx(id="t1", employee_id="e1")

        await service.update("t1", {"category": "Fuel"}, TODAY)

        reference_store.exists.assert_not_awaited()

    async def test_unknown(self, service, store):
        store.get_transaction.return_value = None
        with pytest.raises(NotFoundError):
            await service.update("t9", {"amount": Decimal("1")}, TODAY)


class TestListAndDelete:
    async def test_bad_month_filter(self, service):
        with pytest.raises(ValidationError, match="YYYY-MM"):
            await service.list_transactions(month="March")

    async def test_filters_passed_to_store(self, service, store):
        await service.list_transactions(vehicle_id="v1", month="2025-03")
        store.list_transactions.assert_awaited_once_with(vehicle_id="v1", month="2025-03")

    async def test_delete_unknown(self, service, store):
        store.delete_transaction.return_value = False
        with pytest.raises(NotFoundError):
            await service.delete("t9")
