"""Tests for the reference integrity guard."""

from unittest.mock import AsyncMock

import pytest

from src.core.exceptions import (
    BlockedDeleteError,
    ConstraintViolationError,
    DuplicateKeyError,
    MissingReferenceError,
)
from src.core.interfaces.storage import IReferenceStore, ReferenceRule
from src.core.services.reference_guard import (
    REFERENCE_RULES,
    CheckStatus,
    Reference,
    ReferenceGuard,
    format_reference_error,
)


@pytest.fixture
def store() -> AsyncMock:
    store = AsyncMock(spec=IReferenceStore)
    store.find_id_by_value.return_value = None
    store.exists.return_value = True
    store.find_reference_numbers.return_value = []
    return store


@pytest.fixture
def guard(store: AsyncMock) -> ReferenceGuard:
    return ReferenceGuard(store)


class TestFormatReferenceError:
    def test_empty(self):
        assert format_reference_error("Quote", []) == ""

    def test_single_reference(self):
        message = format_reference_error("Quote", [Reference("Invoice", "INV-001")])
        assert message == "Cannot delete Quote as it is referenced in Invoice INV-001"

    def test_multiple_references_listed(self):
        message = format_reference_error(
            "Customer",
            [Reference("Quote", "Q-001"), Reference("Invoice", "INV-001")],
        )
        assert message == (
            "Cannot delete Customer as it is referenced in:\n"
            "- Quote Q-001\n"
            "- Invoice INV-001"
        )


class TestUniqueness:
    async def test_free_value_ok(self, guard: ReferenceGuard, store: AsyncMock):
        result = await guard.check_uniqueness("quotes", "number", "Q-001", entity="Quote")

        assert result.ok
        store.find_id_by_value.assert_awaited_once_with("quotes", "number", "Q-001", None)

    async def test_taken_value_is_duplicate(self, guard: ReferenceGuard, store: AsyncMock):
        store.find_id_by_value.return_value = "other-id"

        result = await guard.check_uniqueness("quotes", "number", "Q-001", entity="Quote")

        assert result.status is CheckStatus.DUPLICATE
        with pytest.raises(DuplicateKeyError, match='Quote number "Q-001" already exists'):
            result.raise_for_status()

    async def test_exclude_id_passed_through(self, guard: ReferenceGuard, store: AsyncMock):
        await guard.ensure_unique("quotes", "number", "Q-001", entity="Quote", exclude_id="q1")
        store.find_id_by_value.assert_awaited_once_with("quotes", "number", "Q-001", "q1")

    async def test_vehicle_number_label(self, guard: ReferenceGuard, store: AsyncMock):
        store.find_id_by_value.return_value = "v2"
        with pytest.raises(DuplicateKeyError, match='Vehicle Number "DXB-1" already exists'):
            await guard.ensure_unique(
                "vehicles",
                "vehicle_number",
                "DXB-1",
                entity="Vehicle",
                field_label="Number",
            )


class TestExists:
    async def test_none_always_passes(self, guard: ReferenceGuard, store: AsyncMock):
        result = await guard.check_exists("customers", None, entity="Customer")

        assert result.ok
        store.exists.assert_not_awaited()

    async def test_unknown_id_missing(self, guard: ReferenceGuard, store: AsyncMock):
        store.exists.return_value = False

        with pytest.raises(MissingReferenceError, match='Customer with ID "c9" does not exist'):
            await guard.ensure_exists("customers", "c9", entity="Customer")


class TestNoReferences:
    async def test_unreferenced_entity_deletable(self, guard: ReferenceGuard):
        result = await guard.check_no_references("Quote", "q1")
        assert result.ok

    async def test_entity_without_rules_deletable(self, guard: ReferenceGuard, store: AsyncMock):
        assert (await guard.check_no_references("Payslip", "p1")).ok
        store.find_reference_numbers.assert_not_awaited()

    async def test_single_reference_blocks(self, guard: ReferenceGuard, store: AsyncMock):
        store.find_reference_numbers.return_value = ["INV-001"]

        with pytest.raises(BlockedDeleteError) as exc_info:
            await guard.ensure_deletable("Quote", "q1")

        assert str(exc_info.value) == "Cannot delete Quote as it is referenced in Invoice INV-001"
        assert exc_info.value.details["references"] == [{"type": "Invoice", "number": "INV-001"}]

    async def test_references_across_rules_in_rule_order(self, store: AsyncMock):
        async def numbers(rule: ReferenceRule, entity_id: str) -> list[str]:
            return {"quotes": ["Q-001"], "invoices": ["INV-001", "INV-002"]}[rule.table]

        store.find_reference_numbers.side_effect = numbers
        result = await ReferenceGuard(store).check_no_references("Customer", "c1")

        assert result.status is CheckStatus.BLOCKED
        assert [(r.type, r.number) for r in result.references] == [
            ("Quote", "Q-001"),
            ("Invoice", "INV-001"),
            ("Invoice", "INV-002"),
        ]

    async def test_duplicates_collapsed(self, guard: ReferenceGuard, store: AsyncMock):
        # a vehicle on two lines of the same quote
        store.find_reference_numbers.return_value = ["Q-001", "Q-001"]

        result = await guard.check_no_references("Vehicle", "v1")

        assert len(result.references) == 1

    def test_rules_cover_every_deletable_entity(self):
        assert set(REFERENCE_RULES) == {
            "Quote",
            "Vehicle",
            "Employee",
            "Customer",
            "Vendor",
            "Purchase Order",
        }


class TestTranslateViolation:
    async def test_unique_failure_on_natural_key(self, guard: ReferenceGuard):
        violation = ConstraintViolationError(
            "UNIQUE constraint failed: quotes.number", table="quotes", operation="create"
        )

        error = await guard.translate_violation(
            violation, entity="Quote", natural_key=("number", "number", "Q-001")
        )

        assert isinstance(error, DuplicateKeyError)

    async def test_foreign_key_failure_names_missing_reference(
        self, guard: ReferenceGuard, store: AsyncMock
    ):
        store.exists.side_effect = lambda table, entity_id: table != "customers"
        violation = ConstraintViolationError(
            "FOREIGN KEY constraint failed", table="quotes", operation="create"
        )

        error = await guard.translate_violation(
            violation,
            entity="Quote",
            foreign_keys=[("customers", "c-gone", "Customer")],
        )

        assert isinstance(error, MissingReferenceError)
        assert error.details["id"] == "c-gone"

    async def test_foreign_key_failure_on_delete_blocks(
        self, guard: ReferenceGuard, store: AsyncMock
    ):
        store.find_reference_numbers.return_value = ["P-2025-01"]
        violation = ConstraintViolationError(
            "FOREIGN KEY constraint failed", table="employees", operation="delete"
        )

        error = await guard.translate_violation(violation, entity="Employee", deleting_id="e1")

        assert isinstance(error, BlockedDeleteError)
        assert "Payslip P-2025-01" in str(error)

    async def test_unclassified_violation_returned_as_is(self, guard: ReferenceGuard):
        violation = ConstraintViolationError(
            "CHECK constraint failed: status", table="invoices", operation="create"
        )

        error = await guard.translate_violation(violation, entity="Invoice")

        assert error is violation
