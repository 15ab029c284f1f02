"""Tests for domain exceptions."""

from src.core.exceptions import (
    BlockedDeleteError,
    ConstraintViolationError,
    DatabaseError,
    DuplicateKeyError,
    FleetdeskError,
    MissingReferenceError,
    NotFoundError,
    RenderingError,
    StorageError,
    ValidationError,
)


class TestFleetdeskError:
    def test_default_code_is_class_name(self):
        error = FleetdeskError("boom")
        assert error.code == "FleetdeskError"
        assert error.details == {}

    def test_to_dict(self):
        error = FleetdeskError("boom", code="X", details={"a": 1})
        assert error.to_dict() == {"error": "X", "message": "boom", "details": {"a": 1}}


class TestMessages:
    def test_not_found(self):
        error = NotFoundError("Quote", "q1")
        assert str(error) == "Quote not found: q1"
        assert error.code == "NOT_FOUND"

    def test_duplicate_document_number(self):
        error = DuplicateKeyError("Invoice", "INV-001")
        assert str(error) == 'Invoice number "INV-001" already exists'

    def test_duplicate_vehicle_number(self):
        error = DuplicateKeyError("Vehicle", "DXB-1", "Number")
        assert str(error) == 'Vehicle Number "DXB-1" already exists'

    def test_missing_reference(self):
        error = MissingReferenceError("Customer", "c9")
        assert str(error) == 'Customer with ID "c9" does not exist'
        assert error.code == "MISSING_REFERENCE"

    def test_blocked_delete_keeps_references(self):
        error = BlockedDeleteError("Quote", "msg", [{"type": "Invoice", "number": "INV-1"}])
        assert error.code == "BLOCKED_DELETE"
        assert error.details["references"][0]["number"] == "INV-1"

    def test_validation_truncates_value(self):
        error = ValidationError("bad", field="notes", value="x" * 500)
        assert len(error.details["value"]) == 100

    def test_rendering(self):
        error = RenderingError("Quote Q-1", "font missing")
        assert "Quote Q-1" in str(error)


class TestHierarchy:
    def test_storage_errors(self):
        assert issubclass(DatabaseError, StorageError)
        assert issubclass(ConstraintViolationError, StorageError)
        assert issubclass(StorageError, FleetdeskError)

    def test_constraint_violation_keeps_raw_message(self):
        error = ConstraintViolationError(
            "UNIQUE constraint failed: quotes.number", table="quotes", operation="create"
        )
        assert error.message == "UNIQUE constraint failed: quotes.number"
        assert error.table == "quotes"
