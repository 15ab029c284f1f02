"""
Domain exceptions for Fleetdesk.

Every error the core raises derives from FleetdeskError and carries a
machine-readable code used by the HTTP layer.
"""

from typing import Any


class FleetdeskError(Exception):
    """Base exception for all Fleetdesk errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Storage Exceptions
class StorageError(FleetdeskError):
    """Unexpected failure from the persistence layer."""

    pass


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


class ConstraintViolationError(StorageError):
    """The storage engine rejected a write on a UNIQUE or FOREIGN KEY constraint.

    Carries the engine's raw message so the reference guard can work out
    which user-facing error it stands for.
    """

    def __init__(self, message: str, table: str, operation: str):
        super().__init__(
            message,
            code="CONSTRAINT_VIOLATION",
            details={"table": table, "operation": operation},
        )
        self.table = table
        self.operation = operation


# Lookup / integrity exceptions
class NotFoundError(FleetdeskError):
    """Requested entity does not exist."""

    def __init__(self, entity: str, entity_id: str):
        super().__init__(
            f"{entity} not found: {entity_id}",
            code="NOT_FOUND",
            details={"entity": entity, "id": entity_id},
        )


class DuplicateKeyError(FleetdeskError):
    """A natural key (document number, vehicle number) is already taken."""

    def __init__(self, entity: str, value: str, field_label: str = "number"):
        super().__init__(
            f'{entity} {field_label} "{value}" already exists',
            code="DUPLICATE_KEY",
            details={"entity": entity, "field": field_label, "value": value},
        )


class MissingReferenceError(FleetdeskError):
    """A supplied foreign key does not resolve."""

    def __init__(self, entity: str, entity_id: str):
        super().__init__(
            f'{entity} with ID "{entity_id}" does not exist',
            code="MISSING_REFERENCE",
            details={"entity": entity, "id": entity_id},
        )


class BlockedDeleteError(FleetdeskError):
    """Delete refused because other records still cite the entity."""

    def __init__(
        self,
        entity: str,
        message: str,
        references: list[dict[str, str]] | None = None,
    ):
        super().__init__(
            message,
            code="BLOCKED_DELETE",
            details={"entity": entity, "references": references or []},
        )


class ValidationError(FleetdeskError):
    """Structurally invalid input."""

    def __init__(self, message: str, field: str | None = None, value: Any = None):
        super().__init__(
            message,
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "value": str(value)[:100] if value is not None else None,
            },
        )


# Rendering
class RenderingError(FleetdeskError):
    """Document rendering failed."""

    def __init__(self, document: str, reason: str):
        super().__init__(
            f"Could not render {document}: {reason}",
            code="RENDERING_FAILED",
            details={"document": document, "reason": reason},
        )

