"""
Reference integrity guard.

Checks natural-key uniqueness, foreign-key existence and pre-delete
references before a write, returning typed results. The storage engine's
own UNIQUE and FOREIGN KEY constraints stay authoritative; when one of them
fires because a concurrent writer got in between check and write,
``translate_violation`` turns the engine message into the same error the
pre-check would have produced.
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from src.config import get_logger
from src.core.exceptions import (
    BlockedDeleteError,
    ConstraintViolationError,
    DuplicateKeyError,
    FleetdeskError,
    MissingReferenceError,
)
from src.core.interfaces.storage import IReferenceStore, ReferenceRule

logger = get_logger(__name__)


# Tables scanned before deleting an entity, keyed by entity label.
REFERENCE_RULES: dict[str, tuple[ReferenceRule, ...]] = {
    "Quote": (ReferenceRule("Invoice", "invoices", "quote_id"),),
    "Vehicle": (
        ReferenceRule(
            "Quote",
            "quote_items",
            "vehicle_type_id",
            via_table="quotes",
            via_column="quote_id",
        ),
    ),
    "Employee": (ReferenceRule("Payslip", "payslips", "employee_id", number_column="month"),),
    "Customer": (
        ReferenceRule("Quote", "quotes", "customer_id"),
        ReferenceRule("Invoice", "invoices", "customer_id"),
    ),
    "Vendor": (
        ReferenceRule("Purchase Order", "purchase_orders", "vendor_id"),
        ReferenceRule("Invoice", "invoices", "vendor_id"),
    ),
    "Purchase Order": (ReferenceRule("Invoice", "invoices", "purchase_order_id"),),
    # Transactions store the category name, so the lookup value is the name.
    "Expense Category": (
        ReferenceRule("Vehicle Transaction", "vehicle_transactions", "category", number_column="id"),
    ),
}

_UNIQUE_RE = re.compile(r"UNIQUE constraint failed: (\w+)\.(\w+)")


@dataclass(frozen=True)
class Reference:
    """A record citing the entity about to be deleted."""

    type: str
    number: str


class CheckStatus(str, Enum):
    OK = "ok"
    DUPLICATE = "duplicate"
    MISSING = "missing"
    BLOCKED = "blocked"


@dataclass(frozen=True)
class CheckResult:
    """Outcome of a single guard check."""

    status: CheckStatus
    entity: str = ""
    value: str = ""
    field_label: str = "number"
    references: tuple[Reference, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return self.status is CheckStatus.OK

    def to_error(self) -> FleetdeskError | None:
        """The domain error this result stands for, or None when ok."""
        if self.status is CheckStatus.DUPLICATE:
            return DuplicateKeyError(self.entity, self.value, self.field_label)
        if self.status is CheckStatus.MISSING:
            return MissingReferenceError(self.entity, self.value)
        if self.status is CheckStatus.BLOCKED:
            return BlockedDeleteError(
                self.entity,
                format_reference_error(self.entity, self.references),
                [{"type": r.type, "number": r.number} for r in self.references],
            )
        return None

    def raise_for_status(self) -> None:
        error = self.to_error()
        if error is not None:
            raise error


OK = CheckResult(CheckStatus.OK)


def format_reference_error(entity: str, references: Sequence[Reference]) -> str:
    """Build the user-facing blocked-delete message.

    Empty string when there is nothing to report.
    """
    if not references:
        return ""
    if len(references) == 1:
        ref = references[0]
        return f"Cannot delete {entity} as it is referenced in {ref.type} {ref.number}"
    lines = "\n".join(f"- {ref.type} {ref.number}" for ref in references)
    return f"Cannot delete {entity} as it is referenced in:\n{lines}"


class ReferenceGuard:
    """Read-then-decide integrity checks over an IReferenceStore."""

    def __init__(
        self,
        store: IReferenceStore,
        rules: dict[str, tuple[ReferenceRule, ...]] | None = None,
    ):
        self._store = store
        self._rules = rules if rules is not None else REFERENCE_RULES

    async def check_uniqueness(
        self,
        table: str,
        field_name: str,
        value: str,
        *,
        entity: str,
        field_label: str = "number",
        exclude_id: str | None = None,
    ) -> CheckResult:
        """Fail when another row of ``table`` already uses ``value``.

        ``exclude_id`` lets a record keep its own value on update.
        """
        existing = await self._store.find_id_by_value(table, field_name, value, exclude_id)
        if existing is None:
            return OK
        logger.info("reference_duplicate_key", table=table, field=field_name, value=value)
        return CheckResult(CheckStatus.DUPLICATE, entity=entity, value=value, field_label=field_label)

    async def check_exists(self, table: str, entity_id: str | None, *, entity: str) -> CheckResult:
        """Fail when a populated foreign key does not resolve; None always passes."""
        if entity_id is None:
            return OK
        if await self._store.exists(table, entity_id):
            return OK
        logger.info("reference_missing", table=table, id=entity_id)
        return CheckResult(CheckStatus.MISSING, entity=entity, value=entity_id)

    async def check_no_references(self, entity: str, entity_id: str) -> CheckResult:
        """Scan dependent tables before deleting ``entity_id``."""
        references: list[Reference] = []
        seen: set[tuple[str, str]] = set()

        for rule in self._rules.get(entity, ()):
            for number in await self._store.find_reference_numbers(rule, entity_id):
                key = (rule.type_label, number)
                if key in seen:
                    continue
                seen.add(key)
                references.append(Reference(rule.type_label, number))

        if not references:
            return OK

        logger.info(
            "reference_blocked_delete",
            entity=entity,
            id=entity_id,
            references=len(references),
        )
        return CheckResult(CheckStatus.BLOCKED, entity=entity, value=entity_id, references=tuple(references))

    async def ensure_unique(
        self,
        table: str,
        field_name: str,
        value: str,
        *,
        entity: str,
        field_label: str = "number",
        exclude_id: str | None = None,
    ) -> None:
        result = await self.check_uniqueness(
            table,
            field_name,
            value,
            entity=entity,
            field_label=field_label,
            exclude_id=exclude_id,
        )
        result.raise_for_status()

    async def ensure_exists(self, table: str, entity_id: str | None, *, entity: str) -> None:
        (await self.check_exists(table, entity_id, entity=entity)).raise_for_status()

    async def ensure_deletable(self, entity: str, entity_id: str) -> None:
        (await self.check_no_references(entity, entity_id)).raise_for_status()

    async def translate_violation(
        self,
        violation: ConstraintViolationError,
        *,
        entity: str,
        natural_key: tuple[str, str, str] | None = None,
        foreign_keys: Sequence[tuple[str, str | None, str]] = (),
        deleting_id: str | None = None,
    ) -> FleetdeskError:
        """Map a storage constraint failure onto the specific domain error.

        Args:
            violation: error raised by the store
            entity: label of the entity being written
            natural_key: ``(column, label, value)`` of the unique key written
            foreign_keys: ``(table, id, entity)`` for every reference written
            deleting_id: id of the entity, when the failed write was a delete

        Returns the violation itself when it cannot be classified.
        """
        logger.warning(
            "constraint_violation_fallback",
            entity=entity,
            table=violation.table,
            operation=violation.operation,
            error=violation.message,
        )

        unique = _UNIQUE_RE.search(violation.message)
        if unique and natural_key and unique.group(2) == natural_key[0]:
            return DuplicateKeyError(entity, natural_key[2], natural_key[1])

        if "FOREIGN KEY constraint failed" in violation.message:
            if deleting_id is not None:
                result = await self.check_no_references(entity, deleting_id)
                if not result.ok:
                    return result.to_error()  # type: ignore[return-value]
                return BlockedDeleteError(
                    entity,
                    f"Cannot delete {entity} as it is referenced in other records",
                )
            for table, ref_id, ref_entity in foreign_keys:
                result = await self.check_exists(table, ref_id, entity=ref_entity)
                if not result.ok:
                    return result.to_error()  # type: ignore[return-value]

        return violation
