"""
Vehicle transaction bookkeeping.

Validates revenue and expense rows before they reach the store and keeps
their ``month`` in step with their date.
"""

from collections.abc import Mapping
from datetime import date
from decimal import Decimal
from typing import Any

from src.config import get_logger
from src.core.entities.vehicle import VehicleTransaction
from src.core.exceptions import ConstraintViolationError, NotFoundError, ValidationError
from src.core.interfaces.storage import IVehicleTransactionStore
from src.core.month_keys import month_key, months_ago, parse_month_key
from src.core.services.partial_update import merge_changes
from src.core.services.reference_guard import ReferenceGuard

logger = get_logger(__name__)

# (attribute, table, entity label) for every reference a transaction may carry
_REFERENCES: tuple[tuple[str, str, str], ...] = (
    ("vehicle_id", "vehicles", "Vehicle"),
    ("employee_id", "employees", "Employee"),
    ("invoice_id", "invoices", "Invoice"),
    ("purchase_order_id", "purchase_orders", "Purchase Order"),
    ("quote_id", "quotes", "Quote"),
)
_READ_ONLY_FIELDS = frozenset({"id", "month", "created_at", "updated_at"})


class VehicleTransactionService:
    """Create, edit and delete single vehicle transactions."""

    def __init__(
        self,
        store: IVehicleTransactionStore,
        guard: ReferenceGuard,
        lookback_months: int = 12,
    ):
        self._store = store
        self._guard = guard
        self._lookback_months = lookback_months

    async def get(self, transaction_id: str) -> VehicleTransaction:
        transaction = await self._store.get_transaction(transaction_id)
        if transaction is None:
            raise NotFoundError("Vehicle Transaction", transaction_id)
        return transaction

    async def list_transactions(
        self,
        vehicle_id: str | None = None,
        month: str | None = None,
    ) -> list[VehicleTransaction]:
        if month is not None:
            try:
                parse_month_key(month)
            except ValueError as e:
                raise ValidationError("Month must be in YYYY-MM format", field="month", value=month) from e
        return await self._store.list_transactions(vehicle_id=vehicle_id, month=month)

    async def create(
        self,
        transaction: VehicleTransaction,
        today: date | None = None,
    ) -> VehicleTransaction:
        self.validate(transaction, today)
        await self._check_references(transaction)

        transaction = transaction.model_copy(update={"month": month_key(transaction.date)})
        try:
            created = await self._store.create_transaction(transaction)
        except ConstraintViolationError as e:
            raise await self._translate(e, transaction) from e

        logger.info(
            "vehicle_transaction_created",
            transaction_id=created.id,
            vehicle_id=created.vehicle_id,
            transaction_type=created.transaction_type.value,
            amount=str(created.amount),
            month=created.month,
        )
        return created

    async def update(
        self,
        transaction_id: str,
        changes: Mapping[str, Any],
        today: date | None = None,
    ) -> VehicleTransaction:
        """Merge the supplied fields into the stored row.

        Only the fields being changed are validated, so a row dated before
        the booking window can still have its description or category fixed.
        """
        existing = await self.get(transaction_id)
        updates = {k: v for k, v in changes.items() if k not in _READ_ONLY_FIELDS}

        merged = merge_changes(existing, updates)
        if "amount" in updates:
            self.validate_amount(merged)
        if "date" in updates:
            self.validate_date(merged, today)
        if merged.date != existing.date or existing.month is None:
            merged = merged.model_copy(update={"month": month_key(merged.date)})

        await self._check_references(merged, only=set(updates))

        try:
            updated = await self._store.update_transaction(merged)
        except ConstraintViolationError as e:
            raise await self._translate(e, merged) from e

        logger.info(
            "vehicle_transaction_updated",
            transaction_id=transaction_id,
            fields=sorted(updates),
        )
        return updated

    async def delete(self, transaction_id: str) -> None:
        if not await self._store.delete_transaction(transaction_id):
            raise NotFoundError("Vehicle Transaction", transaction_id)
        logger.info("vehicle_transaction_deleted", transaction_id=transaction_id)

    def validate(self, transaction: VehicleTransaction, today: date | None = None) -> None:
        """Amount must be positive and the date inside the booking window."""
        self.validate_amount(transaction)
        self.validate_date(transaction, today)

    def validate_amount(self, transaction: VehicleTransaction) -> None:
        if transaction.amount.is_nan() or transaction.amount <= Decimal("0"):
            raise ValidationError(
                "Transaction amount must be greater than 0",
                field="amount",
                value=transaction.amount,
            )

    def validate_date(self, transaction: VehicleTransaction, today: date | None = None) -> None:
        today = today or date.today()
        if transaction.date is None:
            raise ValidationError("Transaction date is required", field="date")
        if transaction.date > today:
            raise ValidationError(
                "Transaction date cannot be in the future",
                field="date",
                value=transaction.date,
            )
        if transaction.date < months_ago(today, self._lookback_months):
            raise ValidationError(
                f"Transaction date cannot be more than {self._lookback_months} months in the past",
                field="date",
                value=transaction.date,
            )

    async def _check_references(
        self,
        transaction: VehicleTransaction,
        only: set[str] | None = None,
    ) -> None:
        for attribute, table, entity in _REFERENCES:
            if only is not None and attribute not in only:
                continue
            await self._guard.ensure_exists(table, getattr(transaction, attribute), entity=entity)

    async def _translate(self, error: ConstraintViolationError, transaction: VehicleTransaction):
        return await self._guard.translate_violation(
            error,
            entity="Vehicle Transaction",
            foreign_keys=[
                (table, getattr(transaction, attribute), entity)
                for attribute, table, entity in _REFERENCES
            ],
        )
