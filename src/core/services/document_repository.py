"""
Document repository for quotes, invoices and purchase orders.

Every write goes through the same steps: guard checks, line-item
calculation, then one transactional store call for header and items.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from src.config import get_logger
from src.core.entities.financial_document import DocumentDefinition, FinancialDocument, LineItem
from src.core.exceptions import ConstraintViolationError, NotFoundError, ValidationError
from src.core.interfaces.storage import IFinancialDocumentStore
from src.core.services.line_item_calculator import compute_totals
from src.core.services.partial_update import merge_changes
from src.core.services.reference_guard import ReferenceGuard

logger = get_logger(__name__)

# Fields callers can never set directly on update
_READ_ONLY_FIELDS = frozenset({"id", "sub_total", "total_tax", "total", "created_at", "updated_at"})
_REQUIRED_FIELDS = frozenset({"number", "date"})


class DocumentRepository:
    """Validated create/update/delete for one kind of financial document."""

    def __init__(
        self,
        store: IFinancialDocumentStore,
        guard: ReferenceGuard,
        default_currency: str = "AED",
    ):
        self._store = store
        self._guard = guard
        self._definition = store.definition
        self._default_currency = default_currency

    @property
    def definition(self) -> DocumentDefinition:
        return self._definition

    @property
    def label(self) -> str:
        return self._definition.label

    async def get(self, document_id: str) -> FinancialDocument:
        document = await self._store.get_document(document_id)
        if document is None:
            raise NotFoundError(self.label, document_id)
        return document

    async def list_documents(self, limit: int = 100, offset: int = 0) -> list[FinancialDocument]:
        return await self._store.list_documents(limit=limit, offset=offset)

    async def create(self, document: FinancialDocument) -> FinancialDocument:
        """Create a document; client-supplied totals are recomputed."""
        definition = self._definition
        number = document.number.strip()
        if not number:
            raise ValidationError(f"{self.label} number is required", field="number")

        await self._guard.ensure_unique(definition.table, "number", number, entity=self.label)
        await self._check_references(document, document.items)

        document = self._with_totals(document.model_copy(update={"number": number}), document.items)
        if "currency" in definition.header_fields and getattr(document, "currency") is None:
            document = document.model_copy(update={"currency": self._default_currency})

        try:
            created = await self._store.create_document(document)
        except ConstraintViolationError as e:
            raise await self._translate(e, document) from e

        logger.info(
            "document_created",
            kind=definition.kind.value,
            document_id=created.id,
            number=created.number,
            items=len(created.items),
            total=str(created.total),
        )
        return created

    async def update(self, document_id: str, changes: Mapping[str, Any]) -> FinancialDocument:
        """Apply a partial update.

        ``changes`` holds only the fields the caller sent: a missing key
        leaves the stored value alone and an explicit None clears it. When
        ``items`` is present the whole item set is replaced (None clears it)
        and totals are recomputed; otherwise items and totals are kept.
        """
        existing = await self.get(document_id)
        changes = dict(changes)

        replace_items = "items" in changes
        new_items: Sequence[LineItem] = changes.pop("items", None) or []

        for name in _REQUIRED_FIELDS & changes.keys():
            if changes[name] is None:
                raise ValidationError(f"{self.label} {name} is required", field=name)
        if isinstance(changes.get("number"), str):
            changes["number"] = changes["number"].strip()
            if not changes["number"]:
                raise ValidationError(f"{self.label} number is required", field="number")

        header = {k: v for k, v in changes.items() if k not in _READ_ONLY_FIELDS}
        merged = merge_changes(existing, header)

        if "number" in header:
            await self._guard.ensure_unique(
                self._definition.table,
                "number",
                merged.number,
                entity=self.label,
                exclude_id=document_id,
            )
        await self._check_references(merged, new_items if replace_items else [])

        if replace_items:
            merged = self._with_totals(merged, new_items)

        try:
            updated = await self._store.update_document(merged, replace_items=replace_items)
        except ConstraintViolationError as e:
            raise await self._translate(e, merged) from e

        logger.info(
            "document_updated",
            kind=self._definition.kind.value,
            document_id=document_id,
            fields=sorted(header),
            items_replaced=replace_items,
        )
        return updated

    async def delete(self, document_id: str) -> None:
        """Delete a document unless other records still cite it."""
        await self.get(document_id)
        await self._guard.ensure_deletable(self.label, document_id)

        try:
            deleted = await self._store.delete_document(document_id)
        except ConstraintViolationError as e:
            raise await self._guard.translate_violation(
                e, entity=self.label, deleting_id=document_id
            ) from e

        if not deleted:
            raise NotFoundError(self.label, document_id)
        logger.info("document_deleted", kind=self._definition.kind.value, document_id=document_id)

    # ------------------------------------------------------------------

    @staticmethod
    def _with_totals(document: FinancialDocument, items: Sequence[LineItem]) -> FinancialDocument:
        calculated = compute_totals(items)
        return document.model_copy(
            update={
                "items": calculated.items,
                "sub_total": calculated.totals.sub_total,
                "total_tax": calculated.totals.total_tax,
                "total": calculated.totals.total,
            }
        )

    def _reference_targets(
        self, document: FinancialDocument, items: Sequence[LineItem]
    ) -> list[tuple[str, str | None, str]]:
        targets = [
            (fk.table, getattr(document, fk.field), fk.entity)
            for fk in self._definition.foreign_keys
        ]
        vehicle_ids = dict.fromkeys(i.vehicle_type_id for i in items if i.vehicle_type_id)
        targets.extend(("vehicles", vehicle_id, "Vehicle") for vehicle_id in vehicle_ids)
        return targets

    async def _check_references(self, document: FinancialDocument, items: Sequence[LineItem]) -> None:
        for table, ref_id, entity in self._reference_targets(document, items):
            await self._guard.ensure_exists(table, ref_id, entity=entity)

    async def _translate(self, error: ConstraintViolationError, document: FinancialDocument):
        return await self._guard.translate_violation(
            error,
            entity=self.label,
            natural_key=("number", "number", document.number),
            foreign_keys=self._reference_targets(document, document.items),
        )
