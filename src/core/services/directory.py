"""Customer and vendor directory."""

from collections.abc import Mapping
from typing import Any

from src.config import get_logger
from src.core.entities.party import Customer, Vendor
from src.core.exceptions import ConstraintViolationError, NotFoundError, ValidationError
from src.core.interfaces.storage import ICustomerStore, IVendorStore
from src.core.services.partial_update import merge_changes
from src.core.services.reference_guard import ReferenceGuard

logger = get_logger(__name__)


def _require_name(entity: str, name: str | None) -> None:
    if not name or not name.strip():
        raise ValidationError(f"{entity} name is required", field="name")


class DirectoryService:
    """CRUD for the parties documents are issued to or received from.

    Deleting a customer or vendor still named on a document is refused.
    """

    def __init__(
        self,
        customer_store: ICustomerStore,
        vendor_store: IVendorStore,
        guard: ReferenceGuard,
    ):
        self._customers = customer_store
        self._vendors = vendor_store
        self._guard = guard

    # Customers
    async def get_customer(self, customer_id: str) -> Customer:
        customer = await self._customers.get_customer(customer_id)
        if customer is None:
            raise NotFoundError("Customer", customer_id)
        return customer

    async def list_customers(self) -> list[Customer]:
        return await self._customers.list_customers()

    async def create_customer(self, customer: Customer) -> Customer:
        _require_name("Customer", customer.name)
        created = await self._customers.create_customer(customer)
        logger.info("customer_created", customer_id=created.id)
        return created

    async def update_customer(self, customer_id: str, changes: Mapping[str, Any]) -> Customer:
        merged = merge_changes(await self.get_customer(customer_id), changes)
        _require_name("Customer", merged.name)
        return await self._customers.update_customer(merged)

    async def delete_customer(self, customer_id: str) -> None:
        await self.get_customer(customer_id)
        await self._guard.ensure_deletable("Customer", customer_id)
        try:
            await self._customers.delete_customer(customer_id)
        except ConstraintViolationError as e:
            raise await self._guard.translate_violation(e, entity="Customer", deleting_id=customer_id) from e
        logger.info("customer_deleted", customer_id=customer_id)

    # Vendors
    async def get_vendor(self, vendor_id: str) -> Vendor:
        vendor = await self._vendors.get_vendor(vendor_id)
        if vendor is None:
            raise NotFoundError("Vendor", vendor_id)
        return vendor

    async def list_vendors(self) -> list[Vendor]:
        return await self._vendors.list_vendors()

    async def create_vendor(self, vendor: Vendor) -> Vendor:
        _require_name("Vendor", vendor.name)
        created = await self._vendors.create_vendor(vendor)
        logger.info("vendor_created", vendor_id=created.id)
        return created

    async def update_vendor(self, vendor_id: str, changes: Mapping[str, Any]) -> Vendor:
        merged = merge_changes(await self.get_vendor(vendor_id), changes)
        _require_name("Vendor", merged.name)
        return await self._vendors.update_vendor(merged)

    async def delete_vendor(self, vendor_id: str) -> None:
        await self.get_vendor(vendor_id)
        await self._guard.ensure_deletable("Vendor", vendor_id)
        try:
            await self._vendors.delete_vendor(vendor_id)
        except ConstraintViolationError as e:
            raise await self._guard.translate_violation(e, entity="Vendor", deleting_id=vendor_id) from e
        logger.info("vendor_deleted", vendor_id=vendor_id)
