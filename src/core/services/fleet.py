"""Vehicle registry."""

from collections.abc import Mapping
from typing import Any

from src.config import get_logger
from src.core.entities.vehicle import Vehicle
from src.core.exceptions import ConstraintViolationError, NotFoundError, ValidationError
from src.core.interfaces.storage import IVehicleStore
from src.core.services.partial_update import merge_changes
from src.core.services.reference_guard import ReferenceGuard

logger = get_logger(__name__)

ENTITY = "Vehicle"


class VehicleService:
    """Vehicle CRUD with plate-number uniqueness and blocked delete."""

    def __init__(self, store: IVehicleStore, guard: ReferenceGuard):
        self._store = store
        self._guard = guard

    async def get(self, vehicle_id: str) -> Vehicle:
        vehicle = await self._store.get_vehicle(vehicle_id)
        if vehicle is None:
            raise NotFoundError(ENTITY, vehicle_id)
        return vehicle

    async def list_vehicles(self) -> list[Vehicle]:
        return await self._store.list_vehicles()

    async def create(self, vehicle: Vehicle) -> Vehicle:
        if not vehicle.vehicle_number:
            raise ValidationError("Vehicle Number is required", field="vehicle_number")
        await self._ensure_unique_number(vehicle.vehicle_number)

        try:
            created = await self._store.create_vehicle(vehicle)
        except ConstraintViolationError as e:
            raise await self._translate(e, vehicle) from e

        logger.info("vehicle_created", vehicle_id=created.id, vehicle_number=created.vehicle_number)
        return created

    async def update(self, vehicle_id: str, changes: Mapping[str, Any]) -> Vehicle:
        existing = await self.get(vehicle_id)
        merged = merge_changes(existing, changes)
        if not merged.vehicle_number:
            raise ValidationError("Vehicle Number is required", field="vehicle_number")
        if merged.vehicle_number != existing.vehicle_number:
            await self._ensure_unique_number(merged.vehicle_number, exclude_id=vehicle_id)

        try:
            updated = await self._store.update_vehicle(merged)
        except ConstraintViolationError as e:
            raise await self._translate(e, merged) from e

        logger.info("vehicle_updated", vehicle_id=vehicle_id)
        return updated

    async def delete(self, vehicle_id: str) -> None:
        """Delete a vehicle not quoted anywhere; its transactions go with it."""
        await self.get(vehicle_id)
        await self._guard.ensure_deletable(ENTITY, vehicle_id)

        try:
            await self._store.delete_vehicle(vehicle_id)
        except ConstraintViolationError as e:
            raise await self._guard.translate_violation(e, entity=ENTITY, deleting_id=vehicle_id) from e
        logger.info("vehicle_deleted", vehicle_id=vehicle_id)

    async def _ensure_unique_number(self, number: str, exclude_id: str | None = None) -> None:
        await self._guard.ensure_unique(
            "vehicles",
            "vehicle_number",
            number,
            entity=ENTITY,
            field_label="Number",
            exclude_id=exclude_id,
        )

    async def _translate(self, error: ConstraintViolationError, vehicle: Vehicle):
        return await self._guard.translate_violation(
            error,
            entity=ENTITY,
            natural_key=("vehicle_number", "Number", vehicle.vehicle_number),
        )
