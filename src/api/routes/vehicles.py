"""Vehicle and vehicle transaction endpoints."""

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response

from src.api.dependencies import get_profitability, get_vehicle_transactions, get_vehicles
from src.application.dto.requests import (
    CreateVehicleRequest,
    CreateVehicleTransactionRequest,
    UpdateVehicleRequest,
    UpdateVehicleTransactionRequest,
)
from src.application.dto.responses import (
    ErrorResponse,
    ProfitabilitySummaryResponse,
    VehicleResponse,
    VehicleTransactionResponse,
)
from src.core.entities.vehicle import Vehicle, VehicleTransaction
from src.core.services import (
    ProfitabilityAggregator,
    VehicleService,
    VehicleTransactionService,
)

router = APIRouter(prefix="/api/vehicles", tags=["vehicles"])
transactions_router = APIRouter(prefix="/api/vehicle-transactions", tags=["vehicle-transactions"])

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Not found"}}
BAD_REQUEST = {400: {"model": ErrorResponse}}


@router.get("", response_model=list[VehicleResponse])
async def list_vehicles(
    service: VehicleService = Depends(get_vehicles),
) -> list[VehicleResponse]:
    """List vehicles ordered by plate number."""
    return [VehicleResponse.from_entity(v) for v in await service.list_vehicles()]


@router.get("/{vehicle_id}", response_model=VehicleResponse, responses=NOT_FOUND)
async def get_vehicle(
    vehicle_id: str,
    service: VehicleService = Depends(get_vehicles),
) -> VehicleResponse:
    return VehicleResponse.from_entity(await service.get(vehicle_id))


@router.post(
    "",
    response_model=VehicleResponse,
    status_code=status.HTTP_201_CREATED,
    responses=BAD_REQUEST,
)
async def create_vehicle(
    request: CreateVehicleRequest,
    service: VehicleService = Depends(get_vehicles),
) -> VehicleResponse:
    vehicle = await service.create(Vehicle.model_validate(request.model_dump()))
    return VehicleResponse.from_entity(vehicle)


@router.put(
    "/{vehicle_id}",
    response_model=VehicleResponse,
    responses={**NOT_FOUND, **BAD_REQUEST},
)
async def update_vehicle(
    vehicle_id: str,
    request: UpdateVehicleRequest,
    service: VehicleService = Depends(get_vehicles),
) -> VehicleResponse:
    return VehicleResponse.from_entity(await service.update(vehicle_id, request.to_changes()))


@router.delete(
    "/{vehicle_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={**NOT_FOUND, 409: {"model": ErrorResponse, "description": "Still quoted"}},
)
async def delete_vehicle(
    vehicle_id: str,
    service: VehicleService = Depends(get_vehicles),
) -> Response:
    """Delete a vehicle and its transactions, unless a quote still lists it."""
    await service.delete(vehicle_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{vehicle_id}/profitability",
    response_model=ProfitabilitySummaryResponse,
    responses=NOT_FOUND,
)
async def get_vehicle_profitability(
    vehicle_id: str,
    aggregator: ProfitabilityAggregator = Depends(get_profitability),
) -> ProfitabilitySummaryResponse:
    """Monthly, trailing twelve months and all-time profit of a vehicle."""
    summary = await aggregator.summarize(vehicle_id)
    return ProfitabilitySummaryResponse.from_entity(summary)


# --- Transactions ---


@transactions_router.get(
    "",
    response_model=list[VehicleTransactionResponse],
    responses=BAD_REQUEST,
)
async def list_transactions(
    vehicle_id: str | None = Query(None, description="Only this vehicle"),
    month: str | None = Query(None, description="Only this month (YYYY-MM)"),
    service: VehicleTransactionService = Depends(get_vehicle_transactions),
) -> list[VehicleTransactionResponse]:
    transactions = await service.list_transactions(vehicle_id=vehicle_id, month=month)
    return [VehicleTransactionResponse.from_entity(t) for t in transactions]


@transactions_router.get(
    "/{transaction_id}",
    response_model=VehicleTransactionResponse,
    responses=NOT_FOUND,
)
async def get_transaction(
    transaction_id: str,
    service: VehicleTransactionService = Depends(get_vehicle_transactions),
) -> VehicleTransactionResponse:
    return VehicleTransactionResponse.from_entity(await service.get(transaction_id))


@transactions_router.post(
    "",
    response_model=VehicleTransactionResponse,
    status_code=status.HTTP_201_CREATED,
    responses=BAD_REQUEST,
)
async def create_transaction(
    request: CreateVehicleTransactionRequest,
    service: VehicleTransactionService = Depends(get_vehicle_transactions),
) -> VehicleTransactionResponse:
    """Book revenue or an expense; the month key is derived from the date."""
    transaction = VehicleTransaction.model_validate(request.model_dump())
    return VehicleTransactionResponse.from_entity(await service.create(transaction))


@transactions_router.put(
    "/{transaction_id}",
    response_model=VehicleTransactionResponse,
    responses={**NOT_FOUND, **BAD_REQUEST},
)
async def update_transaction(
    transaction_id: str,
    request: UpdateVehicleTransactionRequest,
    service: VehicleTransactionService = Depends(get_vehicle_transactions),
) -> VehicleTransactionResponse:
    updated = await service.update(transaction_id, request.to_changes())
    return VehicleTransactionResponse.from_entity(updated)


@transactions_router.delete(
    "/{transaction_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=NOT_FOUND,
)
async def delete_transaction(
    transaction_id: str,
    service: VehicleTransactionService = Depends(get_vehicle_transactions),
) -> Response:
    await service.delete(transaction_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
