"""Customer and vendor endpoints."""

from fastapi import APIRouter, Depends, status
from fastapi.responses import Response

from src.api.dependencies import get_directory
from src.application.dto.requests import (
    CreateCustomerRequest,
    CreateVendorRequest,
    UpdateCustomerRequest,
    UpdateVendorRequest,
)
from src.application.dto.responses import CustomerResponse, ErrorResponse, VendorResponse
from src.core.entities.party import Customer, Vendor
from src.core.services import DirectoryService

customers_router = APIRouter(prefix="/api/customers", tags=["customers"])
vendors_router = APIRouter(prefix="/api/vendors", tags=["vendors"])

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Not found"}}
BLOCKED = {409: {"model": ErrorResponse, "description": "Still referenced by documents"}}


@customers_router.get("", response_model=list[CustomerResponse])
async def list_customers(
    service: DirectoryService = Depends(get_directory),
) -> list[CustomerResponse]:
    return [CustomerResponse.from_entity(c) for c in await service.list_customers()]


@customers_router.get("/{customer_id}", response_model=CustomerResponse, responses=NOT_FOUND)
async def get_customer(
    customer_id: str,
    service: DirectoryService = Depends(get_directory),
) -> CustomerResponse:
    return CustomerResponse.from_entity(await service.get_customer(customer_id))


@customers_router.post("", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
async def create_customer(
    request: CreateCustomerRequest,
    service: DirectoryService = Depends(get_directory),
) -> CustomerResponse:
    customer = await service.create_customer(Customer.model_validate(request.model_dump()))
    return CustomerResponse.from_entity(customer)


@customers_router.put("/{customer_id}", response_model=CustomerResponse, responses=NOT_FOUND)
async def update_customer(
    customer_id: str,
    request: UpdateCustomerRequest,
    service: DirectoryService = Depends(get_directory),
) -> CustomerResponse:
    customer = await service.update_customer(customer_id, request.to_changes())
    return CustomerResponse.from_entity(customer)


@customers_router.delete(
    "/{customer_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={**NOT_FOUND, **BLOCKED},
)
async def delete_customer(
    customer_id: str,
    service: DirectoryService = Depends(get_directory),
) -> Response:
    await service.delete_customer(customer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@vendors_router.get("", response_model=list[VendorResponse])
async def list_vendors(
    service: DirectoryService = Depends(get_directory),
) -> list[VendorResponse]:
    return [VendorResponse.from_entity(v) for v in await service.list_vendors()]


@vendors_router.get("/{vendor_id}", response_model=VendorResponse, responses=NOT_FOUND)
async def get_vendor(
    vendor_id: str,
    service: DirectoryService = Depends(get_directory),
) -> VendorResponse:
    return VendorResponse.from_entity(await service.get_vendor(vendor_id))


@vendors_router.post("", response_model=VendorResponse, status_code=status.HTTP_201_CREATED)
async def create_vendor(
    request: CreateVendorRequest,
    service: DirectoryService = Depends(get_directory),
) -> VendorResponse:
    vendor = await service.create_vendor(Vendor.model_validate(request.model_dump()))
    return VendorResponse.from_entity(vendor)


@vendors_router.put("/{vendor_id}", response_model=VendorResponse, responses=NOT_FOUND)
async def update_vendor(
    vendor_id: str,
    request: UpdateVendorRequest,
    service: DirectoryService = Depends(get_directory),
) -> VendorResponse:
    return VendorResponse.from_entity(await service.update_vendor(vendor_id, request.to_changes()))


@vendors_router.delete(
    "/{vendor_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={**NOT_FOUND, **BLOCKED},
)
async def delete_vendor(
    vendor_id: str,
    service: DirectoryService = Depends(get_directory),
) -> Response:
    await service.delete_vendor(vendor_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
