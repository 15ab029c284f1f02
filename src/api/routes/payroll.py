"""Employee and payslip endpoints."""

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response

from src.api.dependencies import get_payroll
from src.application.dto.requests import (
    CreateEmployeeRequest,
    CreatePayslipRequest,
    UpdateEmployeeRequest,
    UpdatePayslipRequest,
)
from src.application.dto.responses import EmployeeResponse, ErrorResponse, PayslipResponse
from src.core.entities.payroll import Employee, Payslip
from src.core.services import PayrollService

employees_router = APIRouter(prefix="/api/employees", tags=["employees"])
payslips_router = APIRouter(prefix="/api/payslips", tags=["payslips"])

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Not found"}}


@employees_router.get("", response_model=list[EmployeeResponse])
async def list_employees(
    service: PayrollService = Depends(get_payroll),
) -> list[EmployeeResponse]:
    return [EmployeeResponse.from_entity(e) for e in await service.list_employees()]


@employees_router.get("/{employee_id}", response_model=EmployeeResponse, responses=NOT_FOUND)
async def get_employee(
    employee_id: str,
    service: PayrollService = Depends(get_payroll),
) -> EmployeeResponse:
    return EmployeeResponse.from_entity(await service.get_employee(employee_id))


@employees_router.post("", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED)
async def create_employee(
    request: CreateEmployeeRequest,
    service: PayrollService = Depends(get_payroll),
) -> EmployeeResponse:
    employee = await service.create_employee(Employee.model_validate(request.model_dump()))
    return EmployeeResponse.from_entity(employee)


@employees_router.put("/{employee_id}", response_model=EmployeeResponse, responses=NOT_FOUND)
async def update_employee(
    employee_id: str,
    request: UpdateEmployeeRequest,
    service: PayrollService = Depends(get_payroll),
) -> EmployeeResponse:
    employee = await service.update_employee(employee_id, request.to_changes())
    return EmployeeResponse.from_entity(employee)


@employees_router.delete(
    "/{employee_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={**NOT_FOUND, 409: {"model": ErrorResponse, "description": "Has payslips"}},
)
async def delete_employee(
    employee_id: str,
    service: PayrollService = Depends(get_payroll),
) -> Response:
    await service.delete_employee(employee_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# --- Payslips ---


@payslips_router.get("", response_model=list[PayslipResponse])
async def list_payslips(
    employee_id: str | None = Query(None, description="Only this employee"),
    service: PayrollService = Depends(get_payroll),
) -> list[PayslipResponse]:
    """List payslips, latest month first."""
    payslips = await service.list_payslips(employee_id=employee_id)
    return [PayslipResponse.from_entity(p) for p in payslips]


@payslips_router.get(
    "/month/{month}",
    response_model=list[PayslipResponse],
    responses={400: {"model": ErrorResponse, "description": "Malformed month"}},
)
async def list_payslips_for_month(
    month: str,
    service: PayrollService = Depends(get_payroll),
) -> list[PayslipResponse]:
    """Payslips for one ``YYYY-MM`` month."""
    return [PayslipResponse.from_entity(p) for p in await service.list_payslips(month=month)]


@payslips_router.get("/{payslip_id}", response_model=PayslipResponse, responses=NOT_FOUND)
async def get_payslip(
    payslip_id: str,
    service: PayrollService = Depends(get_payroll),
) -> PayslipResponse:
    return PayslipResponse.from_entity(await service.get_payslip(payslip_id))


@payslips_router.post(
    "",
    response_model=PayslipResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_payslip(
    request: CreatePayslipRequest,
    service: PayrollService = Depends(get_payroll),
) -> PayslipResponse:
    """Generate a payslip; overtime pay and net pay are computed."""
    payslip = await service.create_payslip(Payslip.model_validate(request.model_dump()))
    return PayslipResponse.from_entity(payslip)


@payslips_router.put("/{payslip_id}", response_model=PayslipResponse, responses=NOT_FOUND)
async def update_payslip(
    payslip_id: str,
    request: UpdatePayslipRequest,
    service: PayrollService = Depends(get_payroll),
) -> PayslipResponse:
    payslip = await service.update_payslip(payslip_id, request.to_changes())
    return PayslipResponse.from_entity(payslip)


@payslips_router.delete(
    "/{payslip_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=NOT_FOUND,
)
async def delete_payslip(
    payslip_id: str,
    service: PayrollService = Depends(get_payroll),
) -> Response:
    await service.delete_payslip(payslip_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
