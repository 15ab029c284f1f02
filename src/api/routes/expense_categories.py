"""Expense category endpoints."""

from fastapi import APIRouter, Depends, status
from fastapi.responses import Response

from src.api.dependencies import get_expense_categories
from src.application.dto.requests import CreateExpenseCategoryRequest, UpdateExpenseCategoryRequest
from src.application.dto.responses import ErrorResponse, ExpenseCategoryResponse
from src.core.entities.vehicle import ExpenseCategory
from src.core.services import ExpenseCategoryService

router = APIRouter(prefix="/api/expense-categories", tags=["expense-categories"])

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Not found"}}
DUPLICATE = {400: {"model": ErrorResponse, "description": "Blank or duplicate name"}}


@router.get("", response_model=list[ExpenseCategoryResponse])
async def list_expense_categories(
    service: ExpenseCategoryService = Depends(get_expense_categories),
) -> list[ExpenseCategoryResponse]:
    """List categories, predefined first."""
    return [ExpenseCategoryResponse.from_entity(c) for c in await service.list_categories()]


@router.get("/{category_id}", response_model=ExpenseCategoryResponse, responses=NOT_FOUND)
async def get_expense_category(
    category_id: str,
    service: ExpenseCategoryService = Depends(get_expense_categories),
) -> ExpenseCategoryResponse:
    return ExpenseCategoryResponse.from_entity(await service.get(category_id))


@router.post(
    "",
    response_model=ExpenseCategoryResponse,
    status_code=status.HTTP_201_CREATED,
    responses=DUPLICATE,
)
async def create_expense_category(
    request: CreateExpenseCategoryRequest,
    service: ExpenseCategoryService = Depends(get_expense_categories),
) -> ExpenseCategoryResponse:
    category = await service.create(ExpenseCategory(name=request.name))
    return ExpenseCategoryResponse.from_entity(category)


@router.put(
    "/{category_id}",
    response_model=ExpenseCategoryResponse,
    responses={**NOT_FOUND, **DUPLICATE},
)
async def update_expense_category(
    category_id: str,
    request: UpdateExpenseCategoryRequest,
    service: ExpenseCategoryService = Depends(get_expense_categories),
) -> ExpenseCategoryResponse:
    category = await service.update(category_id, request.to_changes())
    return ExpenseCategoryResponse.from_entity(category)


@router.delete(
    "/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        **NOT_FOUND,
        409: {"model": ErrorResponse, "description": "Predefined or still used by transactions"},
    },
)
async def delete_expense_category(
    category_id: str,
    service: ExpenseCategoryService = Depends(get_expense_categories),
) -> Response:
    await service.delete(category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
