"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from src.application.dto.requests import (
    CreateCustomerRequest,
    CreateEmployeeRequest,
    CreateExpenseCategoryRequest,
    CreateInvoiceRequest,
    CreatePayslipRequest,
    CreatePurchaseOrderRequest,
    CreateQuoteRequest,
    CreateVehicleRequest,
    CreateVehicleTransactionRequest,
    CreateVendorRequest,
    LineItemRequest,
    PartialUpdateRequest,
    UpdateCustomerRequest,
    UpdateEmployeeRequest,
    UpdateExpenseCategoryRequest,
    UpdateInvoiceRequest,
    UpdatePayslipRequest,
    UpdatePurchaseOrderRequest,
    UpdateQuoteRequest,
    UpdateVehicleRequest,
    UpdateVehicleTransactionRequest,
    UpdateVendorRequest,
)
from src.application.dto.responses import (
    CustomerResponse,
    DashboardResponse,
    EmployeeResponse,
    ErrorResponse,
    ExpenseCategoryResponse,
    FleetMetricsResponse,
    HealthResponse,
    InvoiceResponse,
    LineItemResponse,
    PayslipResponse,
    ProfitabilitySummaryResponse,
    PurchaseOrderResponse,
    QuoteResponse,
    VehicleResponse,
    VehicleTransactionResponse,
    VendorResponse,
)

__all__ = [
    # Requests
    "CreateCustomerRequest",
    "CreateEmployeeRequest",
    "CreateExpenseCategoryRequest",
    "CreateInvoiceRequest",
    "CreatePayslipRequest",
    "CreatePurchaseOrderRequest",
    "CreateQuoteRequest",
    "CreateVehicleRequest",
    "CreateVehicleTransactionRequest",
    "CreateVendorRequest",
    "LineItemRequest",
    "PartialUpdateRequest",
    "UpdateCustomerRequest",
    "UpdateEmployeeRequest",
    "UpdateExpenseCategoryRequest",
    "UpdateInvoiceRequest",
    "UpdatePayslipRequest",
    "UpdatePurchaseOrderRequest",
    "UpdateQuoteRequest",
    "UpdateVehicleRequest",
    "UpdateVehicleTransactionRequest",
    "UpdateVendorRequest",
    # Responses
    "CustomerResponse",
    "DashboardResponse",
    "EmployeeResponse",
    "ErrorResponse",
    "ExpenseCategoryResponse",
    "FleetMetricsResponse",
    "HealthResponse",
    "InvoiceResponse",
    "LineItemResponse",
    "PayslipResponse",
    "ProfitabilitySummaryResponse",
    "PurchaseOrderResponse",
    "QuoteResponse",
    "VehicleResponse",
    "VehicleTransactionResponse",
    "VendorResponse",
]
