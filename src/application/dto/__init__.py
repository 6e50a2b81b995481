"""Data transfer objects for the API boundary."""

from src.application.dto.requests import (
    CreateCategoryRequest,
    CreateProductRequest,
    CreateSupplierRequest,
    CreateUserRequest,
    LoginRequest,
    StockInRequest,
    StockOutRequest,
    UpdateProductRequest,
    UpdateSupplierRequest,
)
from src.application.dto.responses import (
    CategoryResponse,
    DashboardStatsResponse,
    ErrorResponse,
    FiscalYearResponse,
    HealthResponse,
    LoginResponse,
    MessageResponse,
    MovementReportResponse,
    MovementResponse,
    PeriodBucketResponse,
    ProductMovementsResponse,
    ProductResponse,
    StockDispatchResponse,
    StockReceiptResponse,
    SupplierResponse,
    UserResponse,
)

__all__ = [
    # Requests
    "LoginRequest",
    "CreateCategoryRequest",
    "CreateSupplierRequest",
    "UpdateSupplierRequest",
    "CreateProductRequest",
    "UpdateProductRequest",
    "CreateUserRequest",
    "StockInRequest",
    "StockOutRequest",
    # Responses
    "UserResponse",
    "LoginResponse",
    "MessageResponse",
    "CategoryResponse",
    "SupplierResponse",
    "ProductResponse",
    "StockReceiptResponse",
    "StockDispatchResponse",
    "MovementResponse",
    "ProductMovementsResponse",
    "DashboardStatsResponse",
    "PeriodBucketResponse",
    "MovementReportResponse",
    "FiscalYearResponse",
    "HealthResponse",
    "ErrorResponse",
]
