"""
Application layer - Use cases, DTOs, and alert dispatch.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API contracts
2. Implementing use cases that coordinate core services and stores
3. Owning the background low-stock alert dispatcher

Use cases are the only entry point for ledger writes and reports.
"""

from src.application.alerts import (
    AlertDispatcher,
    get_alert_dispatcher,
    reset_alert_dispatcher,
)
from src.application.use_cases import (
    AuthenticateUserUseCase,
    CreateProductUseCase,
    CreateUserUseCase,
    DeleteUserUseCase,
    GetDashboardUseCase,
    GetFiscalYearSummaryUseCase,
    GetLowStockUseCase,
    GetMovementReportUseCase,
    GetProductMovementsUseCase,
    ListTransactionsUseCase,
    RecordStockInUseCase,
    RecordStockOutUseCase,
    UpdateProductUseCase,
)

__all__ = [
    # Alerts
    "AlertDispatcher",
    "get_alert_dispatcher",
    "reset_alert_dispatcher",
    # Use cases
    "AuthenticateUserUseCase",
    "CreateProductUseCase",
    "CreateUserUseCase",
    "DeleteUserUseCase",
    "GetDashboardUseCase",
    "GetFiscalYearSummaryUseCase",
    "GetLowStockUseCase",
    "GetMovementReportUseCase",
    "GetProductMovementsUseCase",
    "ListTransactionsUseCase",
    "RecordStockInUseCase",
    "RecordStockOutUseCase",
    "UpdateProductUseCase",
]
