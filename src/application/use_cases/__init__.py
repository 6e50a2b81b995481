"""Application use cases."""

from src.application.use_cases.authenticate_user import (
    AuthenticateUserUseCase,
    AuthenticationResult,
)
from src.application.use_cases.get_dashboard import GetDashboardUseCase
from src.application.use_cases.get_fiscal_year_summary import GetFiscalYearSummaryUseCase
from src.application.use_cases.get_low_stock import GetLowStockUseCase
from src.application.use_cases.get_movement_report import GetMovementReportUseCase
from src.application.use_cases.get_product_movements import (
    GetProductMovementsUseCase,
    ProductMovementsResult,
)
from src.application.use_cases.list_transactions import ListTransactionsUseCase
from src.application.use_cases.manage_products import (
    CreateProductUseCase,
    UpdateProductUseCase,
)
from src.application.use_cases.manage_users import CreateUserUseCase, DeleteUserUseCase
from src.application.use_cases.record_stock_in import RecordStockInUseCase
from src.application.use_cases.record_stock_out import RecordStockOutUseCase

__all__ = [
    # Ledger
    "RecordStockInUseCase",
    "RecordStockOutUseCase",
    "ListTransactionsUseCase",
    "GetProductMovementsUseCase",
    "ProductMovementsResult",
    # Reports
    "GetDashboardUseCase",
    "GetLowStockUseCase",
    "GetMovementReportUseCase",
    "GetFiscalYearSummaryUseCase",
    # Catalog
    "CreateProductUseCase",
    "UpdateProductUseCase",
    # Users
    "AuthenticateUserUseCase",
    "AuthenticationResult",
    "CreateUserUseCase",
    "DeleteUserUseCase",
]
