"""
Dependency injection container for FastAPI.

Provides stores, use cases and the authenticated actor to route
handlers. Use case factories take their stores from the store
dependencies, so overriding a store swaps it everywhere.
"""

from collections.abc import Awaitable, Callable
from functools import lru_cache

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.application.alerts import AlertDispatcher, get_alert_dispatcher
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
from src.config import Settings, bind_request_context, get_settings
from src.core.entities.user import Actor, User
from src.core.exceptions import AuthenticationError
from src.core.interfaces import ICatalogStore, ILedgerStore, IUserStore
from src.core.services.access_policy import Permission, ensure_permission
from src.infrastructure.storage.sqlite import (
    get_catalog_store,
    get_ledger_store,
    get_user_store,
)

bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


# Store dependencies
async def get_catalog() -> ICatalogStore:
    """Get catalog store."""
    return await get_catalog_store()


async def get_ledger() -> ILedgerStore:
    """Get ledger store."""
    return await get_ledger_store()


async def get_users() -> IUserStore:
    """Get user store."""
    return await get_user_store()


async def get_alerts() -> AlertDispatcher:
    """Get the low-stock alert dispatcher."""
    return await get_alert_dispatcher()


# Auth dependencies
def get_authenticate_user_use_case(
    users: IUserStore = Depends(get_users),
) -> AuthenticateUserUseCase:
    return AuthenticateUserUseCase(user_store=users)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    auth: AuthenticateUserUseCase = Depends(get_authenticate_user_use_case),
) -> User:
    """Resolve the bearer token to a user, or raise AuthenticationError."""
    if credentials is None:
        raise AuthenticationError()
    user = await auth.resolve_token(credentials.credentials)
    bind_request_context(user_id=user.id)
    return user


async def get_current_actor(user: User = Depends(get_current_user)) -> Actor:
    return Actor.from_user(user)


def require_permission(permission: Permission) -> Callable[..., Awaitable[Actor]]:
    """Dependency factory: the current actor, if their role grants ``permission``."""

    async def dependency(actor: Actor = Depends(get_current_actor)) -> Actor:
        ensure_permission(actor, permission)
        return actor

    return dependency


# Ledger use case dependencies
def get_record_stock_in_use_case(
    ledger: ILedgerStore = Depends(get_ledger),
    catalog: ICatalogStore = Depends(get_catalog),
) -> RecordStockInUseCase:
    return RecordStockInUseCase(ledger_store=ledger, catalog_store=catalog)


def get_record_stock_out_use_case(
    ledger: ILedgerStore = Depends(get_ledger),
    catalog: ICatalogStore = Depends(get_catalog),
    alerts: AlertDispatcher = Depends(get_alerts),
) -> RecordStockOutUseCase:
    return RecordStockOutUseCase(ledger_store=ledger, catalog_store=catalog, alerts=alerts)


def get_list_transactions_use_case(
    ledger: ILedgerStore = Depends(get_ledger),
) -> ListTransactionsUseCase:
    return ListTransactionsUseCase(ledger_store=ledger)


def get_product_movements_use_case(
    catalog: ICatalogStore = Depends(get_catalog),
    ledger: ILedgerStore = Depends(get_ledger),
) -> GetProductMovementsUseCase:
    return GetProductMovementsUseCase(catalog_store=catalog, ledger_store=ledger)


# Report use case dependencies
def get_dashboard_use_case(
    catalog: ICatalogStore = Depends(get_catalog),
    ledger: ILedgerStore = Depends(get_ledger),
) -> GetDashboardUseCase:
    return GetDashboardUseCase(catalog_store=catalog, ledger_store=ledger)


def get_low_stock_use_case(
    catalog: ICatalogStore = Depends(get_catalog),
) -> GetLowStockUseCase:
    return GetLowStockUseCase(catalog_store=catalog)


def get_movement_report_use_case(
    ledger: ILedgerStore = Depends(get_ledger),
) -> GetMovementReportUseCase:
    return GetMovementReportUseCase(ledger_store=ledger)


def get_fiscal_year_summary_use_case(
    ledger: ILedgerStore = Depends(get_ledger),
) -> GetFiscalYearSummaryUseCase:
    return GetFiscalYearSummaryUseCase(ledger_store=ledger)


# Catalog and user management dependencies
def get_create_product_use_case(
    catalog: ICatalogStore = Depends(get_catalog),
) -> CreateProductUseCase:
    return CreateProductUseCase(catalog_store=catalog)


def get_update_product_use_case(
    catalog: ICatalogStore = Depends(get_catalog),
) -> UpdateProductUseCase:
    return UpdateProductUseCase(catalog_store=catalog)


def get_create_user_use_case(
    users: IUserStore = Depends(get_users),
) -> CreateUserUseCase:
    return CreateUserUseCase(user_store=users)


def get_delete_user_use_case(
    users: IUserStore = Depends(get_users),
) -> DeleteUserUseCase:
    return DeleteUserUseCase(user_store=users)
