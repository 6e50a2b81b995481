"""
Inventory ledger HTTP service.

``create_app`` wires routers, middleware and error handlers; the lifespan
migrates the database, opens the connection pool and runs the low-stock
alert worker for as long as the process serves requests.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.middleware import ErrorHandlerMiddleware, RequestLoggingMiddleware
from src.api.middleware.error_handler import setup_exception_handlers
from src.api.routes import (
    auth_router,
    categories_router,
    health_router,
    inventory_router,
    products_router,
    reports_router,
    suppliers_router,
    users_router,
)
from src.application.alerts import get_alert_dispatcher, reset_alert_dispatcher
from src.config import configure_logging, get_logger, get_settings
from src.infrastructure.storage.sqlite import (
    close_pool,
    get_catalog_store,
    get_pool,
    get_user_store,
)
from src.infrastructure.storage.sqlite.migrations import run_migrations
from src.infrastructure.tools.seed import seed_demo_data

logger = get_logger(__name__)

ROUTERS = (
    health_router,
    auth_router,
    products_router,
    categories_router,
    suppliers_router,
    users_router,
    inventory_router,
    reports_router,
)


async def _open_ledger() -> None:
    settings = get_settings()

    results = await run_migrations()
    failed = [r for r in results if not r.success]
    if failed:
        raise RuntimeError(f"Migration v{failed[0].version} failed: {failed[0].error}")

    pool = await get_pool()
    logger.info("ledger_ready", db_path=str(pool.db_path), migrations_applied=len(results))

    if settings.seed_demo_data:
        await seed_demo_data(await get_user_store(), await get_catalog_store())


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    logger.info("service_starting", host=settings.api.host, port=settings.api.port)

    try:
        await _open_ledger()
    except Exception as e:
        logger.error("ledger_open_failed", error=str(e))
        raise

    dispatcher = await get_alert_dispatcher()
    await dispatcher.start()

    try:
        yield
    finally:
        logger.info("service_stopping", pending_alerts=dispatcher.pending)
        await dispatcher.stop()
        reset_alert_dispatcher()
        await close_pool()
        logger.info("service_stopped")


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title="Inventory Ledger API",
        description="Append-only stock ledger with derived stock levels and reports",
        version=settings.app_version,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    # Last added runs first: errors are rendered inside the request log
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "DELETE"],
            allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
        )

    setup_exception_handlers(app)
    for router in ROUTERS:
        app.include_router(router)

    @app.get("/health", include_in_schema=False)
    async def liveness() -> dict[str, str]:
        return {"status": "healthy", "version": settings.app_version}

    return app


configure_logging()
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.api.main:app",
        host=get_settings().api.host,
        port=get_settings().api.port,
        reload=get_settings().api.debug,
    )
