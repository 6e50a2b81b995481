"""
Health check endpoints.
"""

from fastapi import APIRouter, Depends

from src.api.dependencies import get_app_settings
from src.application.dto.responses import HealthResponse
from src.config import Settings, get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_app_settings)) -> HealthResponse:
    """
    Service health check.

    Tests SQLite connectivity; the service is unhealthy without it.
    """
    from src.infrastructure.storage.sqlite import get_connection

    database = "ok"
    try:
        async with get_connection() as conn:
            await conn.execute("SELECT 1")
    except Exception as e:
        logger.error("health_db_check_failed", error=str(e))
        database = "unavailable"

    return HealthResponse(
        status="healthy" if database == "ok" else "unhealthy",
        version=settings.app_version,
        environment=settings.environment,
        database=database,
    )
