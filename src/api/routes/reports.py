"""
Reporting endpoints.

All figures are computed from the ledger at request time.
"""

from datetime import datetime

from fastapi import APIRouter, Depends, Query

from src.api.dependencies import (
    get_dashboard_use_case,
    get_fiscal_year_summary_use_case,
    get_low_stock_use_case,
    get_movement_report_use_case,
    require_permission,
)
from src.application.dto.responses import (
    DashboardStatsResponse,
    FiscalYearResponse,
    MovementReportResponse,
    ProductResponse,
)
from src.application.use_cases import (
    GetDashboardUseCase,
    GetFiscalYearSummaryUseCase,
    GetLowStockUseCase,
    GetMovementReportUseCase,
)
from src.core.entities.reports import ReportPeriod
from src.core.services.access_policy import Permission

router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.get(
    "/dashboard",
    response_model=DashboardStatsResponse,
    dependencies=[Depends(require_permission(Permission.VIEW_INVENTORY))],
)
async def dashboard(
    use_case: GetDashboardUseCase = Depends(get_dashboard_use_case),
) -> DashboardStatsResponse:
    """Product count, low-stock count, stock value and today's movement totals."""
    stats = await use_case.execute()
    return use_case.to_response(stats)


@router.get(
    "/low-stock",
    response_model=list[ProductResponse],
    dependencies=[Depends(require_permission(Permission.VIEW_INVENTORY))],
)
async def low_stock(
    use_case: GetLowStockUseCase = Depends(get_low_stock_use_case),
) -> list[ProductResponse]:
    return use_case.to_response(await use_case.execute())


@router.get(
    "/movements",
    response_model=MovementReportResponse,
    dependencies=[Depends(require_permission(Permission.VIEW_REPORTS))],
)
async def movement_report(
    period: ReportPeriod = Query(default=ReportPeriod.DAILY),
    user_id: int | None = Query(default=None, alias="userId"),
    since: datetime | None = Query(default=None),
    until: datetime | None = Query(default=None),
    use_case: GetMovementReportUseCase = Depends(get_movement_report_use_case),
) -> MovementReportResponse:
    """
    In/out/net quantities bucketed by day, week (starting Sunday) or month.

    Pass userId to restrict the report to movements one user recorded.
    """
    buckets = await use_case.execute(period, user_id=user_id, since=since, until=until)
    return use_case.to_response(buckets, period, user_id)


@router.get(
    "/fiscal-years",
    response_model=list[FiscalYearResponse],
    dependencies=[Depends(require_permission(Permission.VIEW_REPORTS))],
)
async def fiscal_years(
    use_case: GetFiscalYearSummaryUseCase = Depends(get_fiscal_year_summary_use_case),
) -> list[FiscalYearResponse]:
    return use_case.to_response(await use_case.execute())
