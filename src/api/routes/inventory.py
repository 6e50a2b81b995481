"""
Inventory ledger endpoints.

Stock is never edited directly: it moves only through receipts and
dispatches recorded here.
"""

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import (
    get_list_transactions_use_case,
    get_product_movements_use_case,
    get_record_stock_in_use_case,
    get_record_stock_out_use_case,
    require_permission,
)
from src.application.dto.requests import StockInRequest, StockOutRequest
from src.application.dto.responses import (
    MovementResponse,
    ProductMovementsResponse,
    StockDispatchResponse,
    StockReceiptResponse,
)
from src.application.use_cases import (
    GetProductMovementsUseCase,
    ListTransactionsUseCase,
    RecordStockInUseCase,
    RecordStockOutUseCase,
)
from src.core.entities.user import Actor
from src.core.services.access_policy import Permission
from src.core.services.ledger_reports import FeedType

router = APIRouter(prefix="/api/inventory", tags=["inventory"])


@router.post(
    "/stock-in",
    response_model=StockReceiptResponse,
    status_code=status.HTTP_201_CREATED,
)
async def stock_in(
    request: StockInRequest,
    actor: Actor = Depends(require_permission(Permission.RECORD_STOCK)),
    use_case: RecordStockInUseCase = Depends(get_record_stock_in_use_case),
) -> StockReceiptResponse:
    """
    Record a receipt of goods.

    The purchase price defaults to the product's default purchase price.
    """
    receipt = await use_case.execute(request, actor)
    return use_case.to_response(receipt)


@router.post(
    "/stock-out",
    response_model=StockDispatchResponse,
    status_code=status.HTTP_201_CREATED,
)
async def stock_out(
    request: StockOutRequest,
    actor: Actor = Depends(require_permission(Permission.RECORD_STOCK)),
    use_case: RecordStockOutUseCase = Depends(get_record_stock_out_use_case),
) -> StockDispatchResponse:
    """
    Record a dispatch of goods.

    Rejected with INSUFFICIENT_STOCK when the quantity exceeds current
    stock. A dispatch that leaves the product at or below its minimum
    level queues a low-stock alert.
    """
    dispatch = await use_case.execute(request, actor)
    return use_case.to_response(dispatch)


@router.get(
    "/transactions",
    response_model=list[MovementResponse],
    dependencies=[Depends(require_permission(Permission.VIEW_INVENTORY))],
)
async def list_transactions(
    limit: int | None = Query(default=None, ge=1, le=500),
    type: FeedType = Query(default="all"),
    use_case: ListTransactionsUseCase = Depends(get_list_transactions_use_case),
) -> list[MovementResponse]:
    """Most recent movements first, merged across receipts and dispatches."""
    feed = await use_case.execute(limit=limit, type_filter=type)
    return use_case.to_response(feed)


@router.get(
    "/products/{product_id}/movements",
    response_model=ProductMovementsResponse,
    dependencies=[Depends(require_permission(Permission.VIEW_INVENTORY))],
)
async def product_movements(
    product_id: int,
    use_case: GetProductMovementsUseCase = Depends(get_product_movements_use_case),
) -> ProductMovementsResponse:
    result = await use_case.execute(product_id)
    return use_case.to_response(result)
