"""Record Stock Out Use Case: atomic check-and-append plus low-stock alert."""

from typing import Protocol

from src.application.dto.requests import StockOutRequest
from src.application.dto.responses import StockDispatchResponse
from src.config import get_logger, get_settings
from src.core.entities.catalog import ProductWithStock
from src.core.entities.ledger import MovementType, StockDispatch
from src.core.entities.reports import LowStockAlert
from src.core.entities.user import Actor
from src.core.exceptions import MissingReferenceError
from src.core.interfaces import ICatalogStore, ILedgerStore
from src.core.services.movement_rules import (
    fiscal_year_for,
    normalize_movement_date,
    validate_price,
    validate_quantity,
)
from src.core.services.stock_derivation import is_low_stock

logger = get_logger(__name__)


class AlertPublisher(Protocol):
    def publish(self, alert: LowStockAlert) -> bool: ...


class RecordStockOutUseCase:
    """
    Record stock leaving inventory.

    The sufficiency check is done by the ledger store inside the same
    write transaction as the insert. Once the dispatch is stored, a
    low-stock alert is queued when the product is at or below minimum.
    """

    def __init__(
        self,
        ledger_store: ILedgerStore | None = None,
        catalog_store: ICatalogStore | None = None,
        alerts: AlertPublisher | None = None,
    ):
        self._ledger_store = ledger_store
        self._catalog_store = catalog_store
        self._alerts = alerts

    async def _get_ledger_store(self) -> ILedgerStore:
        if self._ledger_store is None:
            from src.infrastructure.storage.sqlite import get_ledger_store

            self._ledger_store = await get_ledger_store()
        return self._ledger_store

    async def _get_catalog_store(self) -> ICatalogStore:
        if self._catalog_store is None:
            from src.infrastructure.storage.sqlite import get_catalog_store

            self._catalog_store = await get_catalog_store()
        return self._catalog_store

    async def _get_alerts(self) -> AlertPublisher:
        if self._alerts is None:
            from src.application.alerts import get_alert_dispatcher

            self._alerts = await get_alert_dispatcher()
        return self._alerts

    async def execute(self, request: StockOutRequest, actor: Actor) -> StockDispatch:
        """
        Validate and append a dispatch recorded by ``actor``.

        Raises:
            ValidationError: quantity or price out of range.
            MissingReferenceError: product does not exist.
            InsufficientStockError: quantity exceeds current stock.
        """
        settings = get_settings()
        quantity = validate_quantity(
            request.quantity,
            MovementType.OUT,
            settings.inventory.max_movement_quantity,
        )

        catalog = await self._get_catalog_store()
        product = await catalog.get_product(request.product_id)
        if product is None:
            raise MissingReferenceError("product", request.product_id)

        price = validate_price(
            "selling_price",
            request.selling_price
            if request.selling_price is not None
            else product.default_selling_price,
        )

        movement_date = normalize_movement_date(request.date)
        dispatch = StockDispatch(
            product_id=product.id,  # type: ignore[arg-type]
            quantity=quantity,
            selling_price=price,
            date=movement_date,
            reason=request.reason,
            notes=request.notes,
            recorded_by=actor.id,
            fiscal_year=fiscal_year_for(movement_date),
        )

        ledger = await self._get_ledger_store()
        dispatch = await ledger.append_dispatch(dispatch)

        logger.info(
            "record_stock_out_complete",
            dispatch_id=dispatch.id,
            product_id=product.id,
            quantity=dispatch.quantity,
            actor_id=actor.id,
        )

        # The dispatch is committed; alerting must not turn it into an error
        try:
            await self._alert_if_low(ledger, product)
        except Exception as e:
            logger.exception(
                "low_stock_alert_publish_failed",
                dispatch_id=dispatch.id,
                product_id=product.id,
                error=str(e),
            )

        return dispatch

    async def _alert_if_low(self, ledger: ILedgerStore, product: ProductWithStock) -> None:
        remaining = await ledger.current_stock(product.id)  # type: ignore[arg-type]
        if not is_low_stock(remaining, product.min_stock_level):
            return

        alerts = await self._get_alerts()
        alerts.publish(
            LowStockAlert(
                product_id=product.id,  # type: ignore[arg-type]
                product_name=product.name,
                current_stock=remaining,
                min_stock_level=product.min_stock_level,
                unit=product.unit,
            )
        )

    def to_response(self, dispatch: StockDispatch) -> StockDispatchResponse:
        """Convert result to API response."""
        return StockDispatchResponse.from_entity(dispatch)
