"""Record Stock In Use Case: append a receipt to the ledger."""

from src.application.dto.requests import StockInRequest
from src.application.dto.responses import StockReceiptResponse
from src.config import get_logger, get_settings
from src.core.entities.ledger import MovementType, StockReceipt
from src.core.entities.user import Actor
from src.core.exceptions import MissingReferenceError
from src.core.interfaces import ICatalogStore, ILedgerStore
from src.core.services.movement_rules import (
    fiscal_year_for,
    normalize_movement_date,
    validate_price,
    validate_quantity,
)

logger = get_logger(__name__)


class RecordStockInUseCase:
    """
    Record stock received into inventory.

    Receipts never need a stock check; they are validated and appended.
    """

    def __init__(
        self,
        ledger_store: ILedgerStore | None = None,
        catalog_store: ICatalogStore | None = None,
    ):
        self._ledger_store = ledger_store
        self._catalog_store = catalog_store

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

    async def execute(self, request: StockInRequest, actor: Actor) -> StockReceipt:
        """
        Validate and append a receipt recorded by ``actor``.

        Raises:
            ValidationError: quantity or price out of range.
            MissingReferenceError: product or supplier does not exist.
        """
        settings = get_settings()
        quantity = validate_quantity(
            request.quantity,
            MovementType.IN,
            settings.inventory.max_movement_quantity,
        )

        price = request.purchase_price
        if price is None:
            catalog = await self._get_catalog_store()
            product = await catalog.get_product(request.product_id)
            if product is None:
                raise MissingReferenceError("product", request.product_id)
            price = product.default_purchase_price
        price = validate_price("purchase_price", price)

        movement_date = normalize_movement_date(request.date)
        receipt = StockReceipt(
            product_id=request.product_id,
            supplier_id=request.supplier_id,
            quantity=quantity,
            purchase_price=price,
            date=movement_date,
            expiry_date=normalize_movement_date(request.expiry_date)
            if request.expiry_date
            else None,
            notes=request.notes,
            recorded_by=actor.id,
            fiscal_year=fiscal_year_for(movement_date),
        )

        ledger = await self._get_ledger_store()
        receipt = await ledger.append_receipt(receipt)

        logger.info(
            "record_stock_in_complete",
            receipt_id=receipt.id,
            product_id=receipt.product_id,
            quantity=receipt.quantity,
            actor_id=actor.id,
        )
        return receipt

    def to_response(self, receipt: StockReceipt) -> StockReceiptResponse:
        """Convert result to API response."""
        return StockReceiptResponse.from_entity(receipt)
