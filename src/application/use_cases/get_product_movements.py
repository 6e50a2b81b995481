"""Get Product Movements Use Case: one product's ledger and derived stock."""

from dataclasses import dataclass

from src.application.dto.responses import (
    MovementResponse,
    ProductMovementsResponse,
    ProductResponse,
)
from src.core.entities.catalog import ProductWithStock
from src.core.entities.ledger import ProductLedger
from src.core.exceptions import NotFoundError
from src.core.interfaces import ICatalogStore, ILedgerStore
from src.core.services.stock_derivation import build_product_ledger


@dataclass
class ProductMovementsResult:
    product: ProductWithStock
    ledger: ProductLedger


class GetProductMovementsUseCase:
    """
    Fold a product's full movement history into its current stock.

    The fold and the store's aggregate totals must agree; the response
    carries the folded figure.
    """

    def __init__(
        self,
        catalog_store: ICatalogStore | None = None,
        ledger_store: ILedgerStore | None = None,
    ):
        self._catalog_store = catalog_store
        self._ledger_store = ledger_store

    async def _get_catalog_store(self) -> ICatalogStore:
        if self._catalog_store is None:
            from src.infrastructure.storage.sqlite import get_catalog_store

            self._catalog_store = await get_catalog_store()
        return self._catalog_store

    async def _get_ledger_store(self) -> ILedgerStore:
        if self._ledger_store is None:
            from src.infrastructure.storage.sqlite import get_ledger_store

            self._ledger_store = await get_ledger_store()
        return self._ledger_store

    async def execute(self, product_id: int) -> ProductMovementsResult:
        catalog = await self._get_catalog_store()
        product = await catalog.get_product(product_id)
        if product is None:
            raise NotFoundError("product", product_id)

        ledger = await self._get_ledger_store()
        movements = await ledger.list_movements(product_id=product_id)
        return ProductMovementsResult(
            product=product,
            ledger=build_product_ledger(product, movements),
        )

    def to_response(self, result: ProductMovementsResult) -> ProductMovementsResponse:
        return ProductMovementsResponse(
            product=ProductResponse.from_entity(result.product),
            movements=[MovementResponse.from_entity(m) for m in result.ledger.movements],
            current_stock=result.ledger.current_stock,
            is_low_stock=result.ledger.is_low_stock,
        )
