"""Get Low Stock Use Case."""

from src.application.dto.responses import ProductResponse
from src.core.entities.catalog import ProductWithStock
from src.core.interfaces import ICatalogStore
from src.core.services.ledger_reports import low_stock_products


class GetLowStockUseCase:
    """Products at or below their minimum stock level, lowest first."""

    def __init__(self, catalog_store: ICatalogStore | None = None):
        self._catalog_store = catalog_store

    async def _get_catalog_store(self) -> ICatalogStore:
        if self._catalog_store is None:
            from src.infrastructure.storage.sqlite import get_catalog_store

            self._catalog_store = await get_catalog_store()
        return self._catalog_store

    async def execute(self) -> list[ProductWithStock]:
        catalog = await self._get_catalog_store()
        return low_stock_products(await catalog.list_products())

    def to_response(self, products: list[ProductWithStock]) -> list[ProductResponse]:
        return [ProductResponse.from_entity(p) for p in products]
