"""Product catalog use cases."""

from src.application.dto.requests import CreateProductRequest, UpdateProductRequest
from src.application.dto.responses import ProductResponse
from src.config import get_settings
from src.core.entities.catalog import Product, ProductWithStock
from src.core.entities.money import to_money
from src.core.exceptions import NotFoundError
from src.core.interfaces import ICatalogStore


class _CatalogStoreMixin:
    _catalog_store: ICatalogStore | None

    async def _get_catalog_store(self) -> ICatalogStore:
        if self._catalog_store is None:
            from src.infrastructure.storage.sqlite import get_catalog_store

            self._catalog_store = await get_catalog_store()
        return self._catalog_store


class CreateProductUseCase(_CatalogStoreMixin):
    """Add a product, filling configured defaults for omitted fields."""

    def __init__(self, catalog_store: ICatalogStore | None = None):
        self._catalog_store = catalog_store

    async def execute(self, request: CreateProductRequest) -> ProductWithStock:
        settings = get_settings()
        product = Product(
            category_id=request.category_id,
            name=request.name.strip(),
            barcode=request.barcode,
            description=request.description,
            min_stock_level=(
                request.min_stock_level
                if request.min_stock_level is not None
                else settings.inventory.default_min_stock_level
            ),
            default_purchase_price=request.default_purchase_price,
            default_selling_price=request.default_selling_price,
            unit=request.unit or settings.inventory.default_unit,
            expiry_days_default=request.expiry_days_default,
            active=request.active,
        )

        store = await self._get_catalog_store()
        product = await store.create_product(product)

        # Re-read so the response carries category name and zero stock
        created = await store.get_product(product.id)  # type: ignore[arg-type]
        if created is None:
            raise NotFoundError("product", product.id)  # type: ignore[arg-type]
        return created

    def to_response(self, product: ProductWithStock) -> ProductResponse:
        return ProductResponse.from_entity(product)


class UpdateProductUseCase(_CatalogStoreMixin):
    """Partial product update; ledger history is untouched."""

    def __init__(self, catalog_store: ICatalogStore | None = None):
        self._catalog_store = catalog_store

    async def execute(
        self, product_id: int, request: UpdateProductRequest
    ) -> ProductWithStock:
        changes = request.model_dump(exclude_unset=True)
        if "name" in changes and changes["name"] is not None:
            changes["name"] = changes["name"].strip()
        # Explicit nulls are only meaningful for nullable columns
        for field in ("name", "min_stock_level", "default_purchase_price",
                      "default_selling_price", "unit", "active"):
            if field in changes and changes[field] is None:
                del changes[field]

        for field in ("default_purchase_price", "default_selling_price"):
            if field in changes:
                changes[field] = to_money(changes[field])

        store = await self._get_catalog_store()
        return await store.update_product(product_id, changes)  # type: ignore[return-value]

    def to_response(self, product: ProductWithStock) -> ProductResponse:
        return ProductResponse.from_entity(product)
