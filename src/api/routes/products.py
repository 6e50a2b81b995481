"""
Product catalog endpoints.

Every product is returned with its derived stock figures.
"""

from fastapi import APIRouter, Depends, Response, status

from src.api.dependencies import (
    get_catalog,
    get_create_product_use_case,
    get_update_product_use_case,
    require_permission,
)
from src.application.dto.requests import CreateProductRequest, UpdateProductRequest
from src.application.dto.responses import ProductResponse
from src.application.use_cases.manage_products import (
    CreateProductUseCase,
    UpdateProductUseCase,
)
from src.core.exceptions import NotFoundError
from src.core.interfaces import ICatalogStore
from src.core.services.access_policy import Permission

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get(
    "",
    response_model=list[ProductResponse],
    dependencies=[Depends(require_permission(Permission.VIEW_INVENTORY))],
)
async def list_products(
    store: ICatalogStore = Depends(get_catalog),
) -> list[ProductResponse]:
    """All products ordered by name, with current stock and low-stock flag."""
    products = await store.list_products()
    return [ProductResponse.from_entity(p) for p in products]


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    dependencies=[Depends(require_permission(Permission.VIEW_INVENTORY))],
)
async def get_product(
    product_id: int,
    store: ICatalogStore = Depends(get_catalog),
) -> ProductResponse:
    product = await store.get_product(product_id)
    if product is None:
        raise NotFoundError("product", product_id)
    return ProductResponse.from_entity(product)


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_permission(Permission.MANAGE_CATALOG))],
)
async def create_product(
    request: CreateProductRequest,
    use_case: CreateProductUseCase = Depends(get_create_product_use_case),
) -> ProductResponse:
    product = await use_case.execute(request)
    return use_case.to_response(product)


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    dependencies=[Depends(require_permission(Permission.MANAGE_CATALOG))],
)
async def update_product(
    product_id: int,
    request: UpdateProductRequest,
    use_case: UpdateProductUseCase = Depends(get_update_product_use_case),
) -> ProductResponse:
    """Partial update; ledger entries are never touched."""
    product = await use_case.execute(product_id, request)
    return use_case.to_response(product)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_permission(Permission.MANAGE_CATALOG))],
)
async def delete_product(
    product_id: int,
    store: ICatalogStore = Depends(get_catalog),
) -> Response:
    """Delete a product with no ledger history (409 otherwise)."""
    await store.delete_product(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
