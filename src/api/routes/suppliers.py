"""
Supplier endpoints.

Deleting a supplier leaves its receipts in place with a dangling id.
"""

from fastapi import APIRouter, Depends, Response, status

from src.api.dependencies import get_catalog, require_permission
from src.application.dto.requests import CreateSupplierRequest, UpdateSupplierRequest
from src.application.dto.responses import SupplierResponse
from src.core.entities.catalog import Supplier
from src.core.interfaces import ICatalogStore
from src.core.services.access_policy import Permission

router = APIRouter(prefix="/api/suppliers", tags=["suppliers"])


@router.get(
    "",
    response_model=list[SupplierResponse],
    dependencies=[Depends(require_permission(Permission.VIEW_INVENTORY))],
)
async def list_suppliers(
    store: ICatalogStore = Depends(get_catalog),
) -> list[SupplierResponse]:
    return [SupplierResponse.from_entity(s) for s in await store.list_suppliers()]


@router.post(
    "",
    response_model=SupplierResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_permission(Permission.MANAGE_CATALOG))],
)
async def create_supplier(
    request: CreateSupplierRequest,
    store: ICatalogStore = Depends(get_catalog),
) -> SupplierResponse:
    supplier = await store.create_supplier(Supplier(**request.model_dump()))
    return SupplierResponse.from_entity(supplier)


@router.put(
    "/{supplier_id}",
    response_model=SupplierResponse,
    dependencies=[Depends(require_permission(Permission.MANAGE_CATALOG))],
)
async def update_supplier(
    supplier_id: int,
    request: UpdateSupplierRequest,
    store: ICatalogStore = Depends(get_catalog),
) -> SupplierResponse:
    """Partial update; omitted fields are left unchanged."""
    changes = request.model_dump(exclude_unset=True)
    for field in ("name", "active"):
        if field in changes and changes[field] is None:
            del changes[field]
    supplier = await store.update_supplier(supplier_id, changes)
    return SupplierResponse.from_entity(supplier)


@router.delete(
    "/{supplier_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_permission(Permission.MANAGE_CATALOG))],
)
async def delete_supplier(
    supplier_id: int,
    store: ICatalogStore = Depends(get_catalog),
) -> Response:
    await store.delete_supplier(supplier_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
