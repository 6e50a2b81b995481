"""
Category endpoints.
"""

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_catalog, require_permission
from src.application.dto.requests import CreateCategoryRequest
from src.application.dto.responses import CategoryResponse
from src.core.entities.catalog import Category
from src.core.interfaces import ICatalogStore
from src.core.services.access_policy import Permission

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get(
    "",
    response_model=list[CategoryResponse],
    dependencies=[Depends(require_permission(Permission.VIEW_INVENTORY))],
)
async def list_categories(
    store: ICatalogStore = Depends(get_catalog),
) -> list[CategoryResponse]:
    return [CategoryResponse.from_entity(c) for c in await store.list_categories()]


@router.post(
    "",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_permission(Permission.MANAGE_CATALOG))],
)
async def create_category(
    request: CreateCategoryRequest,
    store: ICatalogStore = Depends(get_catalog),
) -> CategoryResponse:
    """Create a category; 409 when the name is taken."""
    category = await store.create_category(Category(name=request.name.strip()))
    return CategoryResponse.from_entity(category)
