"""API route modules."""

from src.api.routes.auth import router as auth_router
from src.api.routes.categories import router as categories_router
from src.api.routes.health import router as health_router
from src.api.routes.inventory import router as inventory_router
from src.api.routes.products import router as products_router
from src.api.routes.reports import router as reports_router
from src.api.routes.suppliers import router as suppliers_router
from src.api.routes.users import router as users_router

__all__ = [
    "auth_router",
    "categories_router",
    "health_router",
    "inventory_router",
    "products_router",
    "reports_router",
    "suppliers_router",
    "users_router",
]
