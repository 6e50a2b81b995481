"""Abstract interface for catalog storage (categories, suppliers, products)."""

from abc import ABC, abstractmethod
from typing import Any

from src.core.entities.catalog import Category, Product, ProductWithStock, Supplier


class ICatalogStore(ABC):
    """Interface for reference entity persistence."""

    # Categories

    @abstractmethod
    async def list_categories(self) -> list[Category]:
        """List categories ordered by name."""
        pass

    @abstractmethod
    async def get_category(self, category_id: int) -> Category | None:
        """Get category by ID."""
        pass

    @abstractmethod
    async def create_category(self, category: Category) -> Category:
        """Create a category. Raises DuplicateEntityError on a taken name."""
        pass

    # Suppliers

    @abstractmethod
    async def list_suppliers(self) -> list[Supplier]:
        """List suppliers ordered by name."""
        pass

    @abstractmethod
    async def get_supplier(self, supplier_id: int) -> Supplier | None:
        """Get supplier by ID."""
        pass

    @abstractmethod
    async def create_supplier(self, supplier: Supplier) -> Supplier:
        """Create a supplier."""
        pass

    @abstractmethod
    async def update_supplier(
        self, supplier_id: int, changes: dict[str, Any]
    ) -> Supplier:
        """Apply a partial update. Raises NotFoundError."""
        pass

    @abstractmethod
    async def delete_supplier(self, supplier_id: int) -> None:
        """Hard-delete a supplier. Receipts keep the dangling id."""
        pass

    # Products

    @abstractmethod
    async def list_products(self) -> list[ProductWithStock]:
        """List products with category name and ledger totals."""
        pass

    @abstractmethod
    async def get_product(self, product_id: int) -> ProductWithStock | None:
        """Get one product with category name and ledger totals."""
        pass

    @abstractmethod
    async def create_product(self, product: Product) -> Product:
        """Create a product."""
        pass

    @abstractmethod
    async def update_product(self, product_id: int, changes: dict[str, Any]) -> ProductWithStock:
        """Apply a partial update. Raises NotFoundError."""
        pass

    @abstractmethod
    async def delete_product(self, product_id: int) -> None:
        """
        Hard-delete a product.

        Raises:
            NotFoundError: no such product.
            EntityInUseError: ledger entries reference it.
        """
        pass
