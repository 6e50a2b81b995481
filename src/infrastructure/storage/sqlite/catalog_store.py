"""SQLite implementation of catalog storage."""

from decimal import Decimal
from typing import Any

import aiosqlite

from src.config import get_logger
from src.core.entities.catalog import Category, Product, ProductWithStock, Supplier
from src.core.exceptions import (
    DuplicateEntityError,
    EntityInUseError,
    MissingReferenceError,
    NotFoundError,
)
from src.core.interfaces.catalog_store import ICatalogStore
from src.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)

_PRODUCT_COLUMNS = {
    "category_id",
    "name",
    "barcode",
    "description",
    "min_stock_level",
    "default_purchase_price",
    "default_selling_price",
    "unit",
    "expiry_days_default",
    "active",
}

_SUPPLIER_COLUMNS = {"name", "contact", "email", "address", "notes", "active"}

# Totals come from scalar subqueries; a double LEFT JOIN would multiply rows
_PRODUCT_SELECT = """
    SELECT p.*, c.name AS category_name,
           COALESCE((SELECT SUM(quantity) FROM stock_in WHERE product_id = p.id), 0)
               AS total_in,
           COALESCE((SELECT SUM(quantity) FROM stock_out WHERE product_id = p.id), 0)
               AS total_out
    FROM products p
    LEFT JOIN categories c ON c.id = p.category_id
"""


def _to_db(value: Any) -> Any:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, Decimal):
        return str(value)
    return value


def _set_clause(changes: dict[str, Any], allowed: set[str]) -> tuple[str, list]:
    unknown = set(changes) - allowed
    if unknown:
        raise ValueError(f"Unknown columns: {sorted(unknown)}")
    columns = sorted(changes)
    return ", ".join(f"{c} = ?" for c in columns), [_to_db(changes[c]) for c in columns]


class SQLiteCatalogStore(ICatalogStore):
    """SQLite implementation of categories, suppliers and products."""

    # =========================================================================
    # Categories
    # =========================================================================

    async def list_categories(self) -> list[Category]:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM categories ORDER BY name")
            rows = await cursor.fetchall()
            return [Category(id=row["id"], name=row["name"]) for row in rows]

    async def get_category(self, category_id: int) -> Category | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM categories WHERE id = ?", (category_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return Category(id=row["id"], name=row["name"])

    async def create_category(self, category: Category) -> Category:
        """Create a category; names are unique."""
        try:
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    "INSERT INTO categories (name) VALUES (?)", (category.name,)
                )
                category.id = cursor.lastrowid
        except aiosqlite.IntegrityError as e:
            raise DuplicateEntityError("category", "name", category.name) from e

        logger.info("category_created", category_id=category.id, name=category.name)
        return category

    # =========================================================================
    # Suppliers
    # =========================================================================

    async def list_suppliers(self) -> list[Supplier]:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM suppliers ORDER BY name, id")
            rows = await cursor.fetchall()
            return [self._row_to_supplier(row) for row in rows]

    async def get_supplier(self, supplier_id: int) -> Supplier | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM suppliers WHERE id = ?", (supplier_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_supplier(row)

    async def create_supplier(self, supplier: Supplier) -> Supplier:
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO suppliers (name, contact, email, address, notes, active)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    supplier.name,
                    supplier.contact,
                    supplier.email,
                    supplier.address,
                    supplier.notes,
                    int(supplier.active),
                ),
            )
            supplier.id = cursor.lastrowid

        logger.info("supplier_created", supplier_id=supplier.id, name=supplier.name)
        return supplier

    async def update_supplier(
        self, supplier_id: int, changes: dict[str, Any]
    ) -> Supplier:
        """Apply a partial update."""
        if changes:
            assignments, params = _set_clause(changes, _SUPPLIER_COLUMNS)
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    f"UPDATE suppliers SET {assignments} WHERE id = ?",
                    (*params, supplier_id),
                )
                if cursor.rowcount == 0:
                    raise NotFoundError("supplier", supplier_id)
            logger.info(
                "supplier_updated", supplier_id=supplier_id, fields=sorted(changes)
            )

        supplier = await self.get_supplier(supplier_id)
        if supplier is None:
            raise NotFoundError("supplier", supplier_id)
        return supplier

    async def delete_supplier(self, supplier_id: int) -> None:
        """Hard delete. Receipts keep the supplier id."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "DELETE FROM suppliers WHERE id = ?", (supplier_id,)
            )
            if cursor.rowcount == 0:
                raise NotFoundError("supplier", supplier_id)
        logger.info("supplier_deleted", supplier_id=supplier_id)

    # =========================================================================
    # Products
    # =========================================================================

    async def list_products(self) -> list[ProductWithStock]:
        """All products with category name and ledger totals, by name."""
        async with get_connection() as conn:
            cursor = await conn.execute(f"{_PRODUCT_SELECT} ORDER BY p.name, p.id")
            rows = await cursor.fetchall()
            return [self._row_to_product_with_stock(row) for row in rows]

    async def get_product(self, product_id: int) -> ProductWithStock | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"{_PRODUCT_SELECT} WHERE p.id = ?", (product_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_product_with_stock(row)

    async def create_product(self, product: Product) -> Product:
        async with get_transaction() as conn:
            await self._require_category(conn, product.category_id)
            cursor = await conn.execute(
                """
                INSERT INTO products (
                    category_id, name, barcode, description, min_stock_level,
                    default_purchase_price, default_selling_price, unit,
                    expiry_days_default, active
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    product.category_id,
                    product.name,
                    product.barcode,
                    product.description,
                    product.min_stock_level,
                    str(product.default_purchase_price),
                    str(product.default_selling_price),
                    product.unit,
                    product.expiry_days_default,
                    int(product.active),
                ),
            )
            product.id = cursor.lastrowid

        logger.info("product_created", product_id=product.id, name=product.name)
        return product

    async def update_product(self, product_id: int, changes: dict[str, Any]) -> ProductWithStock:
        """Apply a partial update."""
        if changes:
            assignments, params = _set_clause(changes, _PRODUCT_COLUMNS)
            async with get_transaction() as conn:
                if "category_id" in changes:
                    await self._require_category(conn, changes["category_id"])
                cursor = await conn.execute(
                    f"UPDATE products SET {assignments} WHERE id = ?",
                    (*params, product_id),
                )
                if cursor.rowcount == 0:
                    raise NotFoundError("product", product_id)
            logger.info("product_updated", product_id=product_id, fields=sorted(changes))

        product = await self.get_product(product_id)
        if product is None:
            raise NotFoundError("product", product_id)
        return product

    async def delete_product(self, product_id: int) -> None:
        """Hard delete, refused while ledger entries reference the product."""
        async with get_transaction() as conn:
            movements = await self._count_movements(conn, product_id)
            if movements:
                raise EntityInUseError(
                    "product", product_id, f"{movements} ledger entries reference it"
                )

            # A receipt committed after the count still trips the foreign key
            try:
                cursor = await conn.execute("DELETE FROM products WHERE id = ?", (product_id,))
            except aiosqlite.IntegrityError as e:
                raise EntityInUseError(
                    "product", product_id, "ledger entries reference it"
                ) from e
            if cursor.rowcount == 0:
                raise NotFoundError("product", product_id)

        logger.info("product_deleted", product_id=product_id)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    async def _count_movements(conn: aiosqlite.Connection, product_id: int) -> int:
        cursor = await conn.execute(
            """
            SELECT (SELECT COUNT(*) FROM stock_in WHERE product_id = ?)
                 + (SELECT COUNT(*) FROM stock_out WHERE product_id = ?)
            """,
            (product_id, product_id),
        )
        return (await cursor.fetchone())[0]

    @staticmethod
    async def _require_category(
        conn: aiosqlite.Connection, category_id: int | None
    ) -> None:
        if category_id is None:
            return
        cursor = await conn.execute(
            "SELECT 1 FROM categories WHERE id = ?", (category_id,)
        )
        if await cursor.fetchone() is None:
            raise MissingReferenceError("category", category_id)

    @staticmethod
    def _row_to_supplier(row: aiosqlite.Row) -> Supplier:
        return Supplier(
            id=row["id"],
            name=row["name"],
            contact=row["contact"],
            email=row["email"],
            address=row["address"],
            notes=row["notes"],
            active=bool(row["active"]),
        )

    @staticmethod
    def _row_to_product_with_stock(row: aiosqlite.Row) -> ProductWithStock:
        return ProductWithStock(
            id=row["id"],
            category_id=row["category_id"],
            name=row["name"],
            barcode=row["barcode"],
            description=row["description"],
            min_stock_level=row["min_stock_level"],
            default_purchase_price=Decimal(row["default_purchase_price"]),
            default_selling_price=Decimal(row["default_selling_price"]),
            unit=row["unit"],
            expiry_days_default=row["expiry_days_default"],
            active=bool(row["active"]),
            category_name=row["category_name"],
            total_in=row["total_in"],
            total_out=row["total_out"],
        )
