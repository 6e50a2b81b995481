"""Pytest configuration and fixtures."""

import os
from collections.abc import AsyncGenerator
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from unittest.mock import MagicMock, patch

# Cheap bcrypt cost for tests; must be set before settings are first read
os.environ.setdefault("AUTH_BCRYPT_ROUNDS", "4")

import pytest

from src.core.entities.catalog import Category, Product, ProductWithStock, Supplier
from src.core.entities.ledger import Movement, MovementType
from src.core.entities.user import Actor, User, UserRole


@pytest.fixture
def admin_actor() -> Actor:
    return Actor(id=1, name="Admin User", role=UserRole.ADMIN)


@pytest.fixture
def manager_actor() -> Actor:
    return Actor(id=2, name="Manager User", role=UserRole.MANAGER)


@pytest.fixture
def clerk_actor() -> Actor:
    return Actor(id=3, name="Stock Controller 1", role=UserRole.STOCK_CONTROLLER)


@pytest.fixture
def viewer_actor() -> Actor:
    return Actor(id=4, name="Viewer User", role=UserRole.VIEWER)


def make_product(**overrides) -> ProductWithStock:
    """Build a product with stock figures; keyword args override defaults."""
    data = {
        "id": 1,
        "category_id": 1,
        "category_name": "Beverages",
        "name": "Cola 330ml",
        "min_stock_level": 20,
        "default_purchase_price": Decimal("0.50"),
        "default_selling_price": Decimal("1.00"),
        "unit": "can",
        "total_in": 0,
        "total_out": 0,
    }
    data.update(overrides)
    return ProductWithStock(**data)


def make_movement(
    movement_id: int,
    type: MovementType,
    quantity: int,
    date: datetime,
    product_id: int = 1,
    recorded_by: int = 1,
) -> Movement:
    return Movement(
        id=movement_id,
        type=type,
        product_id=product_id,
        quantity=quantity,
        date=date,
        recorded_by=recorded_by,
        fiscal_year=date.year,
        details="Purchase" if type == MovementType.IN else "sale",
    )


@pytest.fixture
def product_factory():
    return make_product


@pytest.fixture
def movement_factory():
    return make_movement


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
async def sqlite_db(temp_db_path: Path) -> AsyncGenerator[Path, None]:
    """
    Migrated temporary database with the global pool pointed at it.

    The pool is closed and reset afterwards so later tests start clean.
    """
    import src.infrastructure.storage.sqlite.connection as conn_module
    from src.infrastructure.storage.sqlite.migrations.migrator import initialize_database

    await initialize_database(temp_db_path, create_backup_before=False)

    conn_module._pool = None
    mock_settings = MagicMock()
    mock_settings.storage.db_path = temp_db_path
    mock_settings.storage.pool_size = 2
    mock_settings.storage.busy_timeout = 5000

    with patch.object(conn_module, "get_settings", return_value=mock_settings):
        try:
            yield temp_db_path
        finally:
            await conn_module.close_pool()


@dataclass
class SeededRefs:
    """Ids of the rows every ledger test needs."""

    admin_id: int
    clerk_id: int
    category_id: int
    supplier_id: int
    product_id: int


@pytest.fixture
async def seeded(sqlite_db: Path) -> SeededRefs:
    """One admin, one stock controller, one category, supplier and product."""
    from src.infrastructure.storage.sqlite import SQLiteCatalogStore, SQLiteUserStore

    users = SQLiteUserStore()
    catalog = SQLiteCatalogStore()

    admin = await users.create_user(
        User(email="admin@example.com", password_hash="x", name="Admin", role=UserRole.ADMIN)
    )
    clerk = await users.create_user(
        User(
            email="clerk@example.com",
            password_hash="x",
            name="Clerk",
            role=UserRole.STOCK_CONTROLLER,
        )
    )
    category = await catalog.create_category(Category(name="Beverages"))
    supplier = await catalog.create_supplier(Supplier(name="Global Drinks Ltd"))
    product = await catalog.create_product(
        Product(
            name="Cola 330ml",
            category_id=category.id,
            min_stock_level=20,
            default_purchase_price=Decimal("0.50"),
            default_selling_price=Decimal("1.00"),
            unit="can",
        )
    )
    return SeededRefs(
        admin_id=admin.id,  # type: ignore[arg-type]
        clerk_id=clerk.id,  # type: ignore[arg-type]
        category_id=category.id,  # type: ignore[arg-type]
        supplier_id=supplier.id,  # type: ignore[arg-type]
        product_id=product.id,  # type: ignore[arg-type]
    )
