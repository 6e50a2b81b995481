"""
Demo data seeder.

Usage:
    python -m src.infrastructure.tools.seed [--password PASSWORD]

The database location comes from STORAGE_DATA_DIR / STORAGE_DB_NAME.

Creates one user per role, three categories, two suppliers and two
products. Runs only when the admin account does not exist yet, so it is
safe to call on every startup.
"""

from __future__ import annotations

import argparse
import asyncio
from decimal import Decimal

from src.config import configure_logging, get_logger
from src.core.entities.catalog import Category, Product, Supplier
from src.core.entities.user import User, UserRole
from src.core.interfaces import ICatalogStore, IUserStore
from src.infrastructure.security import hash_password

logger = get_logger(__name__)

ADMIN_EMAIL = "admin@ics.com"
DEFAULT_PASSWORD = "changeme123"

DEMO_USERS = [
    (ADMIN_EMAIL, "Admin User", UserRole.ADMIN),
    ("manager@ics.com", "Manager User", UserRole.MANAGER),
    ("stock1@ics.com", "Stock Controller 1", UserRole.STOCK_CONTROLLER),
    ("viewer@ics.com", "Viewer User", UserRole.VIEWER),
]

DEMO_CATEGORIES = ["Beverages", "Snacks", "Electronics"]

DEMO_SUPPLIERS = [
    Supplier(
        name="Global Drinks Ltd",
        contact="John Doe",
        email="john@global.com",
        address="123 Ind Park",
    ),
    Supplier(
        name="Tech Wholesalers",
        contact="Jane Smith",
        email="jane@tech.com",
        address="456 Tech Ave",
    ),
]

# (name, category, min level, purchase price, selling price, unit)
DEMO_PRODUCTS = [
    ("Cola 330ml", "Beverages", 20, "0.50", "1.00", "can"),
    ("Chips 50g", "Snacks", 15, "0.80", "1.50", "bag"),
]


async def seed_demo_data(
    user_store: IUserStore,
    catalog_store: ICatalogStore,
    password: str = DEFAULT_PASSWORD,
) -> bool:
    """
    Insert demo data unless the admin account already exists.

    Returns:
        True if data was inserted.
    """
    if await user_store.get_user_by_email(ADMIN_EMAIL) is not None:
        logger.info("seed_skipped", reason="admin_exists")
        return False

    password_hash = hash_password(password)
    for email, name, role in DEMO_USERS:
        await user_store.create_user(
            User(email=email, password_hash=password_hash, name=name, role=role)
        )

    categories = {c.name: c for c in await catalog_store.list_categories()}
    for name in DEMO_CATEGORIES:
        if name not in categories:
            categories[name] = await catalog_store.create_category(Category(name=name))

    for supplier in DEMO_SUPPLIERS:
        await catalog_store.create_supplier(supplier.model_copy())

    for name, category, min_level, cost, price, unit in DEMO_PRODUCTS:
        await catalog_store.create_product(
            Product(
                name=name,
                category_id=categories[category].id,
                min_stock_level=min_level,
                default_purchase_price=Decimal(cost),
                default_selling_price=Decimal(price),
                unit=unit,
            )
        )

    logger.info(
        "database_seeded",
        users=len(DEMO_USERS),
        categories=len(DEMO_CATEGORIES),
        suppliers=len(DEMO_SUPPLIERS),
        products=len(DEMO_PRODUCTS),
    )
    return True


async def run(password: str) -> bool:
    from src.infrastructure.storage.sqlite import (
        close_pool,
        get_catalog_store,
        get_user_store,
    )
    from src.infrastructure.storage.sqlite.migrations.migrator import initialize_database

    await initialize_database()
    try:
        return await seed_demo_data(
            await get_user_store(),
            await get_catalog_store(),
            password=password,
        )
    finally:
        await close_pool()


def main() -> None:
    """CLI entry point for seeding demo data."""
    parser = argparse.ArgumentParser(description="Seed the inventory ledger with demo data")
    parser.add_argument(
        "--password",
        default=DEFAULT_PASSWORD,
        help=f"Password for every demo user (default: {DEFAULT_PASSWORD})",
    )
    args = parser.parse_args()

    configure_logging()
    seeded = asyncio.run(run(args.password))
    print("Database seeded" if seeded else "Seed skipped: admin user already exists")


if __name__ == "__main__":
    main()
