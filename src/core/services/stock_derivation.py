"""
Stock derivation.

Current stock is a fold over a product's ledger history. Nothing here
caches or stores a counter; every figure is recomputed from movements or
from per-product aggregate totals.
"""

from collections.abc import Iterable

from src.core.entities.catalog import ProductWithStock
from src.core.entities.ledger import Movement, ProductLedger


def current_stock(movements: Iterable[Movement]) -> int:
    """Sum of receipt quantities minus sum of dispatch quantities."""
    return sum(m.signed_quantity for m in movements)


def stock_from_totals(total_in: int, total_out: int) -> int:
    """Same rule as current_stock, from pre-aggregated sums."""
    return int(total_in or 0) - int(total_out or 0)


def is_low_stock(stock: int, min_stock_level: int) -> bool:
    """
    At or below minimum counts as low.

    A product with no movements has stock 0 and is therefore flagged,
    which is the "needs initial stock" signal.
    """
    return stock <= min_stock_level


def count_low_stock(products: Iterable[ProductWithStock]) -> int:
    return sum(1 for p in products if is_low_stock(p.current_stock, p.min_stock_level))


def build_product_ledger(
    product: ProductWithStock, movements: list[Movement]
) -> ProductLedger:
    """Bundle a product's movements with the stock they derive."""
    stock = current_stock(movements)
    return ProductLedger(
        product_id=product.id,  # type: ignore[arg-type]
        movements=movements,
        current_stock=stock,
        min_stock_level=product.min_stock_level,
        is_low_stock=is_low_stock(stock, product.min_stock_level),
    )
