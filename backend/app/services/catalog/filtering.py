"""
Price range and size filtering for catalog products.
"""
from decimal import Decimal
from typing import List, Optional, Sequence, Set

from app.core.logging import get_logger
from app.models.catalog import Product

logger = get_logger(__name__)


def parse_csv(value: Optional[str]) -> List[str]:
    """
    Split a comma-separated query value.

    Entries are kept as given (no trimming); an absent or empty value yields [].
    """
    if not value:
        return []
    return value.split(",")


def _size_key(size: str) -> str:
    # Ordinal, culture-independent case folding
    return size.upper()


def _matches(
    product: Product,
    min_price: Optional[Decimal],
    max_price: Optional[Decimal],
    sizes: Set[str],
) -> bool:
    if min_price is not None and product.price < min_price:
        return False
    if max_price is not None and product.price > max_price:
        return False
    if sizes:
        return any(_size_key(size) in sizes for size in product.sizes or [])
    return True


def filter_products(
    products: Optional[Sequence[Product]],
    min_price: Optional[Decimal] = None,
    max_price: Optional[Decimal] = None,
    size: Optional[str] = None,
) -> List[Product]:
    """
    Filter products by inclusive price bounds and requested sizes.

    Args:
        products: Catalog to filter (None is treated as empty)
        min_price: Inclusive lower bound, unbounded when None
        max_price: Inclusive upper bound, unbounded when None
        size: Comma-separated sizes; a product matches when any of its sizes
            equals any requested size, ignoring case

    Returns:
        Matching products in their original order
    """
    logger.info(
        "catalog_filter_started",
        min_price=str(min_price) if min_price is not None else None,
        max_price=str(max_price) if max_price is not None else None,
        sizes=size,
    )
    requested_sizes = {_size_key(s) for s in parse_csv(size)}

    filtered = [
        product
        for product in products or []
        if _matches(product, min_price, max_price, requested_sizes)
    ]

    logger.info("catalog_filter_completed", filtered_count=len(filtered))
    return filtered
