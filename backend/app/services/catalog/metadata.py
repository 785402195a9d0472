"""
Filter metadata: price bounds, available sizes and common description words.

Common words are ranked by frequency over every description in the catalog.
The most frequent few are skipped as filler ("the", "a", ...) and the next
ones are returned. Words with equal counts keep their first-occurrence order.
"""
import re
from collections import Counter
from typing import Iterator, List, Optional, Sequence

from app.core.logging import get_logger
from app.models.catalog import FilterMetadata, Product

logger = get_logger(__name__)

COMMON_WORDS_TAKE = 10
COMMON_WORDS_SKIP = 5

_NON_WORD = re.compile(r"\W+")


def _description_words(products: Sequence[Product]) -> Iterator[str]:
    for product in products:
        description = product.description
        if not description or description.isspace():
            continue
        for word in _NON_WORD.split(description.lower()):
            if word:
                yield word


def most_common_words(
    products: Optional[Sequence[Product]],
    take: int = COMMON_WORDS_TAKE,
    skip: int = COMMON_WORDS_SKIP,
) -> List[str]:
    """
    Rank description words by frequency, skip the top `skip`, return the next `take`.

    Counter keeps insertion order and sorted() is stable, so ties are broken
    by first occurrence across the catalog.
    """
    if not products:
        logger.warning("common_words_no_products")
        return []

    counts = Counter(_description_words(products))
    ranked = sorted(counts, key=lambda word: counts[word], reverse=True)
    words = ranked[skip:skip + take]

    logger.info(
        "common_words_extracted",
        distinct_words=len(counts),
        words_count=len(words),
    )
    return words


def _distinct_sizes(products: Sequence[Product]) -> List[str]:
    # dict preserves first-seen order
    return list(dict.fromkeys(size for product in products for size in product.sizes or []))


def generate_filter_metadata(products: Optional[Sequence[Product]]) -> FilterMetadata:
    """
    Summarize a catalog for client-side filter discovery.

    Args:
        products: The full, unfiltered catalog (None is treated as empty)

    Returns:
        FilterMetadata; zero bounds and empty lists for an empty catalog
    """
    if not products:
        logger.warning("filter_metadata_no_products")
        return FilterMetadata()

    prices = [product.price for product in products]
    metadata = FilterMetadata(
        min_price=min(prices),
        max_price=max(prices),
        sizes=_distinct_sizes(products),
        common_words=most_common_words(products),
    )

    logger.info(
        "filter_metadata_generated",
        min_price=str(metadata.min_price),
        max_price=str(metadata.max_price),
        sizes_count=len(metadata.sizes),
        common_words_count=len(metadata.common_words),
    )
    return metadata
