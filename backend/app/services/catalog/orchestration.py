"""
Product filter request orchestration.

Per request:
1. Fetch the full catalog (once)
2. Filter it by price range and sizes
3. Highlight keywords in copies of the filtered products
4. Summarize the *unfiltered* catalog into filter metadata

Metadata always describes the full catalog so clients can discover filter
values outside their current result set.
"""
import time
from decimal import Decimal
from typing import Optional

from app.core.logging import get_logger
from app.core.metrics import record_filtered_products
from app.core.tracing import get_tracer, set_span_attribute
from app.models.catalog import ProductFilterResponse
from app.services.catalog.fetcher import CatalogFetcher
from app.services.catalog.filtering import filter_products, parse_csv
from app.services.catalog.highlight import highlight_words
from app.services.catalog.metadata import generate_filter_metadata

logger = get_logger(__name__)


class ProductFilterService:
    """Composes fetch, filter, highlight and metadata for one request."""

    def __init__(self, fetcher: CatalogFetcher):
        self._fetcher = fetcher

    async def filter_catalog(
        self,
        min_price: Optional[Decimal] = None,
        max_price: Optional[Decimal] = None,
        size: Optional[str] = None,
        highlight: Optional[str] = None,
    ) -> ProductFilterResponse:
        """
        Build the filter response for one request.

        Fetch failures propagate; there is no partial result.
        """
        start_time = time.time()
        tracer = get_tracer()
        with tracer.start_as_current_span("catalog.filter_request"):
            catalog = await self._fetcher.fetch()

            filtered = filter_products(catalog, min_price, max_price, size)

            keywords = parse_csv(highlight)
            highlighted = [
                product.model_copy(
                    update={"description": highlight_words(product.description, keywords)}
                )
                for product in filtered
            ]

            metadata = generate_filter_metadata(catalog)

            record_filtered_products(len(highlighted))
            set_span_attribute("catalog.catalog_count", len(catalog or []))
            set_span_attribute("catalog.filtered_count", len(highlighted))

            logger.info(
                "product_filter_completed",
                catalog_count=len(catalog or []),
                filtered_count=len(highlighted),
                highlight_words_count=len(keywords),
                latency_ms=int((time.time() - start_time) * 1000),
            )
            return ProductFilterResponse(products=highlighted, filter=metadata)
