"""
Product filter endpoint.

GET /api/product/filter?minPrice={decimal}&maxPrice={decimal}&size={csv}&highlight={csv}
"""
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from app.core.logging import get_logger
from app.models.catalog import ProductFilterResponse
from app.services.catalog.orchestration import ProductFilterService

logger = get_logger(__name__)

router = APIRouter()


def get_product_filter_service(request: Request) -> ProductFilterService:
    """Service built at startup from the application settings."""
    return request.app.state.product_filter_service


@router.get("/filter", response_model=ProductFilterResponse)
async def get_filtered_products(
    min_price: Optional[Decimal] = Query(None, alias="minPrice", description="Inclusive minimum price"),
    max_price: Optional[Decimal] = Query(None, alias="maxPrice", description="Inclusive maximum price"),
    size: Optional[str] = Query(None, description="Comma-separated sizes, case-insensitive"),
    highlight: Optional[str] = Query(None, description="Comma-separated words to highlight in descriptions"),
    service: ProductFilterService = Depends(get_product_filter_service),
):
    """
    Return catalog products matching the price range and sizes, with
    highlighted descriptions and metadata describing the full catalog.
    """
    logger.info(
        "product_filter_requested",
        min_price=str(min_price) if min_price is not None else None,
        max_price=str(max_price) if max_price is not None else None,
        size=size,
        highlight=highlight,
    )
    return await service.filter_catalog(
        min_price=min_price,
        max_price=max_price,
        size=size,
        highlight=highlight,
    )
