"""
Catalog models shared by the upstream client and the filter endpoint.

Wire format uses camelCase keys (minPrice, commonWords); attributes are
snake_case. Decimal prices are serialized as JSON numbers.
"""
from decimal import Decimal
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

# Decimal internally, JSON number on the wire. The float conversion is lossy
# beyond ~15 significant digits, which is acceptable for storefront prices.
Price = Annotated[
    Decimal,
    PlainSerializer(float, return_type=float, when_used="json"),
]


class CatalogModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Product(CatalogModel):
    """A single catalog entry as provided by the upstream source."""

    title: Optional[str] = None
    description: Optional[str] = None
    price: Price
    sizes: Optional[List[str]] = None


class CatalogEnvelope(CatalogModel):
    """Upstream response body: {"products": [...]}."""

    products: Optional[List[Product]] = None


class FilterMetadata(CatalogModel):
    """
    Aggregate description of the full, unfiltered catalog.

    Lets a client discover filter values beyond its current narrowed result.
    """

    min_price: Price = Decimal("0")
    max_price: Price = Decimal("0")
    sizes: List[str] = Field(default_factory=list)
    common_words: List[str] = Field(default_factory=list)


class ProductFilterResponse(CatalogModel):
    """Response body of GET /api/product/filter."""

    products: List[Product] = Field(default_factory=list)
    filter: FilterMetadata = Field(default_factory=FilterMetadata)


class ErrorResponse(CatalogModel):
    """Body returned for unhandled failures."""

    status_code: int
    message: str
    detail: Optional[str] = None
