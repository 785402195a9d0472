"""Pydantic models for the catalog and API responses."""

from .catalog import (
    CatalogEnvelope,
    ErrorResponse,
    FilterMetadata,
    Product,
    ProductFilterResponse,
)

__all__ = [
    "CatalogEnvelope",
    "ErrorResponse",
    "FilterMetadata",
    "Product",
    "ProductFilterResponse",
]
