"""Catalog services: upstream fetch, filtering, highlighting and metadata."""

from .fetcher import CatalogFetcher
from .filtering import filter_products
from .highlight import highlight_words
from .metadata import generate_filter_metadata, most_common_words
from .orchestration import ProductFilterService

__all__ = [
    "CatalogFetcher",
    "filter_products",
    "highlight_words",
    "generate_filter_metadata",
    "most_common_words",
    "ProductFilterService",
]
