"""
Prometheus metrics collection module.

Metrics Categories:
- RED Metrics: Rate, Errors, Duration of inbound HTTP requests
- Catalog Metrics: upstream fetch outcomes and latency, catalog and result sizes

All metrics follow Prometheus naming conventions:
- Counters: _total suffix
- Histograms: _seconds suffix for duration
"""
from typing import Optional
from prometheus_client import (
    Counter,
    Histogram,
    generate_latest,
    REGISTRY,
    CONTENT_TYPE_LATEST,
)

from app.core.logging import get_logger

logger = get_logger(__name__)

registry = REGISTRY

# ============================================================================
# RED METRICS - Rate, Errors, Duration
# ============================================================================

http_requests_total = Counter(
    "http_requests_total",
    "Total number of HTTP requests",
    ["method", "endpoint", "status"],
    registry=registry,
)

http_errors_total = Counter(
    "http_errors_total",
    "Total number of HTTP errors",
    ["method", "endpoint", "status_code"],
    registry=registry,
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "endpoint"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
    registry=registry,
)

# ============================================================================
# CATALOG METRICS
# ============================================================================

catalog_fetch_total = Counter(
    "catalog_fetch_total",
    "Total number of upstream catalog fetches",
    ["outcome"],  # "success", "empty", "unavailable", "malformed"
    registry=registry,
)

catalog_fetch_duration_seconds = Histogram(
    "catalog_fetch_duration_seconds",
    "Upstream catalog fetch latency in seconds",
    buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
    registry=registry,
)

catalog_products_fetched = Histogram(
    "catalog_products_fetched",
    "Number of products returned by the upstream catalog",
    buckets=[0, 1, 5, 10, 25, 50, 100, 250, 500, 1000],
    registry=registry,
)

catalog_filtered_products = Histogram(
    "catalog_filtered_products",
    "Number of products left after applying request filters",
    buckets=[0, 1, 5, 10, 25, 50, 100, 250, 500, 1000],
    registry=registry,
)


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def normalize_endpoint(path: str) -> str:
    """
    Normalize endpoint path for metrics.

    Strips query strings and trailing slashes to keep label cardinality low.

    Examples:
        /api/product/filter?minPrice=10 -> /api/product/filter
        /health/ -> /health
    """
    if "?" in path:
        path = path.split("?")[0]
    if len(path) > 1:
        path = path.rstrip("/")
    return path


def record_http_request(
    method: str,
    endpoint: str,
    status_code: int,
    duration_seconds: float,
) -> None:
    """
    Record HTTP request metrics (RED metrics).

    Args:
        method: HTTP method (GET, POST, etc.)
        endpoint: Request path
        status_code: HTTP status code
        duration_seconds: Request duration in seconds
    """
    normalized_endpoint = normalize_endpoint(endpoint)

    http_requests_total.labels(
        method=method,
        endpoint=normalized_endpoint,
        status=str(status_code),
    ).inc()

    if status_code >= 400:
        http_errors_total.labels(
            method=method,
            endpoint=normalized_endpoint,
            status_code=str(status_code),
        ).inc()

    http_request_duration_seconds.labels(
        method=method,
        endpoint=normalized_endpoint,
    ).observe(duration_seconds)


def record_catalog_fetch(
    outcome: str,
    duration_seconds: float,
    product_count: Optional[int] = None,
) -> None:
    """
    Record an upstream catalog fetch.

    Args:
        outcome: "success", "empty", "unavailable" or "malformed"
        duration_seconds: Fetch duration in seconds
        product_count: Number of products parsed (only for successful fetches)
    """
    catalog_fetch_total.labels(outcome=outcome).inc()
    catalog_fetch_duration_seconds.observe(duration_seconds)
    if product_count is not None:
        catalog_products_fetched.observe(product_count)


def record_filtered_products(count: int) -> None:
    catalog_filtered_products.observe(count)


def get_metrics() -> bytes:
    """
    Get Prometheus metrics in text format.
    """
    return generate_latest(registry)


def get_metrics_content_type() -> str:
    return CONTENT_TYPE_LATEST
