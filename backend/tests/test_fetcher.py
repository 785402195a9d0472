"""
Unit tests for the upstream catalog client.

These tests use httpx.MockTransport and do NOT perform real HTTP calls.
"""
import json
from decimal import Decimal

import httpx
import pytest

from app.core.config import Settings
from app.core.errors import MalformedUpstreamPayload, UpstreamUnavailable
from app.services.catalog.fetcher import CatalogFetcher

CATALOG_URL = "http://catalog.test/products"

CATALOG = {
    "products": [
        {"title": "Product 1", "description": "A red shirt", "price": 10, "sizes": ["S"]},
        {"title": "Product 2", "description": "A blue shirt", "price": 20.5, "sizes": ["M", "L"]},
    ]
}


def make_fetcher(handler) -> CatalogFetcher:
    settings = Settings(product_url=CATALOG_URL, timeout_seconds=1.0)
    return CatalogFetcher(settings, transport=httpx.MockTransport(handler))


def respond_with(status_code=200, **kwargs):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, **kwargs)
    return handler


@pytest.mark.asyncio
async def test_fetch_parses_products():
    fetcher = make_fetcher(respond_with(json=CATALOG))

    products = await fetcher.fetch()

    assert [p.title for p in products] == ["Product 1", "Product 2"]
    assert products[1].price == Decimal("20.5")
    assert products[1].sizes == ["M", "L"]


@pytest.mark.asyncio
async def test_fetch_issues_single_get_to_configured_url():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json=CATALOG)

    await make_fetcher(handler).fetch()

    assert len(requests) == 1
    assert requests[0].method == "GET"
    assert str(requests[0].url) == CATALOG_URL


@pytest.mark.asyncio
async def test_missing_products_field_returns_none():
    fetcher = make_fetcher(respond_with(json={"total": 0}))

    assert await fetcher.fetch() is None


@pytest.mark.asyncio
async def test_null_body_returns_none():
    fetcher = make_fetcher(respond_with(content=b"null"))

    assert await fetcher.fetch() is None


@pytest.mark.asyncio
async def test_empty_products_list_returns_empty_list():
    fetcher = make_fetcher(respond_with(json={"products": []}))

    assert await fetcher.fetch() == []


@pytest.mark.asyncio
async def test_invalid_json_is_malformed():
    fetcher = make_fetcher(respond_with(content=b"{not json"))

    with pytest.raises(MalformedUpstreamPayload):
        await fetcher.fetch()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"products": "everything"},
        {"products": [{"title": "No price"}]},
        ["not", "an", "envelope"],
    ],
)
async def test_wrong_shape_is_malformed(body):
    fetcher = make_fetcher(respond_with(content=json.dumps(body).encode()))

    with pytest.raises(MalformedUpstreamPayload) as exc_info:
        await fetcher.fetch()

    assert exc_info.value.url == CATALOG_URL


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [404, 500, 503])
async def test_non_success_status_is_unavailable(status_code):
    fetcher = make_fetcher(respond_with(status_code, json=CATALOG))

    with pytest.raises(UpstreamUnavailable) as exc_info:
        await fetcher.fetch()

    assert exc_info.value.status_code == status_code
    assert isinstance(exc_info.value.__cause__, httpx.HTTPStatusError)


@pytest.mark.asyncio
async def test_timeout_is_unavailable():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("read timed out", request=request)

    with pytest.raises(UpstreamUnavailable) as exc_info:
        await make_fetcher(handler).fetch()

    assert exc_info.value.status_code is None
    assert "timed out" in exc_info.value.reason


@pytest.mark.asyncio
async def test_connection_error_is_unavailable():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamUnavailable) as exc_info:
        await make_fetcher(handler).fetch()

    assert "connection refused" in str(exc_info.value)
