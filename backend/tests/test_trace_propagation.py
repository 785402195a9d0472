"""
Integration tests for trace ID propagation.

Tests verify:
- Trace ID is generated for requests without X-Trace-ID header
- Trace ID is taken from X-Trace-ID, falling back to X-Request-ID
- Request ID is generated for each request
- Failed requests keep their trace context in the 500 response and its log
- Context is cleared after the request completes
"""
import uuid

import httpx
import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.core import exception_handlers
from app.core.config import PRODUCT_URL_ENV, Settings
from app.core.logging import get_trace_id, get_request_id
from app.routes.product import get_product_filter_service
from app.services.catalog.fetcher import CatalogFetcher
from app.services.catalog.orchestration import ProductFilterService


CATALOG_URL = "http://catalog.test/products"

client = TestClient(app)


class RecordingLogger:
    """Stand-in logger that records each error with the context active at call time."""

    def __init__(self):
        self.errors = []

    def error(self, event, **kwargs):
        self.errors.append({
            "event": event,
            "trace_id": get_trace_id(),
            "request_id": get_request_id(),
            **kwargs,
        })


@pytest.fixture
def failing_client(monkeypatch):
    """Client whose filter endpoint talks to an upstream answering 503."""
    monkeypatch.setenv(PRODUCT_URL_ENV, CATALOG_URL)
    settings = Settings(product_url=CATALOG_URL)
    transport = httpx.MockTransport(lambda request: httpx.Response(503))
    service = ProductFilterService(CatalogFetcher(settings, transport=transport))

    with TestClient(app, raise_server_exceptions=False) as test_client:
        app.dependency_overrides[get_product_filter_service] = lambda: service
        yield test_client
    app.dependency_overrides.clear()


class TestTraceIDPropagation:
    """Test trace ID propagation through HTTP requests."""

    def test_trace_id_generated_when_missing(self):
        response = client.get("/health/")

        assert response.status_code == 200
        trace_id = response.headers["X-Trace-ID"]
        assert len(trace_id) == 36
        uuid.UUID(trace_id)

    def test_trace_id_extracted_from_header(self):
        custom_trace_id = str(uuid.uuid4())

        response = client.get("/health/", headers={"X-Trace-ID": custom_trace_id})

        assert response.headers["X-Trace-ID"] == custom_trace_id

    def test_trace_id_extracted_from_request_id_header(self):
        custom_trace_id = str(uuid.uuid4())

        response = client.get("/health/", headers={"X-Request-ID": custom_trace_id})

        assert response.headers["X-Trace-ID"] == custom_trace_id

    def test_request_id_is_unique_per_request(self):
        first = client.get("/health/").headers["X-Request-ID"]
        second = client.get("/health/").headers["X-Request-ID"]

        uuid.UUID(first)
        assert first != second

    def test_context_cleared_after_request(self):
        client.get("/health/", headers={"X-Trace-ID": "trace-to-clear"})

        assert get_trace_id() is None
        assert get_request_id() is None


class TestTraceIDOnFailure:
    """Unhandled failures still carry the request's trace context."""

    def test_error_response_echoes_trace_headers(self, failing_client):
        response = failing_client.get(
            "/api/product/filter", headers={"X-Trace-ID": "client-trace"}
        )

        assert response.status_code == 500
        data = response.json()
        assert data["statusCode"] == 500
        assert data["message"] == "An unexpected error occurred."
        assert CATALOG_URL in data["detail"]
        assert response.headers["X-Trace-ID"] == "client-trace"
        uuid.UUID(response.headers["X-Request-ID"])

    def test_generated_trace_id_on_error_response(self, failing_client):
        response = failing_client.get("/api/product/filter")

        assert response.status_code == 500
        uuid.UUID(response.headers["X-Trace-ID"])
        uuid.UUID(response.headers["X-Request-ID"])

    def test_unhandled_exception_log_has_trace_context(self, failing_client, monkeypatch):
        recorder = RecordingLogger()
        monkeypatch.setattr(exception_handlers, "logger", recorder)

        response = failing_client.get(
            "/api/product/filter", headers={"X-Trace-ID": "client-trace"}
        )

        entries = [e for e in recorder.errors if e["event"] == "unhandled_exception"]
        assert len(entries) == 1
        assert entries[0]["trace_id"] == "client-trace"
        assert entries[0]["request_id"] == response.headers["X-Request-ID"]
        assert entries[0]["error_type"] == "UpstreamUnavailable"

    def test_context_cleared_after_failed_request(self, failing_client):
        failing_client.get("/api/product/filter", headers={"X-Trace-ID": "trace-to-clear"})

        assert get_trace_id() is None
        assert get_request_id() is None
