"""
Upstream product catalog client.

Issues one GET per call against the configured catalog URL and parses the
{"products": [...]} envelope. A body without products is a warning, not an
error; transport failures and unparseable bodies are raised.
"""
import json
import time
from typing import List, Optional

import httpx
from pydantic import ValidationError

from app.core.config import Settings
from app.core.errors import MalformedUpstreamPayload, UpstreamUnavailable
from app.core.logging import get_logger
from app.core.metrics import record_catalog_fetch
from app.core.tracing import (
    get_tracer,
    record_exception,
    set_span_attribute,
    set_span_status,
    StatusCode,
)
from app.models.catalog import CatalogEnvelope, Product

logger = get_logger(__name__)


class CatalogFetcher:
    """Async HTTP client for the upstream product catalog."""

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = settings.product_url
        self.timeout_seconds = settings.timeout_seconds
        # Tests pass an httpx.MockTransport here
        self._transport = transport

    async def _get(self) -> httpx.Response:
        async with httpx.AsyncClient(
            timeout=self.timeout_seconds,
            transport=self._transport,
        ) as client:
            response = await client.get(self.url)
            response.raise_for_status()
            return response

    def _parse(self, body: str) -> Optional[List[Product]]:
        try:
            data = json.loads(body)
        except json.JSONDecodeError as exc:
            raise MalformedUpstreamPayload(self.url, f"invalid JSON: {exc}") from exc

        if data is None:
            return None

        try:
            envelope = CatalogEnvelope.model_validate(data)
        except ValidationError as exc:
            raise MalformedUpstreamPayload(
                self.url,
                f"unexpected catalog shape ({exc.error_count()} validation errors)",
            ) from exc
        return envelope.products

    async def fetch(self) -> Optional[List[Product]]:
        """
        Fetch the full product catalog.

        Returns:
            The product list, [] when the upstream sent an empty list, or None
            when the body had no products field (or was JSON null).

        Raises:
            UpstreamUnavailable: Network failure, timeout or non-2xx status
            MalformedUpstreamPayload: Body is not valid JSON or has the wrong shape
        """
        tracer = get_tracer()
        with tracer.start_as_current_span("catalog.fetch"):
            set_span_attribute("catalog.url", self.url)
            logger.info("catalog_fetch_started", url=self.url)
            start = time.time()

            try:
                response = await self._get()
            except httpx.HTTPStatusError as exc:
                status_code = exc.response.status_code
                record_catalog_fetch("unavailable", time.time() - start)
                record_exception(exc)
                logger.error(
                    "catalog_fetch_failed",
                    url=self.url,
                    status_code=status_code,
                    error=str(exc),
                    error_type=type(exc).__name__,
                )
                raise UpstreamUnavailable(self.url, f"HTTP {status_code}", status_code=status_code) from exc
            except httpx.TimeoutException as exc:
                record_catalog_fetch("unavailable", time.time() - start)
                record_exception(exc)
                logger.error(
                    "catalog_fetch_failed",
                    url=self.url,
                    error=str(exc),
                    error_type=type(exc).__name__,
                    timeout_seconds=self.timeout_seconds,
                )
                raise UpstreamUnavailable(self.url, f"timed out after {self.timeout_seconds}s") from exc
            except httpx.HTTPError as exc:
                record_catalog_fetch("unavailable", time.time() - start)
                record_exception(exc)
                logger.error(
                    "catalog_fetch_failed",
                    url=self.url,
                    error=str(exc),
                    error_type=type(exc).__name__,
                )
                raise UpstreamUnavailable(self.url, str(exc) or type(exc).__name__) from exc

            logger.debug("catalog_fetch_response", url=self.url, body=response.text)

            try:
                products = self._parse(response.text)
            except MalformedUpstreamPayload as exc:
                record_catalog_fetch("malformed", time.time() - start)
                record_exception(exc)
                logger.error(
                    "catalog_fetch_failed",
                    url=self.url,
                    error=exc.reason,
                    error_type=type(exc).__name__,
                )
                raise

            duration = time.time() - start
            latency_ms = int(duration * 1000)

            if not products:
                record_catalog_fetch("empty", duration, product_count=0)
                logger.warning(
                    "catalog_fetch_no_products",
                    url=self.url,
                    products_field_present=products is not None,
                    latency_ms=latency_ms,
                )
            else:
                record_catalog_fetch("success", duration, product_count=len(products))
                logger.info(
                    "catalog_fetch_completed",
                    url=self.url,
                    products_count=len(products),
                    latency_ms=latency_ms,
                )

            set_span_attribute("catalog.products_count", len(products or []))
            set_span_status(StatusCode.OK)
            return products
