"""
Application configuration.

Environment configuration:
- PRODUCT_API_URL: Upstream product catalog URL (required)
- PRODUCT_API_TIMEOUT_SECONDS: Upstream request timeout in seconds (default: 5.0)

Logging and tracing are configured separately in app.main (LOG_LEVEL, LOG_JSON,
OTEL_EXPORTER_OTLP_ENDPOINT) so that startup failures are still logged.
"""
import os
from dataclasses import dataclass

from app.core.errors import ConfigurationMissing

PRODUCT_URL_ENV = "PRODUCT_API_URL"
TIMEOUT_ENV = "PRODUCT_API_TIMEOUT_SECONDS"
DEFAULT_TIMEOUT_SECONDS = 5.0


@dataclass(frozen=True)
class Settings:
    """Read-only settings, loaded once at startup."""

    product_url: str
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS


def load_settings() -> Settings:
    """
    Build settings from environment variables.

    Raises:
        ConfigurationMissing: If PRODUCT_API_URL is not set or blank
    """
    product_url = (os.getenv(PRODUCT_URL_ENV) or "").strip()
    if not product_url:
        raise ConfigurationMissing(PRODUCT_URL_ENV)

    timeout = float(os.getenv(TIMEOUT_ENV) or DEFAULT_TIMEOUT_SECONDS)

    return Settings(product_url=product_url, timeout_seconds=timeout)
