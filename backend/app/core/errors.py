"""
Error taxonomy for the product filter API.

- ConfigurationMissing: fatal at startup, the service must not serve traffic
- UpstreamUnavailable: network failure, timeout or non-2xx from the catalog source
- MalformedUpstreamPayload: catalog body is not valid JSON or has the wrong shape
"""
from typing import Optional


class ProductAPIError(Exception):
    """Base class for product filter API errors."""


class ConfigurationMissing(ProductAPIError):
    """Raised when a required setting is absent."""

    def __init__(self, setting: str):
        self.setting = setting
        super().__init__(f"Required setting '{setting}' is not configured")


class UpstreamUnavailable(ProductAPIError):
    """Raised when the upstream catalog cannot be fetched."""

    def __init__(self, url: str, reason: str, status_code: Optional[int] = None):
        self.url = url
        self.reason = reason
        self.status_code = status_code
        super().__init__(f"Product catalog at {url} is unavailable: {reason}")


class MalformedUpstreamPayload(ProductAPIError):
    """Raised when the upstream catalog body cannot be parsed."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Product catalog at {url} returned a malformed payload: {reason}")
