"""
Core application modules.
Contains configuration, errors, logging, metrics, tracing and middleware.
"""
from .config import Settings, load_settings
from .errors import (
    ProductAPIError,
    ConfigurationMissing,
    UpstreamUnavailable,
    MalformedUpstreamPayload,
)

__all__ = [
    "Settings",
    "load_settings",
    "ProductAPIError",
    "ConfigurationMissing",
    "UpstreamUnavailable",
    "MalformedUpstreamPayload",
]
