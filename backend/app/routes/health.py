"""
Health check endpoints.
"""
from fastapi import APIRouter, Request

from app.core.logging import get_logger

logger = get_logger(__name__)
router = APIRouter()


@router.get("/")
async def health_check():
    """
    Basic health check endpoint.
    """
    return {
        "status": "ok",
        "message": "API is running"
    }


@router.get("/catalog")
async def catalog_health(request: Request):
    """
    Report whether the upstream catalog client is configured.

    Does not call the upstream source.
    """
    settings = getattr(request.app.state, "settings", None)

    if settings is None:
        return {
            "status": "unavailable",
            "configured": False,
            "message": "Catalog client not initialized",
        }

    return {
        "status": "ok",
        "configured": True,
        "product_url": settings.product_url,
        "timeout_seconds": settings.timeout_seconds,
        "message": "Catalog client is configured",
    }
