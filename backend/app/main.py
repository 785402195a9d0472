import os
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .core.config import load_settings
from .core.errors import ConfigurationMissing
from .core.exception_handlers import unexpected_error_response
from .core.logging import configure_logging, get_logger
from .core.middleware import TraceIDMiddleware
from .core.tracing import configure_tracing, instrument_fastapi, shutdown_tracing
from .routes import health, metrics, product
from .services.catalog.fetcher import CatalogFetcher
from .services.catalog.orchestration import ProductFilterService

# Use JSON output in production (containerized), console output in development
log_level = os.getenv("LOG_LEVEL", "INFO")
json_output = os.getenv("LOG_JSON", "true").lower() == "true"
configure_logging(log_level=log_level, json_output=json_output)

logger = get_logger(__name__)

# OTLP export is enabled only when an endpoint is configured
enable_otlp = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "") != ""
configure_tracing(enable_otlp=enable_otlp)

app = FastAPI(
    title="Product Filter API",
    description="Filters an upstream product catalog and summarizes its filter values",
    version="1.0.0"
)

# CORS for local dev; restrict in production
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(TraceIDMiddleware)

instrument_fastapi(app)


@app.on_event("startup")
async def startup_event():
    """Load settings and build the catalog services; refuse to start without them."""
    logger.info("app_startup_started")

    try:
        settings = load_settings()
    except ConfigurationMissing as exc:
        logger.critical(
            "app_startup_configuration_missing",
            setting=exc.setting,
            error=str(exc),
        )
        raise

    app.state.settings = settings
    app.state.product_filter_service = ProductFilterService(CatalogFetcher(settings))

    logger.info(
        "app_startup_completed",
        product_url=settings.product_url,
        timeout_seconds=settings.timeout_seconds,
    )


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup resources on application shutdown."""
    logger.info("app_shutdown_started")
    shutdown_tracing()
    logger.info("app_shutdown_completed")


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Return the generic 500 body for failures raised outside TraceIDMiddleware."""
    return unexpected_error_response(request, exc)


app.include_router(health.router, prefix="/health", tags=["Health"])
app.include_router(product.router, prefix="/api/product", tags=["Products"])
app.include_router(metrics.router, prefix="/metrics", tags=["Metrics"])
