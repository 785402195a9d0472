"""
Generic 500 response for unhandled failures.

Used by TraceIDMiddleware, while the request's trace context is still set,
and by the application-level Exception handler for failures raised outside
the middleware.
"""
from fastapi import Request
from fastapi.responses import JSONResponse

from app.models.catalog import ErrorResponse

from .logging import get_logger, get_trace_id, get_request_id
from .tracing import get_trace_id_from_context, record_exception

logger = get_logger(__name__)

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred."


def unexpected_error_response(request: Request, exc: Exception) -> JSONResponse:
    """
    Log an unhandled failure and build the generic 500 response.

    The body is {"statusCode": 500, "message": ..., "detail": str(exc)}.
    X-Trace-ID and X-Request-ID are attached when a trace context is set.

    Must be called from inside the ``except`` block handling ``exc`` so the
    traceback is logged.

    Args:
        request: Request that failed
        exc: The unhandled exception

    Returns:
        JSONResponse with status 500
    """
    trace_id = get_trace_id() or get_trace_id_from_context()
    request_id = get_request_id()

    record_exception(exc)

    logger.error(
        "unhandled_exception",
        error=str(exc),
        error_type=type(exc).__name__,
        path=request.url.path,
        method=request.method,
        exc_info=True,
    )
    body = ErrorResponse(
        status_code=500,
        message=UNEXPECTED_ERROR_MESSAGE,
        detail=str(exc),
    )
    response = JSONResponse(
        status_code=500,
        content=body.model_dump(by_alias=True),
    )
    if trace_id:
        response.headers["X-Trace-ID"] = trace_id
    if request_id:
        response.headers["X-Request-ID"] = request_id
    return response
