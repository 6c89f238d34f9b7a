"""
Shared API Middleware
=====================

Request tracing for the AskRexi HTTP surface:

- CorrelationIDMiddleware: X-Correlation-ID in, same ID out
- TimingMiddleware: X-Response-Time header
- LoggingMiddleware: one start and one finish line per request
- global_exception_handler: JSON 500 for anything that escapes a route
"""

import time
import uuid
from datetime import datetime, timezone
from typing import Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from askrexi.shared.infrastructure.logging import get_context_logger, get_logger

logger = get_logger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"
RESPONSE_TIME_HEADER = "X-Response-Time"


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


class CorrelationIDMiddleware(BaseHTTPMiddleware):
    """Reuses the caller's X-Correlation-ID or mints one, and echoes it back."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        request.state.correlation_id = correlation_id

        response = await call_next(request)
        response.headers[CORRELATION_HEADER] = correlation_id
        return response


class TimingMiddleware(BaseHTTPMiddleware):
    """Wall-clock handling time in seconds."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        response.headers[RESPONSE_TIME_HEADER] = f"{time.perf_counter() - start:.3f}s"
        return response


class LoggingMiddleware(BaseHTTPMiddleware):
    """Access log in JSON, tagged with the request's correlation ID."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_logger = get_context_logger(
            __name__, getattr(request.state, "correlation_id", None)
        )
        fields = {"method": request.method, "path": request.url.path}
        start = time.perf_counter()

        request_logger.info(
            "Request started",
            extra={**fields, "client": request.client.host if request.client else None},
        )

        try:
            response = await call_next(request)
        except Exception as e:
            request_logger.error(
                "Request failed",
                extra={**fields, "error": str(e), "response_time_ms": _elapsed_ms(start)},
            )
            raise

        request_logger.info(
            "Request completed",
            extra={**fields, "status_code": response.status_code, "response_time_ms": _elapsed_ms(start)},
        )
        return response


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Last-resort handler for exceptions that escape a route.

    The question pipeline answers every question itself, so reaching this
    means a bug outside it. Exception text is only returned in development.
    """
    correlation_id = getattr(request.state, "correlation_id", "unknown")
    logger.error(
        "Unhandled exception",
        extra={
            "correlation_id": correlation_id,
            "path": request.url.path,
            "method": request.method,
            "error_type": type(exc).__name__,
            "error_message": str(exc),
        },
    )

    app_settings = getattr(request.app.state, "settings", None)
    show_details = getattr(app_settings, "environment", None) == "development"

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "detail": "Internal server error",
            "correlation_id": correlation_id,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "debug_info": str(exc) if show_details else None,
        },
    )
