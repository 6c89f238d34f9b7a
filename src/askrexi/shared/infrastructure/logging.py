"""
Structured Logging
==================

JSON log lines for the routing engine, one object per record.

Every line carries a UTC timestamp, the deployment environment and, inside
an HTTP request, the correlation ID set by the API middleware. Values of
keys that look like credentials are masked before they are written.

Usage:
    from askrexi.shared.infrastructure.logging import get_logger

    logger = get_logger(__name__)
    logger.info("Question routed", extra={"domain": "regulatory"})
"""

import logging
import sys
import time
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Iterator

from pythonjsonlogger import jsonlogger

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"
MASK = "***REDACTED***"

_SECRET_MARKERS = ("password", "secret", "api_key", "authorization")

# Third-party loggers that flood INFO with per-request or per-statement lines
_QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "aiosqlite")


class EnvironmentFilter(logging.Filter):
    """Stamps every record with the deployment environment."""

    def __init__(self, environment: str):
        super().__init__()
        self.environment = environment

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "environment"):
            record.environment = self.environment
        return True


class AskRexiJsonFormatter(jsonlogger.JsonFormatter):
    """Adds timestamp, environment and correlation_id, then masks secrets."""

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record.setdefault("timestamp", datetime.now(timezone.utc).isoformat())
        log_record["environment"] = getattr(record, "environment", "unknown")

        correlation_id = getattr(record, "correlation_id", None)
        if correlation_id is not None:
            log_record["correlation_id"] = correlation_id

        for key in [k for k, v in log_record.items() if isinstance(v, str) and _is_secret(k)]:
            log_record[key] = MASK


def _is_secret(key: str) -> bool:
    lowered = key.lower()
    return any(marker in lowered for marker in _SECRET_MARKERS)


def setup_logging(level: str = "INFO", environment: str = "development") -> None:
    """
    Route all logging through one stdout handler writing JSON lines.

    Replaces any handlers already on the root logger, so calling it twice
    is harmless.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    handler.addFilter(EnvironmentFilter(environment))
    handler.setFormatter(AskRexiJsonFormatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(numeric_level)
    root_logger.addHandler(handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Module logger; pass __name__."""
    return logging.getLogger(name)


def get_context_logger(name: str, correlation_id: str | None = None) -> logging.Logger | logging.LoggerAdapter:
    """Logger whose records carry correlation_id, when one is known."""
    logger = get_logger(name)
    if not correlation_id:
        return logger
    return logging.LoggerAdapter(logger, {"correlation_id": correlation_id})


@contextmanager
def log_latency(logger: logging.Logger, operation: str, **extra_context: Any) -> Iterator[None]:
    """
    Log how long the wrapped block took, at DEBUG.

    The line is written even when the block raises.

        with log_latency(logger, "knowledge_lookup", category="regulatory"):
            entries = await store.search(...)
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        logger.debug(
            f"{operation} completed",
            extra={
                "operation": operation,
                "latency_ms": round((time.perf_counter() - start) * 1000, 2),
                **extra_context,
            },
        )
