"""
Shared Infrastructure
=====================

Structured logging setup and helpers.
"""

from askrexi.shared.infrastructure.logging import (
    setup_logging,
    get_logger,
    get_context_logger,
    log_latency,
)

__all__ = ["setup_logging", "get_logger", "get_context_logger", "log_latency"]
