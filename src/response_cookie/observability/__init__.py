"""Observability utilities for response cookie resolution.

This package provides:
- Prometheus metrics for resolution results and resends
- Structured logging with contextual information
"""

from response_cookie.observability.logging import configure_logging, get_logger
from response_cookie.observability.metrics import (
    record_resend,
    record_resend_duration,
    record_resolution,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "record_resolution",
    "record_resend",
    "record_resend_duration",
]
