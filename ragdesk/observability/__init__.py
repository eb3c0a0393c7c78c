"""Observability helpers: logging configuration and structured log utilities."""

from ragdesk.observability.log_utils import (
    log_exception_with_context,
    log_with_context,
    safe_log_value,
)
from ragdesk.observability.logger import configure_logging

__all__ = [
    "configure_logging",
    "log_exception_with_context",
    "log_with_context",
    "safe_log_value",
]
