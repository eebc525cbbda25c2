"""Logging infrastructure for persistkit.

This module provides structured logging with JSON output, context tracking,
and OpenTelemetry trace correlation.
"""

from persistkit.logging.filters import (
    ContextFilter,
    clear_request_context,
    operation_context,
    set_logging_context,
    set_request_context,
)
from persistkit.logging.logger import CustomJsonFormatter, get_logger, setup_logging

__all__ = [
    "get_logger",
    "setup_logging",
    "CustomJsonFormatter",
    "ContextFilter",
    "set_logging_context",
    "set_request_context",
    "operation_context",
    "clear_request_context",
]
