"""Logging filters for context injection.

This module provides filters that inject context variables into log records,
enabling correlation of logs across requests and repository operations.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Dict, Iterator, Optional

from persistkit.__version__ import __version__

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
entity_var: ContextVar[Optional[str]] = ContextVar("entity", default=None)
operation_var: ContextVar[Optional[str]] = ContextVar("operation", default=None)

_static_environment: Optional[str] = None
_static_extra: Dict[str, Any] = {}


class ContextFilter(logging.Filter):
    """Logging filter that adds context variables to log records.

    This filter extracts values from context variables and adds them to
    log records, enabling log correlation across operations. Static
    process-wide values set through ``set_logging_context`` are added only
    when configured.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Add context variables to the log record.

        Args:
            record: Log record to enhance

        Returns:
            Always True (doesn't filter out any records)
        """
        setattr(record, "request_id", request_id_var.get())
        setattr(record, "entity", entity_var.get())
        setattr(record, "operation", operation_var.get())
        setattr(record, "sdk_name", "persistkit")
        setattr(record, "sdk_version", __version__)

        if _static_environment is not None:
            setattr(record, "environment", _static_environment)
        for key, value in _static_extra.items():
            if not hasattr(record, key):
                setattr(record, key, value)

        return True


def set_logging_context(
    environment: Optional[str] = None,
    extra: Optional[Dict[str, Any]] = None,
) -> None:
    """Set process-wide values added to every record (``None`` clears them)."""
    global _static_environment, _static_extra
    _static_environment = environment
    _static_extra = dict(extra or {})


def set_request_context(request_id: Optional[str] = None) -> None:
    """Set request context variables."""
    if request_id is not None:
        request_id_var.set(request_id)


@contextmanager
def operation_context(entity: Optional[str], operation: Optional[str]) -> Iterator[None]:
    """Scope the entity and operation context to a block.

    The previous values are restored on exit, including when the block raises.
    """
    entity_token = entity_var.set(entity)
    operation_token = operation_var.set(operation)
    try:
        yield
    finally:
        operation_var.reset(operation_token)
        entity_var.reset(entity_token)


def clear_request_context() -> None:
    """Clear all request context variables."""
    request_id_var.set(None)
    entity_var.set(None)
    operation_var.set(None)
