"""Common utilities and exceptions for persistkit.

Exception Design:
    The exception system uses error codes for categorization rather than
    numerous specific exception classes. All exceptions raised by the
    execution layer inherit from PersistKitError and include structured
    error information.

    The SQL core (name adapters and query builders) raises ``ValueError``
    for invalid arguments before any SQL is produced; it never wraps or
    reinterprets execution failures.
"""

from persistkit.common.exceptions import (
    PersistKitError,
    ErrorCode,
    # Helper functions
    configuration_error,
    connection_error,
    execution_error,
    query_execution_error,
)

__all__ = [
    # Base Exception and Error Codes
    "PersistKitError",
    "ErrorCode",
    # Helper functions
    "configuration_error",
    "connection_error",
    "execution_error",
    "query_execution_error",
]
