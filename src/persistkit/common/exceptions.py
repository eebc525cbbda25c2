from enum import Enum
from typing import Any, Dict, Optional


_MAX_QUERY_DETAIL = 500


class ErrorCode(Enum):
    """Standard error codes for persistkit operations.

    This enum provides categorized error codes that can be used
    to identify error types without creating numerous exception classes.
    Each category has its own prefix for easy identification.

    Attributes:
        CONFIG_*: Configuration-related errors
        CONNECTION_*: Network and connection errors
        EXECUTION_*: Runtime execution errors
    """
    # Configuration errors
    CONFIG_MISSING = "CONFIG_001"
    CONFIG_INVALID = "CONFIG_002"

    # Connection errors
    CONNECTION_ERROR = "CONNECTION_001"
    TIMEOUT_ERROR = "CONNECTION_002"

    # Execution errors
    EXECUTION_ERROR = "EXECUTION_001"
    QUERY_EXECUTION_ERROR = "EXECUTION_002"
    GENERATED_KEY_MISSING = "EXECUTION_003"


class PersistKitError(Exception):
    """Base exception for all persistkit errors raised outside the SQL core.

    Query builders and name adapters raise plain ``ValueError`` for bad
    arguments; this class covers configuration, connection and execution
    failures, categorized by error code instead of by subclass.

    Attributes:
        message: Error message
        error_code: Error code from ErrorCode enum
        details: Additional error details
        cause: Optional underlying exception
        is_retryable: Whether the error is transient and can be retried
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.EXECUTION_ERROR,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        is_retryable: bool = False
    ):
        """Initialize persistkit error.

        Args:
            message: Error message
            error_code: Error code from ErrorCode enum
            details: Additional error details
            cause: Optional underlying exception
            is_retryable: Whether error is transient
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.cause = cause
        self.is_retryable = is_retryable

        # Lazy import to avoid circular dependency
        from persistkit.logging import get_logger
        logger = get_logger(__name__)
        logger.error(
            message,
            extra={
                "error_code": error_code.value,
                "details": self.details,
                "is_retryable": is_retryable,
            },
            exc_info=cause,
        )

    def __str__(self) -> str:
        """String representation of the error."""
        msg = f"[{self.error_code.value}] {self.message}"
        if self.cause:
            msg = f"{msg} (caused by: {type(self.cause).__name__}: {str(self.cause)})"
        return msg

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code.value,
            "error_name": self.error_code.name,
            "details": self.details,
            "is_retryable": self.is_retryable
        }


def _truncate_query(query: str) -> str:
    return query[:_MAX_QUERY_DETAIL] + "..." if len(query) > _MAX_QUERY_DETAIL else query


# Helper functions for common error scenarios
def configuration_error(
    message: str,
    config_key: Optional[str] = None,
    missing: bool = False,
    **kwargs
) -> PersistKitError:
    """Create a configuration error.

    Args:
        message: Error message
        config_key: Configuration key that caused the error
        missing: Whether the key is absent rather than invalid
        **kwargs: Additional error details

    Returns:
        PersistKitError with CONFIG_MISSING or CONFIG_INVALID code
    """
    details = kwargs.get('details', {})
    if config_key:
        details["config_key"] = config_key

    return PersistKitError(
        message=message,
        error_code=ErrorCode.CONFIG_MISSING if missing else ErrorCode.CONFIG_INVALID,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )


def connection_error(
    message: str,
    service: Optional[str] = None,
    error_code: ErrorCode = ErrorCode.CONNECTION_ERROR,
    **kwargs
) -> PersistKitError:
    """Create a connection error.

    Args:
        message: Error message
        service: Database backend that failed to connect
        error_code: CONNECTION_ERROR, or TIMEOUT_ERROR when no connection
            became available in time
        **kwargs: Additional error details

    Returns:
        PersistKitError with a CONNECTION_* code
    """
    details = kwargs.get('details', {})
    if service:
        details["service"] = service

    return PersistKitError(
        message=message,
        error_code=error_code,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )


def execution_error(
    message: str,
    operation: Optional[str] = None,
    query: Optional[str] = None,
    error_code: ErrorCode = ErrorCode.EXECUTION_ERROR,
    **kwargs
) -> PersistKitError:
    """Create an execution error.

    Args:
        message: Error message
        operation: Operation that failed
        query: Query that failed (if applicable)
        error_code: Specific execution error code
        **kwargs: Additional error details

    Returns:
        PersistKitError with an EXECUTION_* code
    """
    details = kwargs.get('details', {})
    if operation:
        details["operation"] = operation
    if query:
        details["query"] = _truncate_query(query)

    return PersistKitError(
        message=message,
        error_code=error_code,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )


def query_execution_error(
    query: str,
    original_error: Exception,
    **kwargs
) -> PersistKitError:
    """Create a query execution error.

    Args:
        query: SQL query that failed
        original_error: The underlying exception
        **kwargs: Additional error details

    Returns:
        PersistKitError with QUERY_EXECUTION_ERROR code
    """
    details = kwargs.get('details', {})
    details["query"] = _truncate_query(query)

    return PersistKitError(
        message=f"Query execution failed: {str(original_error)}",
        error_code=ErrorCode.QUERY_EXECUTION_ERROR,
        details=details,
        cause=original_error,
        **{k: v for k, v in kwargs.items() if k not in ['details', 'cause']}
    )
