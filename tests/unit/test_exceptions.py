"""Unit tests for error codes and helper constructors."""

import logging

from persistkit.common.exceptions import (
    ErrorCode,
    PersistKitError,
    configuration_error,
    connection_error,
    execution_error,
    query_execution_error,
)


class TestPersistKitError:

    def test_str_includes_code_and_cause(self):
        error = PersistKitError("boom", ErrorCode.EXECUTION_ERROR, cause=RuntimeError("driver"))

        assert str(error) == "[EXECUTION_001] boom (caused by: RuntimeError: driver)"

    def test_to_dict(self):
        error = PersistKitError("missing", ErrorCode.CONFIG_MISSING, details={"config_key": "DATABASE_URL"})

        assert error.to_dict() == {
            "type": "PersistKitError",
            "message": "missing",
            "error_code": "CONFIG_001",
            "error_name": "CONFIG_MISSING",
            "details": {"config_key": "DATABASE_URL"},
            "is_retryable": False,
        }

    def test_retryable_flag_is_carried(self):
        error = PersistKitError("slow", ErrorCode.TIMEOUT_ERROR, is_retryable=True)

        assert error.is_retryable
        assert error.to_dict()["is_retryable"] is True

    def test_creation_is_logged_with_structured_fields(self, caplog):
        with caplog.at_level(logging.ERROR, logger="persistkit.common.exceptions"):
            PersistKitError("logged", ErrorCode.CONNECTION_ERROR)

        record = caplog.records[-1]
        assert record.getMessage() == "logged"
        assert record.error_code == "CONNECTION_001"


class TestHelpers:

    def test_configuration_error_missing(self):
        error = configuration_error("no url", config_key="DATABASE_URL", missing=True)

        assert error.error_code is ErrorCode.CONFIG_MISSING
        assert error.details == {"config_key": "DATABASE_URL"}

    def test_configuration_error_invalid(self):
        error = configuration_error("bad url", config_key="DATABASE_URL")

        assert error.error_code is ErrorCode.CONFIG_INVALID

    def test_connection_error_timeout_code(self):
        error = connection_error("pool exhausted", error_code=ErrorCode.TIMEOUT_ERROR, is_retryable=True)

        assert error.error_code is ErrorCode.TIMEOUT_ERROR
        assert error.is_retryable

    def test_connection_error_keeps_cause(self):
        cause = OSError("refused")
        error = connection_error("cannot connect", service="postgresql", cause=cause)

        assert error.error_code is ErrorCode.CONNECTION_ERROR
        assert error.cause is cause
        assert error.details["service"] == "postgresql"

    def test_execution_error_truncates_query(self):
        error = execution_error("failed", operation="add", query="x" * 600)

        assert error.details["operation"] == "add"
        assert len(error.details["query"]) == 503
        assert error.details["query"].endswith("...")

    def test_query_execution_error(self):
        cause = ValueError("syntax")
        error = query_execution_error("SELECT * FROM article", cause)

        assert error.error_code is ErrorCode.QUERY_EXECUTION_ERROR
        assert error.cause is cause
        assert error.details["query"] == "SELECT * FROM article"
        assert "syntax" in error.message
