"""Unit tests for tracing and retry decorators."""

from unittest.mock import Mock, patch

import pytest

from persistkit.utils.decorators import retry_with_backoff, traced


class TestRetryWithBackoff:

    @patch("persistkit.utils.decorators.time.sleep")
    def test_retries_matching_errors_then_succeeds(self, mock_sleep):
        func = Mock(side_effect=[ConnectionError("down"), ConnectionError("down"), "ok"])
        func.__name__ = "connect"

        wrapped = retry_with_backoff(max_retries=3, initial_delay=1, retry_on=(ConnectionError,))(func)

        assert wrapped() == "ok"
        assert func.call_count == 3
        assert [c.args[0] for c in mock_sleep.call_args_list] == [1, 2]

    @patch("persistkit.utils.decorators.time.sleep")
    def test_other_errors_are_not_retried(self, mock_sleep):
        func = Mock(side_effect=ValueError("bad"))
        func.__name__ = "connect"

        wrapped = retry_with_backoff(max_retries=3, retry_on=(ConnectionError,))(func)

        with pytest.raises(ValueError):
            wrapped()
        assert func.call_count == 1
        mock_sleep.assert_not_called()

    @patch("persistkit.utils.decorators.time.sleep")
    def test_gives_up_after_max_retries(self, mock_sleep):
        func = Mock(side_effect=ConnectionError("down"))
        func.__name__ = "connect"

        wrapped = retry_with_backoff(max_retries=2, initial_delay=1, max_delay=1.5)(func)

        with pytest.raises(ConnectionError):
            wrapped()
        assert func.call_count == 3
        assert [c.args[0] for c in mock_sleep.call_args_list] == [1, 1.5]


class TestTraced:

    def test_returns_result_and_reads_attributes(self):
        getter = Mock(return_value={"db.operation": "query", "db.system": None})

        @traced(span_name="test.span", attribute_getter=getter)
        def run(sql):
            return sql.upper()

        assert run("select 1") == "SELECT 1"
        getter.assert_called_once_with("select 1")

    def test_exceptions_propagate(self):
        @traced()
        def fail():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            fail()

    def test_attribute_getter_failure_does_not_block_call(self):
        @traced(attribute_getter=Mock(side_effect=KeyError("x")))
        def run():
            return 1

        assert run() == 1
