import logging

from persistkit.logging.filters import (
    ContextFilter,
    clear_request_context,
    operation_context,
    set_logging_context,
    set_request_context,
)


def _record() -> logging.LogRecord:
    return logging.LogRecord(
        name="test.logger",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg="sample",
        args=(),
        exc_info=None,
    )


def test_context_filter_respects_static_environment():
    set_logging_context(environment="qa", extra={"region": "us-east"})
    try:
        record = _record()
        assert ContextFilter().filter(record)
        assert getattr(record, "environment") == "qa"
        assert getattr(record, "region") == "us-east"
    finally:
        set_logging_context(environment=None, extra=None)


def test_context_filter_uses_request_context():
    set_logging_context(environment=None, extra=None)
    set_request_context(request_id="req-1")
    try:
        with operation_context("Article", "add"):
            record = _record()
            assert ContextFilter().filter(record)
        assert record.request_id == "req-1"
        assert record.entity == "Article"
        assert record.operation == "add"
        assert record.sdk_name == "persistkit"
    finally:
        clear_request_context()


def test_operation_context_restores_previous_values():
    with operation_context("Article", "update"):
        with operation_context("Comment", "add"):
            inner = _record()
            ContextFilter().filter(inner)
        outer = _record()
        ContextFilter().filter(outer)
    after = _record()
    ContextFilter().filter(after)

    assert (inner.entity, inner.operation) == ("Comment", "add")
    assert (outer.entity, outer.operation) == ("Article", "update")
    assert (after.entity, after.operation) == (None, None)


def test_operation_context_restored_when_block_raises():
    try:
        with operation_context("Article", "delete"):
            raise RuntimeError("failed")
    except RuntimeError:
        pass

    record = _record()
    ContextFilter().filter(record)
    assert record.entity is None
    assert record.operation is None


def test_clear_request_context_resets_values():
    set_request_context(request_id="req-2")
    clear_request_context()

    record = _record()
    ContextFilter().filter(record)
    assert record.request_id is None
    assert record.entity is None
    assert record.operation is None


def test_context_filter_no_config_is_graceful():
    set_logging_context(environment=None, extra=None)
    record = _record()
    assert ContextFilter().filter(record)
    assert not hasattr(record, "environment")
