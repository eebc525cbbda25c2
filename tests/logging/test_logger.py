import json
import logging
import sys

from persistkit.logging.filters import ContextFilter, set_logging_context
from persistkit.logging.logger import CustomJsonFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="persistkit.database.executor",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg="SQL statement %s",
        args=("executed",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_emits_message_and_extra_fields():
    payload = json.loads(CustomJsonFormatter().format(_record(**{"duration.seconds": "0.001000"})))

    assert payload["message"] == "SQL statement executed"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "persistkit.database.executor"
    assert payload["duration.seconds"] == "0.001000"
    assert "trace_id" not in payload


def test_json_formatter_includes_exception_text():
    try:
        raise RuntimeError("broken")
    except RuntimeError:
        record = _record()
        record.exc_info = sys.exc_info()

    payload = json.loads(CustomJsonFormatter().format(record))
    assert "RuntimeError: broken" in payload["exception"]


def test_setup_logging_sets_level():
    setup_logging("WARNING")
    try:
        assert logging.getLogger("persistkit").getEffectiveLevel() == logging.WARNING
    finally:
        setup_logging("INFO")


def test_setup_logging_defaults_come_from_settings(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "error")
    monkeypatch.setenv("APP_ENV", "qa")

    setup_logging()
    try:
        assert logging.getLogger().level == logging.ERROR

        record = _record()
        ContextFilter().filter(record)
        assert record.environment == "qa"
    finally:
        set_logging_context(environment=None, extra=None)
        setup_logging("INFO")
