"""
Unit tests for LoggingService.

Tests logging configuration, logger creation, error logging
and performance logging.

License: MIT
"""

import json
from io import StringIO

import pytest

from rankmerge_core.exceptions import DuplicateDocumentError
from rankmerge_core.logging_service import LoggingConfig, LoggingService


@pytest.fixture(autouse=True)
def unconfigured_logging():
    """Start every test in this module from an unconfigured service."""
    LoggingService.reset()
    yield
    LoggingService.reset()


def _configure_to_buffer(level: str = "DEBUG") -> StringIO:
    stream = StringIO()
    LoggingService.configure_logging(
        config=LoggingConfig(level=level, format="json", output_stream=stream)
    )
    return stream


def _records(stream: StringIO):
    return [json.loads(line) for line in stream.getvalue().splitlines() if line.strip()]


# ============================================================
# CONFIGURATION TESTS
# ============================================================


def test_configure_logging_success():
    LoggingService.configure_logging(level="INFO", format="json")

    assert LoggingService.is_configured()
    assert LoggingService._log_level == "INFO"
    assert LoggingService._config is not None


def test_configure_logging_lowercase_level():
    LoggingService.configure_logging(level="debug", format="CONSOLE")

    assert LoggingService._config.level == "DEBUG"
    assert LoggingService._config.format == "console"


def test_configure_logging_invalid_level():
    with pytest.raises(ValueError) as exc_info:
        LoggingService.configure_logging(level="INVALID")

    assert "Invalid log level" in str(exc_info.value)


def test_configure_logging_invalid_format():
    with pytest.raises(ValueError) as exc_info:
        LoggingService.configure_logging(format="xml")

    assert "Invalid format" in str(exc_info.value)


def test_configure_logging_already_configured():
    LoggingService.configure_logging()

    with pytest.raises(RuntimeError):
        LoggingService.configure_logging()


# ============================================================
# LOGGER TESTS
# ============================================================


def test_get_logger_not_configured():
    with pytest.raises(RuntimeError):
        LoggingService.get_logger("rankmerge")


def test_get_logger_empty_name():
    LoggingService.configure_logging()

    with pytest.raises(ValueError):
        LoggingService.get_logger("")


def test_get_logger_caches_loggers():
    LoggingService.configure_logging()

    assert LoggingService.get_logger("a") is LoggingService.get_logger("a")


def test_level_filters_records():
    stream = _configure_to_buffer(level="WARNING")
    logger = LoggingService.get_logger("rankmerge")

    logger.info("hidden_event")
    logger.warning("visible_event", files=2)

    records = _records(stream)
    assert [r["event"] for r in records] == ["visible_event"]
    assert records[0]["files"] == 2
    assert records[0]["level"] == "warning"


# ============================================================
# ERROR AND PERFORMANCE LOGGING
# ============================================================


def test_log_error_includes_error_code():
    stream = _configure_to_buffer()
    error = DuplicateDocumentError("document 'd1' appears more than once")

    LoggingService.log_error(error, context={"command": "merge"})

    (record,) = _records(stream)
    assert record["event"] == "error_occurred"
    assert record["error_type"] == "DuplicateDocumentError"
    assert record["error_code"] == "LIST_001"
    assert record["correlation_id"] == error.correlation_id
    assert record["command"] == "merge"
    assert "stack_trace" not in record


def test_log_error_plain_exception_with_stack_trace():
    stream = _configure_to_buffer()

    try:
        raise OSError("missing file")
    except OSError as e:
        LoggingService.log_error(e, include_stack_trace=True)

    (record,) = _records(stream)
    assert record["error_type"] == "OSError"
    assert "error_code" not in record
    assert "OSError" in record["stack_trace"]


def test_log_performance_success():
    stream = _configure_to_buffer()

    LoggingService.log_performance("fuse_batch", 12.5, metadata={"queries": 3})

    (record,) = _records(stream)
    assert record["event"] == "performance_metric"
    assert record["operation"] == "fuse_batch"
    assert record["duration_ms"] == 12.5
    assert record["queries"] == 3


def test_log_performance_negative_duration():
    LoggingService.configure_logging()

    with pytest.raises(ValueError):
        LoggingService.log_performance("fuse_batch", -1.0)


def test_log_performance_empty_operation():
    LoggingService.configure_logging()

    with pytest.raises(ValueError):
        LoggingService.log_performance("", 1.0)
