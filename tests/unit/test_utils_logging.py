# SPDX-License-Identifier: MIT
"""Tests for the structured logging utilities."""
from __future__ import annotations

import io
import json
import logging

import numpy as np
import pytest

from priceeval.utils.logging import (
    JSONFormatter,
    StructuredLogger,
    configure_logging,
    correlation_context,
    get_correlation_id,
)


def _make_record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="priceeval.tests",
        level=logging.ERROR,
        pathname=__file__,
        lineno=42,
        msg="problem occurred",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_extras_and_exception() -> None:
    formatter = JSONFormatter()

    try:
        raise ValueError("boom")
    except ValueError as exc:
        record = _make_record(
            correlation_id="cid-123",
            extra_fields={"segment": 3, "mae": np.float64(12.5)},
            exc_info=(ValueError, exc, exc.__traceback__),
        )

    payload = json.loads(formatter.format(record))

    assert payload["level"] == "ERROR"
    assert payload["correlation_id"] == "cid-123"
    assert payload["segment"] == 3
    assert payload["mae"] == 12.5
    assert "ValueError: boom" in payload["exception"]


def test_structured_logger_operation_success_emits_context(
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.INFO)

    logger = StructuredLogger("priceeval.ops", correlation_id="cid-success")
    with logger.operation("segmented_mae", samples=12) as ctx:
        ctx["excluded"] = 2

    start_record, end_record = caplog.records[-2:]

    assert start_record.message == "Starting operation: segmented_mae"
    assert start_record.correlation_id == "cid-success"
    assert start_record.extra_fields["samples"] == 12

    assert end_record.levelno == logging.INFO
    assert end_record.message == "Completed operation: segmented_mae"
    assert end_record.extra_fields["status"] == "success"
    assert end_record.extra_fields["excluded"] == 2
    assert "duration_seconds" in end_record.extra_fields


def test_structured_logger_operation_failure_logs_error(
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.INFO)

    logger = StructuredLogger("priceeval.ops", correlation_id="cid-failure")

    with pytest.raises(RuntimeError):
        with logger.operation("relative_error_ratio", samples=0):
            raise RuntimeError("no samples")

    start_record, error_record = caplog.records[-2:]

    assert start_record.message == "Starting operation: relative_error_ratio"
    assert error_record.levelno == logging.ERROR
    assert error_record.message == "Failed operation: relative_error_ratio"
    assert error_record.correlation_id == "cid-failure"
    assert error_record.extra_fields["status"] == "failure"
    assert error_record.extra_fields["error_type"] == "RuntimeError"
    assert error_record.extra_fields["error_message"] == "no samples"


def test_operation_context_may_reuse_reserved_names(
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.INFO)

    logger = StructuredLogger("priceeval.ops")
    with pytest.raises(ValueError, match="bad band"):
        with logger.operation("segmented_mae", msg="caller text") as ctx:
            ctx["duration_seconds"] = -1.0
            ctx["error_type"] = "placeholder"
            raise ValueError("bad band")

    error_record = caplog.records[-1]
    assert error_record.message == "Failed operation: segmented_mae"
    assert error_record.extra_fields["msg"] == "caller text"
    assert error_record.extra_fields["error_type"] == "ValueError"
    assert error_record.extra_fields["duration_seconds"] >= 0.0

    with logger.operation("segmented_mae", level=logging.INFO) as ctx:
        ctx["duration_seconds"] = -1.0

    assert caplog.records[-1].message == "Completed operation: segmented_mae"
    assert caplog.records[-1].extra_fields["duration_seconds"] >= 0.0


def test_operation_below_logger_level_is_silent(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO)

    logger = StructuredLogger("priceeval.quiet")
    with logger.operation("segmented_mae", level=logging.DEBUG):
        pass

    assert not [r for r in caplog.records if r.name == "priceeval.quiet"]


def test_correlation_context_is_scoped() -> None:
    assert get_correlation_id() is None
    with correlation_context("outer") as cid:
        assert cid == "outer"
        assert get_correlation_id() == "outer"
    assert get_correlation_id() is None


def test_context_correlation_id_is_attached(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO)

    with correlation_context("batch-7"):
        StructuredLogger("priceeval.ctx").info("scored")

    assert caplog.records[-1].correlation_id == "batch-7"


def test_configure_logging_emits_json_payload() -> None:
    stream = io.StringIO()
    configure_logging(level="DEBUG", use_json=True, stream=stream)

    logging.getLogger("priceeval.tests").info("hello world")

    payload = json.loads(stream.getvalue().strip())

    assert payload["level"] == "INFO"
    assert payload["logger"] == "priceeval.tests"
    assert payload["message"] == "hello world"
    assert "timestamp" in payload


def test_configure_logging_plain_text() -> None:
    stream = io.StringIO()
    configure_logging(level="WARNING", use_json=False, stream=stream)

    logging.getLogger("priceeval.tests").info("dropped")
    logging.getLogger("priceeval.tests").warning("kept")

    output = stream.getvalue()
    assert "dropped" not in output
    assert "priceeval.tests - WARNING - kept" in output


def test_configure_logging_rejects_unknown_level() -> None:
    root = logging.getLogger()
    handlers = list(root.handlers)

    with pytest.raises(ValueError, match="log level"):
        configure_logging(level="chatty")

    assert root.handlers == handlers


def test_configure_logging_accepts_lowercase_level() -> None:
    configure_logging(level=" warning ", stream=io.StringIO())

    assert logging.getLogger().level == logging.WARNING
