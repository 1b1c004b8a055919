# SPDX-License-Identifier: MIT
"""Structured JSON logging for priceeval.

The metric functions are pure and never configure handlers themselves; they
only emit records through :class:`StructuredLogger`.  Applications opt into
JSON output with :func:`configure_logging` (or
:meth:`priceeval.config.PriceEvalSettings.apply_logging`).
"""
from __future__ import annotations

import json
import logging
import sys
import time
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Dict, Iterator, Optional, TextIO
from uuid import uuid4


LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

_CORRELATION_ID_VAR: ContextVar[Optional[str]] = ContextVar(
    "priceeval_correlation_id", default=None
)


def generate_correlation_id() -> str:
    return uuid4().hex


def get_correlation_id() -> Optional[str]:
    """Return the correlation identifier bound to the current context, if any."""

    return _CORRELATION_ID_VAR.get()


@contextmanager
def correlation_context(correlation_id: Optional[str] = None) -> Iterator[str]:
    """Bind a correlation identifier to every record logged inside the block."""

    resolved = correlation_id or generate_correlation_id()
    token = _CORRELATION_ID_VAR.set(resolved)
    try:
        yield resolved
    finally:
        _CORRELATION_ID_VAR.reset(token)


class JSONFormatter(logging.Formatter):
    """Render each record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        correlation_id = getattr(record, "correlation_id", None)
        if correlation_id:
            payload["correlation_id"] = correlation_id
        extra_fields = getattr(record, "extra_fields", None)
        if extra_fields:
            payload.update(extra_fields)
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        # numpy scalars and tuples of floats show up in metric payloads
        return json.dumps(payload, default=_json_default)


def _json_default(value: Any) -> Any:
    item = getattr(value, "item", None)
    if callable(item):
        return item()
    return str(value)


class StructuredLogger:
    """Thin wrapper over :class:`logging.Logger` that attaches keyword fields."""

    def __init__(self, name: str, correlation_id: Optional[str] = None):
        self.logger = logging.getLogger(name)
        self._correlation_id = correlation_id

    def _resolve_correlation_id(self, explicit: Optional[str] = None) -> Optional[str]:
        return explicit or get_correlation_id() or self._correlation_id

    def log(self, level: int, msg: str, **fields: Any) -> None:
        self._emit(level, msg, fields)

    def _emit(self, level: int, msg: str, fields: Dict[str, Any]) -> None:
        if not self.logger.isEnabledFor(level):
            return
        fields = dict(fields)
        correlation_id = self._resolve_correlation_id(fields.pop("correlation_id", None))
        extra: Dict[str, Any] = {"correlation_id": correlation_id}
        if fields:
            extra["extra_fields"] = fields
        self.logger.log(level, msg, extra=extra)

    def debug(self, msg: str, **fields: Any) -> None:
        self.log(logging.DEBUG, msg, **fields)

    def info(self, msg: str, **fields: Any) -> None:
        self.log(logging.INFO, msg, **fields)

    def warning(self, msg: str, **fields: Any) -> None:
        self.log(logging.WARNING, msg, **fields)

    def error(self, msg: str, **fields: Any) -> None:
        self.log(logging.ERROR, msg, **fields)

    @contextmanager
    def operation(
        self,
        operation_name: str,
        *,
        level: int = logging.INFO,
        correlation_id: Optional[str] = None,
        **context: Any,
    ) -> Iterator[Dict[str, Any]]:
        """Time a unit of work and log its start, completion or failure.

        The yielded dictionary is merged into the completion record, so callers
        can attach results::

            with logger.operation("segmented_mae", samples=n) as op:
                op["excluded"] = excluded

        Failures are always logged at ``ERROR`` and re-raised.
        """

        started = time.perf_counter()
        op_context: Dict[str, Any] = {"operation": operation_name, **context}

        with correlation_context(self._resolve_correlation_id(correlation_id)):
            self._emit(level, f"Starting operation: {operation_name}", op_context)
            try:
                yield op_context
            except Exception as exc:
                op_context.setdefault("status", "failure")
                self._emit(
                    logging.ERROR,
                    f"Failed operation: {operation_name}",
                    {
                        **op_context,
                        "duration_seconds": time.perf_counter() - started,
                        "error_type": type(exc).__name__,
                        "error_message": str(exc),
                    },
                )
                raise
            op_context.setdefault("status", "success")
            self._emit(
                level,
                f"Completed operation: {operation_name}",
                {**op_context, "duration_seconds": time.perf_counter() - started},
            )


def configure_logging(
    level: str = "INFO",
    use_json: bool = True,
    stream: Optional[TextIO] = None,
) -> None:
    """Install a single stream handler on the root logger.

    Args:
        level: Standard level name (``DEBUG`` ... ``CRITICAL``).
        use_json: Emit :class:`JSONFormatter` output instead of plain text.
        stream: Destination stream, ``sys.stdout`` by default.
    """

    level_name = str(level).strip().upper()
    if level_name not in LOG_LEVELS:
        raise ValueError(f"log level must be one of {', '.join(LOG_LEVELS)}")

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level_name))
    root_logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stdout)
    if use_json:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
    root_logger.addHandler(handler)


def get_logger(name: str, correlation_id: Optional[str] = None) -> StructuredLogger:
    return StructuredLogger(name, correlation_id)


__all__ = [
    "LOG_LEVELS",
    "JSONFormatter",
    "StructuredLogger",
    "configure_logging",
    "correlation_context",
    "generate_correlation_id",
    "get_correlation_id",
    "get_logger",
]
