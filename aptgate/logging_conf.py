"""Logging configuration for the gate.

One JSON object per line on stdout, so edge logs can be shipped as-is.
setup_logging() is idempotent: calling it again won't duplicate handlers.
"""
from __future__ import annotations

import json
import logging
import os
import sys
from datetime import UTC, datetime
from logging import Handler, LogRecord
from typing import Any

_DEFAULT_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Attributes every LogRecord carries; anything else came in via `extra`.
_RESERVED = frozenset(
    {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
    }
)


class JsonFormatter(logging.Formatter):
    """Render a record as a single JSON line.

    Carries ts, level, logger and message, plus any structured fields passed
    with ``logger.info("msg", extra={...})``.
    """

    def format(self, record: LogRecord) -> str:  # type: ignore[override]
        payload: dict[str, Any] = {
            "ts": datetime.now(UTC).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
        }

        msg = record.msg
        if isinstance(msg, dict):
            payload.update(msg)
        else:
            payload["message"] = record.getMessage()

        for key, value in record.__dict__.items():
            if key in _RESERVED or key in payload:
                continue
            payload[key] = value

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def _make_stream_handler(level: int) -> Handler:
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(JsonFormatter())
    return handler


def setup_logging(level: str | int = _DEFAULT_LEVEL) -> None:
    """Configure the root logger and uvicorn's loggers for JSON output.

    Only attaches a handler if the root logger has none yet.
    """
    root = logging.getLogger()

    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    if root.handlers:  # reload / test runners already configured it
        return

    root.setLevel(level)
    root.addHandler(_make_stream_handler(level))

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        lg = logging.getLogger(name)
        lg.setLevel(level)
        lg.propagate = True
        for h in list(lg.handlers):
            lg.removeHandler(h)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger.

    Usage: logger = get_logger(__name__)
    """
    return logging.getLogger(name if name else __name__)
