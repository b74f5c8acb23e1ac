"""Structured logging for ghwrap.

Log records go to stderr: stdout belongs to the wrapped git process and must
stay byte-identical to what git itself would print.
"""

from __future__ import annotations

import json
import logging
import os
import sys
import time
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, TextIO

DEFAULT_LEVEL = "WARNING"


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for attr in ("operation", "rule", "command", "exit_code", "duration_ms", "noop", "error"):
            if hasattr(record, attr):
                entry[attr] = getattr(record, attr)
        reserved = set(entry.keys()) | set(
            vars(logging.LogRecord("", 0, "", 0, "", None, None)).keys()
        )
        for k, v in record.__dict__.items():
            if k not in reserved and not k.startswith("_"):
                entry[k] = v
        return json.dumps(entry, default=str)


class StructuredLogger:
    def __init__(
        self,
        name: str = "ghwrap",
        json_logging: bool = False,
        level: str = DEFAULT_LEVEL,
        stream: TextIO | None = None,
    ) -> None:
        self._logger = logging.getLogger(name)
        self._logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
        for h in list(self._logger.handlers):
            self._logger.removeHandler(h)
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(
            JSONFormatter()
            if json_logging
            else logging.Formatter("[%(name)s] %(levelname)s %(message)s")
        )
        self._logger.addHandler(handler)
        self._logger.propagate = False

    def log_operation(self, operation: str, **kw: Any) -> None:
        self._logger.info(f"Operation: {operation}", extra={"operation": operation, **kw})

    def log_command(self, command: list[str], *, stage: str, noop: bool = False) -> None:
        from .errors import redact  # noqa: PLC0415

        rendered = redact(" ".join(command))
        self._logger.debug(
            f"{stage}: {rendered}" + (" [NOOP]" if noop else ""),
            extra={"operation": f"run_{stage}", "command": rendered, "noop": noop},
        )

    def log_performance(self, operation: str, duration_ms: float, **kw: Any) -> None:
        extra = {"operation": operation, "duration_ms": round(duration_ms, 2), **kw}
        self._logger.debug(f"Performance: {operation} completed in {duration_ms:.2f}ms", extra=extra)

    def debug(self, message: str, **kw: Any) -> None:
        self._logger.debug(message, extra=kw)

    def info(self, message: str, **kw: Any) -> None:
        self._logger.info(message, extra=kw)

    @contextmanager
    def timed_operation(self, operation: str, **kw: Any) -> Iterator[None]:  # noqa: D401
        start = time.perf_counter()
        self._logger.debug(f"{operation}:start", extra={"operation": f"{operation}_start", **kw})
        try:
            yield
            self.log_performance(operation, (time.perf_counter() - start) * 1000, **kw)
        except Exception as exc:
            self._logger.debug(
                f"operation {operation} failed", extra={"operation": operation, "error": str(exc), **kw}
            )
            raise


_GLOBAL: StructuredLogger | None = None


def _level_from_env() -> str:
    if os.environ.get("GHWRAP_DEBUG") == "1":
        return "DEBUG"
    return os.environ.get("GHWRAP_LOG_LEVEL", DEFAULT_LEVEL)


def get_logger() -> StructuredLogger:
    global _GLOBAL  # noqa: PLW0603
    if _GLOBAL is None:
        _GLOBAL = configure_logging()
    return _GLOBAL


def configure_logging(
    json_logging: bool | None = None, level: str | None = None
) -> StructuredLogger:
    """(Re)configure the process-wide logger; unset arguments come from the environment."""
    global _GLOBAL  # noqa: PLW0603
    if json_logging is None:
        json_logging = os.environ.get("GHWRAP_LOG_JSON") == "1"
    _GLOBAL = StructuredLogger(json_logging=json_logging, level=level or _level_from_env())
    return _GLOBAL


__all__ = ["JSONFormatter", "StructuredLogger", "configure_logging", "get_logger"]
