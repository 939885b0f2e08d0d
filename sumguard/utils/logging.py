from __future__ import annotations

import json
import logging
import sys
from typing import Any, Dict


_RESERVED = {
    "args", "msg", "levelname", "levelno", "pathname", "filename", "module",
    "exc_info", "exc_text", "stack_info", "lineno", "funcName", "created",
    "msecs", "relativeCreated", "thread", "threadName", "processName", "process",
    "name", "taskName", "message", "asctime",
}

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Largest integer a double (and so most JSON readers) holds exactly.
MAX_SAFE_JSON_INT = 2**53 - 1


def json_safe(value: Any) -> Any:
    """Render integers beyond the double-precision range as strings.

    Stream values are arbitrary-precision ints; as JSON numbers they would be
    silently rounded by most consumers.
    """
    if isinstance(value, int) and not isinstance(value, bool) and abs(value) > MAX_SAFE_JSON_INT:
        return str(value)
    return value


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with ``extra=`` fields merged at the top level."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        payload: Dict[str, Any] = {
            "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(
            (key, json_safe(value))
            for key, value in record.__dict__.items()
            if key not in _RESERVED
        )
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    if fmt == "json":
        formatter: logging.Formatter = JsonFormatter()
    elif fmt == "text":
        formatter = logging.Formatter(TEXT_FORMAT)
    else:
        raise ValueError(f"unknown log format {fmt!r}")
    root = logging.getLogger()
    root.setLevel(level.upper())
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    root.handlers.clear()
    root.addHandler(handler)
