"""Logging configuration.

PMF uses standard library `logging` with a small convenience wrapper:
- `configure_logging()` sets up root logging once (plain text or JSON lines).
- `get_logger()` returns a module logger.

Modules attach structured context with `extra=`; the JSON formatter emits
those fields alongside the message.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, is_dataclass
from typing import Any, Mapping, Optional

from pydantic import BaseModel

# Attributes every LogRecord carries; anything else came in through `extra=`.
_RECORD_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}


def _jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    return value


class JsonLogFormatter(logging.Formatter):
    """JSON-lines formatter for machine-readable logs."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key.startswith("_") or key in _RECORD_ATTRS:
                continue
            payload[key] = _jsonable(value)

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


class _StaticFieldsFilter(logging.Filter):
    def __init__(self, fields: Mapping[str, Any]):
        super().__init__()
        self._fields = dict(fields)

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in self._fields.items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True


def configure_logging(
    *,
    level: str = "INFO",
    json_logs: bool = False,
    extra: Optional[Mapping[str, Any]] = None,
) -> None:
    """Configure root logging once.

    Args:
        level: Root log level (e.g. 'INFO', 'DEBUG').
        json_logs: If True, emit JSON logs; otherwise emit plain text.
        extra: Optional key-value pairs to attach to *all* log records.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        JsonLogFormatter() if json_logs else logging.Formatter("%(levelname)s %(name)s: %(message)s")
    )
    if extra:
        handler.addFilter(_StaticFieldsFilter(extra))
    root.addHandler(handler)
    root.setLevel(level.upper())


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
