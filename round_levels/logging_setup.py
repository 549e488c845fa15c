"""Logging for the round level service.

Records go to stdout, either as JSON lines (the default, for log shippers) or
as plain text for local runs. Both forms carry the request ID bound by the
HTTP middleware through ``REQUEST_ID_CONTEXT``.
"""

from __future__ import annotations

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

REQUEST_ID_CONTEXT: ContextVar[str | None] = ContextVar("request_id", default=None)

# Attributes every LogRecord carries; anything else arrived through ``extra=``.
_RECORD_ATTRS = frozenset(logging.LogRecord("", 0, "", 0, "", None, None).__dict__) | {
    "message",
    "asctime",
    "request_id",
}

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(request_id)s] %(message)s"


class RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = REQUEST_ID_CONTEXT.get()
        return True


def _utc_stamp(created: float) -> str:
    return datetime.fromtimestamp(created, timezone.utc).isoformat().replace("+00:00", "Z")


class JsonFormatter(logging.Formatter):
    """Compact JSON per record.

    Keys: ``ts`` (record creation time, UTC), ``level``, ``logger``,
    ``message``, then ``request_id``, ``extra`` and ``exception`` when present.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": _utc_stamp(record.created),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if getattr(record, "request_id", None):
            payload["request_id"] = record.request_id
        extra = {k: v for k, v in vars(record).items() if k not in _RECORD_ATTRS and not k.startswith("_")}
        if extra:
            payload["extra"] = extra
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, separators=(",", ":"))


FORMATTERS: Dict[str, Callable[[], logging.Formatter]] = {
    "json": JsonFormatter,
    "text": lambda: logging.Formatter(TEXT_FORMAT),
}


def _coerce_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def build_handler(fmt: str = "json") -> logging.Handler:
    """Stdout handler with the ``fmt`` formatter and the request ID filter."""

    try:
        factory = FORMATTERS[fmt]
    except KeyError:
        raise ValueError(f"unknown log format {fmt!r}; expected one of {sorted(FORMATTERS)}") from None
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(factory())
    handler.addFilter(RequestIdFilter())
    return handler


_installed: Optional[logging.Handler] = None


def setup_logging(level: int | str = logging.INFO, *, fmt: str = "json") -> logging.Handler:
    """Route the root logger through one stdout handler.

    Later calls leave the existing handler in place and return it. Unknown
    level names resolve to INFO.
    """

    global _installed
    if _installed is not None:
        return _installed

    handler = build_handler(fmt)
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(_coerce_level(level))
    logging.captureWarnings(True)
    _installed = handler
    return handler


__all__ = [
    "FORMATTERS",
    "REQUEST_ID_CONTEXT",
    "RequestIdFilter",
    "JsonFormatter",
    "TEXT_FORMAT",
    "build_handler",
    "setup_logging",
]
