"""Log configuration: JSON lines for the server, plain text for the CLI."""

from __future__ import annotations

from collections.abc import Iterator
from datetime import datetime, timezone
import logging
from pathlib import Path
import sys
from typing import Any, TextIO

import orjson

from content_search.observability.context import get_trace_context


PLAIN_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Attributes every LogRecord carries; anything else came in via ``extra=``
_STANDARD_RECORD_FIELDS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys() | {"message", "asctime"}
)


def _clip(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[:limit] + "..."


def _json_default(value: Any) -> Any:
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=str)
    if isinstance(value, (Path, Exception)):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        return value.decode("utf-8", errors="replace")
    return repr(value)


class JsonFormatter(logging.Formatter):
    """One JSON object per line, correlated with the request's trace and locale."""

    SENSITIVE_KEYS = frozenset({"authorization", "cookie", "password", "secret", "token"})
    MAX_MESSAGE_LEN = 2000
    MAX_VALUE_LEN = 500

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "component": record.name.rpartition(".")[2],
            "message": _clip(record.getMessage(), self.MAX_MESSAGE_LEN),
            **get_trace_context().as_log_fields(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        payload.update(self._extra_fields(record))
        return orjson.dumps(payload, default=_json_default).decode("utf-8")

    def _extra_fields(self, record: logging.LogRecord) -> Iterator[tuple[str, Any]]:
        for key, value in vars(record).items():
            if key in _STANDARD_RECORD_FIELDS or key.startswith("_"):
                continue
            if key.lower() in self.SENSITIVE_KEYS:
                yield key, "[REDACTED]"
            elif isinstance(value, str):
                yield key, _clip(value, self.MAX_VALUE_LEN)
            else:
                yield key, value


def _resolve_level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def configure_logging(
    level: str = "info",
    json_output: bool = True,
    *,
    logger_levels: dict[str, str] | None = None,
    access_log: bool = False,
    stream: TextIO | None = None,
) -> logging.Handler:
    """Route every logger through a single root handler.

    Existing root handlers are replaced, so the app factory and the CLI can
    both call this without duplicating output.

    Args:
        level: Root level name (debug, info, warning, error, critical)
        json_output: Use :class:`JsonFormatter` instead of plain text
        logger_levels: Per-logger level overrides (logger name -> level name)
        access_log: Keep ``uvicorn.access`` at the root level instead of WARNING
        stream: Destination stream, stdout by default

    Returns:
        The installed handler.
    """
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(JsonFormatter() if json_output else logging.Formatter(PLAIN_FORMAT))

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(_resolve_level(level))

    overrides = dict(logger_levels or {})
    if not access_log:
        overrides.setdefault("uvicorn.access", "warning")
    for name, name_level in overrides.items():
        logging.getLogger(name).setLevel(_resolve_level(name_level))
    return handler
