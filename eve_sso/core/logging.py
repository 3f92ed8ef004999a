"""Logging configuration for eve-sso.

The library itself only ever calls ``logging.getLogger(__name__)``; nothing
is configured on import.  Applications (and the demo script) call
``setup_logging`` once at startup.

Two formatters are provided:

  _TextFormatter — human-readable, single-line, for local runs.

  _JsonFormatter — one JSON object per line, for log aggregation.
    Set LOG_JSON=true to switch to it.

Token-request context (grant_type, host, status_code, duration_ms) is
passed through ``extra=`` and surfaces as top-level JSON keys.
"""

from __future__ import annotations

import json
import logging
import sys


# Fields the SSO client attaches to token-request records via ``extra=``.
_CONTEXT_FIELDS = (
    "grant_type",
    "host",
    "status_code",
    "duration_ms",
)


class _TextFormatter(logging.Formatter):
    """Single-line formatter for stdout.

    Context fields are appended as ``key=value`` unless the message already
    spells them out, so the response line still shows its duration.
    """

    _FMT = "%(asctime)s %(levelname)-8s %(name)s  %(message)s"

    def __init__(self) -> None:
        super().__init__(fmt=self._FMT)

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        message = record.getMessage()
        extras = [
            f"{key}={getattr(record, key)}"
            for key in _CONTEXT_FIELDS
            if getattr(record, key, None) is not None and f"{key}=" not in message
        ]
        if not extras:
            return line
        # keep any traceback below the enriched first line
        first, sep, rest = line.partition("\n")
        return f"{first}  {' '.join(extras)}{sep}{rest}"


class _JsonFormatter(logging.Formatter):
    """JSON Lines formatter.

    Context fields attached by the SSO client via ``extra=`` appear as
    top-level keys when present.
    """

    def __init__(self) -> None:
        super().__init__(datefmt="%Y-%m-%dT%H:%M:%S%z")

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, object] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key in _CONTEXT_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                log_entry[key] = value

        if record.exc_info and record.exc_info[0] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def setup_logging(level_name: str, *, json_format: bool = False) -> None:
    """Configure the root logger.

    Args:
        level_name: Log level string (debug/info/warning/error)
        json_format: If True, emit JSON lines. If False, human-readable.
                     Controlled by LOG_JSON in Settings.
    """
    level = getattr(logging, level_name.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_JsonFormatter() if json_format else _TextFormatter())

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    # httpx logs every request line at INFO, including full URLs
    for name in ("httpcore", "httpx"):
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
