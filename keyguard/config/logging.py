"""Structured logging for the keyguard device shim.

Log lines are single JSON objects. Anything binary that reaches a record,
whether as an ``extra`` value or a :class:`SizedBuffer`, is reduced to its
length: the bytes this package moves around are passwords, password handles
and verification tokens.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from datetime import datetime, timezone
from logging import Handler
from logging.config import dictConfig
from logging.handlers import SysLogHandler
from pathlib import Path
from typing import Any, Final

import msgspec

from ..const import LOG_STREAM_ENV
from ..protocol.buffer import SizedBuffer
from .model import RuntimeConfig

SYSLOG_SOCKET = Path("/dev/log")
SYSLOG_SOCKET_FALLBACK = Path("/var/run/log")
SYSLOG_IDENT: Final[str] = "keyguard: "

HANDLER_NAME: Final[str] = "keyguard"
FORMATTER_PATH: Final[str] = "keyguard.config.logging.StructuredLogFormatter"

# Attributes every LogRecord carries; whatever else is set came from ``extra``.
_STANDARD_RECORD_KEYS: Final[frozenset[str]] = frozenset(
    logging.LogRecord("", logging.NOTSET, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


def _redact_value(value: Any) -> Any:
    """Make an ``extra`` value JSON-safe without ever exposing binary contents."""
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, SizedBuffer):
        return f"<{value.length} bytes>"
    if isinstance(value, (bytes, bytearray)):
        return f"<{len(value)} bytes>"
    if isinstance(value, memoryview):
        return f"<{value.nbytes} bytes>"
    return str(value)


def _record_extras(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: _redact_value(value)
        for key, value in record.__dict__.items()
        if key not in _STANDARD_RECORD_KEYS and not key.startswith("_")
    }


class StructuredLogFormatter(logging.Formatter):
    """Render each record as one JSON object, logger names relative to ``keyguard``."""

    PREFIX = "keyguard."

    def _logger_name(self, record: logging.LogRecord) -> str:
        name = record.name
        return name[len(self.PREFIX) :] if name.startswith(self.PREFIX) else name

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: dict[str, Any] = {
            "ts": created.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": self._logger_name(record),
            "message": record.getMessage(),
        }
        extras = _record_extras(record)
        if extras:
            payload["extra"] = extras
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return msgspec.json.encode(payload).decode("utf-8")


def _syslog_socket() -> Path | None:
    for candidate in (SYSLOG_SOCKET, SYSLOG_SOCKET_FALLBACK):
        if candidate.exists():
            return candidate
    return None


def _build_handler(environ: Mapping[str, str] | None = None) -> Handler:
    """Syslog on the auth facility, or stderr when asked for or no socket exists."""
    env = os.environ if environ is None else environ
    socket_path = None if env.get(LOG_STREAM_ENV) else _syslog_socket()
    if socket_path is None:
        return logging.StreamHandler()

    handler = SysLogHandler(address=str(socket_path), facility=SysLogHandler.LOG_AUTH)
    handler.ident = SYSLOG_IDENT
    return handler


def configure_logging(config: RuntimeConfig) -> None:
    """Route all logging through one structured handler at the configured level."""
    level_name = logging.getLevelName(logging.DEBUG if config.debug_logging else logging.INFO)

    handler_config: dict[str, Any] = {
        "()": _build_handler,
        "level": level_name,
        "formatter": "structured",
    }
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"structured": {"()": FORMATTER_PATH}},
            "handlers": {HANDLER_NAME: handler_config},
            "root": {"level": level_name, "handlers": [HANDLER_NAME]},
        }
    )
    logging.getLogger("keyguard").info("Logging configured at level %s", level_name)
