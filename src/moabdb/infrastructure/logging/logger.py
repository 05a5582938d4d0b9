# src/moabdb/infrastructure/logging/logger.py
# Copyright (c) MoabDB.
# SPDX-License-Identifier: MIT
"""Structured JSON logging for the MoabDB client.

The library only ever asks for named loggers through :func:`get_json_logger`
and never installs handlers on import. Applications that want JSON lines call
:func:`configure_root_logging` once at startup.

Every line carries ``ts``, ``level``, ``logger``, ``library`` and ``message``.
Structured fields are passed as ``extra={"extra": {...}}`` and merged in after
credential-bearing keys (token, username, raw ``x-req`` wire text) are masked.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any, Final

__all__ = ["REDACTED", "configure_root_logging", "get_json_logger"]

LIBRARY: Final[str] = "moabdb"
REDACTED: Final[str] = "***"

_LEVEL_ENV_KEY: Final[str] = "LOG_LEVEL"
_SENSITIVE_KEYS: Final[frozenset[str]] = frozenset(
    {"token", "username", "password", "authorization", "x-req", "wire"}
)
# Keys the formatter owns; structured extras cannot overwrite them.
_RESERVED_KEYS: Final[frozenset[str]] = frozenset({"ts", "level", "logger", "library", "message"})


def _scrub(fields: Mapping[str, Any]) -> dict[str, Any]:
    return {
        key: REDACTED if key.lower() in _SENSITIVE_KEYS else value
        for key, value in fields.items()
        if key not in _RESERVED_KEYS
    }


class _JsonFormatter(logging.Formatter):
    """Render a record as one compact JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "library": LIBRARY,
            "message": record.getMessage(),
        }

        extra = getattr(record, "extra", None)
        if isinstance(extra, Mapping):
            payload.update(_scrub(extra))

        if record.exc_info and record.exc_info[1] is not None:
            exc = record.exc_info[1]
            payload["exc_type"] = type(exc).__name__
            payload["exc_message"] = str(exc)

        return json.dumps(payload, separators=(",", ":"), ensure_ascii=False, default=str)


def _resolve_level(level: str | int | None) -> str | int:
    if level is not None:
        return level
    return (os.getenv(_LEVEL_ENV_KEY) or "INFO").upper()


def configure_root_logging(level: str | int | None = None) -> None:
    """Install a JSON stream handler on the root logger (idempotent).

    Args:
        level: Logging level or level name. If ``None``, use env ``LOG_LEVEL``
            or ``INFO``.
    """
    root = logging.getLogger()
    root.setLevel(_resolve_level(level))

    if any(isinstance(h.formatter, _JsonFormatter) for h in root.handlers):
        return

    handler = logging.StreamHandler()
    handler.setFormatter(_JsonFormatter())
    root.addHandler(handler)


def get_json_logger(name: str) -> logging.Logger:
    """Return the logger for ``name``; output format is left to the root handler."""
    return logging.getLogger(name)
