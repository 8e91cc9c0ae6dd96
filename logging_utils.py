# logging_utils.py
"""Logging configuration helpers for the relay bot."""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, ClassVar, Optional, TextIO

_DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Libraries that log every HTTP round trip at INFO/DEBUG.
_CHATTY_LOGGERS = ("slack_bolt", "slack_sdk", "urllib3")


class JsonFormatter(logging.Formatter):
    """One JSON object per record; ``extra=`` context becomes top-level keys."""

    RESERVED_KEYS: ClassVar[frozenset[str]] = frozenset(
        vars(logging.LogRecord("", 0, "", 0, "", None, None))
    ) | {"message", "asctime"}

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, Any] = {
            "time": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in self.RESERVED_KEYS and not key.startswith("_"):
                data[key] = value
        return json.dumps(data, default=str, ensure_ascii=False)


def _resolve_log_level(level_name: Optional[str]) -> int:
    if not level_name:
        return logging.INFO
    numeric = logging.getLevelName(level_name.upper())
    return numeric if isinstance(numeric, int) else logging.INFO


def configure_logging(
    level_name: Optional[str], json_enabled: bool, *, stream: Optional[TextIO] = None
) -> None:
    """Replace root handlers with a single stdout handler."""

    level = _resolve_log_level(level_name)
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.setLevel(level)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(JsonFormatter() if json_enabled else logging.Formatter(_DEFAULT_FORMAT))
    root.addHandler(handler)

    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
