"""Logging setup for LinkMinder.

Every module asks :func:`get_logger` for its logger. Structured context is
passed as ``extra={"ctx_<name>": value}`` and shows up as ``<name>`` in the
JSON line.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

import orjson

from linkminder.utils.time import to_iso

_CONTEXT_PREFIX = "ctx_"
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _context(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key[len(_CONTEXT_PREFIX) :]: value
        for key, value in vars(record).items()
        if key.startswith(_CONTEXT_PREFIX)
    }


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": to_iso(datetime.fromtimestamp(record.created, tz=timezone.utc)),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            **_context(record),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        # link records carry datetimes and dataclasses now and then
        return orjson.dumps(payload, default=str).decode("utf-8")


def configure_logging(level: str | int | None = None, use_json: bool = True) -> None:
    """Route all records to stdout through a single handler."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter() if use_json else logging.Formatter(_PLAIN_FORMAT))
    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level or os.environ.get("LNKM_LOG_LEVEL", "INFO"))


def get_logger(name: str = "linkminder") -> logging.Logger:
    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name)


__all__ = ["JsonFormatter", "configure_logging", "get_logger"]
