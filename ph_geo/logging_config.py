"""
Logging setup for the CLI and the API server.
Production emits one JSON object per line; anything else gets plain text.
"""

from __future__ import annotations

import logging
import sys

import json_log_formatter

from ph_geo.config import get_settings

_QUIET_LOGGERS = ("httpx", "uvicorn.access")


class ResolverJSONFormatter(json_log_formatter.JSONFormatter):
    """Adds level and logger name so resolver traces can be filtered downstream."""

    def json_record(self, message: str, extra: dict, record: logging.LogRecord) -> dict:
        extra = super().json_record(message, extra, record)
        extra["level"] = record.levelname
        extra["logger"] = record.name
        return extra


def setup_logging(level_name: str | None = None) -> None:
    settings = get_settings()
    level = getattr(logging, (level_name or settings.log_level).upper(), logging.INFO)

    if settings.env == "production":
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(ResolverJSONFormatter())
        root = logging.getLogger()
        root.setLevel(level)
        root.handlers = [handler]
    else:
        logging.basicConfig(
            level=level,
            format="%(asctime)s [%(levelname)-8s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
            stream=sys.stderr,
        )

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
