"""
Structured Logging

Everything logs under the "promocheck" namespace. Library modules only
call get_logger(); the API lifespan (or a script) calls setup_logging()
once to attach a handler.

Two output formats, chosen by PROMOCHECK_LOG_FORMAT:
  json — one JSON object per line, context fields as top-level keys
  text — one readable line, context fields appended as key=value

Usage:
    from promocheck.logging import get_logger
    logger = get_logger("analyzer")
    logger.info("Analysis complete", extra={"score": 72, "issues_count": 4})
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Optional


LOG_LEVEL = os.getenv("PROMOCHECK_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = os.getenv("PROMOCHECK_LOG_FORMAT", "json")  # "json" or "text"

NAMESPACE = "promocheck"

# Context keys picked up from `extra=`
CONTEXT_FIELDS = (
    "score", "verdict", "issues_count", "findings_count", "content_length",
    "duration_ms", "stage", "result_id", "error", "error_type",
    "method", "path", "status_code", "catalog_version", "rules_count",
)


def _context(record: logging.LogRecord) -> dict:
    return {
        key: getattr(record, key)
        for key in CONTEXT_FIELDS
        if getattr(record, key, None) is not None
    }


class JSONFormatter(logging.Formatter):
    """Formats log records as JSON lines."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_context(record),
        }
        if record.exc_info and record.exc_info[0]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str, ensure_ascii=False)


class TextFormatter(logging.Formatter):
    """Human-readable format for development."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s [%(levelname)-8s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = _context(record)
        if context:
            line += " | " + " ".join(f"{k}={v}" for k, v in context.items())
        return line


def setup_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> logging.Logger:
    """
    Attach a stdout handler to the package logger. Safe to call again;
    the previous handler is replaced, not duplicated.
    """
    logger = logging.getLogger(NAMESPACE)
    logger.setLevel(getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO))
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    if (fmt or LOG_FORMAT) == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(TextFormatter())
    logger.addHandler(handler)

    # Request lines come from our own middleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a named logger under the promocheck namespace."""
    return logging.getLogger(f"{NAMESPACE}.{name}")
