"""
Structured logging configuration.

Two output styles, picked by ``settings.ENVIRONMENT``:
    • production  → one JSON object per line, for log shippers
    • otherwise   → coloured single-line console output

Assessment context (``route_id`` plus anything the caller adds, such as
``caller``) lives in a ContextVar and is attached to every record emitted
while it is active.  Scopes nest: an inner ``assessment_context`` layers
its keys over the outer ones and restores them on exit.

Usage:
    from floodroute.core.logging_config import assessment_context, setup_logging

    setup_logging()
    with assessment_context(caller="dispatcher"):
        service.assess_routes(routes)
"""

from __future__ import annotations

import json
import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Iterator

from floodroute.core.config import settings

_assessment_context: ContextVar[Dict[str, Any]] = ContextVar(
    "assessment_context", default={}
)

# Record attributes passed via ``extra=`` that end up in JSON output
EXTRA_FIELDS = (
    "lat", "lon", "risk_score", "route_id", "waypoint_count",
    "forecast_days", "condition", "seed",
)


def set_assessment_context(**kwargs: Any) -> None:
    """Replace the whole context.  Prefer ``assessment_context`` for scopes."""
    _assessment_context.set(kwargs)


def get_assessment_context() -> Dict[str, Any]:
    return _assessment_context.get()


@contextmanager
def assessment_context(**kwargs: Any) -> Iterator[Dict[str, Any]]:
    """Add keys to the current context for the duration of the block."""
    token = _assessment_context.set({**_assessment_context.get(), **kwargs})
    try:
        yield _assessment_context.get()
    finally:
        _assessment_context.reset(token)


class JSONFormatter(logging.Formatter):
    """One JSON document per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "line": record.lineno,
        }

        ctx = get_assessment_context()
        if ctx:
            entry["context"] = dict(ctx)

        entry.update(
            (key, getattr(record, key))
            for key in EXTRA_FIELDS
            if hasattr(record, key)
        )

        if record.exc_info and record.exc_info[1]:
            exc = record.exc_info[1]
            entry["exception"] = {"type": type(exc).__name__, "message": str(exc)}

        return json.dumps(entry, default=str)


class PrettyFormatter(logging.Formatter):
    """Coloured console line: time, level, [context], logger, message."""

    LEVEL_COLOURS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        colour = self.LEVEL_COLOURS.get(record.levelname, self.RESET)
        head = f"{colour}{self.formatTime(record, '%H:%M:%S')} {record.levelname:8s}{self.RESET}"

        ctx = get_assessment_context()
        tags = [str(ctx["route_id"])] if ctx.get("route_id") else []
        tags.extend(f"{k}={v}" for k, v in ctx.items() if k != "route_id")
        scope = f" [{' '.join(tags)}]" if tags else ""

        line = f"{head}{scope} {record.name}: {record.getMessage()}"
        if record.exc_info and record.exc_info[1]:
            exc = record.exc_info[1]
            line += f"\n  {type(exc).__name__}: {exc}"
        return line


def setup_logging() -> None:
    """Install a single stdout handler on the root logger."""
    root = logging.getLogger()
    root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        JSONFormatter() if settings.is_production else PrettyFormatter()
    )
    root.addHandler(handler)
