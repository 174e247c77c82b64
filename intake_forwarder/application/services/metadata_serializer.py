"""Event metadata serialization.

Pure functions converting event provenance into the JSON structure sent
as a record's "data" member:

    {
        "name": "event app/main.py:42",
        "target": "app.main",
        "level": "INFO",
        "file": "app/main.py",   # or null
        "line": 42               # or null
    }
"""

from __future__ import annotations

import logging
from typing import Any

from intake_forwarder.domain.models import EventMetadata

# Canonical severity names, in increasing order
TRACE = "TRACE"
DEBUG = "DEBUG"
INFO = "INFO"
WARN = "WARN"
ERROR = "ERROR"

_LEVEL_ALIASES: dict[str, str] = {
    "trace": TRACE,
    "debug": DEBUG,
    "info": INFO,
    "msg": INFO,
    "notset": TRACE,
    "warn": WARN,
    "warning": WARN,
    "error": ERROR,
    "exception": ERROR,
    "err": ERROR,
    "critical": ERROR,
    "fatal": ERROR,
}


def canonical_level(level: object) -> str:
    """Map a framework level to its canonical severity string.

    Accepts structlog method names ("info", "warning", "exception", ...)
    and standard logging numeric levels. Unknown names are upper-cased,
    other values are stringified; None maps to INFO.

    Args:
        level: Level name or numeric level.

    Returns:
        One of TRACE, DEBUG, INFO, WARN, ERROR, or the upper-cased input.
    """
    if level is None:
        return INFO
    if isinstance(level, int):
        if level >= logging.ERROR:
            return ERROR
        if level >= logging.WARNING:
            return WARN
        if level >= logging.INFO:
            return INFO
        if level >= logging.DEBUG:
            return DEBUG
        return TRACE
    if isinstance(level, str):
        return _LEVEL_ALIASES.get(level.lower(), level.upper())
    return str(level).upper()


def event_name(file: str | None, line: int | None) -> str:
    """Build an event name from its callsite."""
    if file is None:
        return "event"
    if line is None:
        return f"event {file}"
    return f"event {file}:{line}"


def serialize_metadata(metadata: EventMetadata) -> dict[str, Any]:
    """Serialize event provenance.

    Absent file or line become null. Never raises.

    Args:
        metadata: Provenance of the event.

    Returns:
        JSON-compatible dict with name, target, level, file and line.
    """
    return {
        "name": metadata.name,
        "target": metadata.target,
        "level": metadata.level or INFO,
        "file": metadata.file,
        "line": int(metadata.line) if metadata.line is not None else None,
    }
