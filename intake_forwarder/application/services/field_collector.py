"""Field collector for captured events.

Visits the typed fields of one event and stores a JSON-compatible value
per field name. Every primitive kind has a total serialization, so no
field can make a submission fail:

    signed int    -> JSON integer
    unsigned int  -> JSON integer
    float         -> JSON number (non-finite values -> null)
    bool          -> JSON boolean
    str           -> JSON string
    error         -> its message string (str(exc))
    debug/opaque  -> its repr() string

Usage:
    collector = FieldCollector()
    collector.record_str("user", "alice")
    collector.record_error("cause", exc)
    tags = collector.as_dict()

    # Or classify arbitrary values
    for key, value in event_dict.items():
        collector.record(key, value)
"""

from __future__ import annotations

import math
from typing import Any


class FieldCollector:
    """Visitor converting one event's typed fields into an ordered dict.

    Keys are unique; recording a name twice keeps the last value. A
    collector is used for exactly one event and is not thread-safe.
    """

    def __init__(self) -> None:
        self._fields: dict[str, Any] = {}

    def record_i64(self, name: str, value: int) -> None:
        self._fields[name] = int(value)

    def record_u64(self, name: str, value: int) -> None:
        self._fields[name] = int(value)

    def record_f64(self, name: str, value: float) -> None:
        value = float(value)
        # NaN and infinities have no JSON representation
        self._fields[name] = value if math.isfinite(value) else None

    def record_bool(self, name: str, value: bool) -> None:
        self._fields[name] = bool(value)

    def record_str(self, name: str, value: str) -> None:
        self._fields[name] = str(value)

    def record_error(self, name: str, value: BaseException) -> None:
        """Record an exception by its message, not its structure."""
        self._fields[name] = _safe_str(value)

    def record_debug(self, name: str, value: object) -> None:
        """Record an opaque value by its human-readable repr."""
        self._fields[name] = _safe_repr(value)

    def record(self, name: str, value: object) -> None:
        """Classify a Python value into a primitive kind and record it.

        bool is checked before int because bool subclasses int. Negative
        integers are recorded as signed, the rest as unsigned.

        Args:
            name: Field name.
            value: Any Python value.
        """
        if isinstance(value, bool):
            self.record_bool(name, value)
        elif isinstance(value, int):
            if value < 0:
                self.record_i64(name, value)
            else:
                self.record_u64(name, value)
        elif isinstance(value, float):
            self.record_f64(name, value)
        elif isinstance(value, str):
            self.record_str(name, value)
        elif isinstance(value, BaseException):
            self.record_error(name, value)
        else:
            self.record_debug(name, value)

    def as_dict(self) -> dict[str, Any]:
        """Get a copy of the collected fields in insertion order."""
        return dict(self._fields)

    def __len__(self) -> int:
        return len(self._fields)


def _safe_str(value: BaseException) -> str:
    try:
        return str(value)
    except Exception:
        return f"<unprintable {type(value).__name__}>"


def _safe_repr(value: object) -> str:
    try:
        return repr(value)
    except Exception:
        return f"<unrepresentable {type(value).__name__}>"
