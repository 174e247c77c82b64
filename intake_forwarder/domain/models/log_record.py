"""Value objects exchanged with the log-intake service.

IntakeSession is the capability token returned by the init handshake.
EventMetadata describes where an event came from. LogRecord is the unit
submitted to the logs endpoint, built fresh for every captured event and
consumed exactly once.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class IntakeSession:
    """Session obtained once from the init endpoint.

    There is no expiry or refresh; the session lives as long as the
    client that owns it.

    Attributes:
        session_id: Token sent as INTAKE_SESSION_ID on every submission.
    """

    session_id: str

    def __post_init__(self) -> None:
        """Validate the session id."""
        if not self.session_id:
            raise ValueError("session_id must be a non-empty string")


@dataclass(frozen=True)
class EventMetadata:
    """Provenance of a captured event.

    Attributes:
        name: Event name, e.g. "event app/main.py:42".
        target: Category the event was emitted under (logger name/module).
        level: Canonical severity string (TRACE/DEBUG/INFO/WARN/ERROR).
        file: Source file, or None when the framework did not supply one.
        line: Source line, or None when the framework did not supply one.
    """

    name: str
    target: str
    level: str
    file: str | None = None
    line: int | None = None


@dataclass(frozen=True)
class LogRecord:
    """Structured record submitted to the logs endpoint.

    Attributes:
        service: Service name the record belongs to.
        environment: Deployment environment (e.g. "production").
        severity: Canonical severity string.
        kind: Service type/category, sent on the wire as "type".
        message: Human-readable event message, sent on the wire as "log".
        data: Serialized event metadata (see serialize_metadata).
        tags: Serialized field map (see FieldCollector).
    """

    service: str
    environment: str
    severity: str
    kind: str
    message: str
    data: dict[str, Any] = field(default_factory=dict)
    tags: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON body expected by the logs endpoint."""
        return {
            "service": self.service,
            "environment": self.environment,
            "severity": self.severity,
            "type": self.kind,
            "log": self.message,
            "data": self.data,
            "tags": self.tags,
        }
