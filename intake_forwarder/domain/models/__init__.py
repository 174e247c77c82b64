"""Domain models for intake-forwarder."""

from intake_forwarder.domain.models.log_record import (
    EventMetadata,
    IntakeSession,
    LogRecord,
)

__all__ = ["EventMetadata", "IntakeSession", "LogRecord"]
