"""Application services for intake-forwarder."""

from intake_forwarder.application.services.field_collector import FieldCollector
from intake_forwarder.application.services.metadata_serializer import (
    canonical_level,
    event_name,
    serialize_metadata,
)

__all__ = [
    "FieldCollector",
    "canonical_level",
    "event_name",
    "serialize_metadata",
]
