"""Log intake port.

Protocol the dispatch layer depends on. The httpx-backed
IntakeSessionClient implements it for production; LogIntakeStub
implements it for tests.

Developer Golden Rules:
1. Protocol-based DI - the dispatcher never imports a concrete client
2. submit() never raises for a rejected record, only for transport or
   decoding failures
3. Service identity is stamped by the intake, not by the capture callback
"""

from abc import abstractmethod
from typing import Any, Protocol

from intake_forwarder.domain.models import EventMetadata, LogRecord


class LogIntakeProtocol(Protocol):
    """Protocol for submitting captured events to a log intake."""

    @abstractmethod
    def build_record(
        self,
        metadata: EventMetadata,
        fields: dict[str, Any],
        message: str,
    ) -> LogRecord:
        """Build a LogRecord stamped with this intake's service identity.

        Args:
            metadata: Provenance of the captured event.
            fields: Serialized field map from a FieldCollector.
            message: Human-readable event message.

        Returns:
            A fresh LogRecord ready for submit().
        """
        ...

    @abstractmethod
    async def submit(self, record: LogRecord) -> None:
        """Submit one record.

        A response reporting success=false is logged and the call returns
        normally.

        Args:
            record: The record to deliver.

        Raises:
            IntakeSubmitError: On transport failure or malformed response.
        """
        ...
