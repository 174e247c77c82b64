"""Log Intake Stub for testing.

This module provides a configurable in-memory implementation of
LogIntakeProtocol for unit and integration tests that exercise the
capture callbacks and the dispatcher without HTTP.
"""

from __future__ import annotations

import asyncio
import threading
from typing import Any

from intake_forwarder.application.services import serialize_metadata
from intake_forwarder.domain.errors import IntakeSubmitError
from intake_forwarder.domain.models import EventMetadata, LogRecord


class LogIntakeStub:
    """Stub implementation of LogIntakeProtocol for testing.

    Provides control over submission behavior for testing:
    - Normal operation (records are stored)
    - Transport failure (submit raises IntakeSubmitError)
    - Slow intake (submit sleeps before storing)

    Submissions run on the dispatcher thread while tests inspect the
    stub from the main thread, so access is guarded by a lock.

    Attributes:
        submitted: Records received, in arrival order.
        max_concurrent: Highest number of submit() calls seen in flight.
    """

    def __init__(
        self,
        service_name: str = "test-service",
        environment: str = "testing",
        service_type: str = "test",
        delay_seconds: float = 0.0,
    ) -> None:
        """Initialize log intake stub.

        Args:
            service_name: Service name stamped on built records.
            environment: Environment stamped on built records.
            service_type: Service type stamped on built records.
            delay_seconds: Time each submit() spends "on the network".
        """
        self._service_name = service_name
        self._environment = environment
        self._service_type = service_type
        self._delay_seconds = delay_seconds
        self._fail_with: IntakeSubmitError | None = None
        self._lock = threading.Lock()
        self._changed = threading.Condition(self._lock)
        self._in_flight = 0
        self.submitted: list[LogRecord] = []
        self.max_concurrent = 0

    def fail_with(self, error: IntakeSubmitError | None) -> None:
        """Make every subsequent submit() raise error (None to reset)."""
        self._fail_with = error

    def build_record(
        self,
        metadata: EventMetadata,
        fields: dict[str, Any],
        message: str,
    ) -> LogRecord:
        return LogRecord(
            service=self._service_name,
            environment=self._environment,
            severity=metadata.level,
            kind=self._service_type,
            message=message,
            data=serialize_metadata(metadata),
            tags=fields,
        )

    async def submit(self, record: LogRecord) -> None:
        with self._lock:
            self._in_flight += 1
            self.max_concurrent = max(self.max_concurrent, self._in_flight)

        try:
            if self._delay_seconds:
                await asyncio.sleep(self._delay_seconds)
            if self._fail_with is not None:
                raise self._fail_with
        finally:
            with self._lock:
                self._in_flight -= 1

        with self._changed:
            self.submitted.append(record)
            self._changed.notify_all()

    def wait_for(self, count: int, timeout: float = 5.0) -> bool:
        """Block until at least count records were stored.

        Args:
            count: Number of records to wait for.
            timeout: Seconds to wait.

        Returns:
            True if the count was reached before the timeout.
        """
        with self._changed:
            return self._changed.wait_for(lambda: len(self.submitted) >= count, timeout)

    def clear(self) -> None:
        """Clear stored records (for test cleanup)."""
        with self._lock:
            self.submitted.clear()
            self.max_concurrent = 0
