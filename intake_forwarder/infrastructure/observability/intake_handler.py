"""Standard logging handler forwarding records to the log-intake service.

Counterpart of IntakeForwardingProcessor for code that logs through the
standard library. Attributes passed via ``extra`` become tags; the
logger name, path and line number become metadata.

Usage:
    handler = IntakeLogHandler(client, dispatcher)
    logging.getLogger().addHandler(handler)

    logging.getLogger("app").info("user signed in", extra={"user_id": 7})
"""

from __future__ import annotations

import logging
from typing import Any

from intake_forwarder.application.ports import LogIntakeProtocol
from intake_forwarder.application.services import (
    FieldCollector,
    canonical_level,
    event_name,
)
from intake_forwarder.domain.models import EventMetadata
from intake_forwarder.infrastructure.diagnostics import (
    DIAGNOSTIC_KEY,
    is_excluded_logger,
)
from intake_forwarder.infrastructure.intake.dispatcher import IntakeDispatcher

# Attributes every LogRecord carries; anything else came from ``extra``
_STANDARD_ATTRIBUTES = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime", "taskName"}


class IntakeLogHandler(logging.Handler):
    """Logging handler submitting every record to a log intake.

    Records from this package, httpx and httpcore are never forwarded;
    the session client's own requests would otherwise feed back into it.
    """

    def __init__(
        self,
        intake: LogIntakeProtocol,
        dispatcher: IntakeDispatcher,
        level: int = logging.NOTSET,
    ) -> None:
        """Initialize handler.

        Args:
            intake: Shared intake every record is submitted to.
            dispatcher: Background dispatcher running the submissions.
            level: Minimum level handled.
        """
        super().__init__(level)
        self._intake = intake
        self._dispatcher = dispatcher

    def emit(self, record: logging.LogRecord) -> None:
        """Capture the record and schedule its submission."""
        if is_excluded_logger(record.name) or getattr(record, DIAGNOSTIC_KEY, False):
            return

        try:
            metadata = EventMetadata(
                name=event_name(record.pathname or None, record.lineno),
                target=record.name,
                level=canonical_level(record.levelno),
                file=record.pathname or None,
                line=record.lineno,
            )
            fields = collect_extra_fields(record)
            log_record = self._intake.build_record(metadata, fields, record.getMessage())
            self._dispatcher.dispatch(self._intake, log_record)
        except Exception:
            self.handleError(record)


def collect_extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Visit the ``extra`` attributes of a log record.

    An attached exception is recorded as ``exc_info`` by its message.

    Args:
        record: Standard logging record.

    Returns:
        Serialized field map.
    """
    collector = FieldCollector()
    for key, value in vars(record).items():
        if key in _STANDARD_ATTRIBUTES:
            continue
        collector.record(key, value)
    if record.exc_info and record.exc_info[1] is not None:
        collector.record_error("exc_info", record.exc_info[1])
    return collector.as_dict()
