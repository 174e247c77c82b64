"""Structlog processor forwarding events to the log-intake service.

The processor is the capture callback: structlog calls it once per log
call with the event dict. It snapshots fields and metadata on the
calling thread, hands the finished record to the dispatcher and returns
the event dict untouched so the rest of the chain (renderer, etc.) runs
as usual. A failure while capturing is reported as an
intake_capture_failed diagnostic and never raised into the log call.

Place it after processors that add provenance and before the renderer:

    processors = [
        structlog.processors.add_log_level,
        structlog.processors.CallsiteParameterAdder(...),
        IntakeForwardingProcessor(client, dispatcher),
        structlog.processors.JSONRenderer(),
    ]
"""

from __future__ import annotations

import sys
from typing import Any

from intake_forwarder.application.ports import LogIntakeProtocol
from intake_forwarder.application.services import (
    FieldCollector,
    canonical_level,
    event_name,
)
from intake_forwarder.domain.models import EventMetadata
from intake_forwarder.infrastructure.diagnostics import (
    get_diagnostic_logger,
    is_diagnostic,
)
from intake_forwarder.infrastructure.intake.dispatcher import IntakeDispatcher

log = get_diagnostic_logger()

# Event dict keys consumed as metadata rather than forwarded as tags
MESSAGE_KEY = "event"
PROVENANCE_KEYS = frozenset(
    {"event", "level", "logger", "pathname", "filename", "lineno", "module"}
)

DEFAULT_TARGET = "structlog"


class IntakeForwardingProcessor:
    """Structlog processor submitting every event to a log intake.

    Attributes:
        _intake: Shared intake every record is submitted to.
        _dispatcher: Background dispatcher running the submissions.
    """

    def __init__(self, intake: LogIntakeProtocol, dispatcher: IntakeDispatcher) -> None:
        self._intake = intake
        self._dispatcher = dispatcher

    def __call__(
        self, logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        """Capture the event and schedule its submission.

        Args:
            logger: The wrapped logger.
            method_name: Logging method name ("info", "error", ...).
            event_dict: The event dictionary.

        Returns:
            The event dictionary, unchanged.
        """
        if is_diagnostic(event_dict):
            return event_dict

        try:
            metadata = extract_metadata(logger, method_name, event_dict)
            fields = collect_fields(event_dict)
            message = event_dict.get(MESSAGE_KEY)
            record = self._intake.build_record(
                metadata, fields, "" if message is None else str(message)
            )
        except Exception:
            log.exception("intake_capture_failed", method_name=method_name)
            return event_dict

        try:
            self._dispatcher.dispatch(self._intake, record)
        except RuntimeError as e:
            # Loop closed underneath us during shutdown
            log.warning("intake_dispatch_unavailable", error=str(e))
        except Exception:
            log.exception("intake_capture_failed", method_name=method_name)

        return event_dict


def collect_fields(event_dict: dict[str, Any]) -> dict[str, Any]:
    """Visit every non-provenance entry of an event dict.

    exc_info=True is resolved to the exception currently being handled
    so it serializes as the error's message.

    Args:
        event_dict: Structlog event dictionary.

    Returns:
        Serialized field map.
    """
    collector = FieldCollector()
    for key, value in event_dict.items():
        if key in PROVENANCE_KEYS:
            continue
        if key == "exc_info":
            value = _resolve_exc_info(value)
        collector.record(key, value)
    return collector.as_dict()


def extract_metadata(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> EventMetadata:
    """Build EventMetadata from an event dict.

    Callsite data comes from CallsiteParameterAdder keys when present.

    Args:
        logger: The wrapped logger; its name is a fallback target.
        method_name: Logging method name, used when "level" is absent.
        event_dict: Structlog event dictionary.

    Returns:
        Event provenance.
    """
    file = event_dict.get("pathname") or event_dict.get("filename")
    line = event_dict.get("lineno")
    if not isinstance(line, int) or isinstance(line, bool):
        line = None

    target = (
        event_dict.get("logger")
        or event_dict.get("module")
        or getattr(logger, "name", None)
        or DEFAULT_TARGET
    )

    return EventMetadata(
        name=event_name(file, line),
        target=str(target),
        level=canonical_level(event_dict.get("level") or method_name),
        file=str(file) if file is not None else None,
        line=line,
    )


def _resolve_exc_info(value: Any) -> Any:
    if value is True:
        return sys.exc_info()[1]
    if isinstance(value, tuple) and len(value) == 3:
        return value[1]
    return value
