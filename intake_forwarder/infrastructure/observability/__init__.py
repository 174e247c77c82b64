"""Observability infrastructure: structlog configuration and capture callbacks.

This module provides:
- Structured JSON logging with structlog
- IntakeForwardingProcessor, the structlog capture callback
- IntakeLogHandler, the standard logging capture callback

Usage:
    from intake_forwarder.infrastructure.observability import (
        IntakeForwardingProcessor,
        configure_structlog,
    )

    processor = IntakeForwardingProcessor(client, dispatcher)
    configure_structlog(environment="production", forwarding_processor=processor)
"""

from intake_forwarder.infrastructure.observability.intake_handler import IntakeLogHandler
from intake_forwarder.infrastructure.observability.intake_processor import (
    IntakeForwardingProcessor,
)
from intake_forwarder.infrastructure.observability.logging import (
    build_processors,
    configure_structlog,
)

__all__: list[str] = [
    "IntakeForwardingProcessor",
    "IntakeLogHandler",
    "build_processors",
    "configure_structlog",
]
