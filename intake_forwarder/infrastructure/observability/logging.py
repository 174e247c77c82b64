"""Structured logging configuration with structlog.

This module provides centralized structlog configuration, supporting both
production (JSON) and development (console) output modes, with an
optional intake forwarding processor spliced in before the renderer.

Log Entry Format (production):
    {
        "timestamp": "2024-01-01T00:00:00.000000Z",
        "level": "info",
        "event": "message",
        "pathname": "/app/main.py",
        "lineno": 42,
        ...additional context
    }

Usage:
    # At application startup
    from intake_forwarder.infrastructure.observability import configure_structlog

    configure_structlog(environment="production")  # JSON output
    configure_structlog(environment="development", forwarding_processor=processor)

    # Then use structlog normally
    import structlog
    log = structlog.get_logger()
    log.info("event_name", key="value")
"""

import logging
import os

import structlog
from structlog.typing import Processor

# Environment variable for log level (default: INFO)
LOG_LEVEL_ENV = "LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"

# Callsite data the forwarding processor turns into event metadata
CALLSITE_PARAMETERS = {
    structlog.processors.CallsiteParameter.PATHNAME,
    structlog.processors.CallsiteParameter.LINENO,
    structlog.processors.CallsiteParameter.MODULE,
}


def _get_log_level() -> int:
    """Get the configured log level from environment.

    Returns:
        The logging level integer (e.g., logging.INFO).
    """
    level_name = os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()
    return getattr(logging, level_name, logging.INFO)


def build_processors(
    environment: str = "production",
    forwarding_processor: Processor | None = None,
) -> list[Processor]:
    """Build the processor chain for an environment.

    Args:
        environment: 'production' for JSON output, anything else for console.
        forwarding_processor: Optional capture callback inserted directly
            before the renderer, after all provenance has been added.

    Returns:
        Ordered list of processors.
    """
    processors: list[Processor] = [
        # Merge context from contextvars (async support)
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        # File, line and module of the log call
        structlog.processors.CallsiteParameterAdder(CALLSITE_PARAMETERS),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if forwarding_processor is not None:
        processors.append(forwarding_processor)

    if environment == "production":
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    return processors


def configure_structlog(
    environment: str = "production",
    forwarding_processor: Processor | None = None,
) -> None:
    """Configure structlog for the application.

    Should be called once at application startup.

    Args:
        environment: 'production' for JSON output, 'development' for console.
                    Defaults to 'production'.
        forwarding_processor: Optional intake forwarding processor.
    """
    structlog.configure(
        processors=build_processors(environment, forwarding_processor),
        wrapper_class=structlog.make_filtering_bound_logger(_get_log_level()),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        # Loggers created before forwarding is installed must pick up the
        # new processor chain, so they are never cached.
        cache_logger_on_first_use=False,
    )
