"""Diagnostic channel for the forwarding pipeline itself.

The pipeline reports its own failures through structlog, the same
mechanism it forwards. Diagnostic entries carry intake_diagnostic=True so
the forwarding processor passes them through without submitting them;
otherwise a rejecting intake would receive an endless stream of
"submission rejected" records.
"""

from typing import Any

import structlog

DIAGNOSTIC_KEY = "intake_diagnostic"

# Loggers whose stdlib records are never forwarded. httpx and httpcore
# log every request the session client makes.
EXCLUDED_LOGGER_PREFIXES: tuple[str, ...] = ("intake_forwarder", "httpx", "httpcore")


def get_diagnostic_logger(**initial_values: Any) -> Any:
    """Get a structlog logger whose entries are marked as diagnostics.

    Args:
        **initial_values: Additional context to bind.

    Returns:
        A lazy structlog logger proxy.
    """
    return structlog.get_logger(**{DIAGNOSTIC_KEY: True}, **initial_values)


def is_diagnostic(event_dict: dict[str, Any]) -> bool:
    """Check whether an event dict was emitted by the pipeline itself."""
    return bool(event_dict.get(DIAGNOSTIC_KEY))


def is_excluded_logger(name: str) -> bool:
    """Check whether a stdlib logger name must not be forwarded."""
    return any(
        name == prefix or name.startswith(prefix + ".")
        for prefix in EXCLUDED_LOGGER_PREFIXES
    )
