"""Domain errors for intake-forwarder.

Provides specific exception classes for the two failure families:
session initialization (fatal) and record submission (non-fatal).
All exceptions inherit from IntakeForwarderError.
"""

from intake_forwarder.domain.errors.intake import (
    IntakeConfigurationError,
    IntakeHandshakeError,
    IntakeInitError,
    IntakeSubmitError,
)

__all__: list[str] = [
    "IntakeConfigurationError",
    "IntakeHandshakeError",
    "IntakeInitError",
    "IntakeSubmitError",
]
