"""Intake session and submission exceptions.

Two failure families with deliberately different propagation:

- IntakeInitError is fatal. Configuration problems and a failed session
  handshake abort pipeline construction; the host application is not meant
  to run with a half-initialized forwarder.
- IntakeSubmitError is non-fatal. It is raised inside a dispatch task only
  and reported as a diagnostic; it never reaches the code that emitted
  the log event.
"""

from typing import Any

from intake_forwarder.domain.exceptions import IntakeForwarderError


class IntakeInitError(IntakeForwarderError):
    """Base exception for failures while establishing an intake session."""

    pass


class IntakeConfigurationError(IntakeInitError):
    """Raised when required configuration is missing or invalid.

    Typical cause: INTAKE_ACCESS or INTAKE_SECRET not set at startup.
    """

    def __init__(self, message: str = "Intake configuration invalid", key: str = "") -> None:
        """Initialize with the offending configuration key.

        Args:
            message: Error description.
            key: Name of the missing or invalid setting, if known.
        """
        if key:
            message = f"{message}: {key}"
        super().__init__(message)
        self.key = key


class IntakeHandshakeError(IntakeInitError):
    """Raised when the init handshake fails.

    Covers transport failures, undecodable responses and responses that
    report success=false.
    """

    def __init__(
        self,
        message: str = "Failed to initialize intake session",
        endpoint: str = "",
        status_code: int | None = None,
    ) -> None:
        """Initialize with handshake context.

        Args:
            message: Error description.
            endpoint: Init endpoint that was contacted.
            status_code: HTTP status code if a response was received.
        """
        if endpoint:
            message = f"{message} ({endpoint})"
        super().__init__(message)
        self.endpoint = endpoint
        self.status_code = status_code


class IntakeSubmitError(IntakeForwarderError):
    """Raised when a log record could not be delivered.

    Only transport failures and malformed responses raise this error. A
    well-formed response with success=false is logged, not raised.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        detail: Any = None,
    ) -> None:
        """Initialize with submission context.

        Args:
            message: Error description.
            status_code: HTTP status code if a response was received.
            detail: Raw response body or underlying error text.
        """
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail
