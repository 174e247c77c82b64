"""Base exception classes for the intake-forwarder domain layer."""


class IntakeForwarderError(Exception):
    """Base exception for all intake-forwarder errors.

    All package-specific exceptions MUST inherit from this class so
    callers can catch forwarding failures in one place.
    """

    def __init__(self, message: str = "") -> None:
        """Initialize the exception with an optional message.

        Args:
            message: Human-readable error description.
        """
        super().__init__(message)
