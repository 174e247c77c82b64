"""Wire models for the log-intake service responses.

Both endpoints answer with {"success": bool, "payload": {...}}. A failure
response may omit the payload, so it is optional here and checked by the
caller when success is true.
"""

from pydantic import BaseModel


class InitPayload(BaseModel):
    """Payload of a successful init handshake.

    Attributes:
        session_id: Session token for subsequent submissions.
    """

    session_id: str


class InitResponse(BaseModel):
    """Init endpoint response.

    Attributes:
        success: Whether the session was created.
        payload: Session payload, present when success is true.
    """

    success: bool
    payload: InitPayload | None = None


class LogPayload(BaseModel):
    """Payload of an accepted log submission.

    Attributes:
        log_id: Identifier the intake assigned to the record.
    """

    log_id: str


class LogResponse(BaseModel):
    """Logs endpoint response.

    Attributes:
        success: Whether the record was accepted.
        payload: Log payload, present when success is true.
    """

    success: bool
    payload: LogPayload | None = None
