"""Session client for the log-intake service.

Owns the httpx client, the session obtained from the init handshake and
the configured endpoints. One instance is shared by every dispatch task
in the process; all of its state is fixed once establish() returns.

Failure policy:
- establish() raises IntakeHandshakeError on any failure. The caller is
  expected to abort startup; there is no retry.
- submit() raises IntakeSubmitError on transport or decoding failures,
  which the dispatcher confines to the submitting task. A response with
  success=false is logged as a diagnostic and submit() returns normally.

Usage:
    config = IntakeConfig.from_environment()
    client = await IntakeSessionClient.establish(config)

    record = client.build_record(metadata, fields, "user signed in")
    await client.submit(record)
"""

from __future__ import annotations

import asyncio
from typing import Any

import httpx
from pydantic import ValidationError

from intake_forwarder.application.services import serialize_metadata
from intake_forwarder.config import SESSION_HEADER, IntakeConfig
from intake_forwarder.domain.errors import IntakeHandshakeError, IntakeSubmitError
from intake_forwarder.domain.models import EventMetadata, IntakeSession, LogRecord
from intake_forwarder.infrastructure.diagnostics import get_diagnostic_logger
from intake_forwarder.infrastructure.intake.models import InitResponse, LogResponse

log = get_diagnostic_logger()

JSON_CONTENT_TYPE = "application/json"


class IntakeSessionClient:
    """Client holding an established intake session.

    Construct through establish(); the constructor does no I/O and is
    used directly only when a session id is already known.
    """

    def __init__(
        self,
        config: IntakeConfig,
        session: IntakeSession,
        http_client: httpx.AsyncClient,
        owns_http_client: bool = False,
    ) -> None:
        """Initialize session client.

        Args:
            config: Intake configuration.
            session: Established session.
            http_client: Client used for submissions.
            owns_http_client: Whether aclose() should close http_client.
        """
        self._config = config
        self._session = session
        self._http_client = http_client
        self._owns_http_client = owns_http_client

    @classmethod
    async def establish(
        cls,
        config: IntakeConfig,
        http_client: httpx.AsyncClient | None = None,
    ) -> IntakeSessionClient:
        """Exchange credentials for a session and return a ready client.

        Sends an empty JSON object to the init endpoint with both
        credentials as headers.

        Args:
            config: Intake configuration with credentials and endpoints.
            http_client: Optional client to use. When omitted, one is
                created with the configured timeout and owned by the
                returned instance.

        Returns:
            IntakeSessionClient holding the new session.

        Raises:
            IntakeHandshakeError: On transport failure, malformed response,
                or a response reporting success=false.
        """
        owns_http_client = http_client is None
        client = http_client or httpx.AsyncClient(timeout=config.timeout_seconds)

        try:
            session = await _handshake(client, config)
        except (IntakeHandshakeError, asyncio.CancelledError):
            if owns_http_client:
                await client.aclose()
            raise

        log.info(
            "intake_session_established",
            service=config.service_name,
            environment=config.environment,
            init_endpoint=config.init_endpoint,
        )
        return cls(config, session, client, owns_http_client=owns_http_client)

    @property
    def session_id(self) -> str:
        return self._session.session_id

    @property
    def init_endpoint(self) -> str:
        return self._config.init_endpoint

    @property
    def logs_endpoint(self) -> str:
        return self._config.logs_endpoint

    @property
    def service_name(self) -> str:
        return self._config.service_name

    @property
    def environment(self) -> str:
        return self._config.environment

    @property
    def service_type(self) -> str:
        return self._config.service_type

    def build_record(
        self,
        metadata: EventMetadata,
        fields: dict[str, Any],
        message: str,
    ) -> LogRecord:
        """Build a LogRecord stamped with this client's service identity.

        Args:
            metadata: Provenance of the captured event.
            fields: Serialized field map.
            message: Event message.

        Returns:
            A fresh LogRecord.
        """
        return LogRecord(
            service=self._config.service_name,
            environment=self._config.environment,
            severity=metadata.level,
            kind=self._config.service_type,
            message=message,
            data=serialize_metadata(metadata),
            tags=fields,
        )

    async def submit(self, record: LogRecord) -> None:
        """Submit one record to the logs endpoint.

        Args:
            record: The record to deliver.

        Raises:
            IntakeSubmitError: On transport failure or malformed response.
        """
        headers = {
            SESSION_HEADER: self._session.session_id,
            "Content-Type": JSON_CONTENT_TYPE,
        }

        try:
            response = await self._http_client.post(
                self._config.logs_endpoint,
                json=record.to_dict(),
                headers=headers,
            )
        except httpx.HTTPError as e:
            raise IntakeSubmitError(
                f"Failed to send log request: {e}",
                detail=str(e),
            ) from e

        try:
            body = LogResponse.model_validate_json(response.content)
        except ValidationError as e:
            raise IntakeSubmitError(
                "Failed to deserialize log response",
                status_code=response.status_code,
                detail=response.text,
            ) from e

        if not body.success:
            log.error(
                "intake_submit_rejected",
                status_code=response.status_code,
                response=response.text,
                severity=record.severity,
                logs_endpoint=self._config.logs_endpoint,
            )
            return

        log.debug(
            "intake_log_accepted",
            log_id=body.payload.log_id if body.payload else None,
        )

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http_client:
            await self._http_client.aclose()


async def _handshake(client: httpx.AsyncClient, config: IntakeConfig) -> IntakeSession:
    """Run the init handshake and return the session.

    Raises:
        IntakeHandshakeError: On any failure.
    """
    headers = {
        **config.credentials.as_headers(),
        "Content-Type": JSON_CONTENT_TYPE,
    }

    try:
        response = await client.post(config.init_endpoint, json={}, headers=headers)
    except httpx.HTTPError as e:
        raise IntakeHandshakeError(
            f"Failed to send init request: {e}",
            endpoint=config.init_endpoint,
        ) from e

    try:
        body = InitResponse.model_validate_json(response.content)
    except ValidationError as e:
        raise IntakeHandshakeError(
            "Failed to deserialize init response",
            endpoint=config.init_endpoint,
            status_code=response.status_code,
        ) from e

    if not body.success or body.payload is None:
        log.error(
            "intake_session_rejected",
            status_code=response.status_code,
            init_endpoint=config.init_endpoint,
        )
        raise IntakeHandshakeError(
            "Intake rejected session initialization",
            endpoint=config.init_endpoint,
            status_code=response.status_code,
        )

    try:
        return IntakeSession(session_id=body.payload.session_id)
    except ValueError as e:
        raise IntakeHandshakeError(
            "Intake returned an empty session id",
            endpoint=config.init_endpoint,
            status_code=response.status_code,
        ) from e
