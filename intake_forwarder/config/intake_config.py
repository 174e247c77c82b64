"""Intake service configuration.

This module defines the immutable configuration consumed by the session
client: service identity, endpoint URLs and the two credential secrets.
Values resolve with precedence explicit argument > environment variable >
hardcoded default. Credentials have no default; a missing credential is a
startup failure.

Environment Variables:
- SERVICE_NAME: Service name (default: basename of the running script)
- ENVIRONMENT: Deployment environment (default: "development")
- SERVICE_TYPE: Service type/category (default: "service")
- INTAKE_INIT_ENDPOINT: Session handshake URL
- INTAKE_LOGS_ENDPOINT: Log submission URL
- INTAKE_ACCESS: Access key (required)
- INTAKE_SECRET: Secret key (required)
- INTAKE_TIMEOUT_SECONDS: HTTP timeout per request (default: 10.0)
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field

from intake_forwarder.domain.errors import IntakeConfigurationError

# =============================================================================
# Endpoint Defaults
# =============================================================================

DEFAULT_INIT_ENDPOINT = "https://api.pogr.io/v1/intake/init"
DEFAULT_LOGS_ENDPOINT = "https://api.pogr.io/v1/intake/logs"

# =============================================================================
# Service Identity Defaults
# =============================================================================

DEFAULT_ENVIRONMENT = "development"
DEFAULT_SERVICE_TYPE = "service"
FALLBACK_SERVICE_NAME = "python"

# =============================================================================
# Credential Headers
# =============================================================================

# The access/secret naming scheme is the current one; the older
# client/build header names are not accepted.
DEFAULT_ACCESS_HEADER = "INTAKE_ACCESS"
DEFAULT_SECRET_HEADER = "INTAKE_SECRET"

# Header carrying the session id on every submission
SESSION_HEADER = "INTAKE_SESSION_ID"

# =============================================================================
# Transport
# =============================================================================

DEFAULT_TIMEOUT_SECONDS = 10.0


def _get_env(key: str) -> str | None:
    """Get a non-empty environment variable.

    Args:
        key: Environment variable name.

    Returns:
        The value, or None if unset or empty.
    """
    value = os.environ.get(key)
    if value is None or value == "":
        return None
    return value


def _get_float_env(key: str, default: float) -> float:
    """Get float environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed float value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _default_service_name() -> str:
    """Derive a service name from the running program."""
    program = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else ""
    name, _ = os.path.splitext(program)
    return name or FALLBACK_SERVICE_NAME


@dataclass(frozen=True)
class IntakeCredentials:
    """Long-lived credentials exchanged for a session at startup.

    Secrets are excluded from repr so configuration objects can be logged.

    Attributes:
        access_key: Access key secret.
        secret_key: Secret key secret.
        access_header: Header name the access key travels under.
        secret_header: Header name the secret key travels under.
    """

    access_key: str = field(repr=False)
    secret_key: str = field(repr=False)
    access_header: str = DEFAULT_ACCESS_HEADER
    secret_header: str = DEFAULT_SECRET_HEADER

    def __post_init__(self) -> None:
        """Validate credentials."""
        if not self.access_key:
            raise IntakeConfigurationError("Missing intake credential", key="INTAKE_ACCESS")
        if not self.secret_key:
            raise IntakeConfigurationError("Missing intake credential", key="INTAKE_SECRET")

    def as_headers(self) -> dict[str, str]:
        """Get the handshake headers carrying both secrets."""
        return {
            self.access_header: self.access_key,
            self.secret_header: self.secret_key,
        }


@dataclass(frozen=True)
class IntakeConfig:
    """Configuration for the intake session client.

    Immutable after construction. Use from_environment() to resolve
    values from the process environment.

    Attributes:
        credentials: Access and secret keys for the handshake.
        service_name: Name stamped on every record.
        environment: Deployment environment stamped on every record.
        service_type: Category stamped on every record as "type".
        init_endpoint: Session handshake URL.
        logs_endpoint: Log submission URL.
        timeout_seconds: Per-request HTTP timeout.
    """

    credentials: IntakeCredentials
    service_name: str = FALLBACK_SERVICE_NAME
    environment: str = DEFAULT_ENVIRONMENT
    service_type: str = DEFAULT_SERVICE_TYPE
    init_endpoint: str = DEFAULT_INIT_ENDPOINT
    logs_endpoint: str = DEFAULT_LOGS_ENDPOINT
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not self.service_name:
            raise IntakeConfigurationError("service_name must not be empty", key="SERVICE_NAME")
        if not self.init_endpoint:
            raise IntakeConfigurationError(
                "init_endpoint must not be empty", key="INTAKE_INIT_ENDPOINT"
            )
        if not self.logs_endpoint:
            raise IntakeConfigurationError(
                "logs_endpoint must not be empty", key="INTAKE_LOGS_ENDPOINT"
            )
        if self.timeout_seconds <= 0:
            raise IntakeConfigurationError(
                f"timeout_seconds must be positive, got {self.timeout_seconds}",
                key="INTAKE_TIMEOUT_SECONDS",
            )

    @classmethod
    def from_environment(
        cls,
        init_endpoint: str | None = None,
        logs_endpoint: str | None = None,
        *,
        service_name: str | None = None,
        environment: str | None = None,
        service_type: str | None = None,
        access_key: str | None = None,
        secret_key: str | None = None,
        timeout_seconds: float | None = None,
    ) -> IntakeConfig:
        """Create config from explicit arguments, environment, then defaults.

        Args:
            init_endpoint: Overrides INTAKE_INIT_ENDPOINT.
            logs_endpoint: Overrides INTAKE_LOGS_ENDPOINT.
            service_name: Overrides SERVICE_NAME.
            environment: Overrides ENVIRONMENT.
            service_type: Overrides SERVICE_TYPE.
            access_key: Overrides INTAKE_ACCESS.
            secret_key: Overrides INTAKE_SECRET.
            timeout_seconds: Overrides INTAKE_TIMEOUT_SECONDS.

        Returns:
            Resolved IntakeConfig.

        Raises:
            IntakeConfigurationError: If a credential is missing.
        """
        access = access_key or _get_env("INTAKE_ACCESS")
        if access is None:
            raise IntakeConfigurationError("INTAKE_ACCESS must be set", key="INTAKE_ACCESS")
        secret = secret_key or _get_env("INTAKE_SECRET")
        if secret is None:
            raise IntakeConfigurationError("INTAKE_SECRET must be set", key="INTAKE_SECRET")

        if timeout_seconds is None:
            timeout_seconds = _get_float_env("INTAKE_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS)

        return cls(
            credentials=IntakeCredentials(access_key=access, secret_key=secret),
            service_name=service_name or _get_env("SERVICE_NAME") or _default_service_name(),
            environment=environment or _get_env("ENVIRONMENT") or DEFAULT_ENVIRONMENT,
            service_type=service_type or _get_env("SERVICE_TYPE") or DEFAULT_SERVICE_TYPE,
            init_endpoint=init_endpoint
            or _get_env("INTAKE_INIT_ENDPOINT")
            or DEFAULT_INIT_ENDPOINT,
            logs_endpoint=logs_endpoint
            or _get_env("INTAKE_LOGS_ENDPOINT")
            or DEFAULT_LOGS_ENDPOINT,
            timeout_seconds=timeout_seconds,
        )
