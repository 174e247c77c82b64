"""Configuration module for intake-forwarder.

Available Configurations:
- IntakeConfig: Service identity, endpoints and credentials
- IntakeCredentials: Handshake secrets and their header names
"""

from intake_forwarder.config.intake_config import (
    DEFAULT_INIT_ENDPOINT,
    DEFAULT_LOGS_ENDPOINT,
    SESSION_HEADER,
    IntakeConfig,
    IntakeCredentials,
)

__all__ = [
    "IntakeConfig",
    "IntakeCredentials",
    "DEFAULT_INIT_ENDPOINT",
    "DEFAULT_LOGS_ENDPOINT",
    "SESSION_HEADER",
]
