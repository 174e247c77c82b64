"""Test helpers for intake-forwarder tests.

This package contains reusable test utilities and fake implementations
for dependency injection in unit tests.

Helpers:
    FakeIntakeServer: httpx.MockTransport double of the log-intake service

Usage:
    from tests.helpers import FakeIntakeServer
"""

from tests.helpers.fake_intake_server import (
    INIT_ENDPOINT,
    LOGS_ENDPOINT,
    FakeIntakeServer,
)

__all__ = ["FakeIntakeServer", "INIT_ENDPOINT", "LOGS_ENDPOINT"]
