"""
Pytest configuration and shared fixtures for intake-forwarder tests.

Testing Standards:
- All async tests use pytest.mark.asyncio (auto mode enabled in pyproject.toml)
- HTTP is faked with httpx.MockTransport (see tests/helpers)
- Unit tests go in tests/unit/
- Integration tests go in tests/integration/
"""

from collections.abc import Iterator

import pytest
import structlog

from intake_forwarder.bootstrap import uninstall_forwarding
from intake_forwarder.config import IntakeConfig, IntakeCredentials
from intake_forwarder.infrastructure.intake import IntakeDispatcher
from tests.helpers import INIT_ENDPOINT, LOGS_ENDPOINT, FakeIntakeServer

INTAKE_ENV_VARS = (
    "SERVICE_NAME",
    "ENVIRONMENT",
    "SERVICE_TYPE",
    "INTAKE_INIT_ENDPOINT",
    "INTAKE_LOGS_ENDPOINT",
    "INTAKE_ACCESS",
    "INTAKE_SECRET",
    "INTAKE_TIMEOUT_SECONDS",
)


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    """Restore structlog defaults and drop any installed pipeline."""
    yield
    uninstall_forwarding()
    structlog.reset_defaults()


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove every intake-related environment variable."""
    for name in INTAKE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def intake_config() -> IntakeConfig:
    """Config pointing at the fake intake server."""
    return IntakeConfig(
        credentials=IntakeCredentials(
            access_key="test_access_key",
            secret_key="test_secret_key",
        ),
        service_name="test_service",
        environment="testing",
        service_type="test",
        init_endpoint=INIT_ENDPOINT,
        logs_endpoint=LOGS_ENDPOINT,
    )


@pytest.fixture
def intake_server() -> FakeIntakeServer:
    """Fresh fake intake server."""
    return FakeIntakeServer()


@pytest.fixture
def dispatcher() -> Iterator[IntakeDispatcher]:
    """Running dispatcher, stopped after the test."""
    dispatcher = IntakeDispatcher(thread_name="intake-dispatcher-test")
    dispatcher.start()
    yield dispatcher
    dispatcher.stop()
