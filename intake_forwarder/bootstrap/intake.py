"""Bootstrap wiring for the intake forwarding pipeline.

create_forwarding_pipeline() performs the fatal part of startup: it
resolves configuration, starts the dispatcher and runs the session
handshake on the dispatcher loop. Any IntakeInitError propagates, so an
application that cannot reach the intake at startup fails to start.

The resulting ForwardingPipeline is an explicit object passed through
application setup. install_forwarding() activates it for structlog; at
most one pipeline may be installed per process.

Usage:
    pipeline = create_forwarding_pipeline()
    install_forwarding(pipeline, environment="production")

    # Optionally capture standard logging as well
    logging.getLogger().addHandler(pipeline.handler)
"""

from __future__ import annotations

import threading
from dataclasses import dataclass

import httpx

from intake_forwarder.config import IntakeConfig
from intake_forwarder.domain.errors import IntakeConfigurationError, IntakeHandshakeError
from intake_forwarder.infrastructure.diagnostics import get_diagnostic_logger
from intake_forwarder.infrastructure.intake import IntakeDispatcher, IntakeSessionClient
from intake_forwarder.infrastructure.observability import (
    IntakeForwardingProcessor,
    IntakeLogHandler,
    configure_structlog,
)

log = get_diagnostic_logger()

# The handshake may span several httpx timeout phases
HANDSHAKE_TIMEOUT_FACTOR = 2

_install_lock = threading.Lock()
_installed: ForwardingPipeline | None = None


@dataclass(frozen=True)
class ForwardingPipeline:
    """An established forwarding pipeline.

    Attributes:
        session_client: Shared client holding the intake session.
        dispatcher: Background dispatcher running submissions.
        processor: structlog capture callback.
        handler: Standard logging capture callback.
    """

    session_client: IntakeSessionClient
    dispatcher: IntakeDispatcher
    processor: IntakeForwardingProcessor
    handler: IntakeLogHandler


def create_forwarding_pipeline(
    config: IntakeConfig | None = None,
    *,
    dispatcher: IntakeDispatcher | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> ForwardingPipeline:
    """Establish an intake session and build the capture callbacks.

    Args:
        config: Intake configuration. Resolved from the environment when
            omitted.
        dispatcher: Dispatcher to use. A new one is created and started
            when omitted.
        http_client: Optional httpx client for the session client.

    Returns:
        A ready ForwardingPipeline.

    Raises:
        IntakeConfigurationError: If configuration is missing or invalid.
        IntakeHandshakeError: If the session handshake fails or times out.
    """
    if config is None:
        config = IntakeConfig.from_environment()

    owns_dispatcher = dispatcher is None
    if dispatcher is None:
        dispatcher = IntakeDispatcher()
    dispatcher.start()

    try:
        try:
            session_client = dispatcher.run(
                IntakeSessionClient.establish(config, http_client=http_client),
                timeout=config.timeout_seconds * HANDSHAKE_TIMEOUT_FACTOR,
            )
        except TimeoutError as e:
            raise IntakeHandshakeError(
                "Timed out waiting for intake session initialization",
                endpoint=config.init_endpoint,
            ) from e
    except Exception:
        if owns_dispatcher:
            dispatcher.stop()
        raise

    return ForwardingPipeline(
        session_client=session_client,
        dispatcher=dispatcher,
        processor=IntakeForwardingProcessor(session_client, dispatcher),
        handler=IntakeLogHandler(session_client, dispatcher),
    )


def install_forwarding(pipeline: ForwardingPipeline, environment: str = "production") -> None:
    """Configure structlog to forward every event through pipeline.

    Args:
        pipeline: Pipeline from create_forwarding_pipeline().
        environment: 'production' for JSON output, 'development' for console.

    Raises:
        IntakeConfigurationError: If a different pipeline is already installed.
    """
    global _installed
    with _install_lock:
        if _installed is not None and _installed is not pipeline:
            raise IntakeConfigurationError(
                "A forwarding pipeline is already installed in this process"
            )
        configure_structlog(environment=environment, forwarding_processor=pipeline.processor)
        _installed = pipeline

    log.info(
        "intake_forwarding_installed",
        service=pipeline.session_client.service_name,
        environment=environment,
    )


def get_installed_pipeline() -> ForwardingPipeline | None:
    """Get the pipeline installed in this process, if any."""
    return _installed


def uninstall_forwarding(environment: str = "production") -> None:
    """Remove the installed pipeline and restore plain structlog output.

    The pipeline's dispatcher is left running; in-flight submissions are
    not drained.

    Args:
        environment: Environment passed to configure_structlog().
    """
    global _installed
    with _install_lock:
        _installed = None
        configure_structlog(environment=environment)
