"""Integration tests for the complete forwarding pipeline.

structlog and standard logging calls travel through the capture
callbacks, the dispatcher and the real session client to a fake intake
served over httpx.MockTransport.
"""

import logging
import threading
import time
from collections.abc import Iterator

import httpx
import pytest
import structlog
from structlog.testing import LogCapture

from intake_forwarder.bootstrap import (
    ForwardingPipeline,
    create_forwarding_pipeline,
    install_forwarding,
)
from intake_forwarder.config import IntakeConfig
from tests.helpers import FakeIntakeServer

pytestmark = pytest.mark.integration


@pytest.fixture
def pipeline(
    intake_config: IntakeConfig, intake_server: FakeIntakeServer
) -> Iterator[ForwardingPipeline]:
    pipeline = create_forwarding_pipeline(intake_config, http_client=intake_server.client())
    install_forwarding(pipeline)
    yield pipeline
    pipeline.dispatcher.stop()


class TestStructlogForwarding:
    def test_record_on_the_wire(
        self, pipeline: ForwardingPipeline, intake_server: FakeIntakeServer
    ) -> None:
        structlog.get_logger().warning("slow_tick", tick_ms=48.5, shard=3)

        assert intake_server.wait_for_logs(1)
        request = intake_server.log_requests[0]
        assert request.headers["INTAKE_SESSION_ID"] == "test_session_id"

        body = intake_server.logged_bodies()[0]
        assert body["service"] == "test_service"
        assert body["environment"] == "testing"
        assert body["type"] == "test"
        assert body["severity"] == "WARN"
        assert body["log"] == "slow_tick"
        assert body["data"]["level"] == "WARN"
        assert body["data"]["file"].endswith("test_forwarding_pipeline.py")
        assert body["data"]["name"] == f"event {body['data']['file']}:{body['data']['line']}"
        assert body["tags"]["tick_ms"] == 48.5
        assert body["tags"]["shard"] == 3
        assert "timestamp" in body["tags"]

    def test_hundred_events_delivered_exactly_once(
        self, pipeline: ForwardingPipeline, intake_server: FakeIntakeServer
    ) -> None:
        log = structlog.get_logger()
        for i in range(100):
            log.info("frame", index=i)

        assert intake_server.wait_for_logs(100, timeout=10)
        indexes = sorted(body["tags"]["index"] for body in intake_server.logged_bodies())
        assert indexes == list(range(100))

    def test_concurrent_emitters(
        self, pipeline: ForwardingPipeline, intake_server: FakeIntakeServer
    ) -> None:
        def emit(worker: int) -> None:
            log = structlog.get_logger()
            for i in range(20):
                log.info("work", worker=worker, index=i)

        threads = [threading.Thread(target=emit, args=(w,)) for w in range(5)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert intake_server.wait_for_logs(100, timeout=10)
        seen = {(b["tags"]["worker"], b["tags"]["index"]) for b in intake_server.logged_bodies()}
        assert len(seen) == 100

    def test_rejection_reported_without_feedback(
        self, pipeline: ForwardingPipeline, intake_server: FakeIntakeServer
    ) -> None:
        intake_server.logs_body = {"success": False, "error": "quota exceeded"}
        capture = LogCapture()
        structlog.configure(
            processors=[structlog.processors.add_log_level, pipeline.processor, capture]
        )

        structlog.get_logger().info("one_event")

        deadline = time.monotonic() + 5
        while time.monotonic() < deadline and not _events(capture, "intake_submit_rejected"):
            time.sleep(0.01)
        assert len(_events(capture, "intake_submit_rejected")) == 1
        # The rejection diagnostic passed through the processor but was not submitted
        assert not intake_server.wait_for_logs(2, timeout=0.2)

    def test_transport_failure_does_not_reach_caller(
        self, pipeline: ForwardingPipeline, intake_server: FakeIntakeServer
    ) -> None:
        intake_server.logs_error = httpx.ConnectError("connection reset")

        structlog.get_logger().error("still_returns")
        structlog.get_logger().error("and_again")

        assert intake_server.wait_for_logs(2)
        assert len(intake_server.log_requests) == 2


class TestStdlibForwarding:
    @pytest.fixture
    def game_logger(self, pipeline: ForwardingPipeline) -> Iterator[logging.Logger]:
        logger = logging.getLogger("game.integration")
        logger.setLevel(logging.INFO)
        logger.propagate = False
        logger.addHandler(pipeline.handler)
        yield logger
        logger.removeHandler(pipeline.handler)

    def test_stdlib_record_on_the_wire(
        self, game_logger: logging.Logger, intake_server: FakeIntakeServer
    ) -> None:
        game_logger.error("player %s desynced", "p7", extra={"frame": 1200})

        assert intake_server.wait_for_logs(1)
        body = intake_server.logged_bodies()[0]
        assert body["severity"] == "ERROR"
        assert body["log"] == "player p7 desynced"
        assert body["data"]["target"] == "game.integration"
        assert body["tags"] == {"frame": 1200}


def _events(capture: LogCapture, name: str) -> list[dict]:
    return [entry for entry in list(capture.entries) if entry["event"] == name]
