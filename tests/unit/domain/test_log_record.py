"""Unit tests for intake domain models."""

import json
from dataclasses import FrozenInstanceError

import pytest

from intake_forwarder.domain.models import EventMetadata, IntakeSession, LogRecord


class TestIntakeSession:
    """Tests for IntakeSession value object."""

    def test_holds_session_id(self) -> None:
        session = IntakeSession(session_id="S")

        assert session.session_id == "S"

    def test_empty_session_id_rejected(self) -> None:
        with pytest.raises(ValueError, match="session_id"):
            IntakeSession(session_id="")

    def test_is_immutable(self) -> None:
        session = IntakeSession(session_id="S")

        with pytest.raises(FrozenInstanceError):
            session.session_id = "other"  # type: ignore[misc]


class TestEventMetadata:
    """Tests for EventMetadata defaults."""

    def test_file_and_line_default_to_none(self) -> None:
        metadata = EventMetadata(name="event", target="app", level="INFO")

        assert metadata.file is None
        assert metadata.line is None


class TestLogRecord:
    """Tests for LogRecord wire conversion."""

    def _record(self) -> LogRecord:
        return LogRecord(
            service="TestService",
            environment="test",
            severity="INFO",
            kind="TestType",
            message="This is a test log",
            data={"name": "event", "target": "app", "level": "INFO", "file": None, "line": None},
            tags={"user_id": 7},
        )

    def test_to_dict_uses_intake_field_names(self) -> None:
        """kind travels as "type" and message as "log"."""
        body = self._record().to_dict()

        assert body == {
            "service": "TestService",
            "environment": "test",
            "severity": "INFO",
            "type": "TestType",
            "log": "This is a test log",
            "data": {
                "name": "event",
                "target": "app",
                "level": "INFO",
                "file": None,
                "line": None,
            },
            "tags": {"user_id": 7},
        }

    def test_to_dict_is_json_serializable(self) -> None:
        encoded = json.dumps(self._record().to_dict())

        assert json.loads(encoded)["log"] == "This is a test log"

    def test_data_and_tags_default_to_empty(self) -> None:
        record = LogRecord(
            service="s", environment="e", severity="INFO", kind="k", message="m"
        )

        assert record.data == {}
        assert record.tags == {}
