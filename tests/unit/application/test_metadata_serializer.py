"""Unit tests for event metadata serialization."""

import logging

import pytest

from intake_forwarder.application.services import (
    canonical_level,
    event_name,
    serialize_metadata,
)
from intake_forwarder.domain.models import EventMetadata


class TestSerializeMetadata:
    def test_absent_file_and_line_are_null(self) -> None:
        metadata = EventMetadata(name="event", target="app", level="INFO")

        assert serialize_metadata(metadata) == {
            "name": "event",
            "target": "app",
            "level": "INFO",
            "file": None,
            "line": None,
        }

    def test_present_values_are_literal(self) -> None:
        metadata = EventMetadata(
            name="event src/main.py:12",
            target="app.main",
            level="WARN",
            file="src/main.py",
            line=12,
        )

        assert serialize_metadata(metadata) == {
            "name": "event src/main.py:12",
            "target": "app.main",
            "level": "WARN",
            "file": "src/main.py",
            "line": 12,
        }

    def test_level_never_null(self) -> None:
        metadata = EventMetadata(name="event", target="app", level="")

        assert serialize_metadata(metadata)["level"] == "INFO"


class TestCanonicalLevel:
    @pytest.mark.parametrize(
        ("level", "expected"),
        [
            ("debug", "DEBUG"),
            ("info", "INFO"),
            ("warning", "WARN"),
            ("warn", "WARN"),
            ("error", "ERROR"),
            ("exception", "ERROR"),
            ("critical", "ERROR"),
            ("INFO", "INFO"),
            ("notice", "NOTICE"),
            (None, "INFO"),
        ],
    )
    def test_names(self, level: str | None, expected: str) -> None:
        assert canonical_level(level) == expected

    @pytest.mark.parametrize(
        ("level", "expected"),
        [
            (logging.NOTSET, "TRACE"),
            (5, "TRACE"),
            (logging.DEBUG, "DEBUG"),
            (logging.INFO, "INFO"),
            (logging.WARNING, "WARN"),
            (logging.ERROR, "ERROR"),
            (logging.CRITICAL, "ERROR"),
        ],
    )
    def test_numeric_levels(self, level: int, expected: str) -> None:
        assert canonical_level(level) == expected


class TestEventName:
    def test_with_callsite(self) -> None:
        assert event_name("src/main.py", 12) == "event src/main.py:12"

    def test_without_line(self) -> None:
        assert event_name("src/main.py", None) == "event src/main.py"

    def test_without_callsite(self) -> None:
        assert event_name(None, None) == "event"


class TestCanonicalLevelIsTotal:
    @pytest.mark.parametrize(
        ("level", "expected"),
        [(30.0, "30.0"), (b"warn", "B'WARN'"), (["info"], "['INFO']")],
    )
    def test_other_types_stringified(self, level: object, expected: str) -> None:
        assert canonical_level(level) == expected
