"""Stub implementations for testing.

These stubs replace the HTTP-backed adapters in unit and integration
tests. They are never wired by the bootstrap module.
"""

from intake_forwarder.infrastructure.stubs.log_intake_stub import LogIntakeStub

__all__: list[str] = ["LogIntakeStub"]
