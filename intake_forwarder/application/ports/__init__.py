"""Application ports (Protocols) for intake-forwarder."""

from intake_forwarder.application.ports.log_intake import LogIntakeProtocol

__all__: list[str] = ["LogIntakeProtocol"]
