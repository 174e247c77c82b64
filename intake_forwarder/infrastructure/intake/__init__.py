"""HTTP intake client and background dispatch."""

from intake_forwarder.infrastructure.intake.dispatcher import IntakeDispatcher
from intake_forwarder.infrastructure.intake.session_client import IntakeSessionClient

__all__: list[str] = ["IntakeDispatcher", "IntakeSessionClient"]
