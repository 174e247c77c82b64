"""
intake-forwarder - structured log forwarding to a remote log-intake service.

Captures structlog (and standard logging) events, converts their typed
fields into a structured record and ships each record asynchronously to
the intake service over HTTP, using a session established once at startup.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
