"""Infrastructure layer for intake-forwarder.

Concrete adapters: the httpx session client, the background dispatcher
and the capture callbacks plugged into structlog and standard logging.
"""
