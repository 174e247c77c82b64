"""Application layer for intake-forwarder.

Ports the dispatch layer depends on, plus the pure conversion services
that turn framework events into serializable structures.
"""
