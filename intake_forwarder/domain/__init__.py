"""Domain layer for intake-forwarder.

Holds the value objects exchanged with the intake service and the
exception hierarchy. Nothing here performs I/O.
"""
