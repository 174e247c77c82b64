"""Composition root for wiring dependencies.

This package centralizes infrastructure-aware wiring so applications can
set up forwarding with one call instead of assembling adapters by hand.
"""

from intake_forwarder.bootstrap.intake import (
    ForwardingPipeline,
    create_forwarding_pipeline,
    get_installed_pipeline,
    install_forwarding,
    uninstall_forwarding,
)

__all__ = [
    "ForwardingPipeline",
    "create_forwarding_pipeline",
    "get_installed_pipeline",
    "install_forwarding",
    "uninstall_forwarding",
]
