"""
Sidecar proxy clients.
"""

from vigie.infrastructure.proxy.istio_proxy import (
    SERVER_INFO_URL,
    SERVER_QUIT_URL,
    IstioProxy,
)
from vigie.infrastructure.proxy.null_proxy import NullProxy
from vigie.infrastructure.proxy.readiness_prober import ReadinessProber
from vigie.infrastructure.proxy.shutdown_signaler import ShutdownSignaler

__all__ = [
    "IstioProxy",
    "NullProxy",
    "ReadinessProber",
    "ShutdownSignaler",
    "SERVER_INFO_URL",
    "SERVER_QUIT_URL",
]
