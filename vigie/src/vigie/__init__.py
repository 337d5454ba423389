"""
Vigie - Sidecar proxy lifecycle handshake.

Blocks application startup until the co-located proxy reports LIVE and
asks it to quit when the application terminates.

Example:
    from vigie import create_proxy_from_settings

    proxy = create_proxy_from_settings()
    proxy.wait()
    ...
    proxy.close()
"""

from vigie.di.container import create_proxy, create_proxy_from_settings
from vigie.domain.exceptions import (
    CloseMaxRetriesExceeded,
    MaxRetriesExceeded,
    ProxyException,
    WaitMaxRetriesExceeded,
)
from vigie.domain.services import IProxy
from vigie.domain.value_objects import RetryPolicy
from vigie.infrastructure.proxy import IstioProxy, NullProxy
from vigie.lifecycle import sidecar_lifecycle

__version__ = "0.1.0"

__all__ = [
    "IProxy",
    "IstioProxy",
    "NullProxy",
    "RetryPolicy",
    "ProxyException",
    "MaxRetriesExceeded",
    "WaitMaxRetriesExceeded",
    "CloseMaxRetriesExceeded",
    "create_proxy",
    "create_proxy_from_settings",
    "sidecar_lifecycle",
]
