"""
Domain exceptions.
"""

from vigie.domain.exceptions.proxy_exceptions import (
    CloseMaxRetriesExceeded,
    MaxRetriesExceeded,
    ProxyException,
    WaitMaxRetriesExceeded,
)

__all__ = [
    "ProxyException",
    "MaxRetriesExceeded",
    "WaitMaxRetriesExceeded",
    "CloseMaxRetriesExceeded",
]
