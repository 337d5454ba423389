"""
Null sidecar client used when the sidecar integration is disabled.
"""

from vigie.domain.services import IProxy


class NullProxy(IProxy):
    """wait() and close() succeed immediately without any I/O."""

    def wait(self) -> None:
        return None

    def close(self) -> None:
        return None
