"""
Sidecar proxy interface.

Defines the two lifecycle operations the application performs against its
co-located proxy: wait for readiness and request shutdown.
"""

from abc import ABC, abstractmethod


class IProxy(ABC):
    """
    Abstract interface for the sidecar lifecycle handshake.

    Implemented by the real HTTP client and by a null client used when the
    sidecar integration is disabled, so call sites never branch on
    deployment mode.
    """

    @abstractmethod
    def wait(self) -> None:
        """
        Block until the sidecar reports it is live.

        Raises:
            WaitMaxRetriesExceeded: If readiness is not confirmed in budget
        """

    @abstractmethod
    def close(self) -> None:
        """
        Ask the sidecar to shut down gracefully.

        Raises:
            CloseMaxRetriesExceeded: If shutdown is not acknowledged in budget
        """
