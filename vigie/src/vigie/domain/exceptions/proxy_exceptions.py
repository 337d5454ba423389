"""
Sidecar proxy exceptions.

Only exhaustion of the retry budget is surfaced to callers. Per-attempt
failures are reported and retried, so no exception here carries transport
error text.
"""

from typing import Optional


class ProxyException(Exception):
    """Base exception for sidecar proxy operations."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class MaxRetriesExceeded(ProxyException):
    """Retry budget exhausted before the sidecar answered as expected."""

    operation: str = "proxy"

    def __init__(self, max_retries: int):
        """
        Initialize MaxRetriesExceeded.

        Args:
            max_retries: Attempt ceiling that was exhausted
        """
        self.max_retries = max_retries
        super().__init__(
            f"{self.operation}_max_retries_exceeded, max_retries={max_retries}",
            details={"operation": self.operation, "max_retries": max_retries},
        )


class WaitMaxRetriesExceeded(MaxRetriesExceeded):
    """Sidecar readiness was never confirmed within the retry budget."""

    operation = "wait"


class CloseMaxRetriesExceeded(MaxRetriesExceeded):
    """Sidecar shutdown was never acknowledged within the retry budget."""

    operation = "close"
