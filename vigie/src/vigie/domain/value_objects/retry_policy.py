"""
RetryPolicy value object - Immutable retry budget for sidecar calls.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class RetryPolicy:
    """
    Value object describing how long a sidecar operation may keep trying.

    Business rules:
    - timeout is the per-request deadline in seconds and must be positive
    - retry_delay is the constant pause between attempts (no backoff)
    - max_retries is the attempt ceiling; attempts are counted from 1
    - Immutable once created
    """

    timeout: float
    retry_delay: float
    max_retries: int

    def __post_init__(self):
        """Validate retry policy on creation."""
        if isinstance(self.max_retries, bool) or not isinstance(
            self.max_retries, int
        ):
            raise ValueError(
                f"max_retries must be an integer, got {self.max_retries!r}"
            )

        if self.max_retries < 0:
            raise ValueError(f"max_retries cannot be negative: {self.max_retries}")

        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive: {self.timeout}")

        if self.retry_delay < 0:
            raise ValueError(f"retry_delay cannot be negative: {self.retry_delay}")

    @property
    def worst_case_latency(self) -> float:
        """Upper bound in seconds for one wait() or close() call."""
        return self.max_retries * (self.timeout + self.retry_delay)

    def __str__(self) -> str:
        return (
            f"timeout={self.timeout}s, retry_delay={self.retry_delay}s, "
            f"max_retries={self.max_retries}"
        )
