"""
Resilience patterns for sidecar calls.
"""

from vigie.infrastructure.resilience.fixed_delay_retry import (
    FixedDelayRetry,
    RetryObserver,
)

__all__ = ["FixedDelayRetry", "RetryObserver"]
