"""
Domain value objects.
"""

from vigie.domain.value_objects.attempt_result import (
    LIVE_STATE,
    ProbeOutcome,
    ProbeResult,
    SignalOutcome,
    SignalResult,
)
from vigie.domain.value_objects.retry_policy import RetryPolicy

__all__ = [
    "RetryPolicy",
    "LIVE_STATE",
    "ProbeOutcome",
    "ProbeResult",
    "SignalOutcome",
    "SignalResult",
]
