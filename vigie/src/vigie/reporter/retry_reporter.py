"""
Default retry observer.

Reports every failed sidecar attempt through SystemReporter, in the
`event, retries=<k>, max_retries=<n>, key=value` shape operators grep for.
"""

from typing import Optional, Union

from vigie.domain.value_objects import (
    ProbeOutcome,
    ProbeResult,
    SignalOutcome,
    SignalResult,
)
from vigie.reporter.emojis import ProxyEmoji
from vigie.reporter.system_reporter import SystemReporter, get_reporter

AttemptResult = Union[ProbeResult, SignalResult]

_PROBE_EMOJIS = {
    ProbeOutcome.TRANSPORT_ERROR: ProxyEmoji.DISCONNECTED,
    ProbeOutcome.BODY_READ_ERROR: ProxyEmoji.DISCONNECTED,
    ProbeOutcome.MALFORMED_PAYLOAD: ProxyEmoji.MALFORMED,
    ProbeOutcome.NOT_LIVE: ProxyEmoji.NOT_LIVE,
    ProbeOutcome.LIVE: ProxyEmoji.LIVE,
}

# Kept apart: the two TRANSPORT_ERROR members are equal dict keys
_SIGNAL_EMOJIS = {
    SignalOutcome.TRANSPORT_ERROR: ProxyEmoji.DISCONNECTED,
    SignalOutcome.REJECTED: ProxyEmoji.REJECTED,
    SignalOutcome.ACKNOWLEDGED: ProxyEmoji.ACKNOWLEDGED,
}


def outcome_emoji(result: AttemptResult) -> str:
    """Emoji for one attempt outcome."""
    table = _SIGNAL_EMOJIS if isinstance(result, SignalResult) else _PROBE_EMOJIS
    return table.get(result.outcome, ProxyEmoji.RETRY)


def format_attempt(attempt: int, max_attempts: int, result: AttemptResult) -> str:
    """Render one attempt as a single log line."""
    return (
        f"{result.event}, retries={attempt}, max_retries={max_attempts}, "
        f"{result.describe()}"
    )


class RetryReporter:
    """
    Retry observer writing to a SystemReporter.

    Instances are callables with the observer signature
    `(attempt, max_attempts, result)` expected by FixedDelayRetry.
    """

    def __init__(
        self,
        reporter: Optional[SystemReporter] = None,
        context: str = "Vigie",
    ):
        self.reporter = reporter or get_reporter()
        self.context = context

    def __call__(self, attempt: int, max_attempts: int, result: AttemptResult) -> None:
        emoji = outcome_emoji(result)
        self.reporter.warning(
            f"{emoji} {format_attempt(attempt, max_attempts, result)}",
            context=self.context,
        )
