"""
Bounded retry with a constant delay.

Sidecar calls poll a single local peer, so there is no backoff and no
jitter: every failed attempt is followed by exactly one `retry_delay`
pause, including the last one before the budget runs out. Total latency
is therefore bounded by `max_retries * (timeout + retry_delay)`.
"""

import logging
import time
from typing import Callable, Optional, Protocol, Type, TypeVar

from vigie.domain.exceptions import MaxRetriesExceeded
from vigie.domain.value_objects import RetryPolicy

logger = logging.getLogger(__name__)


class AttemptResult(Protocol):
    """What one attempt must expose to the retry loop."""

    @property
    def succeeded(self) -> bool: ...


ResultT = TypeVar("ResultT", bound=AttemptResult)

RetryObserver = Callable[[int, int, AttemptResult], None]
"""Called as observer(attempt, max_attempts, result) after each failure."""


def _silent_observer(attempt: int, max_attempts: int, result: AttemptResult) -> None:
    logger.debug(f"Attempt {attempt}/{max_attempts} failed: {result}")


class FixedDelayRetry:
    """
    Retry loop with a hard attempt ceiling and a fixed pause.

    Example:
        retry = FixedDelayRetry(RetryPolicy(1.0, 0.5, 10), observer=print)
        result = retry.run(probe_once, WaitMaxRetriesExceeded)
    """

    def __init__(
        self,
        policy: RetryPolicy,
        observer: Optional[RetryObserver] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize retry loop.

        Args:
            policy: Retry budget (delay and attempt ceiling are used here)
            observer: Callback invoked on every non-terminal failure
            sleep: Sleep function, injectable for tests
        """
        self.policy = policy
        self.observer = observer or _silent_observer
        self._sleep = sleep

    def run(
        self,
        attempt_once: Callable[[], ResultT],
        exhausted: Type[MaxRetriesExceeded],
    ) -> ResultT:
        """
        Call attempt_once until it succeeds or the budget is exhausted.

        Args:
            attempt_once: Performs one attempt and classifies its outcome
            exhausted: Exception type raised when attempts run out

        Returns:
            The first successful result

        Raises:
            MaxRetriesExceeded: Subclass given by `exhausted`
        """
        max_retries = self.policy.max_retries
        attempt = 0

        while True:
            attempt += 1
            if attempt > max_retries:
                raise exhausted(max_retries)

            result = attempt_once()
            if result.succeeded:
                if attempt > 1:
                    logger.debug(f"Succeeded on attempt {attempt}/{max_retries}")
                return result

            self.observer(attempt, max_retries, result)
            self._sleep(self.policy.retry_delay)
