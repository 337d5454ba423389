"""
Shutdown signaler for the sidecar quitquitquit endpoint.

Posts an empty JSON request until the sidecar answers HTTP 200.
"""

import logging

import httpx

from vigie.domain.exceptions import CloseMaxRetriesExceeded
from vigie.domain.value_objects import SignalResult
from vigie.infrastructure.proxy.http_errors import describe_error
from vigie.infrastructure.resilience import FixedDelayRetry

logger = logging.getLogger(__name__)

QUIT_HEADERS = {"Content-Type": "application/json"}


class ShutdownSignaler:
    """
    Requests graceful sidecar termination.

    Attributes:
        server_quit_url: Full URL of the quitquitquit endpoint
        client: Shared HTTP client (carries the per-request timeout)
        retry: Fixed-delay retry loop
    """

    def __init__(
        self,
        server_quit_url: str,
        client: httpx.Client,
        retry: FixedDelayRetry,
    ):
        self.server_quit_url = server_quit_url
        self.client = client
        self.retry = retry

    def signal_once(self) -> SignalResult:
        """Perform one shutdown request and classify the answer."""
        try:
            response = self.client.post(
                self.server_quit_url, content=b"", headers=QUIT_HEADERS
            )
        except httpx.HTTPError as e:
            return SignalResult.transport_error(describe_error(e))

        return SignalResult.from_status(response.status_code)

    def close(self) -> None:
        """
        Ask the sidecar to quit.

        Raises:
            CloseMaxRetriesExceeded: If no attempt in budget got HTTP 200
        """
        logger.debug(f"Requesting sidecar shutdown at {self.server_quit_url}")
        self.retry.run(self.signal_once, CloseMaxRetriesExceeded)
