"""
Readiness prober for the sidecar server_info endpoint.

Polls `GET /server_info` until the sidecar reports `{"state": "LIVE"}`.
Transport errors, unreadable bodies, malformed payloads and non-live
states are all retried the same way; only budget exhaustion is raised.
"""

import json
import logging
import time
from typing import Callable, Optional

import httpx

from vigie.domain.exceptions import WaitMaxRetriesExceeded
from vigie.domain.value_objects import ProbeResult
from vigie.infrastructure.proxy.http_errors import describe_error
from vigie.infrastructure.resilience import FixedDelayRetry

logger = logging.getLogger(__name__)


class ReadinessProber:
    """
    Waits for the sidecar to become live.

    httpx timeouts apply per phase (connect, each read, ...), so a body
    trickled in small chunks could outlast them. When `timeout` is given
    the whole attempt, body included, is also held to that deadline.

    Attributes:
        server_info_url: Full URL of the server_info endpoint
        client: Shared HTTP client (carries the per-phase timeout)
        retry: Fixed-delay retry loop
        timeout: Total deadline for one attempt in seconds (None = per-phase only)
    """

    def __init__(
        self,
        server_info_url: str,
        client: httpx.Client,
        retry: FixedDelayRetry,
        timeout: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.server_info_url = server_info_url
        self.client = client
        self.retry = retry
        self.timeout = timeout
        self._clock = clock

    def probe_once(self) -> ProbeResult:
        """
        Perform one readiness check.

        Returns:
            ProbeResult classifying this attempt (never raises for I/O)
        """
        deadline = None if self.timeout is None else self._clock() + self.timeout

        try:
            with self.client.stream("GET", self.server_info_url) as response:
                try:
                    body = self._read_body(response, deadline)
                except (httpx.HTTPError, httpx.StreamError) as e:
                    return ProbeResult.body_read_error(describe_error(e))
        except httpx.HTTPError as e:
            return ProbeResult.transport_error(describe_error(e))

        return self.parse_server_info(body)

    def _read_body(self, response: httpx.Response, deadline: Optional[float]) -> bytes:
        chunks = []
        for chunk in response.iter_bytes():
            chunks.append(chunk)
            self._check_deadline(deadline)
        self._check_deadline(deadline)
        return b"".join(chunks)

    def _check_deadline(self, deadline: Optional[float]) -> None:
        if deadline is not None and self._clock() > deadline:
            raise httpx.ReadTimeout(
                f"server_info not received within {self.timeout}s"
            )

    @staticmethod
    def parse_server_info(body: bytes) -> ProbeResult:
        """
        Interpret a server_info payload.

        Only the `state` field matters; every other field is ignored. A
        payload without `state` reads as the empty (not live) state.
        """
        try:
            payload = json.loads(body)
        except (ValueError, RecursionError) as e:
            # RecursionError: nesting deeper than the decoder can follow
            return ProbeResult.malformed(describe_error(e))

        if payload is None:
            payload = {}

        if not isinstance(payload, dict):
            return ProbeResult.malformed(
                f"expected JSON object, got {type(payload).__name__}"
            )

        state = payload.get("state", "")
        if state is None:
            state = ""

        if not isinstance(state, str):
            return ProbeResult.malformed(
                f"state must be a string, got {type(state).__name__}"
            )

        return ProbeResult.from_state(state)

    def wait(self) -> None:
        """
        Block until the sidecar reports LIVE.

        Raises:
            WaitMaxRetriesExceeded: If every attempt in budget failed
        """
        logger.debug(f"Waiting for sidecar readiness at {self.server_info_url}")
        self.retry.run(self.probe_once, WaitMaxRetriesExceeded)
