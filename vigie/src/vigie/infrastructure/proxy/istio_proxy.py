"""
Istio sidecar client.

Combines the readiness prober and the shutdown signaler behind the IProxy
interface, sharing one HTTP client and one retry policy.
"""

import logging
from typing import Callable, Optional

import httpx

from vigie.domain.services import IProxy
from vigie.domain.value_objects import RetryPolicy
from vigie.infrastructure.proxy.readiness_prober import ReadinessProber
from vigie.infrastructure.proxy.shutdown_signaler import ShutdownSignaler
from vigie.infrastructure.resilience import FixedDelayRetry, RetryObserver

logger = logging.getLogger(__name__)

# Envoy admin (readiness) and istio-agent (shutdown) ports on localhost
SERVER_INFO_URL = "http://localhost:15000/server_info"
SERVER_QUIT_URL = "http://localhost:15020/quitquitquit"


class IstioProxy(IProxy):
    """
    Real sidecar client.

    Created once per process and never mutated afterwards. The endpoint
    URLs default to the fixed local sidecar addresses; overriding them is
    meant for tests.

    Example:
        proxy = IstioProxy(RetryPolicy(timeout=1.0, retry_delay=1.0, max_retries=60))
        proxy.wait()
        ...
        proxy.close()
    """

    def __init__(
        self,
        policy: RetryPolicy,
        observer: Optional[RetryObserver] = None,
        client: Optional[httpx.Client] = None,
        server_info_url: str = SERVER_INFO_URL,
        server_quit_url: str = SERVER_QUIT_URL,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        """
        Initialize sidecar client.

        Args:
            policy: Timeout, retry delay and attempt ceiling
            observer: Retry observer for per-attempt failures
            client: HTTP client; built from policy.timeout if omitted
            server_info_url: Readiness endpoint
            server_quit_url: Shutdown endpoint
            sleep: Sleep function for the retry loop (tests)
        """
        self.policy = policy
        self.server_info_url = server_info_url
        self.server_quit_url = server_quit_url
        # the sidecar is local; never route it through an HTTP(S)_PROXY
        self.client = client or httpx.Client(
            timeout=policy.timeout,
            trust_env=False,
        )

        retry_kwargs = {} if sleep is None else {"sleep": sleep}
        retry = FixedDelayRetry(policy, observer=observer, **retry_kwargs)

        self.prober = ReadinessProber(
            server_info_url, self.client, retry, timeout=policy.timeout
        )
        self.signaler = ShutdownSignaler(server_quit_url, self.client, retry)

        logger.debug(f"IstioProxy initialized ({policy})")

    def wait(self) -> None:
        """Block until the sidecar is LIVE (see ReadinessProber.wait)."""
        self.prober.wait()

    def close(self) -> None:
        """Ask the sidecar to quit (see ShutdownSignaler.close)."""
        self.signaler.close()
