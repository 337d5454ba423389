"""
Factory for the sidecar client.

Selects the real Istio client or the null client from one explicit
boolean, so call sites depend only on IProxy.
"""

from typing import Optional

import httpx

from vigie.config.settings import VigieSettings, get_settings
from vigie.domain.services import IProxy
from vigie.domain.value_objects import RetryPolicy
from vigie.infrastructure.proxy import IstioProxy, NullProxy
from vigie.infrastructure.resilience import RetryObserver
from vigie.reporter import ProxyEmoji, RetryReporter, SystemReporter


def create_reporter(settings: VigieSettings) -> SystemReporter:
    """Create the SystemReporter described by settings."""
    return SystemReporter.from_level_name(
        name="vigie",
        level_name=settings.log_level,
        log_dir=settings.log_dir,
    )


def create_proxy(
    enabled: bool,
    policy: RetryPolicy,
    observer: Optional[RetryObserver] = None,
    client: Optional[httpx.Client] = None,
) -> IProxy:
    """
    Build the sidecar client.

    Args:
        enabled: True for the real client, False for the null client
        policy: Retry policy for the real client
        observer: Retry observer (defaults to a RetryReporter)
        client: Optional HTTP client for the real client

    Returns:
        IstioProxy when enabled, NullProxy otherwise
    """
    if not enabled:
        return NullProxy()

    return IstioProxy(
        policy,
        observer=observer or RetryReporter(),
        client=client,
    )


def create_proxy_from_settings(
    settings: Optional[VigieSettings] = None,
    reporter: Optional[SystemReporter] = None,
) -> IProxy:
    """
    Build the sidecar client from configuration, reading the toggle once.

    Args:
        settings: Settings to use (defaults to the global singleton)
        reporter: Reporter for retry logs (defaults to one from settings)
    """
    settings = settings or get_settings()
    reporter = reporter or create_reporter(settings)

    if not settings.istio_proxy_enabled:
        reporter.debug(
            f"{ProxyEmoji.DISABLED} Sidecar integration disabled, using null client",
            context="Vigie",
        )

    return create_proxy(
        settings.istio_proxy_enabled,
        settings.retry_policy(),
        observer=RetryReporter(reporter),
    )
