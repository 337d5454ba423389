"""
Unit tests for the null proxy and the feature-gated factory.

Usage:
    pytest vigie/tests/unit/infrastructure/test_null_proxy.py
"""

import httpx

from vigie.config.settings import VigieSettings
from vigie.di import create_proxy, create_proxy_from_settings
from vigie.domain.services import IProxy
from vigie.domain.value_objects import RetryPolicy
from vigie.infrastructure.proxy import (
    SERVER_INFO_URL,
    SERVER_QUIT_URL,
    IstioProxy,
    NullProxy,
)
from vigie.reporter import RetryReporter

POLICY = RetryPolicy(timeout=0.5, retry_delay=0.1, max_retries=3)


class TestNullProxy:
    """NullProxy never touches the network."""

    def test_wait_and_close_return_immediately(self):
        proxy = NullProxy()

        assert proxy.wait() is None
        assert proxy.close() is None

    def test_is_a_proxy(self):
        assert isinstance(NullProxy(), IProxy)
        assert isinstance(IstioProxy(POLICY), IProxy)


class TestCreateProxy:
    """Feature gate selection."""

    def test_disabled_returns_null_proxy(self):
        assert isinstance(create_proxy(False, POLICY), NullProxy)

    def test_disabled_makes_no_http_calls(self, sidecar_cls):
        sidecar = sidecar_cls(httpx.Response(500))

        proxy = create_proxy(False, POLICY, client=sidecar.client())
        proxy.wait()
        proxy.close()

        assert sidecar.calls == 0

    def test_enabled_returns_istio_proxy_on_fixed_endpoints(self):
        proxy = create_proxy(True, POLICY)

        assert isinstance(proxy, IstioProxy)
        assert proxy.server_info_url == SERVER_INFO_URL
        assert proxy.server_quit_url == SERVER_QUIT_URL
        assert proxy.policy is POLICY

    def test_enabled_uses_policy_timeout(self):
        proxy = create_proxy(True, POLICY)

        assert proxy.client.timeout.connect == 0.5
        assert proxy.client.timeout.read == 0.5

    def test_enabled_defaults_to_retry_reporter(self):
        proxy = create_proxy(True, POLICY)

        assert isinstance(proxy.prober.retry.observer, RetryReporter)

    def test_enabled_uses_given_observer(self):
        calls = []

        def observer(attempt, total, result):
            calls.append(attempt)

        proxy = create_proxy(True, POLICY, observer=observer)

        assert proxy.signaler.retry.observer is observer


class TestCreateProxyFromSettings:
    """Toggle read once from settings."""

    def test_default_settings_are_disabled(self):
        proxy = create_proxy_from_settings(VigieSettings())

        assert isinstance(proxy, NullProxy)

    def test_enabled_settings(self, reporter):
        settings = VigieSettings(
            istio_proxy_enabled=True, timeout=2.0, retry_delay=0.5, max_retries=7
        )

        proxy = create_proxy_from_settings(settings, reporter=reporter)

        assert isinstance(proxy, IstioProxy)
        assert proxy.policy == RetryPolicy(timeout=2.0, retry_delay=0.5, max_retries=7)
        assert proxy.prober.retry.observer.reporter is reporter

    def test_environment_toggle(self, monkeypatch):
        monkeypatch.setenv("ISTIO_PROXY_ENABLED", "true")

        assert isinstance(create_proxy_from_settings(VigieSettings()), IstioProxy)

    def test_unparsable_environment_toggle_is_disabled(self, monkeypatch):
        monkeypatch.setenv("ISTIO_PROXY_ENABLED", "yes please")

        assert isinstance(create_proxy_from_settings(VigieSettings()), NullProxy)
