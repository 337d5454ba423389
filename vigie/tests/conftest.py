"""
Test fixtures and configuration.

The sidecar is faked with httpx.MockTransport: each fixture-built sidecar
answers from a script of responses (or exceptions) and records every
request it receives.
"""

import os
from typing import Callable, List, Optional, Union

import httpx
import pytest

from vigie.config.settings import reset_settings
from vigie.domain.value_objects import RetryPolicy
from vigie.infrastructure.proxy import IstioProxy
from vigie.reporter import SystemReporter, reset_reporters

SERVER_INFO_LIVE = (
    '{"version":"9b4239dee83dd8894bfc579d412ccd894cff2597/1.13.1-dev/Clean/'
    'RELEASE/BoringSSL","state":"LIVE","hot_restart_version":"11.104",'
    '"command_line_options":{"base_id":"0","concurrency":2,'
    '"config_path":"/etc/istio/proxy/envoy-rev0.json","mode":"Serve",'
    '"drain_time":"45s","parent_shutdown_time":"60s"},'
    '"uptime_current_epoch":"131s","uptime_all_epochs":"131s"}'
)
SERVER_INFO_INITIALIZING = SERVER_INFO_LIVE.replace('"LIVE"', '"PRE_INITIALIZING"')

Scripted = Union[httpx.Response, Exception, Callable[[httpx.Request], httpx.Response]]


class FakeSidecar:
    """
    Scripted sidecar behind an httpx.MockTransport.

    The last scripted answer repeats once the script is exhausted.
    """

    def __init__(self, *script: Scripted):
        self.script: List[Scripted] = list(script)
        self.requests: List[httpx.Request] = []

    def _handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        index = min(len(self.requests), len(self.script)) - 1
        answer = self.script[index]

        if isinstance(answer, Exception):
            raise answer
        if callable(answer) and not isinstance(answer, httpx.Response):
            return answer(request)
        return answer

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self._handler))

    @property
    def calls(self) -> int:
        return len(self.requests)


def connect_error(request: Optional[httpx.Request] = None) -> httpx.ConnectError:
    return httpx.ConnectError("[Errno 111] Connection refused", request=request)


class SleepRecorder:
    """Stands in for time.sleep and remembers every requested delay."""

    def __init__(self):
        self.delays: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Isolate tests from the caller's settings and from registered reporters."""
    for name in list(os.environ):
        if name.upper().startswith("VIGIE_") or name.upper() == "ISTIO_PROXY_ENABLED":
            monkeypatch.delenv(name, raising=False)
    reset_settings()
    reset_reporters()
    yield
    reset_settings()
    reset_reporters()


@pytest.fixture
def reporter() -> SystemReporter:
    return SystemReporter(name="vigie-tests", verbose=1)


@pytest.fixture
def sleeps() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def observed() -> list:
    """Observer calls as (attempt, max_attempts, result) tuples."""
    return []


@pytest.fixture
def make_proxy(sleeps, observed):
    """Build an IstioProxy wired to a FakeSidecar with a recording sleep."""

    def _make(
        sidecar: FakeSidecar,
        max_retries: int = 10,
        retry_delay: float = 0.01,
        timeout: float = 5.0,
    ) -> IstioProxy:
        return IstioProxy(
            RetryPolicy(timeout=timeout, retry_delay=retry_delay, max_retries=max_retries),
            observer=lambda attempt, total, result: observed.append(
                (attempt, total, result)
            ),
            client=sidecar.client(),
            sleep=sleeps,
        )

    return _make


@pytest.fixture
def sidecar_cls():
    return FakeSidecar


@pytest.fixture
def payloads():
    """Canned server_info bodies."""
    return {"live": SERVER_INFO_LIVE, "initializing": SERVER_INFO_INITIALIZING}


@pytest.fixture
def refused():
    return connect_error
