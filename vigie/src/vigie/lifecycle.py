"""
Process wiring for the sidecar handshake.

Wraps an application's main work so that it starts only once the sidecar
is live and the sidecar is asked to quit when the work ends.
"""

from contextlib import contextmanager
from typing import Iterator, Optional

from vigie.domain.exceptions import MaxRetriesExceeded
from vigie.domain.services import IProxy
from vigie.reporter import ProxyEmoji, SystemReporter, get_reporter


@contextmanager
def sidecar_lifecycle(
    proxy: IProxy,
    reporter: Optional[SystemReporter] = None,
) -> Iterator[IProxy]:
    """
    Wait for the sidecar on entry and signal shutdown on exit.

    The shutdown request is sent even when the body raises. A failed
    shutdown is re-raised only if the body itself succeeded, so the
    body's own exception is never masked.

    Example:
        with sidecar_lifecycle(create_proxy_from_settings()):
            run_application()

    Raises:
        WaitMaxRetriesExceeded: Sidecar never became live (body not run)
        CloseMaxRetriesExceeded: Sidecar never acknowledged shutdown
    """
    reporter = reporter or get_reporter()

    reporter.info(f"{ProxyEmoji.WAITING} Waiting for sidecar", context="Lifecycle")
    proxy.wait()
    reporter.info(f"{ProxyEmoji.LIVE} Sidecar is live", context="Lifecycle")

    body_failed = False
    try:
        yield proxy
    except BaseException:
        body_failed = True
        raise
    finally:
        reporter.info(f"{ProxyEmoji.QUIT} Stopping sidecar", context="Lifecycle")
        try:
            proxy.close()
        except MaxRetriesExceeded as e:
            reporter.error(
                f"{ProxyEmoji.EXHAUSTED} Sidecar shutdown failed: {e}",
                context="Lifecycle",
            )
            if not body_failed:
                raise
        else:
            reporter.info(
                f"{ProxyEmoji.ACKNOWLEDGED} Sidecar shutdown acknowledged",
                context="Lifecycle",
            )
