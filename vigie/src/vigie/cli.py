"""
Vigie CLI.

Usage:
    vigie wait  [OPTIONS]
    vigie quit  [OPTIONS]
    vigie run   [OPTIONS] -- COMMAND [ARGS...]

Options (before the subcommand) override the configuration:
    --config FILE, --env-file FILE, --enabled/--disabled,
    --timeout SECONDS, --retry-delay SECONDS, --max-retries N
"""

import signal
import subprocess
from typing import List, Optional, Sequence, Tuple

import click
from pydantic import ValidationError

from vigie.config.settings import VigieSettings, load_config
from vigie.di.container import create_proxy, create_reporter
from vigie.domain.exceptions import (
    CloseMaxRetriesExceeded,
    MaxRetriesExceeded,
    WaitMaxRetriesExceeded,
)
from vigie.domain.services import IProxy
from vigie.domain.value_objects import RetryPolicy
from vigie.lifecycle import sidecar_lifecycle
from vigie.reporter import ProxyEmoji, RetryReporter, SystemReporter

EXIT_COMMAND_NOT_FOUND = 127

# Stop signals passed on to the wrapped command
FORWARDED_SIGNALS = (signal.SIGTERM, signal.SIGINT)


def _load_settings(config: Optional[str], env_file: Optional[str]) -> VigieSettings:
    try:
        return load_config(config_file=config, env_file=env_file)
    except (FileNotFoundError, ValidationError) as e:
        raise click.UsageError(f"Invalid configuration: {e}")


def _build(ctx: click.Context) -> Tuple[IProxy, SystemReporter]:
    """Create the proxy and reporter from settings plus CLI overrides."""
    options = ctx.obj
    settings = _load_settings(options["config"], options["env_file"])
    reporter = create_reporter(settings)

    enabled = options["enabled"]
    if enabled is None:
        enabled = settings.istio_proxy_enabled

    policy = RetryPolicy(
        timeout=options["timeout"] or settings.timeout,
        retry_delay=(
            settings.retry_delay
            if options["retry_delay"] is None
            else options["retry_delay"]
        ),
        max_retries=(
            settings.max_retries
            if options["max_retries"] is None
            else options["max_retries"]
        ),
    )

    if not enabled:
        reporter.info(
            f"{ProxyEmoji.DISABLED} Sidecar integration disabled", context="CLI"
        )
    else:
        reporter.debug(f"Retry policy: {policy}", context="CLI")

    proxy = create_proxy(enabled, policy, observer=RetryReporter(reporter, "CLI"))
    return proxy, reporter


@click.group()
@click.option("--config", "-c", default=None, help="YAML config file")
@click.option("--env-file", default=None, help=".env file to load")
@click.option(
    "--enabled/--disabled",
    default=None,
    help="Force the sidecar integration on or off (default: ISTIO_PROXY_ENABLED)",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Per-request timeout in seconds",
)
@click.option(
    "--retry-delay",
    type=click.FloatRange(min=0),
    default=None,
    help="Pause between attempts in seconds",
)
@click.option(
    "--max-retries",
    type=click.IntRange(min=0),
    default=None,
    help="Maximum number of attempts",
)
@click.pass_context
def cli(ctx, config, env_file, enabled, timeout, retry_delay, max_retries):
    """Vigie - Sidecar proxy lifecycle handshake."""
    ctx.obj = {
        "config": config,
        "env_file": env_file,
        "enabled": enabled,
        "timeout": timeout,
        "retry_delay": retry_delay,
        "max_retries": max_retries,
    }


@cli.command()
@click.pass_context
def wait(ctx):
    """Block until the sidecar reports it is live."""
    proxy, reporter = _build(ctx)

    reporter.info(f"{ProxyEmoji.WAITING} Waiting for sidecar", context="CLI")
    try:
        proxy.wait()
    except MaxRetriesExceeded as e:
        reporter.error(f"{ProxyEmoji.EXHAUSTED} {e}", context="CLI")
        ctx.exit(1)

    reporter.info(f"{ProxyEmoji.LIVE} Sidecar is live", context="CLI")


@cli.command(name="quit")
@click.pass_context
def quit_(ctx):
    """Ask the sidecar to shut down gracefully."""
    proxy, reporter = _build(ctx)

    reporter.info(f"{ProxyEmoji.QUIT} Stopping sidecar", context="CLI")
    try:
        proxy.close()
    except MaxRetriesExceeded as e:
        reporter.error(f"{ProxyEmoji.EXHAUSTED} {e}", context="CLI")
        ctx.exit(1)

    reporter.info(
        f"{ProxyEmoji.ACKNOWLEDGED} Sidecar shutdown acknowledged", context="CLI"
    )


class SignalForwarder:
    """
    Passes stop signals to the wrapped command instead of dying on them.

    vigie then outlives the command long enough for sidecar_lifecycle to
    send the shutdown request. A signal received before the command has
    started is delivered as soon as it exists.

    Example:
        with SignalForwarder(reporter) as forwarder:
            forwarder.attach(subprocess.Popen(command))
    """

    def __init__(self, reporter: SystemReporter):
        self.reporter = reporter
        self.child: Optional[subprocess.Popen] = None
        self._pending: List[int] = []
        self._previous = {}

    def __enter__(self) -> "SignalForwarder":
        for sig in FORWARDED_SIGNALS:
            self._previous[sig] = signal.signal(sig, self._handle_signal)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        for sig, handler in self._previous.items():
            signal.signal(sig, handler)
        self._previous.clear()

    def _handle_signal(self, signum, frame):
        self.reporter.warning(
            f"Received signal {signum}, forwarding to command", context="CLI"
        )
        if self.child is None:
            self._pending.append(signum)
        else:
            self.child.send_signal(signum)

    def attach(self, child: subprocess.Popen) -> None:
        """Start forwarding to child, replaying signals received so far."""
        self.child = child
        for signum in self._pending:
            child.send_signal(signum)
        self._pending.clear()


def _exit_code(returncode: int) -> int:
    """Shell convention: a command killed by signal N exits with 128 + N."""
    return 128 - returncode if returncode < 0 else returncode


def _run_command(command: Sequence[str], reporter: SystemReporter) -> int:
    """Run the wrapped command and return its exit code."""
    reporter.info(f"Running: {' '.join(command)}", context="CLI")

    with SignalForwarder(reporter) as forwarder:
        try:
            child = subprocess.Popen(list(command))
        except FileNotFoundError:
            reporter.error(f"Command not found: {command[0]}", context="CLI")
            return EXIT_COMMAND_NOT_FOUND

        forwarder.attach(child)
        returncode = child.wait()

    reporter.info(f"Command exited with {returncode}", context="CLI")
    return _exit_code(returncode)


@cli.command(context_settings={"ignore_unknown_options": True})
@click.argument("command", nargs=-1, required=True, type=click.UNPROCESSED)
@click.pass_context
def run(ctx, command):
    """Wait for the sidecar, run COMMAND, then stop the sidecar."""
    proxy, reporter = _build(ctx)

    exit_code = 1
    try:
        with sidecar_lifecycle(proxy, reporter):
            exit_code = _run_command(command, reporter)
    except WaitMaxRetriesExceeded as e:
        reporter.error(f"{ProxyEmoji.EXHAUSTED} {e}", context="CLI")
        ctx.exit(1)
    except CloseMaxRetriesExceeded:
        # reported by sidecar_lifecycle; the command's result still wins
        pass

    ctx.exit(exit_code)


def main() -> None:
    cli(prog_name="vigie")


if __name__ == "__main__":
    main()
