"""
Unit tests for SystemReporter and the retry observer.

Usage:
    pytest vigie/tests/unit/reporter/test_reporting.py
"""

import logging

from vigie.domain.value_objects import ProbeResult, SignalResult
from vigie.reporter import (
    ProxyEmoji,
    RetryReporter,
    SystemReporter,
    format_attempt,
    get_reporter,
)
from vigie.reporter.retry_reporter import outcome_emoji


class TestSystemReporter:
    """SystemReporter formatting and filtering."""

    def test_context_prefix(self, capsys):
        reporter = SystemReporter(name="vigie-test-prefix")

        reporter.info("Sidecar is live", context="Lifecycle")

        assert "INFO     | [Lifecycle] Sidecar is live" in capsys.readouterr().out

    def test_verbose_filter(self, capsys):
        reporter = SystemReporter(name="vigie-test-verbose", verbose=1)

        reporter.info("detail", context="Test", verbose_level=2)
        reporter.error("always", context="Test")

        out = capsys.readouterr().out
        assert "detail" not in out
        assert "always" in out

    def test_set_verbose_is_clamped(self):
        reporter = SystemReporter(name="vigie-test-clamp")

        reporter.set_verbose(9)
        assert reporter.verbose == 3

        reporter.set_verbose(-2)
        assert reporter.verbose == 0

    def test_from_level_name(self):
        reporter = SystemReporter.from_level_name("vigie-test-level", "warning")

        assert reporter.logger.level == logging.WARNING

        debug = SystemReporter.from_level_name("vigie-test-debug", "DEBUG")
        assert debug.logger.level == logging.DEBUG
        assert debug.verbose == 3

    def test_log_file(self, tmp_path):
        reporter = SystemReporter(name="vigie-test-file", log_dir=str(tmp_path))

        reporter.warning("written to file", context="Test")
        for handler in reporter.logger.handlers:
            handler.flush()

        log_file = tmp_path / "vigie-test-file.log"
        assert reporter.log_file == str(log_file)
        assert "written to file" in log_file.read_text(encoding="utf-8")

    def test_reinitialising_does_not_duplicate_handlers(self):
        SystemReporter(name="vigie-test-dup")
        reporter = SystemReporter(name="vigie-test-dup")

        assert len(reporter.logger.handlers) == 1

    def test_get_reporter_returns_configured_reporter(self, tmp_path):
        reporter = SystemReporter(name="vigie", log_dir=str(tmp_path))
        handlers = list(reporter.logger.handlers)

        assert get_reporter() is reporter
        assert reporter.logger.handlers == handlers

    def test_get_reporter_creates_one_when_missing(self):
        reporter = get_reporter("vigie-test-fresh")

        assert reporter.name == "vigie-test-fresh"
        assert get_reporter("vigie-test-fresh") is reporter


class TestRetryReporter:
    """Default retry observer."""

    def test_format_probe_failure(self):
        line = format_attempt(1, 2, ProbeResult.transport_error("refused"))

        assert line == "wait_client_get, retries=1, max_retries=2, error=refused"

    def test_format_not_live(self):
        line = format_attempt(3, 10, ProbeResult.from_state("DRAINING"))

        assert line == (
            "wait_server_response_state, retries=3, max_retries=10, state=DRAINING"
        )

    def test_format_rejected(self):
        line = format_attempt(2, 2, SignalResult.from_status(500))

        assert line == "close_response_status, retries=2, max_retries=2, status=500"

    def test_observer_writes_warning(self, capsys):
        reporter = SystemReporter(name="vigie-test-observer")
        observer = RetryReporter(reporter, context="Probe")

        observer(1, 5, ProbeResult.malformed("Expecting value"))

        out = capsys.readouterr().out
        assert "WARNING" in out
        assert "[Probe]" in out
        assert ProxyEmoji.MALFORMED in out
        assert "wait_json_decode, retries=1, max_retries=5" in out

    def test_default_observer_writes_to_configured_log_file(self, tmp_path):
        reporter = SystemReporter(name="vigie", log_dir=str(tmp_path))
        observer = RetryReporter()

        observer(1, 2, SignalResult.transport_error("refused"))
        for handler in reporter.logger.handlers:
            handler.flush()

        assert observer.reporter is reporter
        log_text = (tmp_path / "vigie.log").read_text(encoding="utf-8")
        assert "close_client_post, retries=1, max_retries=2" in log_text

    def test_emoji_per_outcome(self):
        assert outcome_emoji(ProbeResult.transport_error("x")) == ProxyEmoji.DISCONNECTED
        assert outcome_emoji(ProbeResult.malformed("x")) == ProxyEmoji.MALFORMED
        assert outcome_emoji(ProbeResult.from_state("DRAINING")) == ProxyEmoji.NOT_LIVE
        assert outcome_emoji(SignalResult.transport_error("x")) == ProxyEmoji.DISCONNECTED
        assert outcome_emoji(SignalResult.from_status(500)) == ProxyEmoji.REJECTED
        assert outcome_emoji(SignalResult.from_status(200)) == ProxyEmoji.ACKNOWLEDGED


class TestProxyEmoji:
    """Emoji registry introspection."""

    def test_get_all(self):
        emojis = ProxyEmoji.get_all()

        assert emojis["LIVE"] == ProxyEmoji.LIVE
        assert "EXHAUSTED" in emojis

    def test_list_names(self):
        names = ProxyEmoji.list_names()

        assert "QUIT" in names
        assert all(name.isupper() for name in names)
