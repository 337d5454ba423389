"""
Reporting for vigie: SystemReporter, emojis and the default retry observer.
"""

from vigie.reporter.emojis import ComponentEmoji, ProxyEmoji
from vigie.reporter.retry_reporter import RetryReporter, format_attempt
from vigie.reporter.system_reporter import (
    LOG_LEVELS,
    SystemReporter,
    get_reporter,
    reset_reporters,
)

__all__ = [
    "SystemReporter",
    "get_reporter",
    "reset_reporters",
    "LOG_LEVELS",
    "ComponentEmoji",
    "ProxyEmoji",
    "RetryReporter",
    "format_attempt",
]
