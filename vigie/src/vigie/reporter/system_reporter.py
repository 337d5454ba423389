"""
System Reporter - Centralized logging for vigie.

Console logging (stdout, for containers) with an optional log file and a
verbosity filter on top of the standard logging levels.
"""

import logging
import os
import sys
from typing import Dict, Optional

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}

# Last reporter built per logger name; see get_reporter()
_reporters: Dict[str, "SystemReporter"] = {}


class SystemReporter:
    """
    Logger with verbose filtering.

    Verbose Levels:
        0 = Critical only (always visible)
        1 = Important messages (default)
        2 = Detailed information
        3 = Debug/verbose
    """

    def __init__(
        self,
        name: str = "vigie",
        log_dir: Optional[str] = None,
        level: int = logging.INFO,
        verbose: int = 1,
    ) -> None:
        """
        Initialize SystemReporter.

        Args:
            name: Logger name (used for filename if log_dir provided)
            log_dir: Directory for log files. If None, logs to stdout only.
            level: Python logging level
            verbose: Verbosity filter (0-3)
        """
        self.name = name
        self.verbose = max(0, min(3, verbose))
        self.log_file: Optional[str] = None
        self._init_logger(name, log_dir, level)
        _reporters[name] = self

    def _init_logger(self, name: str, log_dir: Optional[str], level: int) -> None:
        """
        Initialize logger with console and optional file handlers.

        Args:
            name: Logger name
            log_dir: Log directory path (None = stdout only)
            level: Python logging level
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level)
        self.logger.propagate = False

        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        self.logger.addHandler(console_handler)

        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
            self.log_file = os.path.join(os.path.abspath(log_dir), f"{name}.log")

            file_handler = logging.FileHandler(self.log_file, encoding="utf-8")
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

    @classmethod
    def from_level_name(
        cls,
        name: str,
        level_name: str = "info",
        log_dir: Optional[str] = None,
        verbose: int = 1,
    ) -> "SystemReporter":
        """Build a reporter from a settings-style level name ("info", ...)."""
        level = LOG_LEVELS.get(level_name.lower(), logging.INFO)
        if level == logging.DEBUG:
            verbose = 3
        return cls(name=name, log_dir=log_dir, level=level, verbose=verbose)

    def set_verbose(self, level: int) -> None:
        """Update verbosity level."""
        self.verbose = max(0, min(3, level))
        self.info(
            f"Verbosity set to {self.verbose}",
            context="SystemReporter",
            verbose_level=0,
        )

    def _should_log(self, verbose_level: int) -> bool:
        """Check if message should be logged."""
        return self.verbose >= verbose_level

    # Core logging methods
    def debug(self, msg: str, context: str = "system", verbose_level: int = 3) -> None:
        if self._should_log(verbose_level):
            self.logger.debug(f"[{context}] {msg}")

    def info(self, msg: str, context: str = "system", verbose_level: int = 1) -> None:
        if self._should_log(verbose_level):
            self.logger.info(f"[{context}] {msg}")

    def warning(
        self, msg: str, context: str = "system", verbose_level: int = 1
    ) -> None:
        if self._should_log(verbose_level):
            self.logger.warning(f"[{context}] {msg}")

    def error(self, msg: str, context: str = "system", verbose_level: int = 0) -> None:
        if self._should_log(verbose_level):
            self.logger.error(f"[{context}] {msg}")

    def critical(
        self, msg: str, context: str = "system", verbose_level: int = 0
    ) -> None:
        if self._should_log(verbose_level):
            self.logger.critical(f"[{context}] {msg}")


def get_reporter(name: str = "vigie") -> SystemReporter:
    """
    Return the reporter already configured for `name`, creating a plain
    console reporter only if none exists yet.

    Building a SystemReporter re-initialises the shared logger (handlers
    and level), so fallbacks must go through here instead of constructing
    a new one over the application's file handler.
    """
    reporter = _reporters.get(name)
    if reporter is None:
        reporter = SystemReporter(name=name)
    return reporter


def reset_reporters() -> None:
    """Forget registered reporters (for testing)."""
    _reporters.clear()
