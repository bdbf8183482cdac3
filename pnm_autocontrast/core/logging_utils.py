"""Logging utilities for consistent status messages."""

import logging
import sys
import time
from contextlib import contextmanager
from typing import Iterator, List, Optional


class _StdoutHandler(logging.StreamHandler):
    """Stream handler bound to whatever sys.stdout is at emit time."""

    def emit(self, record: logging.LogRecord) -> None:
        self.stream = sys.stdout
        super().emit(record)


class StatusLogger:
    """Status logger with consistent prefixes.

    Success, error and warning lines are always shown. Info and timing
    lines are only shown in verbose mode.
    """

    def __init__(self, name: str = "pnm_autocontrast", verbose: bool = False):
        """Initialize the status logger.

        Args:
            name: Logger name for Python logging integration
            verbose: If False, suppresses info and timing messages
        """
        self.verbose = verbose
        self._logger = logging.getLogger(name)

        # Configure handler if not already configured
        if not self._logger.handlers:
            handler = _StdoutHandler(sys.stdout)
            handler.setFormatter(logging.Formatter('%(message)s'))
            self._logger.addHandler(handler)
            self._logger.setLevel(logging.DEBUG)

    def success(self, message: str, indent: int = 0) -> None:
        """Log a success message with [OK] prefix."""
        self._logger.info(f"{' ' * indent}[OK] {message}")

    def error(self, message: str, indent: int = 0) -> None:
        """Log an error message with [ERROR] prefix."""
        self._logger.error(f"{' ' * indent}[ERROR] {message}")

    def warning(self, message: str, indent: int = 0) -> None:
        """Log a warning message with [WARNING] prefix."""
        self._logger.warning(f"{' ' * indent}[WARNING] {message}")

    def result(self, message: str) -> None:
        """Log an unprefixed line that is shown regardless of verbosity."""
        self._logger.info(message)

    def info(self, message: str, indent: int = 0) -> None:
        """Log an info message (respects verbose setting).

        Args:
            message: The message to log
            indent: Number of spaces to indent
        """
        if self.verbose:
            self._logger.info(f"{' ' * indent}{message}")

    def timing(self, label: str, elapsed_ms: float, indent: int = 0) -> None:
        """Log how long a phase took (respects verbose setting).

        Args:
            label: Phase name
            elapsed_ms: Duration in milliseconds
            indent: Number of spaces to indent
        """
        if self.verbose:
            self._logger.info(f"{' ' * indent}{label} in {elapsed_ms:.3f}ms")

    @contextmanager
    def timed(self, label: str, indent: int = 0) -> Iterator[List[float]]:
        """Time the enclosed block and log it via timing().

        Yields a one-element list that holds the elapsed milliseconds once
        the block exits.
        """
        elapsed = [0.0]
        start = time.perf_counter()
        try:
            yield elapsed
        finally:
            elapsed[0] = (time.perf_counter() - start) * 1000
            self.timing(label, elapsed[0], indent=indent)

    def header(self, title: str, width: int = 60) -> None:
        """Print a header section."""
        self._logger.info("=" * width)
        self._logger.info(title)
        self._logger.info("=" * width)

    def set_verbose(self, verbose: bool) -> None:
        """Set verbose mode."""
        self.verbose = verbose


# Global default logger instance
_default_logger: Optional[StatusLogger] = None


def get_logger(verbose: bool = False) -> StatusLogger:
    """Get the default status logger instance.

    Args:
        verbose: If False, info and timing messages are suppressed

    Returns:
        StatusLogger instance
    """
    global _default_logger
    if _default_logger is None:
        _default_logger = StatusLogger(verbose=verbose)
    else:
        _default_logger.set_verbose(verbose)
    return _default_logger
