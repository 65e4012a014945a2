"""
Host-aware logging for solzone.

The estimator core runs inside a UI collaborator (a map page, a notebook,
a desktop shell). Messages go to the standard logging module unless the host
registers a feedback sink, in which case they are forwarded there:
- Host: ``feedback(level, message)`` callable set via set_feedback()
- Python: Standard logging module

Usage:
    from solzone.solzone_logging import get_logger

    logger = get_logger(__name__)
    logger.info("Loaded 12 high suitability polygons")
    logger.debug(f"Allowed zone has {len(region.pieces)} pieces")
    logger.warning("Skipping self-intersecting polygon in union")
"""

from __future__ import annotations

import logging
import sys
from enum import IntEnum
from typing import Callable

FeedbackSink = Callable[[int, str], None]


class LogLevel(IntEnum):
    """Log levels matching Python logging."""

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40


class SolzoneLogger:
    """
    Logger that forwards to a host feedback sink when one is registered.

    Falls back to the standard logging module otherwise, so library users
    get normal ``logging`` behaviour without any setup.
    """

    def __init__(self, name: str, level: LogLevel = LogLevel.INFO):
        """
        Initialize logger.

        Args:
            name: Logger name (usually module name)
            level: Minimum log level to display
        """
        self.name = name
        self.level = level
        self._feedback: FeedbackSink | None = None

    @property
    def backend(self) -> str:
        return "host" if self._feedback is not None else "logging"

    def set_feedback(self, feedback: FeedbackSink | None) -> None:
        """
        Set the host feedback sink.

        Args:
            feedback: Callable receiving ``(level, message)``, or None to
                return to the standard logging module.
        """
        self._feedback = feedback

    def _log(self, level: LogLevel, message: str) -> None:
        if level < self.level:
            return

        if self._feedback is not None:
            self._feedback(int(level), f"{self.name}: {message}")
        else:
            logging.getLogger(self.name).log(level, message)

    def debug(self, message: str) -> None:
        """Log debug message."""
        self._log(LogLevel.DEBUG, message)

    def info(self, message: str) -> None:
        """Log info message."""
        self._log(LogLevel.INFO, message)

    def warning(self, message: str) -> None:
        """Log warning message."""
        self._log(LogLevel.WARNING, message)

    def error(self, message: str) -> None:
        """Log error message."""
        self._log(LogLevel.ERROR, message)

    def set_level(self, level: LogLevel | int) -> None:
        """Set minimum log level."""
        self.level = LogLevel(level) if isinstance(level, int) else level


# Global logger registry
_loggers: dict[str, SolzoneLogger] = {}

# Host sink applied to loggers created after set_global_feedback()
_default_feedback: FeedbackSink | None = None


def get_logger(name: str, level: LogLevel | int = LogLevel.INFO) -> SolzoneLogger:
    """
    Get or create a logger for the given name.

    Args:
        name: Logger name (usually module name or __name__)
        level: Minimum log level (default: INFO)

    Returns:
        SolzoneLogger instance

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Zones loaded")
    """
    if name not in _loggers:
        logger = SolzoneLogger(name, LogLevel(level) if isinstance(level, int) else level)
        logger.set_feedback(_default_feedback)
        _loggers[name] = logger
    return _loggers[name]


def set_global_level(level: LogLevel | int) -> None:
    """
    Set log level for all existing loggers.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR)

    Example:
        >>> import solzone.solzone_logging as slog
        >>> slog.set_global_level(slog.LogLevel.DEBUG)
    """
    level = LogLevel(level) if isinstance(level, int) else level
    for logger in _loggers.values():
        logger.set_level(level)


def set_global_feedback(feedback: FeedbackSink | None) -> None:
    """
    Set the host feedback sink for all loggers, including ones created later.

    Args:
        feedback: Callable receiving ``(level, message)``, or None to reset.
    """
    global _default_feedback
    _default_feedback = feedback
    for logger in _loggers.values():
        logger.set_feedback(feedback)


# Configure Python logging to be less verbose by default
logging.basicConfig(
    level=logging.INFO,
    format="%(name)s: %(message)s",
    stream=sys.stdout,
)
