"""
Logging configuration for the progress package.

The package logs through ``logging.getLogger(__name__)`` and stays silent
unless the host opts in. Log output must not share a stream with a live
progress block; ``ProgressLogHandler`` routes records through
``Progress.log`` so they appear above the block instead.
"""

import logging
import sys
from typing import Any, Optional, TextIO

PACKAGE_LOGGER = "ttygauge"

DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class ProgressLogHandler(logging.Handler):
    """Handler that writes records above a live progress display."""

    def __init__(self, progress: Any, level: int = logging.NOTSET):
        super().__init__(level)
        self._progress = progress
        self._emitting = False

    def emit(self, record):
        # records raised while writing a record would recurse into the display
        if self._emitting:
            return
        self._emitting = True
        try:
            self._progress.log(self.format(record))
        except Exception:
            self.handleError(record)
        finally:
            self._emitting = False


def setup_logging(
    verbose: bool = False,
    stream: Optional[TextIO] = None,
    handler: Optional[logging.Handler] = None,
) -> logging.Logger:
    """
    Attach a handler to the package logger.

    Args:
        verbose: If True, log render decisions at DEBUG. If False, warnings only.
        stream: Stream for a plain StreamHandler (default stdout, since the
            progress block usually owns stderr)
        handler: Use this handler instead, e.g. a ProgressLogHandler

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    if handler is None:
        handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))

    logger.handlers = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False
    return logger


def silence_logging() -> None:
    """Return the package logger to its library default of emitting nothing."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.handlers = [logging.NullHandler()]
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
