"""
Terminal size queries and resize notification.

The resize handler is opt-in: nothing is installed at import time. Callers
(usually ``Progress.watch_resize``) decide when to hook SIGWINCH.
"""

from __future__ import annotations

import logging
import os
import shutil
import signal
import sys
from typing import Any, Callable, Optional, Tuple

logger = logging.getLogger(__name__)

ResizeCallback = Callable[[int, int], None]


def _fd_of(stream: Any) -> Optional[int]:
    if stream is None:
        return None
    fileno = getattr(stream, "fileno", None)
    if fileno is None:
        return None
    try:
        return fileno()
    except Exception:
        return None


def get_terminal_size(
    stream: Any = None, fallback: Tuple[int, int] = (80, 24)
) -> Tuple[int, int]:
    """
    Get the size of the terminal attached to ``stream``.

    The stream's own descriptor is tried first, then stderr and stdout,
    then ``shutil.get_terminal_size`` (which honours COLUMNS/LINES).

    Args:
        stream: Stream (or writer with ``fileno()``) to query
        fallback: Returned if the terminal size cannot be determined

    Returns:
        Tuple of (columns, rows)
    """
    candidates = [_fd_of(stream), _fd_of(sys.stderr), _fd_of(sys.stdout)]
    for fd in candidates:
        if fd is None:
            continue
        try:
            size = os.get_terminal_size(fd)
        except (OSError, ValueError):
            continue
        if size.columns > 0:
            return (size.columns, size.lines)

    try:
        size = shutil.get_terminal_size(fallback=fallback)
        return (size.columns, size.lines)
    except Exception:
        logger.debug("terminal size query failed; using %s", fallback)
        return fallback


def install_resize_handler(callback: ResizeCallback, stream: Any = None) -> bool:
    """
    Install a SIGWINCH handler that reports the new size to ``callback``.

    Any previously installed handler keeps being called first.

    Args:
        callback: Called with (columns, rows) when the terminal is resized
        stream: Stream whose terminal is measured on resize

    Returns:
        True if the handler was installed
    """
    if sys.platform == "win32" or not hasattr(signal, "SIGWINCH"):
        return False

    previous = signal.getsignal(signal.SIGWINCH)

    def handler(signum: int, frame: object) -> None:
        if callable(previous):
            try:
                previous(signum, frame)
            except Exception:
                logger.debug("chained SIGWINCH handler failed", exc_info=True)

        cols, rows = get_terminal_size(stream)
        try:
            callback(cols, rows)
        except Exception:
            logger.debug("resize callback failed", exc_info=True)

    try:
        signal.signal(signal.SIGWINCH, handler)
    except ValueError:
        # signal handlers can only be installed from the main thread
        logger.debug("SIGWINCH handler not installed outside the main thread")
        return False
    return True
