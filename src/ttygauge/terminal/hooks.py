"""
Process-exit hooks that put the terminal cursor back.

A progress display configured to hide the cursor leaves it hidden if the
host process dies before ``complete()`` runs. Hosts opt into this hook
explicitly; importing the package registers nothing.
"""

from __future__ import annotations

import atexit
import logging
from typing import Callable

from .ansi import SHOW_CURSOR
from .stream import TerminalWriter

logger = logging.getLogger(__name__)


def register_cursor_restore(writer: TerminalWriter) -> Callable[[], None]:
    """
    Register an exit hook that re-shows the cursor on ``writer``.

    Returns:
        The registered hook, for use with ``unregister_cursor_restore``
    """

    def restore() -> None:
        try:
            writer.write_sync(SHOW_CURSOR.encode("utf-8"))
        except Exception:
            logger.debug("cursor restore at exit failed", exc_info=True)

    atexit.register(restore)
    return restore


def unregister_cursor_restore(hook: Callable[[], None]) -> None:
    """Remove a hook previously returned by ``register_cursor_restore``."""
    atexit.unregister(hook)
