"""
Terminal primitives: stream writing, size queries and cursor hooks.
"""

from .ansi import (
    CLEAR_EOL,
    CLEAR_EOS,
    HIDE_CURSOR,
    LINE_START,
    NEXT_LINE,
    SHOW_CURSOR,
    cursor_up,
)
from .hooks import register_cursor_restore, unregister_cursor_restore
from .size import get_terminal_size, install_resize_handler
from .stream import StreamWriter, TerminalWriter

__all__ = [
    "CLEAR_EOL",
    "CLEAR_EOS",
    "HIDE_CURSOR",
    "LINE_START",
    "NEXT_LINE",
    "SHOW_CURSOR",
    "cursor_up",
    "register_cursor_restore",
    "unregister_cursor_restore",
    "get_terminal_size",
    "install_resize_handler",
    "StreamWriter",
    "TerminalWriter",
]
