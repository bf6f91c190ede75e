"""
Display compositor for the live progress block.

The compositor owns what is currently on screen: the static title lines,
the block of progress lines beneath them, and where the cursor sits
relative to that block. Every operation works out cursor movement from the
tracked ``CursorPosition`` instead of assuming an absolute position, and
each operation goes out as one write.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable, List, Sequence, Tuple

from ..terminal.ansi import (
    CLEAR_EOL,
    HIDE_CURSOR,
    LINE_START,
    NEXT_LINE,
    SHOW_CURSOR,
    cursor_up,
)
from ..terminal.stream import TerminalWriter
from .text_metrics import split_lines

logger = logging.getLogger(__name__)


class CursorPosition(Enum):
    """Where the cursor sits relative to the progress block."""

    BLOCK_START = "block_start"
    """First column of the first block line"""

    BLOCK_END = "block_end"
    """On the last block line"""

    AFTER_BLOCK = "after_block"
    """First column of the line following the block"""


class DisplayCompositor:
    """Emit the minimal terminal output to move between frames."""

    def __init__(
        self,
        writer: TerminalWriter,
        titles: Sequence[str] = (),
        hide_cursor: bool = False,
    ):
        self._writer = writer
        self._titles: Tuple[str, ...] = tuple(titles)
        self._hide_cursor = hide_cursor
        self._displayed: Tuple[str, ...] = ()
        self._position = CursorPosition.BLOCK_START
        self._pending: List[str] = []

    @property
    def titles(self) -> Tuple[str, ...]:
        return self._titles

    @property
    def displayed(self) -> Tuple[str, ...]:
        """Block lines currently on screen, top to bottom."""
        return self._displayed

    @property
    def position(self) -> CursorPosition:
        return self._position

    def _emit(self, text: str) -> None:
        if text:
            self._pending.append(text)

    def _flush(self) -> None:
        data = "".join(self._pending)
        self._pending.clear()
        if data:
            self._writer.write_sync(data.encode("utf-8", errors="replace"))

    def _write_line(self, text: str) -> None:
        self._emit(LINE_START + text + CLEAR_EOL)

    def _next_line(self, lines: int = 1) -> None:
        self._emit(NEXT_LINE * max(lines, 0))

    def _row_of(self, position: CursorPosition) -> int:
        height = len(self._displayed)
        if position is CursorPosition.BLOCK_START:
            return 0
        if position is CursorPosition.BLOCK_END:
            return max(height - 1, 0)
        return height

    def _move(self, target: CursorPosition) -> None:
        if target is CursorPosition.BLOCK_END and not self._displayed:
            target = CursorPosition.BLOCK_START
        if target is self._position:
            return

        delta = self._row_of(target) - self._row_of(self._position)
        if delta > 0:
            # newlines rather than cursor-down so the screen scrolls if needed
            self._next_line(delta)
        elif delta < 0:
            self._emit(cursor_up(-delta))

        if target is CursorPosition.BLOCK_END:
            self._write_line(self._displayed[-1])
        else:
            self._emit(LINE_START)
        self._position = target

    def move_to(self, position: CursorPosition) -> None:
        """Park the cursor at ``position``."""
        self._move(position)
        self._flush()

    def write_title(self) -> None:
        """Write the title lines; the block starts on the line below them."""
        for title in self._titles:
            self._write_line(title)
            self._next_line()
        self._position = CursorPosition.BLOCK_START
        self._flush()

    def redraw(self, lines: Iterable[str]) -> None:
        """
        Replace the block on screen with ``lines``.

        Lines beyond the new block's height are blanked and the cursor moved
        back up, leaving it on the new last line.
        """
        lines = tuple(lines)
        if self._hide_cursor:
            self._emit(HIDE_CURSOR)
        self._move(CursorPosition.BLOCK_START)

        rows = max(len(self._displayed), len(lines))
        for index in range(rows):
            if index:
                self._next_line()
            self._write_line(lines[index] if index < len(lines) else "")
        if rows:
            self._emit(cursor_up(rows - max(len(lines), 1)))

        self._displayed = lines
        self._position = CursorPosition.BLOCK_END if lines else CursorPosition.BLOCK_START
        self._flush()

    def clear_block(self) -> None:
        """Blank the block bottom-to-top, leaving the cursor where it began."""
        if not self._displayed:
            return
        self._move(CursorPosition.BLOCK_END)
        height = len(self._displayed)
        for index in range(height):
            self._write_line("")
            if index < height - 1:
                self._emit(cursor_up(1))
        self._displayed = ()
        self._position = CursorPosition.BLOCK_START
        self._flush()

    def log(self, message: str) -> None:
        """
        Write ``message`` above the title and block without disturbing them.

        Each message line is written and cleared on its own line, then the
        titles and the block are replayed unchanged beneath it.
        """
        if self._hide_cursor:
            self._emit(HIDE_CURSOR)
        self._move(CursorPosition.BLOCK_START)

        span = len(self._titles) + len(self._displayed)
        self._emit(cursor_up(len(self._titles)))
        # reserve the line below the block first so the rewrite does not
        # scroll mid-frame
        self._next_line(span)
        self._emit(cursor_up(span))

        for line in split_lines(message):
            self._write_line(line)
            self._next_line()
        for title in self._titles:
            self._write_line(title)
            self._next_line()
        for index, line in enumerate(self._displayed):
            if index:
                self._next_line()
            self._write_line(line)

        self._position = (
            CursorPosition.BLOCK_END if self._displayed else CursorPosition.BLOCK_START
        )
        self._flush()

    def hide_cursor(self) -> None:
        self._emit(HIDE_CURSOR)
        self._flush()

    def show_cursor(self) -> None:
        self._emit(SHOW_CURSOR)
        self._flush()
