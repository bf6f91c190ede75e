"""
Output sink abstraction for the progress display.

Anything that can synchronously write bytes and tell whether it is attached
to a terminal can drive a progress block.
"""

from __future__ import annotations

import sys
from typing import Optional, Protocol, TextIO, runtime_checkable


@runtime_checkable
class TerminalWriter(Protocol):
    """Capability interface for a synchronous, terminal-aware byte sink."""

    def write_sync(self, data: bytes) -> int:
        """Write all of ``data`` and return the number of bytes written."""
        ...

    def is_terminal(self) -> bool:
        """Return True when output reaches an interactive terminal."""
        ...


class StreamWriter:
    """
    Adapt a standard text stream (stderr by default) to ``TerminalWriter``.

    Bytes go straight to the stream's binary buffer when it has one so that
    escape sequences and wide glyphs are not re-encoded; otherwise they are
    decoded as UTF-8 and written as text.
    """

    def __init__(self, stream: Optional[TextIO] = None, encoding: str = "utf-8"):
        self._stream = stream if stream is not None else sys.stderr
        self._encoding = encoding

    @property
    def stream(self) -> TextIO:
        return self._stream

    def write_sync(self, data: bytes) -> int:
        buffer = getattr(self._stream, "buffer", None)
        if buffer is not None:
            # pending text must reach the fd before raw bytes do
            self._stream.flush()
            buffer.write(data)
            buffer.flush()
        else:
            self._stream.write(data.decode(self._encoding, errors="replace"))
            self._stream.flush()
        return len(data)

    def is_terminal(self) -> bool:
        try:
            return bool(self._stream.isatty())
        except Exception:
            return False

    def fileno(self) -> Optional[int]:
        """Return the underlying file descriptor, or None if there is none."""
        try:
            return self._stream.fileno()
        except Exception:
            return None
