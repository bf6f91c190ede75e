"""
Display-width helpers for strings that may carry ANSI styling.

Widths are terminal cells, not characters: full-width CJK glyphs take two
cells, combining marks take none, and escape sequences take none.
"""

from __future__ import annotations

import re
from typing import Any, Iterator, List, Tuple

from rich.cells import cell_len, get_character_cell_size

_ANSI_PATTERN = (
    r"\x1b\[[0-?]*[ -/]*[@-~]"  # CSI
    r"|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)"  # OSC, BEL or ST terminated
    r"|\x1b[@-_]"  # two-character escapes, incl. truncated CSI/OSC introducers
)
ANSI_RE = re.compile(_ANSI_PATTERN)

_EOL_RE = re.compile(r"\r\n|\n|\r")
_TERMINAL_EOL_RE = re.compile(r"(?:\r\n|\n|\r)\Z")


def _tokens(text: str) -> Iterator[Tuple[bool, str]]:
    """Yield (is_escape, chunk) pairs covering ``text`` in order."""
    position = 0
    for match in ANSI_RE.finditer(text):
        if match.start() > position:
            yield False, text[position : match.start()]
        yield True, match.group()
        position = match.end()
    if position < len(text):
        yield False, text[position:]


def strip_ansi(text: Any) -> str:
    """Remove escape sequences, leaving only the visible characters."""
    return ANSI_RE.sub("", str(text))


def display_width(text: Any) -> int:
    """
    Measure how many terminal columns ``text`` occupies.

    Never raises; anything that is not a string is measured as ``str(text)``.
    """
    try:
        return cell_len(strip_ansi(text))
    except Exception:
        return len(strip_ansi(text))


def truncate(text: str, width: int) -> str:
    """
    Cut ``text`` to at most ``width`` visible cells.

    Escape sequences are passed through untouched, including the ones after
    the cut, so any styling reset at the end of the string still applies. A
    wide glyph that would straddle the limit is dropped entirely.
    """
    if width <= 0:
        return "".join(chunk for is_escape, chunk in _tokens(text) if is_escape)
    if display_width(text) <= width:
        return text

    parts: List[str] = []
    used = 0
    full = False
    for is_escape, chunk in _tokens(text):
        if is_escape:
            parts.append(chunk)
            continue
        if full:
            continue
        for char in chunk:
            size = get_character_cell_size(char)
            if used + size > width:
                full = True
                break
            parts.append(char)
            used += size
    return "".join(parts)


def split_lines(text: str) -> List[str]:
    """
    Split ``text`` on any EOL style.

    A single trailing EOL is dropped so it does not produce a phantom empty
    last line.
    """
    return _EOL_RE.split(_TERMINAL_EOL_RE.sub("", text))
