"""
ANSI CSI control sequences used to redraw the progress block in place.

ref: https://en.wikipedia.org/wiki/ANSI_escape_code
"""

CLEAR_EOL = "\x1b[0K"
CLEAR_EOS = "\x1b[0J"
HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"
LINE_START = "\r"
NEXT_LINE = "\r\n"


def cursor_up(lines: int = 1) -> str:
    """Return the sequence moving the cursor up, or an empty string for n <= 0."""
    if lines <= 0:
        return ""
    return f"\x1b[{lines}A"
