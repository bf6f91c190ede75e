"""
ttygauge: live, in-place terminal progress bars.

Single gauges and stacked multi-line bars redrawn with cursor-control
escape sequences, with log messages that can be written above the block
without corrupting it.
"""

import logging

from .config import RenderConfig, load_env_config
from .progress import Progress
from .render import CursorPosition, display_width
from .schemas import UpdateOptions
from .state import ProgressLine
from .terminal import StreamWriter, TerminalWriter

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "CursorPosition",
    "Progress",
    "ProgressLine",
    "RenderConfig",
    "StreamWriter",
    "TerminalWriter",
    "UpdateOptions",
    "display_width",
    "load_env_config",
]
