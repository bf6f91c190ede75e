"""
Rendering: text measurement, line templates and terminal compositing.
"""

from .compositor import CursorPosition, DisplayCompositor
from .template import RenderedLine, TemplateRenderer
from .text_metrics import display_width, split_lines, strip_ansi, truncate

__all__ = [
    "CursorPosition",
    "DisplayCompositor",
    "RenderedLine",
    "TemplateRenderer",
    "display_width",
    "split_lines",
    "strip_ansi",
    "truncate",
]
