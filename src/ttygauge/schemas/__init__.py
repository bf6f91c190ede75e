"""
Option schemas for progress lines.
"""

from .update_options import (
    DEFAULT_PROGRESS_TEMPLATE,
    DEFAULT_SYMBOL_COMPLETE,
    DEFAULT_SYMBOL_INCOMPLETE,
    UpdateOptions,
    coerce_options,
    layer_options,
)

__all__ = [
    "DEFAULT_PROGRESS_TEMPLATE",
    "DEFAULT_SYMBOL_COMPLETE",
    "DEFAULT_SYMBOL_INCOMPLETE",
    "UpdateOptions",
    "coerce_options",
    "layer_options",
]
