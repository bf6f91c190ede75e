"""
Progress line state.
"""

from .line_tracker import LineTracker, merge_line, normalize_updates
from .progress_line import LinePosition, ProgressLine

__all__ = ["LinePosition", "LineTracker", "ProgressLine", "merge_line", "normalize_updates"]
