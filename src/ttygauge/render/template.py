"""
Template rendering for a single progress line.

A line is produced from a value, the resolved line options and the time
elapsed since the session started. Built-in tokens are ``{value}``,
``{goal}``, ``{percent}``, ``{elapsed}``, ``{eta}``, ``{rate}``, ``{label}``
and ``{bar}``; the bar is sized to whatever width the rest of the line
leaves free.
"""

from __future__ import annotations

import math
import re
from typing import NamedTuple, Optional

from ..schemas.update_options import UpdateOptions
from .text_metrics import display_width, truncate

BAR_TOKEN = "{bar}"
SAFETY_MARGIN = 1

_LABEL_RE = re.compile(r"(\s?)\{label\}(\s?)")


class RenderedLine(NamedTuple):
    """Result of rendering one line: text (None when hidden), status and clamped value."""

    text: Optional[str]
    completed: bool
    value: float


def clamp_value(value: float, goal: float) -> float:
    """Clamp ``value`` into [0, goal]; NaN, infinities and negatives become 0."""
    try:
        value = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(value) or value < 0:
        return 0.0
    return min(value, goal)


def _divide(numerator: float, denominator: float) -> float:
    # IEEE semantics instead of ZeroDivisionError
    try:
        return numerator / denominator
    except ZeroDivisionError:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator)


def _non_finite(number: float) -> Optional[str]:
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "Infinity" if number > 0 else "-Infinity"
    return None


def format_fixed(number: float, digits: int) -> str:
    """Format with a fixed number of decimals and thousands grouping."""
    return _non_finite(number) or f"{number:,.{digits}f}"


def format_percent(number: float) -> str:
    """Whole percent, rounded half up, right-aligned to three characters."""
    text = _non_finite(number) or str(int(math.floor(number + 0.5)))
    return text.rjust(3)


def format_number(number: float) -> str:
    """Plain number: integral values print without a fractional part."""
    text = _non_finite(number)
    if text is not None:
        return text
    if float(number).is_integer():
        return str(int(number))
    return repr(float(number))


def glyph_width(options: UpdateOptions) -> int:
    """Widest display width among the bar glyphs (at least 1)."""
    return max([display_width(glyph) for glyph in options.glyphs()] + [1])


def bar_width(options: UpdateOptions, available: int) -> int:
    """
    Pick the bar width for ``available`` free cells.

    The result lies within the configured bounds (minimum rounded up, maximum
    rounded down) and is always a whole number of glyphs wide.
    """
    step = glyph_width(options)
    width_min = -(-options.width_min // step) * step
    width_max = options.width_max - options.width_max % step
    width = max(min(width_max, available), width_min)
    return width - width % step


def build_bar(value: float, goal: float, width: int, options: UpdateOptions, completed: bool) -> str:
    """Assemble complete, intermediate, leader and incomplete runs for ``width`` cells."""
    step = glyph_width(options)
    # a goal of 0 means the total is unknown; show the bar full
    complete_width = width * (value / goal if goal > 0 else 1)
    whole_width = int(math.floor(complete_width))
    aligned_width = whole_width - whole_width % step

    intermediate = ""
    ramp = options.symbol_intermediate
    partial = (complete_width - aligned_width) / step
    if ramp and not completed and partial > 0:
        intermediate = ramp[min(int(math.floor(len(ramp) * partial)), len(ramp) - 1)]

    filled_width = aligned_width + display_width(intermediate)
    leader = "" if completed or filled_width >= width else options.symbol_leader

    incomplete_width = width - filled_width - display_width(leader)
    complete_run = options.symbol_complete * (aligned_width // step)
    incomplete_run = options.symbol_incomplete * max(incomplete_width // step, 0)
    return complete_run + intermediate + leader + incomplete_run


class TemplateRenderer:
    """Renders progress lines for a terminal ``columns`` cells wide."""

    def __init__(self, columns: int = 80):
        self.columns = columns

    def render_line(
        self, value: float, options: UpdateOptions, elapsed_ms: float
    ) -> RenderedLine:
        goal = options.goal
        value = clamp_value(value, goal)
        completed = options.auto_complete and value >= goal

        if completed and options.has_complete_template:
            template = options.complete_template
        else:
            template = options.progress_template
        if template is None:
            return RenderedLine(None, completed, value)

        elapsed_s = elapsed_ms / 1000
        rate = _divide(value, elapsed_s)
        eta = _divide(goal - value, rate)
        percent = _divide(value, goal) * 100

        text = template
        for token, replacement in options.token_overrides:
            text = text.replace("{" + token + "}", replacement, 1)

        label = options.label
        text = (
            text.replace("{elapsed}", format_fixed(elapsed_s, 1))
            .replace("{eta}", format_fixed(eta, 1))
            .replace("{goal}", format_number(goal))
            .replace("{percent}", format_percent(percent))
            .replace("{rate}", format_fixed(rate, 2))
            .replace("{value}", format_number(value))
        )
        text = _LABEL_RE.sub(
            lambda m: m.group(1) + label + m.group(2) if label else "", text
        )

        if BAR_TOKEN in text:
            rest_width = display_width(text.replace(BAR_TOKEN, "", 1))
            available = max(0, self.columns - rest_width - SAFETY_MARGIN)
            width = bar_width(options, available)
            text = text.replace(BAR_TOKEN, build_bar(value, goal, width, options, completed), 1)

        text = truncate(text, self.columns - SAFETY_MARGIN)
        return RenderedLine(text, completed, value)
