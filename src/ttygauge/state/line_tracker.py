"""
Line state tracking across update calls.

Updates arrive either as a single value (line 0) or as a list with one entry
per line. An entry of ``None`` leaves its line untouched, and lines missing
from a shorter list keep their previous state, so a caller can refresh one
bar of a stack without restating the others.
"""

from __future__ import annotations

import logging
import numbers
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from ..render.template import RenderedLine
from ..schemas.update_options import UpdateOptions, coerce_options, layer_options
from .progress_line import LineId, LinePosition, ProgressLine

logger = logging.getLogger(__name__)

UpdateEntry = Optional[Tuple[float, Optional[UpdateOptions]]]
RenderFn = Callable[[float, UpdateOptions], RenderedLine]


def _is_scalar(value: Any) -> bool:
    return isinstance(value, numbers.Real)


def _normalize_entry(entry: Any) -> UpdateEntry:
    if entry is None:
        return None
    if _is_scalar(entry):
        return (entry, None)
    if isinstance(entry, (list, tuple)):
        if not entry:
            return None
        overrides = coerce_options(entry[1]) if len(entry) > 1 else None
        return (entry[0], overrides)
    raise TypeError(f"unsupported update entry: {entry!r}")


def normalize_updates(updates: Any, options: Any = None) -> List[UpdateEntry]:
    """
    Turn the public update input into a list of per-line entries.

    Args:
        updates: A number (applies to line 0) or a list whose items are a
            number, a ``(value,)`` / ``(value, options)`` pair, or None
        options: Overrides for the single-value form

    Returns:
        One entry per position, None meaning "no change"
    """
    if _is_scalar(updates):
        return [(updates, coerce_options(options))]
    if isinstance(updates, (list, tuple)):
        if options is not None:
            raise TypeError("per-call options are only accepted with a single value")
        return [_normalize_entry(entry) for entry in updates]
    raise TypeError(f"unsupported update value: {updates!r}")


def merge_line(
    value: float,
    overrides: Optional[UpdateOptions],
    prior: Optional[ProgressLine],
    defaults: Optional[UpdateOptions],
    render: RenderFn,
    identity: LineId,
) -> ProgressLine:
    """
    Produce the next record for one line.

    A completed line is frozen and comes back unchanged. Otherwise options
    are layered (defaults, the line's prior options, this call's overrides)
    and the line is rendered.
    """
    if prior is not None and prior.completed:
        return prior

    options = layer_options(defaults, prior.options if prior else None, overrides)
    rendered = render(value, options)
    text = rendered.text
    if rendered.completed and options.clear_on_complete:
        text = None
    return ProgressLine(
        identity=identity,
        value=rendered.value,
        text=text,
        completed=rendered.completed,
        options=options,
    )


class LineTracker:
    """
    Ordered, keyed collection of progress lines.

    Lines are kept in first-appearance order and looked up by identity: an
    explicit ``id`` option, or else whichever line currently sits at the
    entry's position. Each ``apply`` swaps in a new mapping rather than
    editing records in place.
    """

    def __init__(self, defaults: Optional[UpdateOptions] = None):
        self._defaults = defaults
        self._lines: Dict[LineId, ProgressLine] = {}
        self._order: List[LineId] = []
        self._version = 0

    @property
    def defaults(self) -> Optional[UpdateOptions]:
        return self._defaults

    @property
    def version(self) -> int:
        """Number of merges applied so far."""
        return self._version

    @property
    def lines(self) -> Tuple[ProgressLine, ...]:
        return tuple(self._lines[identity] for identity in self._order)

    def __len__(self) -> int:
        return len(self._order)

    def get(self, identity: LineId) -> Optional[ProgressLine]:
        return self._lines.get(identity)

    def _identity_for(self, index: int, overrides: Optional[UpdateOptions]) -> LineId:
        if overrides is not None and overrides.id is not None:
            return overrides.id
        if index < len(self._order):
            return self._order[index]
        # kept apart from explicit ids, which may also be integers
        return LinePosition(index)

    def apply(self, entries: Sequence[UpdateEntry], render: RenderFn) -> Tuple[ProgressLine, ...]:
        """Merge one update call and return the new ordered lines."""
        lines = dict(self._lines)
        order = list(self._order)
        for index, entry in enumerate(entries):
            if entry is None:
                continue
            value, overrides = entry
            identity = self._identity_for(index, overrides)
            lines[identity] = merge_line(
                value, overrides, lines.get(identity), self._defaults, render, identity
            )
            if identity not in order:
                order.append(identity)

        self._lines = lines
        self._order = order
        self._version += 1
        return self.lines

    def frame(self, dynamic_height: bool = False) -> Tuple[str, ...]:
        """
        Texts to display, top to bottom.

        Suppressed lines show blank, or are left out entirely when
        ``dynamic_height`` is set.
        """
        texts = []
        for line in self.lines:
            if line.text is None:
                if dynamic_height:
                    continue
                texts.append("")
            else:
                texts.append(line.text)
        return tuple(texts)

    def all_completed(self) -> bool:
        lines = self.lines
        return bool(lines) and all(line.completed for line in lines)
