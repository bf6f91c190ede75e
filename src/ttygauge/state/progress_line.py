"""
Line records for the progress block.
"""

from dataclasses import dataclass
from typing import NamedTuple, Optional, Union

from ..schemas.update_options import UpdateOptions


class LinePosition(NamedTuple):
    """Identity of a line addressed only by its position in the block."""

    index: int


LineId = Union[int, str, LinePosition]


@dataclass(frozen=True)
class ProgressLine:
    """
    State of one displayed progress row.

    Records are immutable; each frame replaces the records it touches.
    """

    identity: LineId
    value: float
    text: Optional[str]
    completed: bool
    options: UpdateOptions

    @property
    def goal(self) -> float:
        return self.options.goal

    @property
    def label(self) -> str:
        return self.options.label
