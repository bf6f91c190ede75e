"""
Per-line progress options and their layering rules.
"""

import math
from typing import Any, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from rich.style import Style

DEFAULT_PROGRESS_TEMPLATE = "{label} {percent}% {bar} ({elapsed}s) {value}/{goal}"

DEFAULT_SYMBOL_COMPLETE = Style(bgcolor="green").render(" ")
DEFAULT_SYMBOL_INCOMPLETE = Style(bgcolor="white").render(" ")


class UpdateOptions(BaseModel):
    """
    Options controlling how one progress line is rendered.

    Every field can be given as a constructor default and overridden per
    update call. Only fields that were explicitly set take part in layering,
    so an override object carrying just ``label`` leaves everything else as
    it was.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: Optional[Union[int, str]] = Field(
        default=None, description="Stable line identity (defaults to position)"
    )
    goal: float = Field(default=100, description="Value representing 100%")
    label: str = Field(default="", description="Text substituted for {label}")
    progress_template: str = Field(
        default=DEFAULT_PROGRESS_TEMPLATE, description="Line template while running"
    )
    complete_template: Optional[str] = Field(
        default=None,
        description="Line template once completed; only used when set, None hides the line",
    )
    symbol_complete: str = Field(
        default=DEFAULT_SYMBOL_COMPLETE, description="Glyph for completed bar cells"
    )
    symbol_incomplete: str = Field(
        default=DEFAULT_SYMBOL_INCOMPLETE, description="Glyph for remaining bar cells"
    )
    symbol_intermediate: List[str] = Field(
        default_factory=list, description="Ramp of partial-fill glyphs, emptiest first"
    )
    symbol_leader: str = Field(default="", description="Glyph marking the advancing edge")
    width_max: int = Field(default=50, ge=0, description="Maximum bar width in cells")
    width_min: int = Field(default=10, ge=0, description="Minimum bar width in cells")
    auto_complete: bool = Field(
        default=True, description="Mark the line completed when value reaches goal"
    )
    clear_on_complete: bool = Field(
        default=False, description="Suppress the line text once completed"
    )
    token_overrides: List[Tuple[str, str]] = Field(
        default_factory=list,
        description="Ordered (token, replacement) pairs applied before built-in tokens",
    )

    @field_validator("goal")
    @classmethod
    def _lenient_goal(cls, value: float) -> float:
        if not math.isfinite(value) or value < 0:
            return 0.0
        return value

    @field_validator("token_overrides", mode="before")
    @classmethod
    def _overrides_from_mapping(cls, value: Any) -> Any:
        if isinstance(value, Mapping):
            return [(str(k), str(v)) for k, v in value.items()]
        return value

    @property
    def has_complete_template(self) -> bool:
        """True when a completion template (possibly None) was explicitly set."""
        return "complete_template" in self.model_fields_set

    def glyphs(self) -> List[str]:
        """All bar glyphs, used to find the common cell width."""
        return [
            self.symbol_complete,
            self.symbol_incomplete,
            *self.symbol_intermediate,
            self.symbol_leader,
        ]


def coerce_options(options: Any) -> Optional[UpdateOptions]:
    """Accept None, a mapping of option fields, or an UpdateOptions instance."""
    if options is None or isinstance(options, UpdateOptions):
        return options
    if isinstance(options, Mapping):
        return UpdateOptions.model_validate(dict(options))
    raise TypeError(f"unsupported options type: {type(options).__name__}")


def layer_options(*layers: Optional[UpdateOptions]) -> UpdateOptions:
    """
    Merge option layers, lowest precedence first.

    Typical order: constructor defaults, the line's prior resolved options,
    then the current call's overrides. Built-in defaults sit underneath all
    of them as the model's field defaults.
    """
    merged: dict = {}
    for layer in layers:
        if layer is not None:
            merged.update(layer.model_dump(exclude_unset=True))
    return UpdateOptions(**merged)
