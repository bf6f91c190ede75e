"""
Tests for line option validation and layering.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from ttygauge.schemas.update_options import (
    DEFAULT_PROGRESS_TEMPLATE,
    UpdateOptions,
    coerce_options,
    layer_options,
)


def test_defaults_match_documented_values() -> None:
    options = UpdateOptions()
    assert options.goal == 100
    assert options.label == ""
    assert options.progress_template == DEFAULT_PROGRESS_TEMPLATE
    assert options.width_min == 10
    assert options.width_max == 50
    assert options.auto_complete
    assert not options.clear_on_complete
    assert "\x1b[42m" in options.symbol_complete


def test_layering_order_lowest_to_highest() -> None:
    constructor = UpdateOptions(label="ctor", goal=10)
    prior = layer_options(constructor, UpdateOptions(label="prior"))
    merged = layer_options(constructor, prior, UpdateOptions(goal=20))

    assert merged.label == "prior"
    assert merged.goal == 20
    assert merged.width_max == 50


def test_unset_fields_do_not_override() -> None:
    merged = layer_options(UpdateOptions(label="keep"), UpdateOptions(goal=5))
    assert merged.label == "keep"


def test_complete_template_setness_survives_layering() -> None:
    assert not UpdateOptions().has_complete_template
    hidden = UpdateOptions(complete_template=None)
    assert hidden.has_complete_template
    assert layer_options(hidden, UpdateOptions(label="x")).has_complete_template


def test_token_overrides_accept_mapping() -> None:
    options = UpdateOptions(token_overrides={"a": "1", "b": "2"})
    assert options.token_overrides == [("a", "1"), ("b", "2")]


def test_non_finite_or_negative_goal_is_lenient() -> None:
    assert UpdateOptions(goal=float("nan")).goal == 0
    assert UpdateOptions(goal=-5).goal == 0


def test_unknown_option_rejected() -> None:
    with pytest.raises(ValidationError):
        UpdateOptions(colour="red")


def test_options_are_frozen() -> None:
    options = UpdateOptions()
    with pytest.raises(ValidationError):
        options.label = "changed"


def test_coerce_options_variants() -> None:
    assert coerce_options(None) is None
    options = UpdateOptions(label="a")
    assert coerce_options(options) is options
    assert coerce_options({"label": "b"}).label == "b"
    with pytest.raises(TypeError):
        coerce_options(42)
