from __future__ import annotations

import pytest

from deckcore import easing
from deckcore.models import CardLayout, Easing


@pytest.mark.parametrize("name", list(Easing))
def test_curves_start_at_zero_and_end_at_one(name: Easing) -> None:
    curve = easing.get_easing(name)

    assert curve(0.0) == pytest.approx(0.0)
    assert curve(1.0) == pytest.approx(1.0, abs=1e-3)


def test_named_curve_values() -> None:
    assert easing.ease_in(0.5) == 0.25
    assert easing.ease_out(0.5) == 0.75
    assert easing.ease_in_out(0.25) == 0.125
    assert easing.ease_in_out(0.75) == 0.875
    assert easing.spring(0.25) == 0.125
    assert easing.spring(0.9) == 1.0


def test_unknown_names_fall_back_to_linear() -> None:
    assert easing.get_easing("bounce") is easing.linear
    assert easing.get_easing(None) is easing.linear
    assert easing.get_easing("easeOut") is easing.ease_out


def test_interpolate_layout() -> None:
    start = CardLayout(x=0.0, y=0.0, rotation=0.0, scale=1.0, z_index=0)
    target = CardLayout(x=100.0, y=-50.0, rotation=90.0, scale=0.5, z_index=7)

    assert easing.interpolate_layout(start, target, 0.0) == start
    assert easing.interpolate_layout(start, target, 1.0) == target
    halfway = easing.interpolate_layout(start, target, 0.5, Easing.EASE_IN)
    assert halfway == CardLayout(x=25.0, y=-12.5, rotation=22.5, scale=0.875, z_index=7)
    assert easing.interpolate_layout(start, target, 3.0) == target
