from __future__ import annotations

import math

import pytest

from deckcore import layout, state
from deckcore.models import CardData, CardLayout, FanOptions, RingOptions, Vector2


def _deck(count: int, **config: float):
    cards = [CardData(id=f"c{idx}", name=f"Card {idx}") for idx in range(count)]
    return state.create_deck_state(cards, {"seed": 1, **config})


@pytest.mark.parametrize("count", [1, 2, 3, 4, 5, 8, 13])
def test_fan_layout_is_mirror_symmetric(count: int) -> None:
    deck = _deck(count)
    layouts = layout.compute_fan_layout(deck)
    ordered = [layouts[card.id] for card in deck.cards]

    for idx, card_layout in enumerate(ordered):
        mirror = ordered[count - 1 - idx]
        assert card_layout.rotation == -mirror.rotation
        assert card_layout.x == pytest.approx(-mirror.x)
        assert card_layout.y == pytest.approx(mirror.y)
        assert card_layout.z_index == idx
        assert card_layout.scale == 1.0


@pytest.mark.parametrize("count", [1, 3, 5, 9])
def test_fan_middle_card_sits_on_origin(count: int) -> None:
    deck = _deck(count)
    origin = Vector2(12.0, -30.0)
    layouts = layout.compute_fan_layout(deck, FanOptions(origin=origin))
    middle = layouts[deck.cards[(count - 1) // 2].id]

    assert middle.rotation == 0
    assert middle.x == origin.x
    assert middle.y == origin.y


def test_fan_layout_follows_arc_formula() -> None:
    deck = _deck(3)
    layouts = layout.compute_fan_layout(deck)

    # Three cards over a half circle: -90, 0 and +90 degrees.
    assert layouts["c0"].rotation == pytest.approx(-90.0)
    assert layouts["c0"].x == pytest.approx(-240.0)
    assert layouts["c0"].y == pytest.approx(-240.0)
    assert layouts["c2"].x == pytest.approx(240.0)
    assert layouts["c2"].y == pytest.approx(-240.0)


def test_fan_options_override_config() -> None:
    deck = _deck(3, fan_radius=500.0)
    default = layout.compute_fan_layout(deck)
    custom = layout.compute_fan_layout(deck, FanOptions(radius=100.0, spread_angle=math.pi / 2))

    assert default["c2"].x == pytest.approx(500.0)
    assert custom["c2"].x == pytest.approx(100.0 * math.sin(math.pi / 4))
    assert custom["c2"].rotation == pytest.approx(45.0)


def test_fan_layout_is_deterministic() -> None:
    deck = _deck(7)

    assert layout.compute_fan_layout(deck) == layout.compute_fan_layout(deck)


def test_stack_layout_ignores_previous_positions() -> None:
    deck = _deck(4)
    deck = state.set_deck_positions(deck, layout.compute_fan_layout(deck))

    layouts = layout.compute_stack_layout(deck)

    for idx, card in enumerate(deck.cards):
        assert layouts[card.id] == CardLayout(x=0.0, y=0.0, rotation=0.0, scale=1.0, z_index=idx)


def test_line_layout_uses_config_spacing() -> None:
    deck = _deck(3, spacing=30.0)

    layouts = layout.compute_line_layout(deck)

    assert [layouts[card.id].x for card in deck.cards] == [-30.0, 0.0, 30.0]
    assert all(item.rotation == 0.0 and item.y == 0.0 for item in layouts.values())


def test_line_layout_spacing_override() -> None:
    deck = _deck(2)

    layouts = layout.compute_line_layout(deck, spacing=100.0)

    assert layouts["c0"].x == -50.0
    assert layouts["c1"].x == 50.0


def test_ring_layout_spaces_cards_evenly() -> None:
    deck = _deck(4, ring_radius=100.0)

    layouts = layout.compute_ring_layout(deck)

    assert layouts["c0"].x == pytest.approx(0.0, abs=1e-9)
    assert layouts["c0"].y == pytest.approx(-100.0)
    assert layouts["c0"].rotation == pytest.approx(0.0, abs=1e-9)
    assert layouts["c1"].x == pytest.approx(100.0)
    assert layouts["c1"].rotation == pytest.approx(90.0)
    assert layouts["c2"].y == pytest.approx(100.0)
    assert layouts["c3"].x == pytest.approx(-100.0)
    for card_layout in layouts.values():
        assert math.hypot(card_layout.x, card_layout.y) == pytest.approx(100.0)


def test_ring_layout_options() -> None:
    deck = _deck(2)

    layouts = layout.compute_ring_layout(deck, RingOptions(radius=10.0, origin=Vector2(5.0, 5.0), start_angle=0.0))

    assert layouts["c0"].x == pytest.approx(15.0)
    assert layouts["c0"].y == pytest.approx(5.0)
    assert layouts["c1"].x == pytest.approx(-5.0)


@pytest.mark.parametrize(
    "compute",
    [layout.compute_fan_layout, layout.compute_stack_layout, layout.compute_line_layout, layout.compute_ring_layout],
)
def test_layouts_handle_empty_deck(compute) -> None:
    assert compute(_deck(0)) == {}
