"""Pure layout functions mapping a deck snapshot to per-card target layouts."""

from __future__ import annotations

import math

from .models import CardId, CardLayout, DeckState, FanOptions, RingOptions, Vector2
from .state import get_hand_origin

Layouts = dict[CardId, CardLayout]


def _degrees(radians: float) -> float:
    return radians * 180 / math.pi


def compute_fan_layout(deck: DeckState, options: FanOptions | None = None) -> Layouts:
    """Spread the in-deck cards along a circular arc.

    The arc is symmetric around the vertical through ``origin``: card ``i`` sits
    at ``(i - middle) * step`` radians from it, so mirrored cards get opposite
    rotations and the middle card of an odd deck sits exactly on the origin.
    """

    options = options or FanOptions()
    config = deck.config
    origin = options.origin if options.origin is not None else Vector2()
    spread_angle = options.spread_angle if options.spread_angle is not None else config.fan_angle
    radius = options.radius if options.radius is not None else config.fan_radius

    count = len(deck.cards)
    middle = (count - 1) / 2
    step = spread_angle / max(count - 1, 1)

    layouts: Layouts = {}
    for index, card in enumerate(deck.cards):
        angle = (index - middle) * step
        layouts[card.id] = CardLayout(
            x=origin.x + radius * math.sin(angle),
            y=origin.y - radius * (1 - math.cos(angle)),
            rotation=_degrees(angle),
            scale=1.0,
            z_index=index,
        )
    return layouts


def compute_stack_layout(deck: DeckState) -> Layouts:
    return {card.id: CardLayout(z_index=index) for index, card in enumerate(deck.cards)}


def compute_line_layout(deck: DeckState, spacing: float | None = None) -> Layouts:
    if spacing is None:
        spacing = deck.config.spacing
    count = len(deck.cards)
    layouts: Layouts = {}
    for index, card in enumerate(deck.cards):
        slot = get_hand_origin(count, index, spacing)
        layouts[card.id] = CardLayout(x=slot.x, y=slot.y, z_index=index)
    return layouts


def compute_ring_layout(deck: DeckState, options: RingOptions | None = None) -> Layouts:
    """Place the in-deck cards at evenly spaced points on a circle.

    The first card sits at ``start_angle`` (the top of the circle by default)
    and the rest follow clockwise in screen coordinates. Each card is rotated so
    that its vertical axis points away from the centre.
    """

    options = options or RingOptions()
    origin = options.origin if options.origin is not None else Vector2()
    radius = options.radius if options.radius is not None else deck.config.ring_radius
    start_angle = options.start_angle if options.start_angle is not None else -math.pi / 2

    count = len(deck.cards)
    layouts: Layouts = {}
    for index, card in enumerate(deck.cards):
        angle = start_angle + 2 * math.pi * index / count
        layouts[card.id] = CardLayout(
            x=origin.x + radius * math.cos(angle),
            y=origin.y + radius * math.sin(angle),
            rotation=_degrees(angle) + 90,
            scale=1.0,
            z_index=index,
        )
    return layouts
