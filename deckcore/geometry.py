"""Bounding-box math for rotated, scaled cards."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence

import numpy as np

from .models import CardId, CardLayout, CardState


@dataclass(frozen=True, slots=True)
class CardDimensions:
    width: float
    height: float


@dataclass(frozen=True, slots=True)
class DeckBounds:
    """Axis-aligned bounding box in logical coordinates."""

    min_x: float = 0.0
    max_x: float = 0.0
    min_y: float = 0.0
    max_y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    center_x: float = 0.0
    center_y: float = 0.0

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0


ZERO_BOUNDS = DeckBounds()


def calculate_deck_bounds(
    cards: Sequence[CardState],
    positions: Mapping[CardId, CardLayout],
    dimensions: CardDimensions,
) -> DeckBounds:
    """Return the box enclosing every card's rotated rectangle.

    Cards without a layout entry are ignored. An empty deck, or any non-finite
    value along the way, yields :data:`ZERO_BOUNDS`.
    """

    layouts = [positions[card.id] for card in cards if card.id in positions]
    if not layouts:
        return ZERO_BOUNDS

    with np.errstate(invalid="ignore", over="ignore"):
        data = np.array(
            [(layout.x, layout.y, layout.rotation, layout.scale) for layout in layouts],
            dtype=np.float64,
        )
        centers_x, centers_y, rotations, scales = data.T
        widths = dimensions.width * scales
        heights = dimensions.height * scales
        radians = np.deg2rad(rotations)
        cos = np.abs(np.cos(radians))
        sin = np.abs(np.sin(radians))

        half_widths = (cos * widths + sin * heights) / 2
        half_heights = (sin * widths + cos * heights) / 2

        min_x = float(np.min(centers_x - half_widths))
        max_x = float(np.max(centers_x + half_widths))
        min_y = float(np.min(centers_y - half_heights))
        max_y = float(np.max(centers_y + half_heights))

    if not np.all(np.isfinite(data)) or not np.all(np.isfinite([min_x, max_x, min_y, max_y])):
        return ZERO_BOUNDS

    width = max_x - min_x
    height = max_y - min_y
    return DeckBounds(
        min_x=min_x,
        max_x=max_x,
        min_y=min_y,
        max_y=max_y,
        width=width,
        height=height,
        center_x=min_x + width / 2,
        center_y=min_y + height / 2,
    )
