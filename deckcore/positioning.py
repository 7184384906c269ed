"""Viewport fitting: scale and centre a deck's logical layout in a render area.

Layouts are computed in logical coordinates around the origin. A scene maps
them into a concrete container by shrinking everything uniformly (never
enlarging) until the deck's bounding box fits inside the container minus its
padding, then translating the scaled box's centre onto the render area's
centre.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Final, Mapping

from .geometry import ZERO_BOUNDS, CardDimensions, DeckBounds, calculate_deck_bounds
from .models import CardId, CardLayout, DeckState, LayoutMode, Vector2

logger = logging.getLogger(__name__)

CARD_WIDTH: Final[float] = 160.0
CARD_HEIGHT: Final[float] = 240.0
DEFAULT_CARD_DIMENSIONS: Final[CardDimensions] = CardDimensions(CARD_WIDTH, CARD_HEIGHT)

LAYOUT_PADDING: Final[float] = 16.0
SAFETY_MARGIN: Final[float] = 8.0
MIN_FIT_SCALE: Final[float] = 0.1
SCALE_PRECISION: Final[int] = 10_000
POSITION_PRECISION: Final[int] = 1_000
OVERFLOW_TOLERANCE: Final[float] = 1.0

MIN_RING_RADIUS: Final[float] = 72.0


@dataclass(frozen=True, slots=True)
class LayoutParams:
    """Layout inputs sized for a particular container."""

    fan_radius: float
    ring_radius: float
    fan_origin: Vector2
    fan_spread: float
    spacing: float


DEFAULT_LAYOUT_PARAMS: Final[LayoutParams] = LayoutParams(
    fan_radius=240.0,
    ring_radius=260.0,
    fan_origin=Vector2(0.0, 144.0),
    fan_spread=math.pi,
    spacing=24.0,
)


@dataclass(frozen=True, slots=True)
class DeckTransform:
    translate_x: float = 0.0
    translate_y: float = 0.0
    anchor_left: float = 0.0
    anchor_top: float = 0.0


@dataclass(frozen=True, slots=True)
class SceneMetrics:
    layout_width: float
    layout_height: float
    render_width: float
    render_height: float
    inner_width: float
    inner_height: float
    effective_inner_width: float
    effective_inner_height: float
    card_count: int
    layout_mode: LayoutMode


@dataclass(frozen=True, slots=True)
class DeckScene:
    fit_scale: float
    scaled_positions: Mapping[CardId, CardLayout]
    scaled_card_dimensions: CardDimensions
    unscaled_bounds: DeckBounds
    scaled_bounds: DeckBounds
    deck_transform: DeckTransform
    metrics: SceneMetrics


def round_to(value: float, precision: int) -> float:
    """Round half up to ``1 / precision``."""

    return math.floor(value * precision + 0.5) / precision


def inner_size(width: float, height: float) -> tuple[float, float]:
    """Return the usable area once padding and the safety margin are removed."""

    inner_width = max(0.0, width - LAYOUT_PADDING * 2)
    inner_height = max(0.0, height - LAYOUT_PADDING * 2)
    return max(0.0, inner_width - SAFETY_MARGIN * 2), max(0.0, inner_height - SAFETY_MARGIN * 2)


def calculate_layout_params(
    container_width: float,
    container_height: float,
    card_count: int,
    card_dimensions: CardDimensions = DEFAULT_CARD_DIMENSIONS,
) -> LayoutParams:
    """Size the fan, ring and line layouts for a container.

    The ring radius is the smallest radius at which ``card_count`` card
    diagonals fit around the circumference, capped so the ring stays inside the
    container. Degenerate containers, card counts or card dimensions give
    :data:`DEFAULT_LAYOUT_PARAMS`.
    """

    inner_width = max(0.0, container_width - LAYOUT_PADDING * 2)
    inner_height = max(0.0, container_height - LAYOUT_PADDING * 2)
    if inner_width <= 0 or inner_height <= 0 or card_count <= 0:
        return DEFAULT_LAYOUT_PARAMS
    if not (card_dimensions.width > 0 and card_dimensions.height > 0):
        logger.debug("unusable card dimensions %s, using default layout params", card_dimensions)
        return DEFAULT_LAYOUT_PARAMS

    effective_width, effective_height = inner_size(container_width, container_height)
    card_width = card_dimensions.width

    max_fan_by_width = (effective_width - card_width) / 2
    max_fan_by_height = effective_height * 0.68
    dynamic_fan_cap = min(max(140.0, min(effective_width, effective_height) * 0.85), 360.0)
    fan_radius = max(60.0, min(max_fan_by_width, max_fan_by_height, dynamic_fan_cap))

    diagonal = math.hypot(card_dimensions.width, card_dimensions.height)
    no_overlap_radius = card_count * diagonal / (2 * math.pi)
    max_ring_radius = min(effective_width, effective_height) / 2 - diagonal / 2
    ring_radius = max(no_overlap_radius, MIN_RING_RADIUS)
    if max_ring_radius > 0:
        ring_radius = min(ring_radius, max_ring_radius)
    else:
        ring_radius = max(MIN_RING_RADIUS, min(effective_width, effective_height) / 2 - 20)

    spacing = 28.0
    if card_count > 1:
        max_spacing = (effective_width - card_width) / (card_count - 1)
        spacing = max(8.0, min(max_spacing, 32.0))

    params = LayoutParams(
        fan_radius=fan_radius,
        ring_radius=ring_radius,
        fan_origin=Vector2(0.0, fan_radius * 0.6),
        fan_spread=math.pi,
        spacing=spacing,
    )
    logger.debug(
        "layout params for %sx%s with %d cards: %s",
        container_width,
        container_height,
        card_count,
        params,
    )
    return params


def compute_fit_scale(bounds: DeckBounds, inner_width: float, inner_height: float) -> float:
    """Return the uniform scale that fits ``bounds`` into the inner area.

    The scale never exceeds 1, is clamped to :data:`MIN_FIT_SCALE` and rounded
    to four decimals. Degenerate bounds or space give 1.
    """

    if bounds.width <= 0 or bounds.height <= 0 or inner_width <= 0 or inner_height <= 0:
        return 1.0
    scale = min(inner_width / bounds.width, inner_height / bounds.height, 1.0)
    return round_to(max(MIN_FIT_SCALE, scale), SCALE_PRECISION)


def scale_positions(
    positions: Mapping[CardId, CardLayout],
    fit_scale: float,
    card_ids: tuple[CardId, ...] | None = None,
) -> dict[CardId, CardLayout]:
    """Multiply positions and scales by ``fit_scale``; rotation and order are kept."""

    ids = card_ids if card_ids is not None else tuple(positions)
    scaled: dict[CardId, CardLayout] = {}
    for card_id in ids:
        layout = positions.get(card_id)
        if layout is None:
            continue
        scaled[card_id] = CardLayout(
            x=round_to(layout.x * fit_scale, POSITION_PRECISION),
            y=round_to(layout.y * fit_scale, POSITION_PRECISION),
            rotation=layout.rotation,
            scale=round_to(layout.scale * fit_scale, SCALE_PRECISION),
            z_index=layout.z_index,
        )
    return scaled


def compute_deck_transform(bounds: DeckBounds, render_width: float, render_height: float) -> DeckTransform:
    """Translate ``bounds`` so its centre lands on the render area's centre."""

    if render_width <= 0 or render_height <= 0:
        return DeckTransform()
    anchor_left = render_width / 2
    anchor_top = render_height / 2
    return DeckTransform(
        translate_x=round_to(anchor_left - bounds.center_x, POSITION_PRECISION),
        translate_y=round_to(anchor_top - bounds.center_y, POSITION_PRECISION),
        anchor_left=anchor_left,
        anchor_top=anchor_top,
    )


def compute_deck_scene(
    deck: DeckState,
    base_positions: Mapping[CardId, CardLayout] | None,
    layout_width: float,
    layout_height: float,
    render_width: float,
    render_height: float,
    card_dimensions: CardDimensions = DEFAULT_CARD_DIMENSIONS,
) -> DeckScene:
    """Fit the in-deck cards of ``deck`` into a container.

    ``base_positions`` defaults to the deck's own positions. Recompute whenever
    the container size, card count or layout mode changes.
    """

    positions = deck.positions if base_positions is None else base_positions
    inner_width = max(0.0, layout_width - LAYOUT_PADDING * 2)
    inner_height = max(0.0, layout_height - LAYOUT_PADDING * 2)
    effective_width, effective_height = inner_size(layout_width, layout_height)

    if deck.cards:
        unscaled_bounds = calculate_deck_bounds(deck.cards, positions, card_dimensions)
    else:
        unscaled_bounds = ZERO_BOUNDS

    fit_scale = compute_fit_scale(unscaled_bounds, effective_width, effective_height)
    scaled_positions = scale_positions(positions, fit_scale, deck.card_ids())

    if deck.cards:
        scaled_bounds = calculate_deck_bounds(deck.cards, scaled_positions, card_dimensions)
    else:
        scaled_bounds = ZERO_BOUNDS

    if (
        scaled_bounds.width > effective_width + OVERFLOW_TOLERANCE
        or scaled_bounds.height > effective_height + OVERFLOW_TOLERANCE
    ) and effective_width > 0 and effective_height > 0:
        logger.warning(
            "deck overflows %sx%s container at fit scale %s: %s",
            layout_width,
            layout_height,
            fit_scale,
            scaled_bounds,
        )

    metrics = SceneMetrics(
        layout_width=layout_width,
        layout_height=layout_height,
        render_width=render_width,
        render_height=render_height,
        inner_width=inner_width,
        inner_height=inner_height,
        effective_inner_width=effective_width,
        effective_inner_height=effective_height,
        card_count=len(deck.cards),
        layout_mode=deck.layout_mode,
    )
    logger.debug("scene metrics: %s (fit scale %s)", metrics, fit_scale)

    return DeckScene(
        fit_scale=fit_scale,
        scaled_positions=scaled_positions,
        scaled_card_dimensions=CardDimensions(card_dimensions.width * fit_scale, card_dimensions.height * fit_scale),
        unscaled_bounds=unscaled_bounds,
        scaled_bounds=scaled_bounds,
        deck_transform=compute_deck_transform(scaled_bounds, render_width, render_height),
        metrics=metrics,
    )
