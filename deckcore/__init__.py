"""Deterministic layout and animation sequencing for decks of cards."""

from . import (
    assets,
    controller,
    drivers,
    easing,
    geometry,
    layout,
    models,
    observable,
    positioning,
    primitives,
    shuffle,
    state,
)

__all__ = [
    "assets",
    "controller",
    "drivers",
    "easing",
    "geometry",
    "layout",
    "models",
    "observable",
    "positioning",
    "primitives",
    "shuffle",
    "state",
]
