"""Value objects shared by the deck layout and sequencing engine."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterator, Mapping

CardId = str


class LayoutMode(str, Enum):
    """Named arrangements a deck can be in."""

    STACK = "stack"
    FAN = "fan"
    LINE = "line"
    RING = "ring"
    CUSTOM = "custom"


class Easing(str, Enum):
    """Easing curves understood by animation drivers."""

    LINEAR = "linear"
    EASE_IN = "easeIn"
    EASE_OUT = "easeOut"
    EASE_IN_OUT = "easeInOut"
    SPRING = "spring"


class DeckEventName(str, Enum):
    """Event types published on a deck's observable."""

    SELECT = "select"
    FLIP = "flip"
    SHUFFLE = "shuffle"
    FAN = "fan"
    RING = "ring"
    DRAW = "draw"


@dataclass(frozen=True, slots=True)
class Vector2:
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True, slots=True)
class CardData:
    """Immutable catalog entry describing a card."""

    id: CardId
    name: str
    description: str | None = None
    face_asset: str | None = None
    back_asset: str | None = None
    metadata: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class CardState:
    """Runtime wrapper around a card; replaced on every transition."""

    id: CardId
    face_up: bool = False
    selected: bool = False
    draggable: bool = True
    data: CardData | None = None


@dataclass(frozen=True, slots=True)
class CardLayout:
    """Logical centre position, rotation (degrees), scale and stacking index."""

    x: float = 0.0
    y: float = 0.0
    rotation: float = 0.0
    scale: float = 1.0
    z_index: int = 0


@dataclass(frozen=True, slots=True)
class CardTransform:
    """Target layout for a single animation step, with timing in milliseconds."""

    x: float
    y: float
    rotation: float
    scale: float
    z_index: int
    duration: float
    easing: Easing | None = None
    delay: float | None = None

    @classmethod
    def from_layout(
        cls,
        layout: CardLayout,
        duration: float,
        easing: Easing | None = None,
        delay: float | None = None,
    ) -> "CardTransform":
        return cls(
            x=layout.x,
            y=layout.y,
            rotation=layout.rotation,
            scale=layout.scale,
            z_index=layout.z_index,
            duration=duration,
            easing=easing,
            delay=delay,
        )

    def layout(self) -> CardLayout:
        """Return the positional part of the transform."""

        return CardLayout(x=self.x, y=self.y, rotation=self.rotation, scale=self.scale, z_index=self.z_index)


@dataclass(frozen=True, slots=True)
class DeckConfig:
    """Resolved deck configuration.

    ``seed`` is ``None`` only on the class defaults; :func:`deckcore.state.create_deck_state`
    always resolves it to a concrete value.
    """

    fan_angle: float = math.pi
    fan_radius: float = 240.0
    spacing: float = 24.0
    seed: int | None = None
    draw_limit: int = 2
    ring_radius: float = 260.0
    default_back_asset: str | None = None

    def merged(self, overrides: "Mapping[str, Any] | DeckConfig | None" = None, **kwargs: Any) -> "DeckConfig":
        """Return a copy with every non-``None`` override applied."""

        values: dict[str, Any] = {}
        if isinstance(overrides, DeckConfig):
            values.update({f.name: getattr(overrides, f.name) for f in fields(DeckConfig)})
        elif overrides:
            values.update(overrides)
        values.update(kwargs)
        known = {f.name for f in fields(DeckConfig)}
        changes = {key: value for key, value in values.items() if key in known and value is not None}
        return replace(self, **changes)

    @classmethod
    def resolve(cls, overrides: "Mapping[str, Any] | DeckConfig | None" = None) -> "DeckConfig":
        """Merge ``overrides`` over the documented defaults."""

        return cls().merged(overrides)


@dataclass(frozen=True, slots=True)
class DeckState:
    """Full snapshot of a deck. Never mutated; transitions build a new one."""

    cards: tuple[CardState, ...]
    drawn_cards: tuple[CardState, ...]
    positions: Mapping[CardId, CardLayout]
    config: DeckConfig
    layout_mode: LayoutMode = LayoutMode.STACK

    # Compared by value only; card metadata may hold unhashable values.
    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        object.__setattr__(self, "positions", MappingProxyType(dict(self.positions)))

    def find_card(self, card_id: CardId) -> CardState | None:
        """Return the in-deck card with ``card_id`` or ``None``."""

        for card in self.cards:
            if card.id == card_id:
                return card
        return None

    def card_ids(self) -> tuple[CardId, ...]:
        return tuple(card.id for card in self.cards)


@dataclass(frozen=True, slots=True)
class AnimationStep:
    card_id: CardId
    target: CardTransform


@dataclass(frozen=True, slots=True)
class SequenceMeta:
    """Semantic tag telling a driver how to interpret a sequence."""

    type: str
    restore_layout_mode: LayoutMode | None = None


@dataclass(frozen=True, slots=True)
class AnimationSequence:
    """Declarative list of per-card motions for an external driver."""

    steps: tuple[AnimationStep, ...] = ()
    stagger: float | None = None
    meta: SequenceMeta | None = None

    def card_ids(self) -> tuple[CardId, ...]:
        return tuple(step.card_id for step in self.steps)


@dataclass(frozen=True, slots=True)
class Transition:
    """A new deck snapshot paired with the sequence that animates towards it."""

    deck: DeckState
    sequence: AnimationSequence

    def __iter__(self) -> Iterator[Any]:
        yield self.deck
        yield self.sequence


@dataclass(frozen=True, slots=True)
class FanOptions:
    origin: Vector2 | None = None
    spread_angle: float | None = None
    radius: float | None = None


@dataclass(frozen=True, slots=True)
class RingOptions:
    origin: Vector2 | None = None
    radius: float | None = None
    start_angle: float | None = None


@dataclass(frozen=True, slots=True)
class ShuffleOptions:
    """Options for the shuffle primitive.

    With ``restore_layout`` the shuffled order is laid out again in
    ``restore_layout_mode`` (or the deck's current mode) instead of a stack.
    """

    seed: int | float | None = None
    iterations: int | None = None
    restore_layout: bool = False
    restore_layout_mode: LayoutMode | None = None


@dataclass(frozen=True, slots=True)
class FlipOptions:
    duration: float | None = None
    easing: Easing | None = None


@dataclass(frozen=True, slots=True)
class AnimateToOptions:
    duration: float | None = None
    easing: Easing | None = None
    delay: float | None = None


@dataclass(frozen=True, slots=True)
class SelectEvent:
    card_id: CardId
    selected: bool


@dataclass(frozen=True, slots=True)
class FlipEvent:
    card_id: CardId
    face_up: bool


@dataclass(frozen=True, slots=True)
class ShuffleEvent:
    order: tuple[CardId, ...]


@dataclass(frozen=True, slots=True)
class LayoutEvent:
    """Payload for ``fan`` and ``ring`` events."""

    layouts: Mapping[CardId, CardLayout]


@dataclass(frozen=True, slots=True)
class DrawEvent:
    card_id: CardId
    card: CardState


@dataclass(frozen=True, slots=True)
class DeckEvent:
    type: DeckEventName
    payload: SelectEvent | FlipEvent | ShuffleEvent | LayoutEvent | DrawEvent
