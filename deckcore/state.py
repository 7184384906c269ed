"""Deck state store: construction and pure whole-snapshot transitions."""

from __future__ import annotations

import time
from dataclasses import replace
from typing import Any, Callable, Iterable, Mapping

from .models import (
    CardData,
    CardId,
    CardLayout,
    CardState,
    DeckConfig,
    DeckState,
    LayoutMode,
    Vector2,
)

Clock = Callable[[], int]


def wall_clock_ms() -> int:
    """Return the current wall-clock time in milliseconds."""

    return time.time_ns() // 1_000_000


def create_deck_state(
    cards: Iterable[CardData],
    config: Mapping[str, Any] | DeckConfig | None = None,
    *,
    clock: Clock = wall_clock_ms,
) -> DeckState:
    """Build the initial snapshot for ``cards``.

    Every card starts face down, unselected and draggable, stacked at the
    origin in input order. A missing seed is taken from ``clock``, which is the
    only source of nondeterminism in the engine; pass an explicit seed (or a
    fixed clock) for reproducible decks.
    """

    resolved = DeckConfig.resolve(config)
    if resolved.seed is None:
        resolved = replace(resolved, seed=clock())

    card_states = tuple(CardState(id=card.id, data=card) for card in cards)
    positions = {card.id: CardLayout(z_index=index) for index, card in enumerate(card_states)}
    return DeckState(
        cards=card_states,
        drawn_cards=(),
        positions=positions,
        config=resolved,
        layout_mode=LayoutMode.STACK,
    )


def _has_card(deck: DeckState, card_id: CardId) -> bool:
    return any(card.id == card_id for card in deck.cards) or any(card.id == card_id for card in deck.drawn_cards)


def update_card_state(deck: DeckState, card_id: CardId, **changes: Any) -> DeckState:
    """Return ``deck`` with one card's state shallow-merged with ``changes``."""

    if not _has_card(deck, card_id):
        return deck
    cards = tuple(replace(card, **changes) if card.id == card_id else card for card in deck.cards)
    drawn = tuple(replace(card, **changes) if card.id == card_id else card for card in deck.drawn_cards)
    return replace(deck, cards=cards, drawn_cards=drawn)


def update_card_layout(deck: DeckState, card_id: CardId, **changes: Any) -> DeckState:
    """Return ``deck`` with one card's layout shallow-merged with ``changes``."""

    if not _has_card(deck, card_id):
        return deck
    current = deck.positions.get(card_id, CardLayout())
    positions = dict(deck.positions)
    positions[card_id] = replace(current, **changes)
    return replace(deck, positions=positions)


def set_deck_positions(deck: DeckState, positions: Mapping[CardId, CardLayout]) -> DeckState:
    return replace(deck, positions=dict(positions))


def set_deck_config(
    deck: DeckState,
    config: Mapping[str, Any] | DeckConfig | None = None,
    **changes: Any,
) -> DeckState:
    return replace(deck, config=deck.config.merged(config, **changes))


def set_deck_layout_mode(deck: DeckState, layout_mode: LayoutMode) -> DeckState:
    return replace(deck, layout_mode=LayoutMode(layout_mode))


def draw_card(deck: DeckState, card_id: CardId) -> DeckState:
    """Move a card from the deck to the drawn pile, face up and selected.

    The card keeps its position entry. The draw limit is not checked here;
    that is the orchestration layer's job.
    """

    card = deck.find_card(card_id)
    if card is None:
        return deck
    drawn = replace(card, face_up=True, selected=True)
    remaining = tuple(c for c in deck.cards if c.id != card_id)
    return replace(deck, cards=remaining, drawn_cards=deck.drawn_cards + (drawn,))


def get_hand_origin(
    size: int,
    index: int,
    spacing: float,
    origin: Vector2 | None = None,
) -> Vector2:
    """Return the position of slot ``index`` in a row of ``size`` slots centred on ``origin``."""

    if origin is None:
        origin = Vector2()
    total_width = (size - 1) * spacing
    start_x = origin.x - total_width / 2
    return Vector2(x=start_x + index * spacing, y=origin.y)
