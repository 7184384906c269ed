"""Orchestration wrapper tying primitives, a driver and the event bus together."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Iterable, Mapping, Sequence

from . import primitives
from .drivers import AnimationDriver
from .models import (
    AnimateToOptions,
    AnimationSequence,
    CardData,
    CardId,
    CardLayout,
    CardState,
    CardTransform,
    DeckConfig,
    DeckEvent,
    DeckEventName,
    DeckState,
    DrawEvent,
    FanOptions,
    FlipEvent,
    FlipOptions,
    LayoutEvent,
    LayoutMode,
    RingOptions,
    SelectEvent,
    ShuffleEvent,
    ShuffleOptions,
    Transition,
)
from .observable import DeckObservable, Listener
from .state import (
    Clock,
    create_deck_state,
    draw_card,
    set_deck_positions,
    update_card_layout,
    update_card_state,
    wall_clock_ms,
)

logger = logging.getLogger(__name__)


class DeckController:
    """Owns one deck snapshot, its listeners and the driver that animates it.

    Every action applies the primitive's returned deck first, then awaits the
    driver, then emits the matching event. Actions on one controller run one
    at a time.
    """

    def __init__(
        self,
        cards: Iterable[CardData],
        driver: AnimationDriver,
        config: Mapping[str, Any] | DeckConfig | None = None,
        *,
        seed_source: Clock = wall_clock_ms,
    ) -> None:
        self._driver = driver
        self._seed_source = seed_source
        self._observable = DeckObservable()
        self._lock = asyncio.Lock()
        self._deck = create_deck_state(cards, config, clock=seed_source)

    @property
    def deck(self) -> DeckState:
        return self._deck

    @property
    def busy(self) -> bool:
        """``True`` while an action's sequence is playing."""

        return self._lock.locked()

    def on(self, event_type: DeckEventName | str, listener: Listener) -> Callable[[], None]:
        return self._observable.on(event_type, listener)

    def off(self, event_type: DeckEventName | str, listener: Listener) -> None:
        self._observable.off(event_type, listener)

    def reset(
        self,
        cards: Iterable[CardData],
        config: Mapping[str, Any] | DeckConfig | None = None,
    ) -> DeckState:
        """Replace the deck wholesale, e.g. when the card set changes."""

        self._deck = create_deck_state(cards, config, clock=self._seed_source)
        return self._deck

    def cancel(self, card_ids: Sequence[CardId] | None = None) -> None:
        cancel = getattr(self._driver, "cancel", None)
        if callable(cancel):
            cancel(card_ids)

    async def _play(self, transition: Transition) -> AnimationSequence:
        self._deck = transition.deck
        await self._driver.play(transition.sequence)
        return transition.sequence

    def _emit(self, event_type: DeckEventName, payload: Any) -> None:
        self._observable.emit(DeckEvent(type=event_type, payload=payload))

    async def fan(self, options: FanOptions | None = None) -> AnimationSequence:
        async with self._lock:
            sequence = await self._play(primitives.fan(self._deck, options))
            self._emit(DeckEventName.FAN, LayoutEvent(layouts=dict(self._deck.positions)))
            return sequence

    async def ring(self, options: RingOptions | None = None) -> AnimationSequence:
        async with self._lock:
            sequence = await self._play(primitives.ring(self._deck, options))
            self._emit(DeckEventName.RING, LayoutEvent(layouts=dict(self._deck.positions)))
            return sequence

    async def stack(self) -> AnimationSequence:
        async with self._lock:
            return await self._play(primitives.stack(self._deck))

    async def line(self, spacing: float | None = None) -> AnimationSequence:
        async with self._lock:
            return await self._play(primitives.line(self._deck, spacing))

    async def shuffle(
        self,
        seed: int | None = None,
        iterations: int | None = None,
        *,
        restore_layout: bool = False,
        restore_layout_mode: LayoutMode | None = None,
    ) -> AnimationSequence:
        """Shuffle the deck; without a seed a fresh one comes from ``seed_source``."""

        async with self._lock:
            options = ShuffleOptions(
                seed=seed if seed is not None else self._seed_source(),
                iterations=iterations,
                restore_layout=restore_layout,
                restore_layout_mode=restore_layout_mode,
            )
            sequence = await self._play(primitives.shuffle(self._deck, options))
            self._emit(DeckEventName.SHUFFLE, ShuffleEvent(order=self._deck.card_ids()))
            return sequence

    async def flip(self, card_id: CardId, options: FlipOptions | None = None) -> AnimationSequence:
        async with self._lock:
            sequence = await self._play(primitives.flip(self._deck, card_id, options))
            card = self._deck.find_card(card_id)
            if card is not None:
                self._emit(DeckEventName.FLIP, FlipEvent(card_id=card_id, face_up=card.face_up))
            return sequence

    async def animate_to(
        self,
        card_id: CardId,
        target: CardTransform,
        options: AnimateToOptions | None = None,
    ) -> AnimationSequence:
        async with self._lock:
            return await self._play(primitives.animate_to(self._deck, card_id, target, options))

    async def select_card(self, card_id: CardId) -> bool | None:
        """Toggle selection; returns the new flag or ``None`` when refused."""

        async with self._lock:
            deck = self._deck
            card = deck.find_card(card_id)
            if card is None:
                logger.warning("select_card: unknown card %r", card_id)
                return None

            selected_count = sum(1 for c in deck.cards if c.selected) + len(deck.drawn_cards)
            if not card.selected and selected_count >= deck.config.draw_limit:
                logger.warning(
                    "select_card: limit reached for %r (%d of %d)",
                    card_id,
                    selected_count,
                    deck.config.draw_limit,
                )
                return None

            selected = not card.selected
            self._deck = update_card_state(deck, card_id, selected=selected)
            self._emit(DeckEventName.SELECT, SelectEvent(card_id=card_id, selected=selected))
            return selected

    def _relayout(self, deck: DeckState) -> Transition:
        mode = deck.layout_mode
        if mode is LayoutMode.STACK:
            return primitives.stack(deck)
        if mode is LayoutMode.RING:
            return primitives.ring(deck)
        if mode is LayoutMode.LINE:
            return primitives.line(deck)
        return primitives.fan(deck)

    async def draw_card(self, card_id: CardId) -> CardState | None:
        """Draw a card and re-lay-out the remaining ones in the current mode."""

        async with self._lock:
            deck = self._deck
            if deck.find_card(card_id) is None:
                logger.warning("draw_card: unknown card %r", card_id)
                return None
            if len(deck.drawn_cards) >= deck.config.draw_limit:
                logger.warning(
                    "draw_card: limit reached for %r (%d drawn, limit %d)",
                    card_id,
                    len(deck.drawn_cards),
                    deck.config.draw_limit,
                )
                return None

            drawn_deck = draw_card(deck, card_id)
            drawn = drawn_deck.drawn_cards[-1]
            await self._play(self._relayout(drawn_deck))
            self._emit(DeckEventName.DRAW, DrawEvent(card_id=card_id, card=drawn))
            return drawn

    def set_layout(self, card_id: CardId, **layout: Any) -> DeckState:
        self._deck = update_card_layout(self._deck, card_id, **layout)
        return self._deck

    def set_positions(self, positions: Mapping[CardId, CardLayout]) -> DeckState:
        self._deck = set_deck_positions(self._deck, positions)
        return self._deck
