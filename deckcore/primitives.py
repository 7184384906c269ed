"""Animation primitives: pure deck transitions paired with motion sequences.

Every primitive returns a :class:`~deckcore.models.Transition`. The returned
deck is authoritative as soon as it is returned; the sequence only describes
how a driver may animate towards it.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Mapping

from .layout import (
    Layouts,
    compute_fan_layout,
    compute_line_layout,
    compute_ring_layout,
    compute_stack_layout,
)
from .models import (
    AnimateToOptions,
    AnimationSequence,
    AnimationStep,
    CardId,
    CardLayout,
    CardTransform,
    DeckState,
    Easing,
    FanOptions,
    FlipOptions,
    LayoutMode,
    RingOptions,
    SequenceMeta,
    ShuffleOptions,
    Transition,
)
from .shuffle import shuffle_array
from .state import update_card_layout, update_card_state

FAN_DURATION = 400
FAN_STAGGER = 15
STACK_DURATION = 300
LINE_DURATION = 350
LINE_STAGGER = 10
RING_DURATION = 420
RING_STAGGER = 10
SHUFFLE_DURATION = 500
SHUFFLE_STAGGER = 20
SHUFFLE_ITERATIONS = 3
FLIP_DURATION = 400


def _apply_layouts(deck: DeckState, layouts: Mapping[CardId, CardLayout], mode: LayoutMode) -> DeckState:
    # Drawn cards keep their last known position.
    positions = {card.id: deck.positions[card.id] for card in deck.drawn_cards if card.id in deck.positions}
    positions.update(layouts)
    return replace(deck, positions=positions, layout_mode=mode)


def _sequence(
    layouts: Layouts,
    duration: float,
    easing: Easing,
    stagger: float | None = None,
    meta: SequenceMeta | None = None,
) -> AnimationSequence:
    steps = tuple(
        AnimationStep(
            card_id=card_id,
            target=CardTransform.from_layout(
                layout,
                duration=duration,
                easing=easing,
                delay=index * stagger if stagger is not None else None,
            ),
        )
        for index, (card_id, layout) in enumerate(layouts.items())
    )
    return AnimationSequence(steps=steps, stagger=stagger, meta=meta)


def fan(deck: DeckState, options: FanOptions | None = None) -> Transition:
    layouts = compute_fan_layout(deck, options)
    return Transition(
        deck=_apply_layouts(deck, layouts, LayoutMode.FAN),
        sequence=_sequence(layouts, FAN_DURATION, Easing.EASE_OUT, stagger=FAN_STAGGER),
    )


def stack(deck: DeckState) -> Transition:
    layouts = compute_stack_layout(deck)
    return Transition(
        deck=_apply_layouts(deck, layouts, LayoutMode.STACK),
        sequence=_sequence(layouts, STACK_DURATION, Easing.EASE_IN_OUT),
    )


def line(deck: DeckState, spacing: float | None = None) -> Transition:
    layouts = compute_line_layout(deck, spacing)
    return Transition(
        deck=_apply_layouts(deck, layouts, LayoutMode.LINE),
        sequence=_sequence(layouts, LINE_DURATION, Easing.EASE_OUT, stagger=LINE_STAGGER),
    )


def ring(deck: DeckState, options: RingOptions | None = None) -> Transition:
    layouts = compute_ring_layout(deck, options)
    return Transition(
        deck=_apply_layouts(deck, layouts, LayoutMode.RING),
        sequence=_sequence(layouts, RING_DURATION, Easing.EASE_OUT, stagger=RING_STAGGER),
    )


def _layout_for_mode(deck: DeckState, mode: LayoutMode) -> tuple[Layouts, LayoutMode]:
    if mode is LayoutMode.FAN:
        return compute_fan_layout(deck), mode
    if mode is LayoutMode.RING:
        return compute_ring_layout(deck), mode
    if mode is LayoutMode.LINE:
        return compute_line_layout(deck), mode
    return compute_stack_layout(deck), LayoutMode.STACK


def shuffle(deck: DeckState, options: ShuffleOptions | None = None) -> Transition:
    """Permute the in-deck card order and gather the cards again.

    The seed defaults to the deck's configured seed. By default the new order
    is stacked; ``restore_layout`` lays it out in the requested or current mode
    instead.
    """

    options = options or ShuffleOptions()
    seed = options.seed if options.seed is not None else deck.config.seed
    iterations = options.iterations if options.iterations is not None else SHUFFLE_ITERATIONS
    cards = tuple(shuffle_array(deck.cards, seed, iterations))
    shuffled = replace(deck, cards=cards)

    meta = None
    if options.restore_layout:
        layouts, mode = _layout_for_mode(shuffled, options.restore_layout_mode or deck.layout_mode)
        meta = SequenceMeta(type="shuffle", restore_layout_mode=mode)
    else:
        layouts, mode = compute_stack_layout(shuffled), LayoutMode.STACK

    return Transition(
        deck=_apply_layouts(shuffled, layouts, mode),
        sequence=_sequence(layouts, SHUFFLE_DURATION, Easing.SPRING, stagger=SHUFFLE_STAGGER, meta=meta),
    )


def flip(deck: DeckState, card_id: CardId, options: FlipOptions | None = None) -> Transition:
    """Toggle an in-deck card's face; the step keeps its current transform.

    Drawn cards are outside the deck and are left as they are, like unknown ids:
    the same deck comes back with an empty sequence.
    """

    options = options or FlipOptions()
    card = deck.find_card(card_id)
    if card is None:
        return Transition(deck=deck, sequence=AnimationSequence())

    layout = deck.positions.get(card_id, CardLayout())
    target = CardTransform.from_layout(
        layout,
        duration=options.duration if options.duration is not None else FLIP_DURATION,
        easing=options.easing if options.easing is not None else Easing.EASE_IN_OUT,
    )
    return Transition(
        deck=update_card_state(deck, card_id, face_up=not card.face_up),
        sequence=AnimationSequence(
            steps=(AnimationStep(card_id=card_id, target=target),),
            meta=SequenceMeta(type="flip"),
        ),
    )


def animate_to(
    deck: DeckState,
    card_id: CardId,
    target: CardTransform,
    options: AnimateToOptions | None = None,
) -> Transition:
    """Move one card to ``target``; timing options override the target's own."""

    options = options or AnimateToOptions()
    if deck.find_card(card_id) is None and all(card.id != card_id for card in deck.drawn_cards):
        return Transition(deck=deck, sequence=AnimationSequence())

    step_target = replace(
        target,
        duration=options.duration if options.duration is not None else target.duration,
        easing=options.easing if options.easing is not None else target.easing,
        delay=options.delay if options.delay is not None else target.delay,
    )
    layout = target.layout()
    return Transition(
        deck=update_card_layout(
            deck,
            card_id,
            x=layout.x,
            y=layout.y,
            rotation=layout.rotation,
            scale=layout.scale,
            z_index=layout.z_index,
        ),
        sequence=AnimationSequence(steps=(AnimationStep(card_id=card_id, target=step_target),)),
    )
