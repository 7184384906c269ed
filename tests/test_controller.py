from __future__ import annotations

import asyncio
import logging
from typing import List, Sequence

import pytest

from deckcore import layout
from deckcore.controller import DeckController
from deckcore.drivers import StaticDriver
from deckcore.models import (
    AnimationSequence,
    CardData,
    CardTransform,
    DeckEvent,
    DeckEventName,
    LayoutMode,
)
from deckcore.shuffle import shuffle_array


class RecordingDriver:
    def __init__(self) -> None:
        self.played: List[AnimationSequence] = []
        self.cancelled: List[Sequence[str] | None] = []
        self.controller: DeckController | None = None
        self.seen_decks: list = []

    async def play(self, sequence: AnimationSequence) -> None:
        if self.controller is not None:
            self.seen_decks.append(self.controller.deck)
        self.played.append(sequence)

    def cancel(self, card_ids: Sequence[str] | None = None) -> None:
        self.cancelled.append(card_ids)


class FailingDriver:
    async def play(self, sequence: AnimationSequence) -> None:
        raise RuntimeError("renderer gone")


def _cards(count: int) -> list[CardData]:
    return [CardData(id=f"c{idx}", name=f"Card {idx}") for idx in range(count)]


def _controller(count: int = 5, driver=None, **config: int) -> DeckController:
    return DeckController(_cards(count), driver or RecordingDriver(), {"seed": 11, **config})


def test_state_is_applied_before_playback_and_event_after() -> None:
    async def scenario() -> None:
        driver = RecordingDriver()
        controller = DeckController(_cards(5), driver, {"seed": 11})
        driver.controller = controller
        events: list[DeckEvent] = []
        controller.on(DeckEventName.FAN, events.append)

        sequence = await controller.fan()

        assert driver.played == [sequence]
        assert driver.seen_decks[0].layout_mode is LayoutMode.FAN
        assert controller.deck.layout_mode is LayoutMode.FAN
        assert len(events) == 1
        assert events[0].payload.layouts == dict(controller.deck.positions)

    asyncio.run(scenario())


def test_shuffle_emits_new_order() -> None:
    async def scenario() -> None:
        controller = _controller(6)
        original = controller.deck.cards
        orders: list[tuple[str, ...]] = []
        controller.on("shuffle", lambda event: orders.append(event.payload.order))

        await controller.shuffle(seed=42)

        expected = tuple(card.id for card in shuffle_array(original, 42, 3))
        assert controller.deck.card_ids() == expected
        assert orders == [expected]

    asyncio.run(scenario())


def test_shuffle_without_seed_uses_seed_source() -> None:
    async def scenario() -> None:
        seeds = iter([100, 200, 300])
        controller = DeckController(_cards(8), StaticDriver(), seed_source=lambda: next(seeds))
        original = controller.deck.cards

        assert controller.deck.config.seed == 100
        await controller.shuffle()

        assert controller.deck.cards == tuple(shuffle_array(original, 200, 3))

    asyncio.run(scenario())


def test_flip_emits_face_state_and_ignores_unknown_cards() -> None:
    async def scenario() -> None:
        controller = _controller(3)
        flips: list[tuple[str, bool]] = []
        controller.on(DeckEventName.FLIP, lambda event: flips.append((event.payload.card_id, event.payload.face_up)))

        await controller.flip("c1")
        sequence = await controller.flip("missing")

        assert flips == [("c1", True)]
        assert sequence.steps == ()

    asyncio.run(scenario())


def test_select_respects_draw_limit() -> None:
    async def scenario() -> None:
        controller = _controller(4, draw_limit=2)
        selections: list[tuple[str, bool]] = []
        controller.on("select", lambda event: selections.append((event.payload.card_id, event.payload.selected)))

        assert await controller.select_card("c0") is True
        assert await controller.select_card("c1") is True
        assert await controller.select_card("c2") is None
        assert await controller.select_card("c0") is False
        assert await controller.select_card("c2") is True
        assert await controller.select_card("ghost") is None

        assert selections == [("c0", True), ("c1", True), ("c0", False), ("c2", True)]

    asyncio.run(scenario())


def test_draw_card_moves_card_and_relayouts(caplog: pytest.LogCaptureFixture) -> None:
    async def scenario() -> None:
        driver = RecordingDriver()
        controller = _controller(5, driver=driver, draw_limit=1)
        await controller.fan()
        draws: list[DeckEvent] = []
        controller.on(DeckEventName.DRAW, draws.append)

        drawn = await controller.draw_card("c2")

        assert drawn is not None
        assert drawn.face_up and drawn.selected
        deck = controller.deck
        assert [card.id for card in deck.drawn_cards] == ["c2"]
        assert "c2" not in deck.card_ids()
        assert set(deck.positions) == {"c0", "c1", "c2", "c3", "c4"}
        assert deck.layout_mode is LayoutMode.FAN
        remaining = {card_id: deck.positions[card_id] for card_id in deck.card_ids()}
        assert remaining == layout.compute_fan_layout(deck)
        assert driver.played[-1].card_ids() == ("c0", "c1", "c3", "c4")
        assert [event.payload.card_id for event in draws] == ["c2"]

        with caplog.at_level(logging.WARNING, logger="deckcore.controller"):
            assert await controller.draw_card("c0") is None
            assert await controller.draw_card("ghost") is None

        assert len(controller.deck.drawn_cards) == 1
        assert "limit reached" in caplog.text
        assert "unknown card" in caplog.text

    asyncio.run(scenario())


def test_draw_from_stack_keeps_stack_mode() -> None:
    async def scenario() -> None:
        controller = _controller(3)

        await controller.draw_card("c0")

        assert controller.deck.layout_mode is LayoutMode.STACK
        assert controller.deck.positions["c1"].z_index == 0

    asyncio.run(scenario())


def test_driver_failure_keeps_applied_state_and_skips_event() -> None:
    async def scenario() -> None:
        controller = _controller(3, driver=FailingDriver())
        events: list[DeckEvent] = []
        controller.on(DeckEventName.FAN, events.append)

        with pytest.raises(RuntimeError):
            await controller.fan()

        assert controller.deck.layout_mode is LayoutMode.FAN
        assert events == []
        assert not controller.busy

    asyncio.run(scenario())


def test_actions_are_serialised() -> None:
    async def scenario() -> None:
        release = asyncio.Event()
        order: list[str] = []

        class GatedDriver:
            async def play(self, sequence: AnimationSequence) -> None:
                order.append(f"start:{len(sequence.steps)}")
                await release.wait()
                order.append("end")

        controller = _controller(4, driver=GatedDriver())
        first = asyncio.create_task(controller.fan())
        second = asyncio.create_task(controller.flip("c0"))
        await asyncio.sleep(0)
        assert controller.busy
        release.set()
        await asyncio.gather(first, second)

        assert order == ["start:4", "end", "start:1", "end"]
        assert controller.deck.layout_mode is LayoutMode.FAN
        assert controller.deck.cards[0].face_up

    asyncio.run(scenario())


def test_animate_to_and_direct_setters() -> None:
    async def scenario() -> None:
        controller = _controller(2)
        target = CardTransform(x=5.0, y=6.0, rotation=7.0, scale=1.0, z_index=3, duration=100)

        sequence = await controller.animate_to("c0", target)
        assert sequence.steps[0].target == target
        assert controller.deck.positions["c0"].x == 5.0

        controller.set_layout("c1", rotation=45.0)
        assert controller.deck.positions["c1"].rotation == 45.0

        controller.set_positions({})
        assert controller.deck.positions == {}

    asyncio.run(scenario())


def test_unsubscribe_and_cancel_and_reset() -> None:
    driver = RecordingDriver()
    controller = _controller(2, driver=driver)
    calls: list[DeckEvent] = []
    unsubscribe = controller.on(DeckEventName.FAN, calls.append)
    unsubscribe()

    asyncio.run(controller.fan())
    controller.cancel(["c0"])
    deck = controller.reset(_cards(4), {"seed": 3})

    assert calls == []
    assert driver.cancelled == [["c0"]]
    assert len(deck.cards) == 4
    assert deck.config.seed == 3
    assert controller.deck is deck
