"""Animation driver contract and trivial reference drivers."""

from __future__ import annotations

import asyncio
from typing import Protocol, Sequence, runtime_checkable

from .models import AnimationSequence, CardId


@runtime_checkable
class AnimationDriver(Protocol):
    """Turns an :class:`AnimationSequence` into observed motion.

    Drivers may also expose ``cancel(card_ids=None)``; callers look it up with
    ``getattr`` since it is optional.
    """

    async def play(self, sequence: AnimationSequence) -> None: ...


def sequence_duration(sequence: AnimationSequence) -> float:
    """Return the time in milliseconds until the last step finishes."""

    return max(
        ((step.target.duration or 0) + (step.target.delay or 0) for step in sequence.steps),
        default=0.0,
    )


class NoopAnimationDriver:
    """Waits as long as the sequence would take without animating anything."""

    async def play(self, sequence: AnimationSequence) -> None:
        if not sequence.steps:
            return
        await asyncio.sleep(sequence_duration(sequence) / 1000)

    def cancel(self, card_ids: Sequence[CardId] | None = None) -> None:
        return None


class StaticDriver:
    """Completes every sequence immediately."""

    async def play(self, sequence: AnimationSequence) -> None:
        return None

    def cancel(self, card_ids: Sequence[CardId] | None = None) -> None:
        return None
