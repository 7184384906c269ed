"""Named easing curves and layout interpolation for Python-side drivers."""

from __future__ import annotations

from typing import Callable, Final

from .models import CardLayout, Easing

EasingFn = Callable[[float], float]


def linear(t: float) -> float:
    return t


def ease_in(t: float) -> float:
    return t * t


def ease_out(t: float) -> float:
    return t * (2 - t)


def ease_in_out(t: float) -> float:
    return 2 * t * t if t < 0.5 else -1 + (4 - 2 * t) * t


def spring(t: float) -> float:
    """Quadratic wind-up, then an exponential settle capped at 1.

    This is a shaping curve, not a spring simulation.
    """

    if t < 0.5:
        return 2 * t * t
    settled = 1 - 2 ** (-10 * (t - 0.5))
    return min(1.1 * settled, 1.0)


EASINGS: Final[dict[Easing, EasingFn]] = {
    Easing.LINEAR: linear,
    Easing.EASE_IN: ease_in,
    Easing.EASE_OUT: ease_out,
    Easing.EASE_IN_OUT: ease_in_out,
    Easing.SPRING: spring,
}


def get_easing(name: Easing | str | None = None) -> EasingFn:
    """Return the curve for ``name``; unknown or missing names are linear."""

    if name is None:
        return linear
    try:
        return EASINGS[Easing(name)]
    except ValueError:
        return linear


def interpolate_layout(
    start: CardLayout,
    target: CardLayout,
    progress: float,
    easing: Easing | str | None = None,
) -> CardLayout:
    """Return the layout ``progress`` (0..1) of the way from ``start`` to ``target``.

    The stacking index switches to the target's as soon as motion begins.
    """

    clamped = min(max(progress, 0.0), 1.0)
    eased = get_easing(easing)(clamped)

    def lerp(a: float, b: float) -> float:
        return a + (b - a) * eased

    return CardLayout(
        x=lerp(start.x, target.x),
        y=lerp(start.y, target.y),
        rotation=lerp(start.rotation, target.rotation),
        scale=lerp(start.scale, target.scale),
        z_index=start.z_index if clamped <= 0 else target.z_index,
    )
