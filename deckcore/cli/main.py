"""Typer entry-point wiring for the deckcore inspection CLI."""

from __future__ import annotations

import logging
import math

import typer
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .. import primitives
from ..models import CardData, DeckState, FanOptions, LayoutMode, RingOptions, Transition
from ..positioning import calculate_layout_params, compute_deck_scene
from ..shuffle import shuffle_array
from ..state import create_deck_state
from .render import render_layouts, render_scene

app = typer.Typer(add_completion=False, rich_markup_mode="rich")
console = Console()


def _build_cards(count: int) -> list[CardData]:
    return [CardData(id=f"c{idx}", name=f"Card {idx + 1}") for idx in range(count)]


def _build_deck(count: int, seed: int) -> DeckState:
    return create_deck_state(_build_cards(count), {"seed": seed})


def _apply_mode(
    deck: DeckState,
    mode: LayoutMode,
    *,
    radius: float | None = None,
    angle: float | None = None,
    spacing: float | None = None,
) -> Transition:
    if mode is LayoutMode.FAN:
        spread = math.radians(angle) if angle is not None else None
        return primitives.fan(deck, FanOptions(radius=radius, spread_angle=spread))
    if mode is LayoutMode.RING:
        return primitives.ring(deck, RingOptions(radius=radius))
    if mode is LayoutMode.LINE:
        return primitives.line(deck, spacing)
    if mode is LayoutMode.STACK:
        return primitives.stack(deck)
    raise typer.BadParameter(f"mode '{mode.value}' has no computed layout")


@app.callback()
def configure(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log layout parameters and scene metrics."),
) -> None:
    """Inspect layouts, shuffles and viewport fitting for synthetic decks."""

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.command()
def layout(
    mode: LayoutMode = typer.Argument(LayoutMode.FAN, help="Arrangement to compute."),
    cards: int = typer.Option(5, min=0, help="Number of synthetic cards."),
    radius: float | None = typer.Option(None, help="Fan or ring radius override."),
    angle: float | None = typer.Option(None, help="Fan spread in degrees."),
    spacing: float | None = typer.Option(None, help="Line spacing override."),
    seed: int = typer.Option(1, help="Deck seed."),
) -> None:
    """Print the layout computed for each card."""

    deck = _build_deck(cards, seed)
    transition = _apply_mode(deck, mode, radius=radius, angle=angle, spacing=spacing)
    console.print(
        render_layouts(
            transition.deck.cards,
            transition.deck.positions,
            title=f"{mode.value.title()} layout",
        )
    )


@app.command()
def shuffle(
    cards: int = typer.Option(8, min=0, help="Number of synthetic cards."),
    seed: int = typer.Option(42, help="Shuffle seed."),
    iterations: int = typer.Option(3, min=0, help="Fisher-Yates passes."),
) -> None:
    """Print the order produced by the seeded shuffle."""

    order = shuffle_array([card.id for card in _build_cards(cards)], seed, iterations)

    table = Table(title="Shuffled order", box=box.SIMPLE_HEAVY)
    table.add_column("Position", justify="right")
    table.add_column("Card", justify="left")
    for idx, card_id in enumerate(order):
        table.add_row(str(idx), card_id)
    console.print(table)


@app.command()
def fit(
    mode: LayoutMode = typer.Argument(LayoutMode.FAN, help="Arrangement to fit."),
    cards: int = typer.Option(5, min=0, help="Number of synthetic cards."),
    width: float = typer.Option(390.0, min=0.0, help="Container width."),
    height: float = typer.Option(640.0, min=0.0, help="Container height."),
    seed: int = typer.Option(1, help="Deck seed."),
) -> None:
    """Size a layout for a container and print the fitted scene."""

    params = calculate_layout_params(width, height, cards)
    deck = create_deck_state(
        _build_cards(cards),
        {
            "seed": seed,
            "fan_radius": params.fan_radius,
            "ring_radius": params.ring_radius,
            "spacing": params.spacing,
        },
    )
    transition = _apply_mode(deck, mode)
    scene = compute_deck_scene(transition.deck, None, width, height, width, height)
    console.print(render_scene(scene, title=f"{mode.value.title()} in {width:g}×{height:g}"))
    console.print(render_layouts(transition.deck.cards, scene.scaled_positions, title="Scaled positions"))


def main() -> None:
    """Entry-point for ``python -m deckcore.cli``."""

    app()


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    main()
