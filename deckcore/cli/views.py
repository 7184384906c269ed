"""Composable view primitives for the deckcore CLI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping, Sequence

from rich import box
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table

from ..geometry import DeckBounds
from ..models import CardId, CardLayout, CardState
from ..positioning import DeckScene


@dataclass(slots=True)
class LayoutTableView:
    """Renderable listing each card's computed layout."""

    cards: Sequence[CardState]
    positions: Mapping[CardId, CardLayout]
    number_formatter: Callable[[float], str]

    def render(self) -> RenderableType:
        table = Table(box=box.ROUNDED, expand=True)
        table.add_column("#", justify="right", style="dim")
        table.add_column("Card", justify="left", style="bold")
        table.add_column("Face", justify="left")
        table.add_column("x", justify="right")
        table.add_column("y", justify="right")
        table.add_column("Rotation", justify="right")
        table.add_column("Scale", justify="right")
        table.add_column("z", justify="right")

        fmt = self.number_formatter
        for idx, card in enumerate(self.cards):
            layout = self.positions.get(card.id)
            face = "[green]up[/green]" if card.face_up else "[dim]down[/dim]"
            if layout is None:
                table.add_row(str(idx), card.id, face, "-", "-", "-", "-", "-")
                continue
            table.add_row(
                str(idx),
                card.id,
                face,
                fmt(layout.x),
                fmt(layout.y),
                fmt(layout.rotation),
                fmt(layout.scale),
                str(layout.z_index),
            )
        return table


@dataclass(slots=True)
class SceneSummaryView:
    """Renderable summarising a fitted deck scene."""

    scene: DeckScene
    number_formatter: Callable[[float], str]

    def _bounds_row(self, grid: Table, label: str, bounds: DeckBounds) -> None:
        fmt = self.number_formatter
        grid.add_row(
            f"[cyan]{label}[/cyan]",
            f"{fmt(bounds.width)} × {fmt(bounds.height)} @ ({fmt(bounds.center_x)}, {fmt(bounds.center_y)})",
        )

    def render(self) -> RenderableType:
        fmt = self.number_formatter
        scene = self.scene
        metrics = scene.metrics

        grid = Table.grid(expand=True)
        grid.add_column(justify="left")
        grid.add_column(justify="left")
        grid.add_row("[cyan]Mode[/cyan]", metrics.layout_mode.value)
        grid.add_row("[cyan]Cards[/cyan]", str(metrics.card_count))
        grid.add_row(
            "[cyan]Inner area[/cyan]",
            f"{fmt(metrics.effective_inner_width)} × {fmt(metrics.effective_inner_height)}",
        )
        grid.add_row("[cyan]Fit scale[/cyan]", fmt(scene.fit_scale))
        self._bounds_row(grid, "Unscaled", scene.unscaled_bounds)
        self._bounds_row(grid, "Scaled", scene.scaled_bounds)
        transform = scene.deck_transform
        grid.add_row(
            "[cyan]Translate[/cyan]",
            f"({fmt(transform.translate_x)}, {fmt(transform.translate_y)})",
        )

        meta = Panel(grid, title="Scene", box=box.SQUARE, border_style="blue")
        return Group(meta)
