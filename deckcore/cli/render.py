"""Rendering helpers dedicated to the CLI experience."""

from __future__ import annotations

from typing import Mapping, Sequence

from rich.console import RenderableType
from rich.panel import Panel

from ..models import CardId, CardLayout, CardState
from ..positioning import DeckScene
from .views import LayoutTableView, SceneSummaryView


def format_number(value: float) -> str:
    """Return ``value`` with at most three decimals and no trailing zeros."""

    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def render_layouts(
    cards: Sequence[CardState],
    positions: Mapping[CardId, CardLayout],
    *,
    title: str = "Layout",
) -> RenderableType:
    """Return a Rich panel listing the layout of every card."""

    view = LayoutTableView(cards=cards, positions=positions, number_formatter=format_number)
    return Panel(view.render(), title=title, padding=(0, 1), border_style="cyan")


def render_scene(scene: DeckScene, *, title: str = "Viewport fit") -> RenderableType:
    view = SceneSummaryView(scene=scene, number_formatter=format_number)
    return Panel(view.render(), title=title, padding=(0, 1), border_style="cyan")
