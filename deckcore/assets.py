"""Card asset resolution helpers."""

from __future__ import annotations

from .models import CardState, DeckConfig


def _is_valid_asset(value: object) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return True
    if isinstance(value, str):
        return bool(value.strip())
    return False


def resolve_card_back_asset(
    card: CardState,
    config: DeckConfig | None = None,
    default_asset: str | int | None = None,
) -> str | int | None:
    """Pick the back asset for ``card``.

    The card's own ``back_asset`` wins, then the deck's ``default_back_asset``,
    then ``default_asset``. Blank strings are skipped.
    """

    candidates = (
        card.data.back_asset if card.data is not None else None,
        config.default_back_asset if config is not None else None,
        default_asset,
    )
    for candidate in candidates:
        if _is_valid_asset(candidate):
            return candidate
    return None
