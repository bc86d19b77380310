"""
Color filter.

Reduces the catalog to the cards that may be played in a deck of the
selected colors. A card is playable when its color identity is contained
in the selection; colorless cards need the colorless marker unless no
color was selected; basic lands are always playable.
"""

from collections.abc import Iterable

from deckoracle.models.card import COLORLESS, WUBRG, Card
from deckoracle.models.failure import InvalidColorError
from deckoracle.services.card_catalog import CardCatalog

VALID_SELECTION_SYMBOLS: frozenset[str] = frozenset(WUBRG) | {COLORLESS}

COLOR_NAMES: dict[str, str] = {
    "W": "White",
    "U": "Blue",
    "B": "Black",
    "R": "Red",
    "G": "Green",
    "C": "Colorless",
}


def parse_color_selection(colors: str | Iterable[str] | None) -> frozenset[str]:
    """
    Normalize user input into a color selection.

    Accepts "WU", "w,u", "W U" or an iterable of symbols.

    Raises:
        InvalidColorError: If any symbol is not one of W/U/B/R/G/C
    """
    if colors is None:
        return frozenset()

    if isinstance(colors, str):
        symbols = {ch.upper() for ch in colors if not ch.isspace() and ch != ","}
    else:
        symbols = {str(c).strip().upper() for c in colors if str(c).strip()}

    invalid = symbols - VALID_SELECTION_SYMBOLS
    if invalid:
        raise InvalidColorError(invalid)
    return frozenset(symbols)


def is_playable(card: Card, selection: frozenset[str]) -> bool:
    """Check whether a card is legal in a deck of the selected colors."""
    if card.is_basic_land:
        return True
    if not selection:
        return True

    wubrg = selection - {COLORLESS}
    want_colorless = COLORLESS in selection

    if card.is_colorless:
        return want_colorless or not wubrg

    return card.color_identity <= wubrg


def filter_cards(catalog: CardCatalog, selection: frozenset[str]) -> list[Card]:
    """Playable cards in catalog order."""
    return [card for card in catalog if is_playable(card, selection)]


def filter_card_names(catalog: CardCatalog, selection: frozenset[str]) -> list[str]:
    """
    Names of the cards playable under a color selection.

    Args:
        catalog: Loaded card catalog
        selection: Symbols from W/U/B/R/G/C; empty means no filter

    Returns:
        Card names in catalog order
    """
    return [card.name for card in filter_cards(catalog, selection)]


def describe_colors(selection: Iterable[str]) -> str:
    """Human-readable color list in WUBRG order, e.g. "Red, Green"."""
    ordered = [c for c in (*WUBRG, COLORLESS) if c in set(selection)]
    return ", ".join(COLOR_NAMES[c] for c in ordered)
