"""
Deck text formatter.

Renders a parsed deck in the Arena import layout, which is also the
layout the deck list parser reads back.
"""

from __future__ import annotations

from collections.abc import Iterable

from deckoracle.models.deck import DeckEntry, ParsedDeck


def format_deck_text(deck: ParsedDeck) -> str:
    """
    Format a deck as Arena import text.

    Example:
        Deck
        4 Shock
        20 Mountain

        Sideboard
        2 Abrade
    """
    lines: list[str] = ["Deck"]
    lines.extend(_format_entry(entry) for entry in deck.main_deck)

    if deck.sideboard:
        lines.append("")
        lines.append("Sideboard")
        lines.extend(_format_entry(entry) for entry in deck.sideboard)

    return "\n".join(lines)


def format_entries(entries: Iterable[DeckEntry]) -> str:
    """Entry lines only, without a section header."""
    return "\n".join(_format_entry(entry) for entry in entries)


def _format_entry(entry: DeckEntry) -> str:
    return f"{entry.count} {entry.name}"
