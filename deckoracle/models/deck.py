from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Literal

# Mana curve bucket labels, cmc 7 and above share the last bucket
CURVE_BUCKETS: tuple[str, ...] = ("0", "1", "2", "3", "4", "5", "6", "7+")


@dataclass(frozen=True, slots=True)
class DeckEntry:
    """
    One `count name` line of a deck list.

    The name is whatever the text producer wrote; it may not exist
    in the catalog.
    """

    count: int
    name: str


@dataclass(frozen=True, slots=True)
class ParsedDeck:
    """
    A deck recovered from a model reply.

    Attributes:
        main_deck: Main deck entries in reply order (never empty)
        sideboard: Sideboard entries, or None when the reply had none
        explanation: Free text following the deck list ("" when absent)
    """

    main_deck: tuple[DeckEntry, ...]
    sideboard: tuple[DeckEntry, ...] | None = None
    explanation: str = ""

    def main_deck_count(self) -> int:
        """Total cards in the main deck."""
        return sum(entry.count for entry in self.main_deck)

    def sideboard_count(self) -> int:
        """Total cards in the sideboard."""
        if not self.sideboard:
            return 0
        return sum(entry.count for entry in self.sideboard)


@dataclass(frozen=True, slots=True)
class DeckFound:
    """Parse outcome when a structured deck was recognized."""

    deck: ParsedDeck
    kind: Literal["ok"] = "ok"


@dataclass(frozen=True, slots=True)
class NoDeckFound:
    """Parse outcome when the reply contained no main deck entries."""

    kind: Literal["noDeckFound"] = "noDeckFound"


ParseOutcome = DeckFound | NoDeckFound


@dataclass(frozen=True, slots=True)
class DeckStats:
    """
    Aggregate counts for a main deck.

    Purely numeric; formatting is left to the presentation layer.
    """

    total_cards: int = 0
    total_creatures: int = 0
    total_lands: int = 0
    total_spells: int = 0
    mana_curve: Mapping[str, int] = field(
        default_factory=lambda: MappingProxyType({bucket: 0 for bucket in CURVE_BUCKETS})
    )
    unrecognized: tuple[str, ...] = ()

    @property
    def has_unrecognized(self) -> bool:
        return bool(self.unrecognized)
