"""
Deck statistics.

Derives type counts and the mana curve for a main deck. Entries whose
name is not in the catalog still count toward the deck size; they are
listed as unrecognized and left out of every other bucket.
"""

import math
from collections.abc import Iterable
from types import MappingProxyType

from deckoracle.models.card import Card
from deckoracle.models.deck import CURVE_BUCKETS, DeckEntry, DeckStats
from deckoracle.services.card_catalog import CardCatalog

# cmc at or above this value shares the last curve bucket
CURVE_CAP = 7


def curve_bucket(card: Card) -> str:
    """Mana curve label for a card: "0".."6" or "7+"."""
    bucket = min(max(math.floor(card.cmc), 0), CURVE_CAP)
    return CURVE_BUCKETS[bucket]


def compute_stats(main_deck: Iterable[DeckEntry], catalog: CardCatalog) -> DeckStats:
    """
    Compute aggregate counts for a main deck.

    Args:
        main_deck: Parsed main deck entries
        catalog: Loaded card catalog

    Returns:
        DeckStats with totals, curve over all eight buckets, and the
        names that are not in the catalog (first occurrence order)
    """
    total_cards = 0
    total_creatures = 0
    total_lands = 0
    total_spells = 0
    mana_curve = {bucket: 0 for bucket in CURVE_BUCKETS}
    unrecognized: list[str] = []

    for entry in main_deck:
        total_cards += entry.count

        card = catalog.get(entry.name)
        if card is None:
            if entry.name not in unrecognized:
                unrecognized.append(entry.name)
            continue

        if card.is_land:
            total_lands += entry.count
            continue

        if "Creature" in card.type_line:
            total_creatures += entry.count
        else:
            total_spells += entry.count
        mana_curve[curve_bucket(card)] += entry.count

    return DeckStats(
        total_cards=total_cards,
        total_creatures=total_creatures,
        total_lands=total_lands,
        total_spells=total_spells,
        mana_curve=MappingProxyType(mana_curve),
        unrecognized=tuple(unrecognized),
    )
