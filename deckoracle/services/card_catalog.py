"""
Card catalog.

In-memory, read-only index of catalog cards keyed by name.

Rows come from the catalog store with JSON-encoded sub-fields. A malformed
sub-field never aborts the load: that field falls back to an empty value
and the fallback is recorded on the catalog.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from deckoracle.models.card import WUBRG, Card

logger = logging.getLogger(__name__)

# Row keys as stored, with the camelCase spellings also accepted
_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "name": ("name",),
    "oracle_id": ("oracle_id", "oracleId"),
    "color_identity": ("color_identity", "colorIdentity"),
    "type_line": ("type_line", "typeLine"),
    "mana_cost": ("mana_cost", "manaCost"),
    "cmc": ("cmc",),
    "rarity": ("rarity",),
    "oracle_text": ("oracle_text", "oracleText"),
    "keywords": ("keywords",),
}


@dataclass(frozen=True, slots=True)
class FieldDefault:
    """Record of a card field that was replaced by its empty default."""

    card_name: str
    field: str


def _get(row: Mapping[str, Any], field: str) -> Any:
    for key in _FIELD_ALIASES[field]:
        if key in row:
            return row[key]
    return None


def _parse_string_set(raw: Any) -> frozenset[str] | None:
    """
    Decode a JSON array of strings.

    Returns an empty set for null/empty input and None when the value
    is present but unusable.
    """
    if raw is None or raw == "":
        return frozenset()

    value = raw
    if isinstance(raw, (str, bytes)):
        try:
            value = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError):
            return None

    if value is None:
        return frozenset()
    if not isinstance(value, (list, tuple, set, frozenset)):
        return None
    if not all(isinstance(item, str) for item in value):
        return None
    return frozenset(value)


def _parse_cmc(raw: Any) -> float | None:
    if raw is None or raw == "":
        return 0.0
    try:
        cmc = float(raw)
    except (TypeError, ValueError):
        return None
    if cmc < 0 or not math.isfinite(cmc):
        return None
    return cmc


def _text(raw: Any) -> str:
    return raw if isinstance(raw, str) else ""


class CardCatalog:
    """
    Read-only lookup of cards by name.

    Usage:
        catalog = CardCatalog.from_rows(rows)
        card = catalog.get("Shock")
        for name in catalog.names: ...
    """

    __slots__ = ("_cards", "_names", "_defaulted")

    def __init__(
        self,
        cards: Iterable[Card],
        defaulted_fields: Iterable[FieldDefault] = (),
    ) -> None:
        by_name: dict[str, Card] = {}
        for card in cards:
            if card.name not in by_name:
                by_name[card.name] = card
        self._cards = by_name
        self._names = tuple(by_name)
        self._defaulted = tuple(defaulted_fields)

    @classmethod
    def from_rows(cls, rows: Iterable[Mapping[str, Any]]) -> CardCatalog:
        """
        Build a catalog from raw catalog rows.

        Rows are taken in the order given. The first row for each identity
        (oracle_id, or the name when there is none) wins, and so does the
        first row for each name.

        Args:
            rows: Mappings with name, color_identity, type_line, mana_cost,
                cmc, rarity, oracle_text, keywords and optionally oracle_id

        Returns:
            CardCatalog with one Card per unique name
        """
        cards: list[Card] = []
        defaulted: list[FieldDefault] = []
        seen_identities: set[str] = set()
        seen_names: set[str] = set()

        for row in rows:
            name = _get(row, "name")
            if not isinstance(name, str) or not name.strip():
                logger.warning("Skipping catalog row without a name: %r", row)
                continue
            name = name.strip()

            oracle_id = _get(row, "oracle_id")
            identity = str(oracle_id) if oracle_id else name
            if identity in seen_identities or name in seen_names:
                continue
            seen_identities.add(identity)
            seen_names.add(name)

            color_identity = _parse_string_set(_get(row, "color_identity"))
            if color_identity is None:
                defaulted.append(FieldDefault(name, "color_identity"))
                color_identity = frozenset()
            else:
                color_identity = color_identity & frozenset(WUBRG)

            keywords = _parse_string_set(_get(row, "keywords"))
            if keywords is None:
                defaulted.append(FieldDefault(name, "keywords"))
                keywords = frozenset()

            cmc = _parse_cmc(_get(row, "cmc"))
            if cmc is None:
                defaulted.append(FieldDefault(name, "cmc"))
                cmc = 0.0

            cards.append(
                Card(
                    name=name,
                    color_identity=color_identity,
                    type_line=_text(_get(row, "type_line")),
                    mana_cost=_text(_get(row, "mana_cost")),
                    cmc=cmc,
                    rarity=_text(_get(row, "rarity")),
                    oracle_text=_text(_get(row, "oracle_text")),
                    keywords=keywords,
                    oracle_id=str(oracle_id) if oracle_id else None,
                )
            )

        for entry in defaulted:
            logger.warning(
                "Malformed %s for %s, using empty default",
                entry.field,
                entry.card_name,
            )

        catalog = cls(cards, defaulted)
        logger.info(
            "catalog_built",
            extra={"cards": len(catalog), "defaulted_fields": len(defaulted)},
        )
        return catalog

    @property
    def names(self) -> tuple[str, ...]:
        """Card names in catalog order."""
        return self._names

    @property
    def defaulted_fields(self) -> tuple[FieldDefault, ...]:
        """Fields that fell back to an empty default during the load."""
        return self._defaulted

    def get(self, name: str) -> Card | None:
        return self._cards.get(name)

    def __getitem__(self, name: str) -> Card:
        return self._cards[name]

    def __contains__(self, name: object) -> bool:
        return name in self._cards

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards.values())

    def __repr__(self) -> str:
        return f"<CardCatalog(cards={len(self._cards)})>"
