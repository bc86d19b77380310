from typing import Any

import pytest

from deckoracle.services.card_catalog import CardCatalog


def _row(
    name: str,
    color_identity: str | None,
    type_line: str,
    mana_cost: str,
    cmc: float,
    rarity: str = "common",
    keywords: str | None = "[]",
    oracle_id: str | None = None,
) -> dict[str, Any]:
    return {
        "oracle_id": oracle_id or f"oid-{name.lower().replace(' ', '-')}",
        "name": name,
        "color_identity": color_identity,
        "type_line": type_line,
        "mana_cost": mana_cost,
        "cmc": cmc,
        "rarity": rarity,
        "oracle_text": "",
        "keywords": keywords,
    }


@pytest.fixture
def catalog_rows() -> list[dict[str, Any]]:
    """Catalog rows as the store returns them, ordered by name."""
    return [
        _row("Atraxa, Grand Unifier", '["W","U","B","G"]', "Legendary Creature — Phyrexian Angel", "{3}{G}{W}{U}{B}", 7.0, "mythic", '["Flying","Vigilance"]'),
        _row("Duress", '["B"]', "Sorcery", "{B}", 1.0),
        _row("Fable of the Mirror-Breaker", '["R"]', "Enchantment — Saga", "{2}{R}", 3.0, "rare"),
        _row("Forest", '["G"]', "Basic Land — Forest", "", 0.0),
        _row("Goblin Guide", '["R"]', "Creature — Goblin Scout", "{R}", 1.0, "rare", '["Haste"]'),
        _row("Invasion of Gobakhan", '["W"]', "Battle — Siege", "{1}{W}", 2.0, "rare"),
        _row("Llanowar Elves", '["G"]', "Creature — Elf Druid", "{G}", 1.0),
        _row("Mountain", '["R"]', "Basic Land — Mountain", "", 0.0),
        _row("Negate", '["U"]', "Instant", "{1}{U}", 2.0),
        _row("Patchwork Banner", "[]", "Artifact", "{3}", 3.0, "uncommon"),
        _row("Restless Vinestalk", '["G"]', "Land", "", 0.0, "rare"),
        _row("Shock", '["R"]', "Instant", "{R}", 1.0),
        _row("Undercity", "[]", "Dungeon", "", 0.0, "special"),
        _row("Wastes", "[]", "Basic Land", "", 0.0),
        _row("Wrenn and Realmbreaker", '["G"]', "Legendary Planeswalker — Wrenn", "{1}{G}{G}", 3.0, "mythic"),
    ]


@pytest.fixture
def catalog(catalog_rows: list[dict[str, Any]]) -> CardCatalog:
    """Small catalog covering every category and color case."""
    return CardCatalog.from_rows(catalog_rows)


@pytest.fixture
def sample_reply() -> str:
    """A typical model reply with a deck, sideboard and explanation."""
    return """Here's an aggressive red list built only from your pool.

Deck
4 Goblin Guide
4x Shock
2 Fable of the Mirror-Breaker
20 Mountain

Sideboard
2 Negate

This deck wants to end the game quickly.
Keep hands with at least two lands."""
