from dataclasses import dataclass, field

# Fixed five-color alphabet used by color identity
WUBRG: tuple[str, ...] = ("W", "U", "B", "R", "G")

# Selection marker meaning "colorless cards permitted"
COLORLESS = "C"


@dataclass(frozen=True, slots=True)
class Card:
    """
    A single catalog card, one per unique name.

    Attributes:
        name: Card name exactly as it appears in Arena
        color_identity: Subset of W/U/B/R/G; empty for colorless cards
        type_line: Full type line (e.g., "Legendary Creature — Elf Druid")
        mana_cost: Display mana cost (e.g., "{1}{G}")
        cmc: Converted mana cost
        rarity: common, uncommon, rare or mythic
        oracle_text: Rules text
        keywords: Ability keywords (e.g., "Flying", "Trample")
        oracle_id: Identity shared by every printing of this card
    """

    name: str
    color_identity: frozenset[str] = field(default_factory=frozenset)
    type_line: str = ""
    mana_cost: str = ""
    cmc: float = 0.0
    rarity: str = ""
    oracle_text: str = ""
    keywords: frozenset[str] = field(default_factory=frozenset)
    oracle_id: str | None = None

    @property
    def is_basic_land(self) -> bool:
        return "Basic Land" in self.type_line

    @property
    def is_land(self) -> bool:
        return "Land" in self.type_line

    @property
    def is_colorless(self) -> bool:
        return not self.color_identity
