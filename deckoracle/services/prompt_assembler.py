"""
Prompt assembly for deck generation.

Groups the playable card pool by category and renders it into a fixed,
scannable block so the model sees the same structure regardless of how
the catalog happens to be ordered.
"""

from collections.abc import Iterable

from deckoracle.models.card import Card
from deckoracle.models.chat import ChatMessage, DeckRequest
from deckoracle.services.card_catalog import CardCatalog
from deckoracle.services.color_filter import describe_colors, filter_card_names

# Type keywords tested in order; first match wins
CATEGORY_KEYWORDS: tuple[str, ...] = (
    "Creature",
    "Instant",
    "Sorcery",
    "Enchantment",
    "Artifact",
    "Planeswalker",
    "Battle",
    "Land",
)

OTHER_CATEGORY = "Other"

CATEGORY_ORDER: tuple[str, ...] = (*CATEGORY_KEYWORDS, OTHER_CATEGORY)

SYSTEM_PROMPT = """You are an expert Magic: The Gathering deck builder specializing in MTG Arena Standard format.

IMPORTANT RULES:
1. You MUST ONLY use cards from the provided card list. Do NOT invent or hallucinate card names.
2. Every card you include MUST appear exactly as named in the provided list.
3. A Standard deck must contain exactly 60 cards in the main deck.
4. For Best-of-3, include a 15-card sideboard.
5. You may include up to 4 copies of any non-basic-land card.
6. Basic lands (Plains, Island, Swamp, Mountain, Forest) have no copy limit.

OUTPUT FORMAT - you MUST output the deck list in this exact MTG Arena import format:

Deck
4 Card Name
3 Another Card
...

Sideboard
2 Sideboard Card
...

The words "Deck" and "Sideboard" go on their own lines. Put exactly one card per line
as "<count> <card name>" with no bullets, numbering or markdown.

After the deck list, you may include a brief explanation of the deck strategy and card choices.

When the user asks you to modify the deck, output the COMPLETE updated deck list in the
same format (not just the changes)."""


def categorize(card: Card) -> str:
    """Category of a card, from its type line."""
    for keyword in CATEGORY_KEYWORDS:
        if keyword in card.type_line:
            return keyword
    return OTHER_CATEGORY


def _category_heading(category: str, size: int) -> str:
    label = category if category == OTHER_CATEGORY else f"{category}s"
    return f"--- {label} ({size}) ---"


def _card_line(card: Card) -> str:
    return f"{card.name} | {card.mana_cost} | {card.type_line} | {card.rarity}"


def group_by_category(catalog: CardCatalog, card_names: Iterable[str]) -> dict[str, list[Card]]:
    """
    Group cards by category, keeping input order within each group.

    Names missing from the catalog are skipped.
    """
    groups: dict[str, list[Card]] = {category: [] for category in CATEGORY_ORDER}
    for name in card_names:
        card = catalog.get(name)
        if card is None:
            continue
        groups[categorize(card)].append(card)
    return groups


def render_card_list(catalog: CardCatalog, card_names: Iterable[str]) -> str:
    """
    Render a card pool as the block embedded in the user prompt.

    Example:
        --- Creatures (1) ---
        Goblin Guide | {R} | Creature — Goblin Scout | rare

        --- Instants (1) ---
        Shock | {R} | Instant | common

    Returns:
        Text block, "" when no card is known
    """
    blocks: list[str] = []
    for category, cards in group_by_category(catalog, card_names).items():
        if not cards:
            continue
        lines = [_category_heading(category, len(cards))]
        lines.extend(_card_line(card) for card in cards)
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)


def describe_request(request: DeckRequest) -> str:
    """Short label for the request as shown in the conversation."""
    label = (
        f"Generate a {describe_colors(request.colors) or 'any-color'} "
        f"{request.archetype} deck ({request.match_format.upper()})"
    )
    if request.extra_instructions.strip():
        label += f"\n{request.extra_instructions.strip()}"
    return label


def build_user_prompt(request: DeckRequest, card_list_text: str) -> str:
    """Compose the opening user message around a rendered card list."""
    colors = describe_colors(request.colors) or "any colors"
    if request.wants_sideboard:
        match_format = "Best of 3 (include a 15-card sideboard)"
    else:
        match_format = "Best of 1 (no sideboard needed)"

    parts = [
        f"Build me a Standard-legal MTG Arena {request.archetype} deck in {colors}.",
        f"Format: {match_format}.",
        "",
        "Here are ALL the legal Standard cards you may choose from "
        "(you MUST only use cards from this list):",
        card_list_text,
        "",
    ]
    extra = request.extra_instructions.strip()
    if extra:
        parts.extend([f"Additional instructions: {extra}", ""])
    parts.append(
        'Remember: output the deck in exact MTG Arena import format, starting with a line '
        'that says "Deck" and one "<count> <card name>" per line, then explain the strategy.'
    )
    return "\n".join(parts)


def build_initial_messages(request: DeckRequest, catalog: CardCatalog) -> list[ChatMessage]:
    """
    Build the opening conversation for a new deck.

    Filters the catalog by the requested colors, renders the pool, and
    wraps it with the system prompt.
    """
    names = filter_card_names(catalog, request.colors)
    card_list_text = render_card_list(catalog, names)
    return [
        ChatMessage(role="system", content=SYSTEM_PROMPT),
        ChatMessage(role="user", content=build_user_prompt(request, card_list_text)),
    ]
