"""
DeckOracle services.

Catalog filtering, prompt assembly, reply parsing and deck statistics.
"""

from deckoracle.services.card_catalog import CardCatalog, FieldDefault
from deckoracle.services.color_filter import (
    describe_colors,
    filter_card_names,
    filter_cards,
    is_playable,
    parse_color_selection,
)
from deckoracle.services.deck_formatter import format_deck_text, format_entries
from deckoracle.services.deck_session import DeckSession, ReplyResult, process_reply
from deckoracle.services.deck_stats import compute_stats
from deckoracle.services.decklist_parser import DeckListParser, parse_deck_list
from deckoracle.services.llm_client import TextGenerationClient
from deckoracle.services.prompt_assembler import (
    SYSTEM_PROMPT,
    build_initial_messages,
    build_user_prompt,
    categorize,
    describe_request,
    render_card_list,
)

__all__ = [
    # Catalog
    "CardCatalog",
    "FieldDefault",
    # Color filter
    "describe_colors",
    "filter_card_names",
    "filter_cards",
    "is_playable",
    "parse_color_selection",
    # Prompt assembly
    "SYSTEM_PROMPT",
    "build_initial_messages",
    "build_user_prompt",
    "categorize",
    "describe_request",
    "render_card_list",
    # Reply processing
    "DeckListParser",
    "parse_deck_list",
    "compute_stats",
    "format_deck_text",
    "format_entries",
    # Session
    "DeckSession",
    "ReplyResult",
    "process_reply",
    "TextGenerationClient",
]
