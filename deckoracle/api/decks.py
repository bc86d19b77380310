"""
Deck list endpoints.

Parse a model reply into a structured deck with stats, and render a
structured deck back to Arena import text.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from deckoracle.api.dependencies import get_catalog
from deckoracle.models.deck import DeckEntry, DeckStats, ParsedDeck
from deckoracle.services.card_catalog import CardCatalog
from deckoracle.services.deck_formatter import format_deck_text
from deckoracle.services.deck_session import ReplyResult, process_reply

router = APIRouter(prefix="/decks", tags=["decks"])


class DeckEntryModel(BaseModel):
    """A single `count name` entry."""

    count: int = Field(..., gt=0)
    name: str = Field(..., min_length=1)


class DeckModel(BaseModel):
    """Structured deck."""

    main_deck: list[DeckEntryModel] = Field(..., min_length=1)
    sideboard: list[DeckEntryModel] | None = None
    explanation: str = ""


class DeckStatsModel(BaseModel):
    """Aggregate counts for the main deck."""

    total_cards: int
    total_creatures: int
    total_lands: int
    total_spells: int
    mana_curve: dict[str, int]
    unrecognized: list[str] = Field(default_factory=list)


class ParseRequest(BaseModel):
    """Request body for deck parsing."""

    text: str


class ParseResponse(BaseModel):
    """Parsed deck, or found=false when the text holds no deck."""

    found: bool
    deck: DeckModel | None = None
    stats: DeckStatsModel | None = None
    deck_text: str | None = None


class FormatResponse(BaseModel):
    """Arena import text for a deck."""

    deck_text: str


def deck_to_model(deck: ParsedDeck) -> DeckModel:
    return DeckModel(
        main_deck=[DeckEntryModel(count=e.count, name=e.name) for e in deck.main_deck],
        sideboard=(
            [DeckEntryModel(count=e.count, name=e.name) for e in deck.sideboard]
            if deck.sideboard
            else None
        ),
        explanation=deck.explanation,
    )


def model_to_deck(model: DeckModel) -> ParsedDeck:
    return ParsedDeck(
        main_deck=tuple(DeckEntry(count=e.count, name=e.name.strip()) for e in model.main_deck),
        sideboard=(
            tuple(DeckEntry(count=e.count, name=e.name.strip()) for e in model.sideboard)
            if model.sideboard
            else None
        ),
        explanation=model.explanation,
    )


def stats_to_model(stats: DeckStats) -> DeckStatsModel:
    return DeckStatsModel(
        total_cards=stats.total_cards,
        total_creatures=stats.total_creatures,
        total_lands=stats.total_lands,
        total_spells=stats.total_spells,
        mana_curve=dict(stats.mana_curve),
        unrecognized=list(stats.unrecognized),
    )


def result_to_response(result: ReplyResult) -> ParseResponse:
    if result.deck is None or result.stats is None:
        return ParseResponse(found=False)
    return ParseResponse(
        found=True,
        deck=deck_to_model(result.deck),
        stats=stats_to_model(result.stats),
        deck_text=result.deck_text,
    )


@router.post("/parse", response_model=ParseResponse)
async def parse_deck(
    request: ParseRequest,
    catalog: Annotated[CardCatalog, Depends(get_catalog)],
) -> ParseResponse:
    """
    Parse a model reply.

    Returns the structured deck, its stats and Arena import text, or
    found=false when no "Deck" section with entries was recognized.
    """
    return result_to_response(process_reply(request.text, catalog))


@router.post("/format", response_model=FormatResponse)
async def format_deck(request: DeckModel) -> FormatResponse:
    """Render a structured deck as Arena import text."""
    return FormatResponse(deck_text=format_deck_text(model_to_deck(request)))
