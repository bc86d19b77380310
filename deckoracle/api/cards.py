"""
Card pool endpoints.

Exposes the color-filtered card pool and the prompt block built from it.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from deckoracle.api.dependencies import get_catalog
from deckoracle.services.card_catalog import CardCatalog
from deckoracle.services.color_filter import filter_card_names, parse_color_selection
from deckoracle.services.prompt_assembler import render_card_list

router = APIRouter(prefix="/cards", tags=["cards"])

ColorsQuery = Annotated[
    str,
    Query(description="Color symbols, e.g. 'WU' or 'R,G,C'. Empty means no filter."),
]


class CardPoolResponse(BaseModel):
    """Names playable under a color selection."""

    colors: list[str]
    count: int
    names: list[str]


class CardPromptResponse(BaseModel):
    """Rendered card list block for a color selection."""

    colors: list[str]
    count: int
    text: str


@router.get("", response_model=CardPoolResponse)
async def get_card_pool(
    catalog: Annotated[CardCatalog, Depends(get_catalog)],
    colors: ColorsQuery = "",
) -> CardPoolResponse:
    """List the cards playable in a deck of the given colors, in catalog order."""
    selection = parse_color_selection(colors)
    names = filter_card_names(catalog, selection)
    return CardPoolResponse(colors=sorted(selection), count=len(names), names=names)


@router.get("/prompt", response_model=CardPromptResponse)
async def get_card_prompt(
    catalog: Annotated[CardCatalog, Depends(get_catalog)],
    colors: ColorsQuery = "",
) -> CardPromptResponse:
    """Preview the card list block sent to the model."""
    selection = parse_color_selection(colors)
    names = filter_card_names(catalog, selection)
    return CardPromptResponse(
        colors=sorted(selection),
        count=len(names),
        text=render_card_list(catalog, names),
    )
