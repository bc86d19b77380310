"""
Chat API endpoints for deck generation.

The client holds the conversation. `/chat/generate` starts a new deck from
a color selection; `/chat/` continues an existing conversation. Every reply
is parsed for a deck list, and stats are attached when one is found.
"""

import logging
from typing import Annotated, Literal

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, StringConstraints

from deckoracle.api.decks import DeckModel, DeckStatsModel, deck_to_model, stats_to_model
from deckoracle.api.dependencies import get_catalog, get_text_client
from deckoracle.config import DEFAULT_ARCHETYPE
from deckoracle.models.chat import ChatMessage, DeckRequest
from deckoracle.models.failure import FailureKind, KnownError
from deckoracle.services.card_catalog import CardCatalog
from deckoracle.services.color_filter import parse_color_selection
from deckoracle.services.deck_session import DeckSession, ReplyResult
from deckoracle.services.llm_client import TextGenerationClient
from deckoracle.services.prompt_assembler import describe_request

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


class ChatMessageModel(BaseModel):
    """A single chat message."""

    role: Literal["system", "user", "assistant"]
    content: str


class GenerateRequest(BaseModel):
    """Request body for starting a new deck."""

    colors: str = Field(default="", description="Color symbols, e.g. 'RG' or 'W,U,C'")
    archetype: Annotated[
        str, StringConstraints(strip_whitespace=True, min_length=1, max_length=64)
    ] = DEFAULT_ARCHETYPE
    match_format: Literal["bo1", "bo3"] = "bo3"
    extra_instructions: str = Field(default="", max_length=2000)


class ChatRequest(BaseModel):
    """Request body for continuing a conversation."""

    messages: list[ChatMessageModel] = Field(..., min_length=1)


class ChatResponse(BaseModel):
    """Assistant reply plus the deck it contains, if any."""

    message: ChatMessageModel
    messages: list[ChatMessageModel]
    summary: str | None = None
    deck_found: bool = False
    deck: DeckModel | None = None
    stats: DeckStatsModel | None = None
    deck_text: str | None = None


def _to_message_models(messages: list[ChatMessage]) -> list[ChatMessageModel]:
    return [ChatMessageModel(role=m.role, content=m.content) for m in messages]


async def _run_session(
    session: DeckSession,
    client: TextGenerationClient,
    summary: str | None = None,
) -> ChatResponse:
    result: ReplyResult = await session.send(client)
    if result.failure is not None:
        raise result.failure

    reply = result.reply or ""
    return ChatResponse(
        message=ChatMessageModel(role="assistant", content=reply),
        messages=_to_message_models(session.messages),
        summary=summary,
        deck_found=result.deck_found,
        deck=deck_to_model(result.deck) if result.deck else None,
        stats=stats_to_model(result.stats) if result.stats else None,
        deck_text=result.deck_text,
    )


@router.post("/generate", response_model=ChatResponse)
async def generate_deck(
    request: GenerateRequest,
    catalog: Annotated[CardCatalog, Depends(get_catalog)],
    client: Annotated[TextGenerationClient, Depends(get_text_client)],
) -> ChatResponse:
    """
    Generate a new deck.

    Filters the catalog by color, sends the card pool to the model, and
    parses the reply. The returned `messages` are the conversation to send
    back to `/chat/` for revisions.
    """
    deck_request = DeckRequest(
        colors=parse_color_selection(request.colors),
        archetype=request.archetype,
        match_format=request.match_format,
        extra_instructions=request.extra_instructions,
    )
    session = DeckSession(catalog)
    session.start(deck_request)

    summary = describe_request(deck_request)
    logger.info("Generating deck: %s", summary.splitlines()[0])
    return await _run_session(session, client, summary=summary)


@router.post("/", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    catalog: Annotated[CardCatalog, Depends(get_catalog)],
    client: Annotated[TextGenerationClient, Depends(get_text_client)],
) -> ChatResponse:
    """
    Continue a deck conversation.

    The last message should be the user's follow-up; the full history
    (including the system prompt) is replayed to the model.
    """
    if request.messages[-1].role != "user":
        raise KnownError(
            kind=FailureKind.INVALID_INPUT,
            message="The last message must come from the user",
            suggestion="Append the follow-up as a user message and resend the conversation.",
            status_code=422,
        )

    session = DeckSession(
        catalog,
        [ChatMessage(role=m.role, content=m.content) for m in request.messages],
    )
    return await _run_session(session, client)
