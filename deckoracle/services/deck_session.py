"""
Deck-building session.

Holds everything one user's deck conversation needs: the catalog, the
message history, the deck currently on display, and a busy flag that
rejects a second request while one is in flight. Engine functions stay
pure; this object only sequences them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from deckoracle.models.chat import ChatMessage, DeckRequest
from deckoracle.models.deck import DeckFound, DeckStats, ParsedDeck
from deckoracle.models.failure import SessionBusyError, TextGenerationError
from deckoracle.services.card_catalog import CardCatalog
from deckoracle.services.deck_formatter import format_deck_text
from deckoracle.services.deck_stats import compute_stats
from deckoracle.services.decklist_parser import parse_deck_list
from deckoracle.services.prompt_assembler import build_initial_messages

logger = logging.getLogger(__name__)


class ReplyCompleter(Protocol):
    async def complete(self, messages: list[ChatMessage]) -> str: ...


@dataclass(frozen=True, slots=True)
class ReplyResult:
    """
    Outcome of one round trip to the text-generation service.

    Exactly one of `reply` and `failure` is set. `deck`, `stats` and
    `deck_text` are set only when the reply contained a deck.
    """

    reply: str | None = None
    deck: ParsedDeck | None = None
    stats: DeckStats | None = None
    deck_text: str | None = None
    failure: TextGenerationError | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @property
    def error(self) -> str | None:
        return self.failure.message if self.failure is not None else None

    @property
    def deck_found(self) -> bool:
        return self.deck is not None


def process_reply(reply: str, catalog: CardCatalog) -> ReplyResult:
    """Parse a reply and derive stats and deck text when it holds a deck."""
    outcome = parse_deck_list(reply)
    if not isinstance(outcome, DeckFound):
        return ReplyResult(reply=reply)

    deck = outcome.deck
    stats = compute_stats(deck.main_deck, catalog)
    if stats.has_unrecognized:
        logger.info("Reply names %d unrecognized cards", len(stats.unrecognized))
    return ReplyResult(
        reply=reply,
        deck=deck,
        stats=stats,
        deck_text=format_deck_text(deck),
    )


class DeckSession:
    """
    One user's deck conversation.

    Usage:
        session = DeckSession(catalog)
        session.start(DeckRequest(colors=frozenset({"R"})))
        result = await session.send(client)
        session.add_user_message("Swap the sideboard for more removal")
        result = await session.send(client)
    """

    def __init__(
        self,
        catalog: CardCatalog,
        messages: list[ChatMessage] | None = None,
    ) -> None:
        self.catalog = catalog
        self.messages: list[ChatMessage] = list(messages or [])
        self.deck: ParsedDeck | None = None
        self.stats: DeckStats | None = None
        self.deck_text: str = ""
        self.busy = False

    def start(self, request: DeckRequest) -> list[ChatMessage]:
        """Reset the conversation to the opening messages for a new deck."""
        self._ensure_idle()
        self.messages = build_initial_messages(request, self.catalog)
        return list(self.messages)

    def add_user_message(self, content: str) -> None:
        self._ensure_idle()
        self.messages.append(ChatMessage(role="user", content=content))

    async def send(self, client: ReplyCompleter) -> ReplyResult:
        """
        Send the conversation and process the reply.

        A failed call yields a ReplyResult with `failure` set; the current
        deck stays on display and the history is left as it was.

        Raises:
            SessionBusyError: If a request is already in flight
        """
        self._ensure_idle()
        self.busy = True
        try:
            reply = await client.complete(list(self.messages))
        except TextGenerationError as e:
            logger.warning("Deck request failed: %s", e.message)
            return ReplyResult(failure=e)
        finally:
            self.busy = False

        self.messages.append(ChatMessage(role="assistant", content=reply))
        result = process_reply(reply, self.catalog)
        if result.deck is not None:
            self.deck = result.deck
            self.stats = result.stats
            self.deck_text = result.deck_text or ""
        return result

    def _ensure_idle(self) -> None:
        if self.busy:
            raise SessionBusyError()
