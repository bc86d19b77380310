"""
Deck list parser for model replies.

=============================================================================
INPUT
=============================================================================

A model reply is free prose with an Arena-style deck list somewhere in it:

    Here's a fast red deck!
    Deck
    4 Monastery Swiftspear
    4x Shock
    20 Mountain

    Sideboard
    2 Abrade

    The plan is to attack early and burn out the opponent.

=============================================================================
STATE MACHINE
=============================================================================

Each trimmed line is tokenized first, then fed to a three-state machine:

    NONE ──"Deck"──> IN_DECK ──"Sideboard"──> IN_SIDEBOARD
                        ^                          │
                        └──────────"Deck"──────────┘

- Header lines ("deck" / "sideboard", whole line, any case) switch state
  and are consumed.
- Entry lines ("<count>[x] <name>") are recorded in the current section.
  Entries outside a section are ignored, as are zero counts.
- Explanation starts at the first other non-blank, non-decorative line
  after a main deck entry, unless the sideboard header was just read and
  no sideboard entry has followed yet. From then on, every non-blank line
  that is neither a header nor a recorded entry joins the explanation.
- No main deck entry means no deck.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from deckoracle.models.deck import DeckEntry, DeckFound, NoDeckFound, ParsedDeck, ParseOutcome

# "4 Card Name", "4x Card Name", "04 Card Name"
ENTRY_PATTERN = re.compile(r"^(\d+)[xX]?\s+(.+)$")

# A line made only of dashes or equals signs
DECORATIVE_PATTERN = re.compile(r"^[-=]+$")

DECK_HEADER = "deck"
SIDEBOARD_HEADER = "sideboard"


class ParserState(Enum):
    NONE = "none"
    IN_DECK = "in_deck"
    IN_SIDEBOARD = "in_sideboard"


class LineKind(Enum):
    BLANK = "blank"
    DECK_HEADER = "deck_header"
    SIDEBOARD_HEADER = "sideboard_header"
    ENTRY = "entry"
    DECORATIVE = "decorative"
    TEXT = "text"


@dataclass(frozen=True, slots=True)
class LineToken:
    """A classified reply line."""

    kind: LineKind
    text: str
    count: int = 0
    name: str = ""


def tokenize_line(line: str) -> LineToken:
    """Classify one line of a reply."""
    stripped = line.strip()
    if not stripped:
        return LineToken(LineKind.BLANK, stripped)

    lowered = stripped.lower()
    if lowered == DECK_HEADER:
        return LineToken(LineKind.DECK_HEADER, stripped)
    if lowered == SIDEBOARD_HEADER:
        return LineToken(LineKind.SIDEBOARD_HEADER, stripped)

    match = ENTRY_PATTERN.match(stripped)
    if match:
        count_str, name = match.groups()
        return LineToken(LineKind.ENTRY, stripped, count=int(count_str), name=name.strip())

    if DECORATIVE_PATTERN.match(stripped):
        return LineToken(LineKind.DECORATIVE, stripped)

    return LineToken(LineKind.TEXT, stripped)


class DeckListParser:
    """
    Single-use parser for one model reply.

    Usage:
        outcome = DeckListParser().parse(reply_text)
        if isinstance(outcome, DeckFound): ...
    """

    def __init__(self) -> None:
        self.state = ParserState.NONE
        self.main_deck: list[DeckEntry] = []
        self.sideboard: list[DeckEntry] = []
        self.explanation: list[str] = []
        self.in_explanation = False

    def parse(self, text: str) -> ParseOutcome:
        for line in text.splitlines():
            self.feed(tokenize_line(line))
        return self.result()

    def feed(self, token: LineToken) -> None:
        """Advance the state machine by one line."""
        if token.kind is LineKind.BLANK:
            return

        if token.kind is LineKind.DECK_HEADER:
            self.state = ParserState.IN_DECK
            return

        if token.kind is LineKind.SIDEBOARD_HEADER:
            self.state = ParserState.IN_SIDEBOARD
            return

        if token.kind is LineKind.ENTRY and self.state is not ParserState.NONE:
            if token.count > 0:
                self._current_section().append(DeckEntry(count=token.count, name=token.name))
            elif self.in_explanation:
                self.explanation.append(token.text)
            return

        if not self.in_explanation and self._starts_explanation(token):
            self.in_explanation = True

        if self.in_explanation and token.kind is not LineKind.ENTRY:
            self.explanation.append(token.text)

    def result(self) -> ParseOutcome:
        if not self.main_deck:
            return NoDeckFound()
        return DeckFound(
            ParsedDeck(
                main_deck=tuple(self.main_deck),
                sideboard=tuple(self.sideboard) if self.sideboard else None,
                explanation="\n".join(self.explanation),
            )
        )

    def _current_section(self) -> list[DeckEntry]:
        if self.state is ParserState.IN_SIDEBOARD:
            return self.sideboard
        return self.main_deck

    def _starts_explanation(self, token: LineToken) -> bool:
        if token.kind is not LineKind.TEXT or not self.main_deck:
            return False
        # Prose right under the sideboard header is skipped
        return not (self.state is ParserState.IN_SIDEBOARD and not self.sideboard)


def parse_deck_list(text: str) -> ParseOutcome:
    """
    Extract a deck from a model reply.

    Args:
        text: Raw assistant message content

    Returns:
        DeckFound with the parsed deck, or NoDeckFound when the reply
        contains no main deck entry
    """
    return DeckListParser().parse(text)
