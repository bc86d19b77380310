from dataclasses import dataclass, field
from typing import Literal

from deckoracle.config import DEFAULT_ARCHETYPE

Role = Literal["system", "user", "assistant"]
MatchFormat = Literal["bo1", "bo3"]


@dataclass(frozen=True, slots=True)
class ChatMessage:
    """A role-tagged message in a text-generation conversation."""

    role: Role
    content: str


@dataclass(frozen=True, slots=True)
class DeckRequest:
    """
    What the user asked for when starting a new deck.

    Attributes:
        colors: Color selection (W/U/B/R/G plus C for colorless)
        archetype: Play style (e.g., "Aggro", "Control")
        match_format: "bo1" (no sideboard) or "bo3" (15-card sideboard)
        extra_instructions: Free-form additions from the user
    """

    colors: frozenset[str] = field(default_factory=frozenset)
    archetype: str = DEFAULT_ARCHETYPE
    match_format: MatchFormat = "bo3"
    extra_instructions: str = ""

    @property
    def wants_sideboard(self) -> bool:
        return self.match_format == "bo3"
