from deckoracle.models.card import COLORLESS, WUBRG, Card
from deckoracle.models.chat import ChatMessage, DeckRequest
from deckoracle.models.deck import (
    CURVE_BUCKETS,
    DeckEntry,
    DeckFound,
    DeckStats,
    NoDeckFound,
    ParsedDeck,
    ParseOutcome,
)
from deckoracle.models.failure import (
    ApiResponse,
    CatalogLoadError,
    FailureDetail,
    FailureKind,
    InvalidColorError,
    KnownError,
    OutcomeType,
    ServiceUnavailableError,
    SessionBusyError,
    TextGenerationError,
)

__all__ = [
    "COLORLESS",
    "CURVE_BUCKETS",
    "WUBRG",
    "ApiResponse",
    "Card",
    "CatalogLoadError",
    "ChatMessage",
    "DeckEntry",
    "DeckFound",
    "DeckRequest",
    "DeckStats",
    "FailureDetail",
    "FailureKind",
    "InvalidColorError",
    "KnownError",
    "NoDeckFound",
    "OutcomeType",
    "ParseOutcome",
    "ParsedDeck",
    "ServiceUnavailableError",
    "SessionBusyError",
    "TextGenerationError",
]
