from deckoracle.api.cards import router as cards_router
from deckoracle.api.chat import router as chat_router
from deckoracle.api.decks import router as decks_router
from deckoracle.api.health import router as health_router

__all__ = [
    "cards_router",
    "chat_router",
    "decks_router",
    "health_router",
]
