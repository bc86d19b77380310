"""
Shared FastAPI dependencies.

The catalog is loaded once at startup and kept on `app.state`; endpoints
that need it fail with 503 while it is unavailable.
"""

from fastapi import Request

from deckoracle.config import settings
from deckoracle.models.failure import CatalogLoadError, ServiceUnavailableError
from deckoracle.services.card_catalog import CardCatalog
from deckoracle.services.llm_client import TextGenerationClient


def get_loaded_catalog(request: Request) -> CardCatalog | None:
    """The catalog loaded at startup, or None if loading failed."""
    return getattr(request.app.state, "catalog", None)


def get_catalog(request: Request) -> CardCatalog:
    catalog = get_loaded_catalog(request)
    if catalog is None:
        raise CatalogLoadError("Card database not loaded")
    return catalog


def get_text_client() -> TextGenerationClient:
    if not settings.anthropic_api_key:
        raise ServiceUnavailableError(
            "Anthropic API key not configured",
            suggestion="Set ANTHROPIC_API_KEY and restart the service.",
        )
    return TextGenerationClient.from_settings()
