import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from deckoracle.api import cards_router, chat_router, decks_router, health_router
from deckoracle.config import settings
from deckoracle.db.catalog_store import load_card_catalog
from deckoracle.models.failure import ApiResponse, CatalogLoadError, KnownError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Load the card catalog once; without it deck building stays unavailable."""
    try:
        app.state.catalog = await load_card_catalog()
    except CatalogLoadError as e:
        logger.error("Card catalog unavailable: %s", e.detail or e.message)
        app.state.catalog = None
    yield


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("deckoracle"),
    lifespan=lifespan,
)

app.include_router(cards_router)
app.include_router(chat_router)
app.include_router(decks_router)
app.include_router(health_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(KnownError)
async def known_error_handler(_request: Request, exc: KnownError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(mode="json"),
    )


@app.exception_handler(Exception)
async def unknown_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content=ApiResponse.unknown_failure(exc).model_dump(mode="json"),
    )
