"""
Card catalog store.

Reads card rows from the SQLite catalog (or any SQLAlchemy async URL) and
turns them into a CardCatalog. Any failure to reach or read the store is a
CatalogLoadError.
"""

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from deckoracle.config import settings
from deckoracle.models.db import Base, CardPrintingDB
from deckoracle.models.failure import CatalogLoadError
from deckoracle.services.card_catalog import CardCatalog

logger = logging.getLogger(__name__)

CATALOG_COLUMNS = (
    "oracle_id",
    "name",
    "color_identity",
    "type_line",
    "mana_cost",
    "cmc",
    "rarity",
    "oracle_text",
    "keywords",
)


def _check_sqlite_file(database_url: str) -> None:
    """Refuse to open a SQLite file that does not exist (it would be created empty)."""
    try:
        url = make_url(database_url)
    except ArgumentError as e:
        raise CatalogLoadError(f"Invalid database URL: {database_url}") from e

    if url.get_backend_name() != "sqlite":
        return
    database = url.database
    if database and database != ":memory:" and not Path(database).exists():
        raise CatalogLoadError(f"Card database not found at {database}")


async def fetch_catalog_rows(
    engine: AsyncEngine,
    lang: str = "en",
) -> list[dict[str, Any]]:
    """
    Fetch one row per card identity, ordered by name.

    The earliest stored printing of each identity is the representative.
    """
    columns = [getattr(CardPrintingDB, column) for column in CATALOG_COLUMNS]
    first_printing = (
        select(func.min(CardPrintingDB.id))
        .where(CardPrintingDB.lang == lang)
        .group_by(CardPrintingDB.oracle_id)
    )
    stmt = (
        select(*columns)
        .where(CardPrintingDB.id.in_(first_printing))
        .order_by(CardPrintingDB.name, CardPrintingDB.id)
    )
    async with engine.connect() as conn:
        result = await conn.execute(stmt)
        return [dict(row) for row in result.mappings()]


async def load_catalog_rows(
    database_url: str | None = None,
    lang: str | None = None,
) -> list[dict[str, Any]]:
    """
    Load raw catalog rows from the store.

    Raises:
        CatalogLoadError: If the store is missing, unreachable or unreadable
    """
    database_url = database_url or settings.card_database_url
    _check_sqlite_file(database_url)

    try:
        engine = create_async_engine(database_url, echo=settings.debug)
    except (SQLAlchemyError, ImportError) as e:
        logger.error("Cannot open card catalog store: %s", e)
        raise CatalogLoadError(str(e)) from e

    try:
        return await fetch_catalog_rows(engine, lang or settings.card_language)
    except (SQLAlchemyError, OSError) as e:
        logger.error("Failed to load card catalog: %s", e)
        raise CatalogLoadError(str(e)) from e
    finally:
        await engine.dispose()


async def load_card_catalog(
    database_url: str | None = None,
    lang: str | None = None,
) -> CardCatalog:
    """
    Load the card catalog.

    Raises:
        CatalogLoadError: If the store is missing, unreachable or unreadable
    """
    rows = await load_catalog_rows(database_url, lang)
    catalog = CardCatalog.from_rows(rows)
    logger.info("Loaded %d unique cards", len(catalog))
    return catalog


async def write_card_printings(
    engine: AsyncEngine,
    printings: Iterable[Mapping[str, Any]],
) -> int:
    """
    Replace the catalog contents with the given printings.

    Creates the table if needed.

    Returns:
        Number of rows written
    """
    rows = [dict(printing) for printing in printings]
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        await conn.execute(delete(CardPrintingDB))
        if rows:
            await conn.execute(CardPrintingDB.__table__.insert(), rows)
    return len(rows)
