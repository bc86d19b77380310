"""
Build the card catalog database.

Downloads Scryfall's default-cards bulk data and writes every Arena,
Standard-legal printing into the SQLite `cards` table read by the service.

Usage:
    python -m deckoracle.jobs.build_catalog
    python -m deckoracle.jobs.build_catalog --source data/default-cards.json
"""

import argparse
import asyncio
import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import httpx
from sqlalchemy.ext.asyncio import create_async_engine

from deckoracle.config import settings
from deckoracle.db.catalog_store import write_card_printings

logger = logging.getLogger(__name__)

SCRYFALL_BULK_API = "https://api.scryfall.com/bulk-data"
DATA_DIR = Path("data")
DEFAULT_SOURCE = DATA_DIR / "default-cards.json"


async def download_bulk_cards(
    output_path: Path = DEFAULT_SOURCE,
    client: httpx.AsyncClient | None = None,
) -> Path:
    """
    Download the latest Scryfall default-cards bulk data.

    Raises:
        ValueError: If the bulk data URL is not listed
        httpx.HTTPError: If a download fails
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)

    owns_client = client is None
    client = client or httpx.AsyncClient(
        timeout=30.0, headers={"User-Agent": "DeckOracle/1.0"}
    )
    try:
        response = await client.get(SCRYFALL_BULK_API)
        response.raise_for_status()

        download_url = None
        for item in response.json()["data"]:
            if item["type"] == "default_cards":
                download_url = item["download_uri"]
                break

        if not download_url:
            raise ValueError("Could not find default_cards bulk data URL")

        # Stream download (file is several hundred MB)
        async with client.stream("GET", download_url, timeout=300.0) as stream:
            stream.raise_for_status()
            with open(output_path, "wb") as f:
                async for chunk in stream.aiter_bytes(8192):
                    f.write(chunk)
    finally:
        if owns_client:
            await client.aclose()

    return output_path


def is_arena_standard(card: dict[str, Any]) -> bool:
    """True for printings available on Arena and legal in Standard."""
    return "arena" in card.get("games", []) and card.get("legalities", {}).get("standard") == "legal"


def _face_value(card: dict[str, Any], key: str, separator: str) -> str:
    """Top-level value, or the card faces' values joined for multi-face cards."""
    value = card.get(key)
    if value:
        return str(value)
    faces = card.get("card_faces") or []
    return separator.join(str(face[key]) for face in faces if face.get(key))


def scryfall_card_to_printing(card: dict[str, Any]) -> dict[str, Any] | None:
    """
    Convert a Scryfall card object to a `cards` table row.

    Returns None for objects without an oracle identity (tokens, art cards).
    """
    oracle_id = card.get("oracle_id") or (card.get("card_faces") or [{}])[0].get("oracle_id")
    name = card.get("name")
    if not oracle_id or not name:
        return None

    return {
        "oracle_id": oracle_id,
        "name": name,
        "lang": card.get("lang", "en"),
        "set_code": card.get("set"),
        "color_identity": json.dumps(card.get("color_identity", [])),
        "type_line": _face_value(card, "type_line", " // "),
        "mana_cost": _face_value(card, "mana_cost", " // "),
        "cmc": card.get("cmc", 0.0),
        "rarity": card.get("rarity", ""),
        "oracle_text": _face_value(card, "oracle_text", "\n//\n"),
        "keywords": json.dumps(card.get("keywords", [])),
    }


def select_printings(cards: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """Rows for every Arena Standard printing in the bulk data."""
    printings: list[dict[str, Any]] = []
    for card in cards:
        if not is_arena_standard(card):
            continue
        printing = scryfall_card_to_printing(card)
        if printing is not None:
            printings.append(printing)
    return printings


async def build_catalog(
    source_path: Path = DEFAULT_SOURCE,
    database_url: str | None = None,
) -> int:
    """
    Import bulk data into the catalog database.

    Returns:
        Number of printings written
    """
    database_url = database_url or settings.card_database_url

    with open(source_path, encoding="utf-8") as f:
        cards = json.load(f)

    printings = select_printings(cards)

    engine = create_async_engine(database_url)
    try:
        written = await write_card_printings(engine, printings)
    finally:
        await engine.dispose()

    logger.info("Wrote %d printings to %s", written, database_url)
    return written


async def run_build(source: Path, database_url: str | None, download: bool) -> None:
    if download:
        logger.info("Downloading Scryfall card database...")
        source = await download_bulk_cards(source)
        logger.info("Downloaded card database to %s", source)

    if database_url is None and settings.card_database_url.startswith("sqlite"):
        DATA_DIR.mkdir(parents=True, exist_ok=True)

    await build_catalog(source, database_url)


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Build the DeckOracle card catalog.")
    parser.add_argument("--source", type=Path, default=DEFAULT_SOURCE)
    parser.add_argument("--database-url", default=None)
    parser.add_argument(
        "--skip-download",
        action="store_true",
        help="Use an existing bulk data file instead of downloading",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(run_build(args.source, args.database_url, download=not args.skip_download))


if __name__ == "__main__":
    main()
