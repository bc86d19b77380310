from pathlib import Path
from typing import Any

import pytest
from sqlalchemy.ext.asyncio import create_async_engine

from deckoracle.db.catalog_store import load_card_catalog, load_catalog_rows, write_card_printings
from deckoracle.models.failure import CatalogLoadError


def _printing(
    name: str,
    oracle_id: str,
    lang: str = "en",
    set_code: str = "ONE",
    color_identity: str | None = "[]",
    type_line: str = "Instant",
    rarity: str = "common",
) -> dict[str, Any]:
    return {
        "oracle_id": oracle_id,
        "name": name,
        "lang": lang,
        "set_code": set_code,
        "color_identity": color_identity,
        "type_line": type_line,
        "mana_cost": "{R}",
        "cmc": 1.0,
        "rarity": rarity,
        "oracle_text": "",
        "keywords": "[]",
    }


@pytest.fixture
async def database_url(tmp_path: Path) -> str:
    """A SQLite catalog with reprints, translations and a malformed row."""
    url = f"sqlite+aiosqlite:///{tmp_path / 'cards.sqlite'}"
    engine = create_async_engine(url)
    await write_card_printings(
        engine,
        [
            _printing("Shock", "oid-shock", set_code="M21", rarity="common", color_identity='["R"]'),
            _printing("Shock", "oid-shock", set_code="ONE", rarity="uncommon", color_identity='["R"]'),
            _printing("Choc", "oid-shock", lang="fr", color_identity='["R"]'),
            _printing("Negate", "oid-negate", color_identity='["U"]'),
            _printing("Broken Card", "oid-broken", color_identity="{{not json"),
            _printing("Mountain", "oid-mountain", type_line="Basic Land — Mountain"),
        ],
    )
    await engine.dispose()
    return url


class TestLoadCatalogRows:
    async def test_one_row_per_identity_ordered_by_name(self, database_url: str) -> None:
        rows = await load_catalog_rows(database_url, lang="en")

        assert [row["name"] for row in rows] == ["Broken Card", "Mountain", "Negate", "Shock"]

    async def test_earliest_printing_is_representative(self, database_url: str) -> None:
        rows = await load_catalog_rows(database_url, lang="en")
        shock = next(row for row in rows if row["name"] == "Shock")

        assert shock["rarity"] == "common"

    async def test_language_filter(self, database_url: str) -> None:
        rows = await load_catalog_rows(database_url, lang="fr")

        assert [row["name"] for row in rows] == ["Choc"]


class TestLoadCardCatalog:
    async def test_builds_catalog(self, database_url: str) -> None:
        catalog = await load_card_catalog(database_url, lang="en")

        assert len(catalog) == 4
        assert catalog["Shock"].color_identity == frozenset({"R"})
        assert catalog["Mountain"].is_basic_land

    async def test_malformed_field_does_not_abort_load(self, database_url: str) -> None:
        catalog = await load_card_catalog(database_url, lang="en")

        assert catalog["Broken Card"].color_identity == frozenset()
        assert [d.card_name for d in catalog.defaulted_fields] == ["Broken Card"]

    async def test_missing_file_raises(self, tmp_path: Path) -> None:
        url = f"sqlite+aiosqlite:///{tmp_path / 'missing.sqlite'}"

        with pytest.raises(CatalogLoadError) as exc_info:
            await load_card_catalog(url)

        assert exc_info.value.status_code == 503
        assert not (tmp_path / "missing.sqlite").exists()

    async def test_unreadable_store_raises(self, tmp_path: Path) -> None:
        """A file without the cards table is a load failure."""
        path = tmp_path / "empty.sqlite"
        path.write_bytes(b"")

        with pytest.raises(CatalogLoadError):
            await load_card_catalog(f"sqlite+aiosqlite:///{path}")

    async def test_sync_driver_url_raises(self, database_url: str) -> None:
        """A URL without an async driver is a load failure, not a crash."""
        sync_url = database_url.replace("sqlite+aiosqlite:", "sqlite:")

        with pytest.raises(CatalogLoadError):
            await load_catalog_rows(sync_url)

    async def test_invalid_url_raises(self) -> None:
        with pytest.raises(CatalogLoadError):
            await load_card_catalog("not a database url")
