from deckoracle.db.catalog_store import (
    fetch_catalog_rows,
    load_card_catalog,
    load_catalog_rows,
    write_card_printings,
)

__all__ = [
    "fetch_catalog_rows",
    "load_card_catalog",
    "load_catalog_rows",
    "write_card_printings",
]
