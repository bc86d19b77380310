"""
SQLAlchemy ORM model for the card catalog store.

The `cards` table keeps one row per printing and language. Color identity
and keywords are stored as JSON array text, exactly as the catalog build
job receives them, and are decoded leniently when the catalog is loaded.
"""

from sqlalchemy import Float, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class CardPrintingDB(Base):
    """A single printing of a card in one language."""

    __tablename__ = "cards"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    oracle_id: Mapped[str] = mapped_column(String(64), index=True)
    name: Mapped[str] = mapped_column(String(255), index=True)
    lang: Mapped[str] = mapped_column(String(8), default="en")
    set_code: Mapped[str | None] = mapped_column(String(16), nullable=True)
    color_identity: Mapped[str | None] = mapped_column(Text, nullable=True)
    type_line: Mapped[str | None] = mapped_column(Text, nullable=True)
    mana_cost: Mapped[str | None] = mapped_column(String(128), nullable=True)
    cmc: Mapped[float | None] = mapped_column(Float, nullable=True)
    rarity: Mapped[str | None] = mapped_column(String(32), nullable=True)
    oracle_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    keywords: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<CardPrintingDB(name={self.name}, set={self.set_code}, lang={self.lang})>"
