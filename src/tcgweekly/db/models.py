"""SQLAlchemy ORM models for the tcgweekly database.

Tables: players, deck_archetype_1 (primary role), deck_archetype_2
(secondary role), results.
"""

from __future__ import annotations

import uuid
from datetime import UTC, date, datetime

from sqlalchemy import Date, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def _uuid() -> str:
    return str(uuid.uuid4())


def player_name_key(name: str) -> str:
    """Fold a player name to its lookup key: trimmed, Unicode case-folded."""
    return name.strip().casefold()


class Base(DeclarativeBase):
    """Base class for all ORM models."""


class PlayerRow(Base):
    __tablename__ = "players"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    # player_name_key(name); case folding may lengthen the name.
    name_key: Mapped[str] = mapped_column(String(200), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=lambda: datetime.now(UTC))

    results: Mapped[list[ResultRow]] = relationship(back_populates="player")

    __table_args__ = (
        Index("ix_players_name", "name"),
        Index("ix_players_name_key", "name_key"),
    )


class PrimaryArchetypeRow(Base):
    """A Pokémon used as the primary half of a deck archetype."""

    __tablename__ = "deck_archetype_1"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    image_url: Mapped[str] = mapped_column(String(500), default="")
    created_at: Mapped[datetime] = mapped_column(DateTime, default=lambda: datetime.now(UTC))

    __table_args__ = (Index("ix_deck_archetype_1_name", "name"),)


class SecondaryArchetypeRow(Base):
    """A Pokémon used as the optional secondary half of a deck archetype.

    Not deduplicated against ``deck_archetype_1``: the same name may have a
    row in each table.
    """

    __tablename__ = "deck_archetype_2"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    image_url: Mapped[str] = mapped_column(String(500), default="")
    created_at: Mapped[datetime] = mapped_column(DateTime, default=lambda: datetime.now(UTC))

    __table_args__ = (Index("ix_deck_archetype_2_name", "name"),)


class ResultRow(Base):
    __tablename__ = "results"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    week_start: Mapped[date] = mapped_column(Date, nullable=False)
    wins: Mapped[int] = mapped_column(Integer, default=0)
    losses: Mapped[int] = mapped_column(Integer, default=0)
    ties: Mapped[int] = mapped_column(Integer, default=0)
    player_id: Mapped[str] = mapped_column(ForeignKey("players.id"), nullable=False)
    deck_archetype_1_id: Mapped[int] = mapped_column(
        ForeignKey("deck_archetype_1.id"), nullable=False
    )
    deck_archetype_2_id: Mapped[int | None] = mapped_column(
        ForeignKey("deck_archetype_2.id"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=lambda: datetime.now(UTC))

    player: Mapped[PlayerRow] = relationship(back_populates="results")
    deck_archetype_1: Mapped[PrimaryArchetypeRow] = relationship()
    deck_archetype_2: Mapped[SecondaryArchetypeRow | None] = relationship()

    # No unique (player_id, week_start) constraint: the duplicate guard is a
    # best-effort check in the submission path.
    __table_args__ = (
        Index("ix_results_week_start", "week_start"),
        Index("ix_results_player_week", "player_id", "week_start"),
    )
