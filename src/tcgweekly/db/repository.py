"""Repository pattern for database access.

Wraps SQLAlchemy async sessions. Every method is a single statement (plus a
flush for inserts); callers compose them without relying on isolation
between steps.
"""

from __future__ import annotations

from datetime import date

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from tcgweekly.db.models import (
    PlayerRow,
    PrimaryArchetypeRow,
    ResultRow,
    SecondaryArchetypeRow,
    player_name_key,
)

ArchetypeModel = type[PrimaryArchetypeRow] | type[SecondaryArchetypeRow]


class Repository:
    """Async repository for all database operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def commit(self) -> None:
        """Persist everything flushed so far; later steps start a new transaction."""
        await self.session.commit()

    # --- Players ---

    async def create_player(self, name: str) -> PlayerRow:
        row = PlayerRow(name=name, name_key=player_name_key(name))
        self.session.add(row)
        await self.session.flush()
        return row

    async def get_player(self, player_id: str) -> PlayerRow | None:
        return await self.session.get(PlayerRow, player_id)

    async def find_players_by_name(self, name: str) -> list[PlayerRow]:
        """Return players whose name equals *name* ignoring case, oldest first."""
        stmt = (
            select(PlayerRow)
            .where(PlayerRow.name_key == player_name_key(name))
            .order_by(PlayerRow.created_at, PlayerRow.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def search_players(self, fragment: str) -> list[PlayerRow]:
        """Return players whose name contains *fragment*, case-insensitively.

        ``%`` and ``_`` in the fragment match literally.
        """
        stmt = (
            select(PlayerRow)
            .where(PlayerRow.name.icontains(fragment, autoescape=True))
            .order_by(PlayerRow.name)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_all_players(self) -> list[PlayerRow]:
        stmt = select(PlayerRow).order_by(PlayerRow.name)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    # --- Deck archetypes ---

    async def find_archetype(self, model: ArchetypeModel, name: str) -> int | None:
        """Return the id of the first row in *model*'s table named exactly *name*."""
        stmt = select(model.id).where(model.name == name).order_by(model.id).limit(1)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create_archetype(
        self, model: ArchetypeModel, name: str, image_url: str
    ) -> PrimaryArchetypeRow | SecondaryArchetypeRow:
        row = model(name=name, image_url=image_url)
        self.session.add(row)
        await self.session.flush()
        return row

    async def archetype_exists(self, model: ArchetypeModel, archetype_id: int) -> bool:
        return await self.session.get(model, archetype_id) is not None

    # --- Results ---

    async def create_result(
        self,
        week_start: date,
        wins: int,
        losses: int,
        ties: int,
        player_id: str,
        deck_archetype_1_id: int,
        deck_archetype_2_id: int | None = None,
    ) -> ResultRow:
        row = ResultRow(
            week_start=week_start,
            wins=wins,
            losses=losses,
            ties=ties,
            player_id=player_id,
            deck_archetype_1_id=deck_archetype_1_id,
            deck_archetype_2_id=deck_archetype_2_id,
        )
        self.session.add(row)
        await self.session.flush()
        return row

    async def get_result_ids_for_player_week(
        self, player_id: str, week_start: date
    ) -> list[int]:
        stmt = select(ResultRow.id).where(
            ResultRow.player_id == player_id,
            ResultRow.week_start == week_start,
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_results_for_week(self, week_start: date) -> int:
        stmt = select(func.count(ResultRow.id)).where(ResultRow.week_start == week_start)
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def get_results_for_player(self, player_id: str) -> list[ResultRow]:
        """Return a player's results with both archetypes loaded, newest week first."""
        stmt = (
            select(ResultRow)
            .where(ResultRow.player_id == player_id)
            .options(
                selectinload(ResultRow.deck_archetype_1),
                selectinload(ResultRow.deck_archetype_2),
            )
            .order_by(ResultRow.week_start.desc(), ResultRow.id.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
