"""Player resolution: find a player by name, or create one."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from sqlalchemy.exc import SQLAlchemyError

from tcgweekly.core.errors import DatabaseError

if TYPE_CHECKING:
    from tcgweekly.db.repository import Repository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlayerResolution:
    player_id: str
    is_new: bool


async def resolve_player(repo: Repository, name: str) -> PlayerResolution:
    """Return the player whose name matches *name*, creating one if needed.

    Matching ignores case and surrounding whitespace. When several rows
    match, the oldest wins. A lookup and an insert are separate statements,
    so two concurrent first submissions under the same name can both insert.
    """
    trimmed = name.strip()
    try:
        existing = await repo.find_players_by_name(trimmed)
        if existing:
            return PlayerResolution(player_id=existing[0].id, is_new=False)

        row = await repo.create_player(trimmed)
    except SQLAlchemyError as exc:
        logger.exception("player_resolution_failed name=%r", trimmed)
        raise DatabaseError("Failed to process player") from exc

    logger.info("player_created id=%s name=%r", row.id, trimmed)
    return PlayerResolution(player_id=row.id, is_new=True)
