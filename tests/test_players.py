"""Tests for player resolution."""

from datetime import datetime
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from tcgweekly.core.errors import DatabaseError
from tcgweekly.core.players import resolve_player
from tcgweekly.db.repository import Repository


async def test_new_name_creates_player(repo: Repository):
    resolution = await resolve_player(repo, "Serena")
    assert resolution.is_new
    row = await repo.get_player(resolution.player_id)
    assert row is not None
    assert row.name == "Serena"


async def test_second_lookup_returns_same_id(repo: Repository):
    first = await resolve_player(repo, "Clemont")
    second = await resolve_player(repo, "Clemont")
    assert second.player_id == first.player_id
    assert not second.is_new
    assert len(await repo.get_all_players()) == 1


async def test_trailing_space_matches_existing(repo: Repository):
    existing = await repo.create_player("Ash")
    resolution = await resolve_player(repo, "Ash ")
    assert resolution.player_id == existing.id
    assert not resolution.is_new


async def test_case_insensitive_match(repo: Repository):
    existing = await repo.create_player("Ash")
    resolution = await resolve_player(repo, "  aSH")
    assert resolution.player_id == existing.id


async def test_name_is_stored_trimmed(repo: Repository):
    resolution = await resolve_player(repo, "  Dawn  ")
    row = await repo.get_player(resolution.player_id)
    assert row.name == "Dawn"


async def test_oldest_duplicate_wins(repo: Repository):
    first = await repo.create_player("Gary")
    first.created_at = datetime(2020, 1, 1)
    await repo.create_player("GARY")
    resolution = await resolve_player(repo, "gary")
    assert resolution.player_id == first.id


async def test_database_failure_is_generic(repo: Repository):
    repo.find_players_by_name = AsyncMock(  # type: ignore[method-assign]
        side_effect=OperationalError("SELECT", {}, Exception("disk I/O error"))
    )
    with pytest.raises(DatabaseError, match="Failed to process player"):
        await resolve_player(repo, "Max")


async def test_accented_name_matches_other_case(repo: Repository):
    existing = await repo.create_player("Élodie")
    resolution = await resolve_player(repo, "élodie ")
    assert resolution.player_id == existing.id
    assert not resolution.is_new
    assert len(await repo.get_all_players()) == 1


async def test_casefold_matches_sharp_s(repo: Repository):
    existing = await repo.create_player("Strauß")
    resolution = await resolve_player(repo, "STRAUSS")
    assert resolution.player_id == existing.id
