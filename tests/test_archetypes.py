"""Tests for deck archetype resolution and the meta deck catalogue."""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import IntegrityError

from tcgweekly.config import DEFAULT_POKEMON_SPRITES_BASE
from tcgweekly.core.archetypes import (
    ArchetypeRole,
    resolve_archetype,
    resolve_deck,
    sprite_url,
)
from tcgweekly.core.errors import DatabaseError, SubmissionValidationError
from tcgweekly.core.meta_decks import META_DECKS, active_meta_decks, get_meta_deck
from tcgweekly.db.models import PrimaryArchetypeRow, SecondaryArchetypeRow
from tcgweekly.db.repository import Repository
from tcgweekly.models.submission import CustomPokemon, TournamentRecordRequest


def _form(selected_deck: object, custom: list[CustomPokemon] | None = None):
    return TournamentRecordRequest(
        player_name="Ash",
        date="2025-06-09",
        wins=1,
        selected_deck=selected_deck,
        custom_pokemon=custom or [],
    )


class TestSpriteUrl:
    def test_default_host(self):
        assert sprite_url(25) == f"{DEFAULT_POKEMON_SPRITES_BASE}/25.png"

    def test_custom_host(self):
        assert sprite_url(887, "https://cdn.test/sprites/") == "https://cdn.test/sprites/887.png"


class TestMetaDecks:
    def test_ids_unique(self):
        ids = [d.id for d in META_DECKS]
        assert len(ids) == len(set(ids))

    def test_lookup(self):
        deck = get_meta_deck(2)
        assert deck is not None
        assert [p.name for p in deck.pokemon] == ["Raging Bolt", "Ogerpon"]
        assert get_meta_deck(0) is None

    def test_active_sorted_by_rank(self):
        ranks = [d.rank for d in active_meta_decks()]
        assert ranks == sorted(ranks)


class TestResolveArchetype:
    async def test_creates_then_reuses(self, repo: Repository):
        first = await resolve_archetype(repo, ArchetypeRole.PRIMARY, "Gholdengo", "g.png")
        again = await resolve_archetype(repo, ArchetypeRole.PRIMARY, "Gholdengo", "other.png")
        assert first == again

    async def test_roles_not_deduplicated(self, repo: Repository):
        await resolve_archetype(repo, ArchetypeRole.PRIMARY, "Dragapult", "d.png")
        await resolve_archetype(repo, ArchetypeRole.SECONDARY, "Dragapult", "d.png")
        assert await repo.find_archetype(PrimaryArchetypeRow, "Dragapult") is not None
        assert await repo.find_archetype(SecondaryArchetypeRow, "Dragapult") is not None

    async def test_insert_failure_is_descriptive(self, repo: Repository):
        repo.create_archetype = AsyncMock(  # type: ignore[method-assign]
            side_effect=IntegrityError("INSERT", {}, Exception("constraint"))
        )
        with pytest.raises(DatabaseError, match="Failed to create Joltik archetype"):
            await resolve_archetype(repo, ArchetypeRole.PRIMARY, "Joltik", "j.png")


class TestResolveDeck:
    async def test_single_pokemon_meta_deck(self, repo: Repository):
        ids = await resolve_deck(repo, _form(1))
        assert ids.deck_archetype_2_id is None
        gardevoir_id = await repo.find_archetype(PrimaryArchetypeRow, "Gardevoir")
        assert gardevoir_id == ids.deck_archetype_1_id

    async def test_two_pokemon_meta_deck(self, repo: Repository):
        ids = await resolve_deck(repo, _form(4))
        assert ids.deck_archetype_1_id == await repo.find_archetype(
            PrimaryArchetypeRow, "Dragapult"
        )
        assert ids.deck_archetype_2_id == await repo.find_archetype(
            SecondaryArchetypeRow, "Charizard"
        )

    async def test_meta_deck_sprite_from_dex(self, repo: Repository):
        ids = await resolve_deck(repo, _form(8), sprites_base="https://cdn.test")
        row = await repo.session.get(PrimaryArchetypeRow, ids.deck_archetype_1_id)
        assert row.image_url == "https://cdn.test/595.png"

    async def test_custom_pokemon(self, repo: Repository):
        custom = [
            CustomPokemon(name="Pikachu", pokedex_number=25, sprite_url="https://x.test/pika.png"),
            CustomPokemon(name="Raichu", pokedex_number=26),
        ]
        ids = await resolve_deck(repo, _form("other", custom), sprites_base="https://cdn.test")
        primary = await repo.session.get(PrimaryArchetypeRow, ids.deck_archetype_1_id)
        secondary = await repo.session.get(SecondaryArchetypeRow, ids.deck_archetype_2_id)
        assert primary.image_url == "https://x.test/pika.png"
        assert secondary.name == "Raichu"
        assert secondary.image_url == "https://cdn.test/26.png"

    async def test_unknown_meta_deck(self, repo: Repository):
        with pytest.raises(SubmissionValidationError):
            await resolve_deck(repo, _form(404))

    async def test_other_without_picks(self, repo: Repository):
        with pytest.raises(SubmissionValidationError):
            await resolve_deck(repo, _form("other"))
