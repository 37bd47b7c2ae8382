"""Deck archetype resolution.

An archetype is stored as one row per Pokémon name in a role table:
``deck_archetype_1`` for the primary Pokémon and ``deck_archetype_2`` for
the optional secondary one. Rows are created the first time a name is
used in that role.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from sqlalchemy.exc import SQLAlchemyError

from tcgweekly.config import DEFAULT_POKEMON_SPRITES_BASE
from tcgweekly.core.errors import DatabaseError, SubmissionValidationError, ValidationIssue
from tcgweekly.core.meta_decks import get_meta_deck
from tcgweekly.core.validation import OTHER_DECK
from tcgweekly.db.models import PrimaryArchetypeRow, SecondaryArchetypeRow

if TYPE_CHECKING:
    from tcgweekly.db.repository import Repository
    from tcgweekly.models.submission import TournamentRecordRequest

logger = logging.getLogger(__name__)


class ArchetypeRole(enum.Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"

    @property
    def model(self) -> type[PrimaryArchetypeRow] | type[SecondaryArchetypeRow]:
        if self is ArchetypeRole.PRIMARY:
            return PrimaryArchetypeRow
        return SecondaryArchetypeRow


@dataclass(frozen=True)
class DeckArchetypeIds:
    deck_archetype_1_id: int
    deck_archetype_2_id: int | None = None


def sprite_url(pokedex_number: int, base: str = DEFAULT_POKEMON_SPRITES_BASE) -> str:
    """Front sprite for a national Pokédex number on the sprite host."""
    return f"{base.rstrip('/')}/{pokedex_number}.png"


async def resolve_archetype(
    repo: Repository, role: ArchetypeRole, name: str, image_url: str
) -> int:
    """Return the id of the *role* row named *name*, inserting it if absent.

    The name match is exact. An existing row keeps its original image.
    """
    model = role.model
    try:
        existing_id = await repo.find_archetype(model, name)
    except SQLAlchemyError as exc:
        raise DatabaseError(f"Database error while searching for {name}") from exc
    if existing_id is not None:
        return existing_id

    try:
        row = await repo.create_archetype(model, name, image_url)
    except SQLAlchemyError as exc:
        raise DatabaseError(f"Failed to create {name} archetype") from exc

    logger.info("archetype_created role=%s id=%s name=%r", role.value, row.id, name)
    return row.id


async def resolve_deck(
    repo: Repository,
    form: TournamentRecordRequest,
    sprites_base: str = DEFAULT_POKEMON_SPRITES_BASE,
) -> DeckArchetypeIds:
    """Resolve the submitted deck selection into archetype row ids.

    A meta deck resolves its catalogue Pokémon; ``"other"`` resolves the
    custom picks. In both cases the first Pokémon is primary and the second,
    if present, secondary. The primary row is created before the secondary.
    """
    selected = form.selected_deck

    if isinstance(selected, int) and not isinstance(selected, bool):
        deck = get_meta_deck(selected)
        if deck is None:
            raise SubmissionValidationError(
                [ValidationIssue("selected_deck", "Selected meta deck not found")]
            )
        picks = [(p.name, sprite_url(p.pokedex_number, sprites_base)) for p in deck.pokemon]
    elif selected == OTHER_DECK and form.custom_pokemon:
        picks = [
            (p.name.strip(), p.sprite_url or sprite_url(p.pokedex_number, sprites_base))
            for p in form.custom_pokemon
        ]
    else:
        raise SubmissionValidationError(
            [ValidationIssue("selected_deck", "Invalid deck selection")]
        )

    primary_name, primary_image = picks[0]
    primary_id = await resolve_archetype(
        repo, ArchetypeRole.PRIMARY, primary_name, primary_image
    )

    secondary_id: int | None = None
    if len(picks) > 1:
        secondary_name, secondary_image = picks[1]
        secondary_id = await resolve_archetype(
            repo, ArchetypeRole.SECONDARY, secondary_name, secondary_image
        )

    return DeckArchetypeIds(deck_archetype_1_id=primary_id, deck_archetype_2_id=secondary_id)
