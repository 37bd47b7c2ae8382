"""Request and catalogue models for tournament submissions.

A deck archetype is one or two Pokémon; a meta deck is a curated preset
archetype; ``week_start`` is the date that groups results into weeks.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class CustomPokemon(BaseModel):
    """A freely chosen Pokémon for an "other" deck selection."""

    name: str
    pokedex_number: int
    sprite_url: str = ""


class TournamentRecordRequest(BaseModel):
    """Everything the submission form sends in one request.

    ``selected_deck`` is a meta deck id, the string ``"other"`` (use
    ``custom_pokemon``), or empty when the user picked nothing. Field-level
    rules live in ``core.validation`` so every problem can be reported at once.
    """

    player_name: str = ""
    date: str = ""
    wins: int = 0
    losses: int = 0
    ties: int = 0
    selected_deck: int | str | None = None
    custom_pokemon: list[CustomPokemon] = Field(default_factory=list)
    password: str = ""


class PlayerRequest(BaseModel):
    player_name: str = ""
    password: str = ""


class ResultRequest(BaseModel):
    """A result whose player and archetypes were resolved beforehand."""

    week_start: str = ""
    wins: int = 0
    losses: int = 0
    ties: int = 0
    player_id: str = ""
    deck_archetype_1_id: int | None = None
    deck_archetype_2_id: int | None = None
    password: str = ""


class MetaDeckPokemon(BaseModel):
    name: str
    pokedex_number: int


class MetaDeck(BaseModel):
    """A curated preset archetype."""

    id: int
    name: str
    rank: int = Field(ge=1)
    pokemon: list[MetaDeckPokemon] = Field(min_length=1, max_length=2)
    is_active: bool = True


class PokemonSuggestion(BaseModel):
    """A Pokédex search hit offered to the deck picker."""

    name: str
    pokedex_number: int
    sprite_url: str
    types: list[str] = Field(default_factory=list)
    generation: int = 1
