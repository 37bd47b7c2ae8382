"""Deck picker endpoints: meta deck catalogue and Pokédex search."""

from __future__ import annotations

from fastapi import APIRouter

from tcgweekly.api.deps import SettingsDep
from tcgweekly.core.archetypes import sprite_url
from tcgweekly.core.meta_decks import active_meta_decks
from tcgweekly.core.pokedex import search_pokemon

router = APIRouter(prefix="/api", tags=["pokemon"])


@router.get("/meta-decks")
async def list_meta_decks(settings: SettingsDep) -> dict:
    base = settings.pokemon_sprites_base
    return {
        "data": [
            {
                "id": deck.id,
                "name": deck.name,
                "rank": deck.rank,
                "pokemon": [
                    {
                        "name": p.name,
                        "pokedex_number": p.pokedex_number,
                        "sprite_url": sprite_url(p.pokedex_number, base),
                    }
                    for p in deck.pokemon
                ],
            }
            for deck in active_meta_decks()
        ],
    }


@router.get("/pokemon/search")
async def pokemon_search(settings: SettingsDep, q: str = "") -> dict:
    """Suggest Pokémon for the custom deck picker.

    Upstream failures return an empty list rather than an error.
    """
    suggestions = await search_pokemon(
        q,
        api_base=settings.pokemon_api_base,
        sprites_base=settings.pokemon_sprites_base,
        index_limit=settings.pokemon_search_limit,
        results_limit=settings.pokemon_results_limit,
        timeout=settings.pokemon_api_timeout,
    )
    return {"data": [s.model_dump() for s in suggestions]}
