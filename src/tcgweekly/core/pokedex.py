"""Search-as-you-type Pokémon lookups against the public PokéAPI.

Suggestions are best effort: an unreachable or misbehaving API yields an
empty list, never an error, so a submission is never blocked by it.
"""

from __future__ import annotations

import asyncio
import logging
import math

import httpx

from tcgweekly.config import DEFAULT_POKEMON_API_BASE, DEFAULT_POKEMON_SPRITES_BASE
from tcgweekly.core.archetypes import sprite_url
from tcgweekly.models.submission import PokemonSuggestion

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 3
POKEMON_PER_GENERATION = 151

# Alternate forms that only change a Pokémon's look; hidden from suggestions.
COSMETIC_VARIANTS: tuple[str, ...] = (
    "rock-star",
    "belle",
    "popstar",
    "phd",
    "libre",
    "cosplay",
    "battle-bond",
    "ash-",
    "cap",
    "partner",
    "spiky-eared",
    "totem",
    "school",
    "sunshine",
    "midnight",
    "dusk",
    "own-tempo",
    "original-color",
    "orange",
    "violet",
)


def generation_for(pokedex_number: int) -> int:
    return max(1, math.ceil(pokedex_number / POKEMON_PER_GENERATION))


def is_cosmetic(name: str) -> bool:
    lowered = name.lower()
    return any(variant in lowered for variant in COSMETIC_VARIANTS)


def matching_entries(
    index: list[dict[str, str]], query: str, limit: int
) -> list[dict[str, str]]:
    """Index entries whose name contains *query*, minus cosmetic forms, capped at *limit*."""
    needle = query.lower()
    hits = [
        entry
        for entry in index
        if needle in entry.get("name", "").lower() and not is_cosmetic(entry.get("name", ""))
    ]
    return hits[:limit]


async def _fetch_json(client: httpx.AsyncClient, url: str, **params: object) -> dict:
    resp = await client.get(url, params=params or None)
    resp.raise_for_status()
    return resp.json()


async def _fetch_suggestion(
    client: httpx.AsyncClient, entry: dict[str, str], sprites_base: str
) -> PokemonSuggestion | None:
    """Load one Pokémon's details. ``None`` when the detail request fails."""
    try:
        detail = await _fetch_json(client, entry["url"])
        dex = int(detail["id"])
        sprite = (detail.get("sprites") or {}).get("front_default") or sprite_url(
            dex, sprites_base
        )
        types = [t["type"]["name"] for t in detail.get("types", [])]
    except (httpx.HTTPError, KeyError, TypeError, ValueError):
        logger.debug("pokedex_detail_failed url=%s", entry.get("url"), exc_info=True)
        return None
    name = entry["name"]
    return PokemonSuggestion(
        name=name[:1].upper() + name[1:],
        pokedex_number=dex,
        sprite_url=sprite,
        types=types,
        generation=generation_for(dex),
    )


async def search_pokemon(
    query: str,
    *,
    api_base: str = DEFAULT_POKEMON_API_BASE,
    sprites_base: str = DEFAULT_POKEMON_SPRITES_BASE,
    index_limit: int = 1500,
    results_limit: int = 20,
    timeout: float = 10.0,
) -> list[PokemonSuggestion]:
    """Return up to *results_limit* Pokémon whose names contain *query*.

    Queries shorter than three characters return nothing. Results are
    sorted by national Pokédex number.
    """
    query = query.strip()
    if len(query) < MIN_QUERY_LENGTH:
        return []

    try:
        async with httpx.AsyncClient(timeout=httpx.Timeout(timeout, connect=3.0)) as client:
            index = await _fetch_json(client, f"{api_base}/pokemon", limit=index_limit)
            entries = matching_entries(index.get("results", []), query, results_limit)
            details = await asyncio.gather(
                *(_fetch_suggestion(client, entry, sprites_base) for entry in entries)
            )
    except (httpx.HTTPError, ValueError):
        logger.warning("pokedex_search_failed query=%r", query, exc_info=True)
        return []

    suggestions = [d for d in details if d is not None]
    suggestions.sort(key=lambda s: s.pokedex_number)
    return suggestions
