"""Tests for the PokéAPI search client with the HTTP helper mocked out."""

from unittest.mock import AsyncMock, patch

import httpx

from tcgweekly.core.pokedex import (
    generation_for,
    is_cosmetic,
    matching_entries,
    search_pokemon,
)

API = "https://pokeapi.test/api/v2"
SPRITES = "https://sprites.test"

INDEX = {
    "results": [
        {"name": "pikachu", "url": f"{API}/pokemon/25/"},
        {"name": "pikachu-rock-star", "url": f"{API}/pokemon/10080/"},
        {"name": "raichu", "url": f"{API}/pokemon/26/"},
        {"name": "pikipek", "url": f"{API}/pokemon/731/"},
        {"name": "charizard", "url": f"{API}/pokemon/6/"},
    ]
}

DETAILS = {
    f"{API}/pokemon/25/": {
        "id": 25,
        "sprites": {"front_default": "https://img.test/25.png"},
        "types": [{"type": {"name": "electric"}}],
    },
    f"{API}/pokemon/731/": {
        "id": 731,
        "sprites": {"front_default": None},
        "types": [{"type": {"name": "normal"}}, {"type": {"name": "flying"}}],
    },
}


async def _fake_fetch(client: object, url: str, **params: object) -> dict:
    if url == f"{API}/pokemon":
        return INDEX
    if url in DETAILS:
        return DETAILS[url]
    request = httpx.Request("GET", url)
    raise httpx.HTTPStatusError(
        "not found", request=request, response=httpx.Response(404, request=request)
    )


class TestHelpers:
    def test_generation(self):
        assert generation_for(1) == 1
        assert generation_for(151) == 1
        assert generation_for(152) == 2
        assert generation_for(1025) == 7

    def test_cosmetic(self):
        assert is_cosmetic("pikachu-rock-star")
        assert is_cosmetic("Lycanroc-Midnight")
        assert not is_cosmetic("pikachu")

    def test_matching_entries_respects_limit(self):
        hits = matching_entries(INDEX["results"], "PIK", limit=1)
        assert [h["name"] for h in hits] == ["pikachu"]


class TestSearchPokemon:
    async def test_short_query_skips_network(self):
        with patch("tcgweekly.core.pokedex._fetch_json", new_callable=AsyncMock) as fetch:
            assert await search_pokemon(" pi ", api_base=API) == []
        fetch.assert_not_awaited()

    async def test_filters_and_sorts(self):
        with patch("tcgweekly.core.pokedex._fetch_json", side_effect=_fake_fetch):
            results = await search_pokemon("pik", api_base=API, sprites_base=SPRITES)
        assert [r.name for r in results] == ["Pikachu", "Pikipek"]
        assert results[0].sprite_url == "https://img.test/25.png"
        assert results[0].types == ["electric"]
        assert results[1].sprite_url == f"{SPRITES}/731.png"
        assert results[1].generation == 5

    async def test_failed_detail_is_dropped(self):
        with patch("tcgweekly.core.pokedex._fetch_json", side_effect=_fake_fetch):
            results = await search_pokemon("chu", api_base=API, sprites_base=SPRITES)
        # raichu's detail lookup 404s
        assert [r.name for r in results] == ["Pikachu"]

    async def test_index_failure_degrades_to_empty(self):
        fetch = AsyncMock(side_effect=httpx.ConnectError("unreachable"))
        with patch("tcgweekly.core.pokedex._fetch_json", fetch):
            assert await search_pokemon("pikachu", api_base=API) == []
