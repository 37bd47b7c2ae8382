"""Curated meta deck catalogue.

Preset archetypes offered in the deck dropdown, ranked by popularity. The
first Pokémon resolves into the primary archetype table, the optional second
into the secondary table.
"""

from __future__ import annotations

from tcgweekly.models.submission import MetaDeck, MetaDeckPokemon


def _deck(deck_id: int, name: str, *pokemon: tuple[str, int]) -> MetaDeck:
    return MetaDeck(
        id=deck_id,
        name=name,
        rank=deck_id,
        pokemon=[MetaDeckPokemon(name=n, pokedex_number=dex) for n, dex in pokemon],
    )


META_DECKS: tuple[MetaDeck, ...] = (
    _deck(1, "Gardevoir ex", ("Gardevoir", 282)),
    _deck(2, "Raging Bolt Ogerpon", ("Raging Bolt", 1021), ("Ogerpon", 1017)),
    _deck(3, "Grimmsnarl Froslass", ("Grimmsnarl", 861), ("Froslass", 478)),
    _deck(4, "Dragapult Charizard", ("Dragapult", 887), ("Charizard", 6)),
    _deck(5, "Dragapult Dusknoir", ("Dragapult", 887), ("Dusknoir", 477)),
    _deck(6, "Flareon Noctowl", ("Flareon", 136), ("Noctowl", 164)),
    _deck(7, "Dragapult ex", ("Dragapult", 887)),
    _deck(8, "Joltik Box", ("Joltik", 595)),
    _deck(9, "Gholdengo ex", ("Gholdengo", 1000)),
    _deck(10, "Gholdengo Dragapult", ("Gholdengo", 1000), ("Dragapult", 887)),
)

_BY_ID: dict[int, MetaDeck] = {deck.id: deck for deck in META_DECKS}


def get_meta_deck(deck_id: int) -> MetaDeck | None:
    return _BY_ID.get(deck_id)


def active_meta_decks() -> list[MetaDeck]:
    """Active decks ordered by rank."""
    return sorted((d for d in META_DECKS if d.is_active), key=lambda d: d.rank)
