"""Seed both deck archetype tables from the meta deck catalogue.

Usage:
    python scripts/seed_meta_archetypes.py          # Seed archetypes
    python scripts/seed_meta_archetypes.py status   # Print archetype tables

Uses DATABASE_URL if set, otherwise a local SQLite database (tcgweekly.db).
Safe to re-run: existing names are left alone.
"""

from __future__ import annotations

import asyncio
import os
import sys

from sqlalchemy import select

from tcgweekly.config import DEFAULT_POKEMON_SPRITES_BASE
from tcgweekly.core.archetypes import ArchetypeRole, resolve_archetype, sprite_url
from tcgweekly.core.meta_decks import active_meta_decks
from tcgweekly.db.engine import create_engine, create_tables, get_session
from tcgweekly.db.repository import Repository

DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite+aiosqlite:///tcgweekly.db")
SPRITES_BASE = os.environ.get("POKEMON_SPRITES_BASE", DEFAULT_POKEMON_SPRITES_BASE)


async def seed() -> None:
    engine = create_engine(DATABASE_URL)
    await create_tables(engine)
    async with get_session(engine) as session:
        repo = Repository(session)
        for deck in active_meta_decks():
            roles = (ArchetypeRole.PRIMARY, ArchetypeRole.SECONDARY)
            for role, pokemon in zip(roles, deck.pokemon):
                archetype_id = await resolve_archetype(
                    repo, role, pokemon.name, sprite_url(pokemon.pokedex_number, SPRITES_BASE)
                )
                print(f"  {deck.name}: {role.value} {pokemon.name} -> #{archetype_id}")
    await engine.dispose()
    print("Seeded archetypes for", len(active_meta_decks()), "meta decks.")


async def status() -> None:
    engine = create_engine(DATABASE_URL)
    async with get_session(engine) as session:
        for role in ArchetypeRole:
            rows = (await session.execute(select(role.model).order_by(role.model.id))).scalars()
            print(f"{role.model.__tablename__}:")
            for row in rows:
                print(f"  {row.id:>4}  {row.name:<20} {row.image_url}")
    await engine.dispose()


def main() -> None:
    command = sys.argv[1] if len(sys.argv) > 1 else "seed"
    if command == "seed":
        asyncio.run(seed())
    elif command == "status":
        asyncio.run(status())
    else:
        print(__doc__)
        sys.exit(1)


if __name__ == "__main__":
    main()
