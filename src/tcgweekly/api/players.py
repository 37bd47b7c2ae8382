"""Player API endpoints: find-or-create, search, history."""

from __future__ import annotations

from fastapi import APIRouter

from tcgweekly.api.deps import RepoDep, SettingsDep
from tcgweekly.core.errors import NotFoundError, SubmissionValidationError, ValidationIssue
from tcgweekly.core.players import resolve_player
from tcgweekly.core.submission import authorize
from tcgweekly.core.validation import validate_player_name
from tcgweekly.db.models import PrimaryArchetypeRow, ResultRow, SecondaryArchetypeRow
from tcgweekly.models.submission import PlayerRequest

router = APIRouter(prefix="/api/players", tags=["players"])


def _archetype_dict(row: PrimaryArchetypeRow | SecondaryArchetypeRow | None) -> dict | None:
    if row is None:
        return None
    return {"id": row.id, "name": row.name, "image_url": row.image_url}


def _result_dict(result: ResultRow) -> dict:
    return {
        "id": result.id,
        "week_start": result.week_start.isoformat(),
        "wins": result.wins,
        "losses": result.losses,
        "ties": result.ties,
        "deck_archetype_1": _archetype_dict(result.deck_archetype_1),
        "deck_archetype_2": _archetype_dict(result.deck_archetype_2),
    }


@router.post("")
async def create_or_find_player(
    body: PlayerRequest, repo: RepoDep, settings: SettingsDep
) -> dict:
    """Return the player with this name, creating them on first use."""
    authorize(body.password, settings.submission_password)

    issues = validate_player_name(body.player_name)
    if issues:
        raise SubmissionValidationError(issues)

    player = await resolve_player(repo, body.player_name)
    return {"success": True, "player_id": player.player_id, "is_new": player.is_new}


@router.get("")
async def list_players(repo: RepoDep, name: str | None = None) -> dict:
    """Search players by partial name, or list everyone when no name is given."""
    if name is None:
        players = await repo.get_all_players()
    else:
        fragment = name.strip()
        if not fragment:
            raise SubmissionValidationError(
                [ValidationIssue("name", "Player name parameter is required")],
                message="Player name parameter is required",
            )
        players = await repo.search_players(fragment)
    return {"success": True, "players": [{"id": p.id, "name": p.name} for p in players]}


@router.get("/{player_id}")
async def get_player(player_id: str, repo: RepoDep) -> dict:
    """Get a player with their results, newest week first."""
    player = await repo.get_player(player_id)
    if player is None:
        raise NotFoundError("Player not found")
    results = await repo.get_results_for_player(player_id)
    return {
        "success": True,
        "player": {"id": player.id, "name": player.name},
        "results": [_result_dict(r) for r in results],
    }
