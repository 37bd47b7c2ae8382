"""Result API endpoints: direct inserts and full form submissions."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter

from tcgweekly.api.deps import RepoDep, SettingsDep
from tcgweekly.core.submission import submit_result, submit_tournament_record
from tcgweekly.models.submission import ResultRequest, TournamentRecordRequest

router = APIRouter(prefix="/api", tags=["results"])


@router.post("/results")
async def create_result(body: ResultRequest, repo: RepoDep, settings: SettingsDep) -> dict:
    """Record a result for an already-resolved player and archetypes."""
    result_id = await submit_result(
        repo,
        body,
        expected_password=settings.submission_password,
        weekly_cap=settings.weekly_result_cap,
    )
    return {"success": True, "result_id": result_id}


@router.post("/tournament-records")
async def create_tournament_record(
    body: TournamentRecordRequest, repo: RepoDep, settings: SettingsDep
) -> dict:
    """Resolve the player and deck, then record the result, in one call."""
    outcome = await submit_tournament_record(
        repo,
        body,
        expected_password=settings.submission_password,
        today=date.today(),
        weekly_cap=settings.weekly_result_cap,
        sprites_base=settings.pokemon_sprites_base,
    )
    return {
        "success": True,
        "player_id": outcome.player_id,
        "result_id": outcome.result_id,
        "is_new_player": outcome.player_is_new,
        "deck_archetype_1_id": outcome.deck_archetype_1_id,
        "deck_archetype_2_id": outcome.deck_archetype_2_id,
    }
