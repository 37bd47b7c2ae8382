"""Tournament record submission.

One submission runs a fixed, linear sequence::

    validate -> resolve_player -> resolve_archetypes -> insert_result -> done

The first failure stops the sequence. Whatever identifiers were already
resolved ride along on the raised error so a resubmission reuses the same
player. Completed steps are not undone: a player or archetype created
before a later failure stays in the database.

The duplicate-result guard and the weekly cap are plain reads followed by
an insert, with no locking. Concurrent writers can slip past either.
"""

from __future__ import annotations

import enum
import logging
import secrets
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy.exc import SQLAlchemyError

from tcgweekly.config import DEFAULT_POKEMON_SPRITES_BASE, DEFAULT_WEEKLY_RESULT_CAP
from tcgweekly.core.archetypes import ArchetypeRole, DeckArchetypeIds, resolve_deck
from tcgweekly.core.errors import (
    ConflictError,
    DatabaseError,
    SubmissionValidationError,
    TcgWeeklyError,
    UnauthorizedError,
    ValidationIssue,
)
from tcgweekly.core.players import resolve_player
from tcgweekly.core.validation import (
    require_iso_date,
    validate_result_request,
    validate_submission,
)

if TYPE_CHECKING:
    from tcgweekly.db.repository import Repository
    from tcgweekly.models.submission import ResultRequest, TournamentRecordRequest

logger = logging.getLogger(__name__)


class SubmissionState(enum.Enum):
    VALIDATE = "validate"
    RESOLVE_PLAYER = "resolve_player"
    RESOLVE_ARCHETYPES = "resolve_archetypes"
    INSERT_RESULT = "insert_result"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class SubmissionOutcome:
    player_id: str
    result_id: int
    deck_archetype_1_id: int
    deck_archetype_2_id: int | None
    player_is_new: bool
    state: SubmissionState = SubmissionState.DONE


def authorize(provided: str, expected: str) -> None:
    """Raise ``UnauthorizedError`` unless *provided* matches the shared secret.

    An unset secret refuses everything.
    """
    if not expected or not provided:
        raise UnauthorizedError()
    if not secrets.compare_digest(provided.encode(), expected.encode()):
        raise UnauthorizedError()


async def record_result(
    repo: Repository,
    *,
    week_start: date,
    wins: int,
    losses: int,
    ties: int,
    player_id: str,
    deck: DeckArchetypeIds,
    weekly_cap: int = DEFAULT_WEEKLY_RESULT_CAP,
) -> int:
    """Insert a result after the duplicate and weekly-cap checks. Returns its id."""
    try:
        existing = await repo.get_result_ids_for_player_week(player_id, week_start)
    except SQLAlchemyError as exc:
        raise DatabaseError("Failed to check for existing result") from exc
    if existing:
        raise ConflictError("A result for this player and week already exists.")

    try:
        week_count = await repo.count_results_for_week(week_start)
    except SQLAlchemyError as exc:
        raise DatabaseError("Failed to check results count for this date") from exc
    if week_count >= weekly_cap:
        raise ConflictError(
            f"The maximum number of results ({weekly_cap}) for this date has been reached."
        )

    try:
        row = await repo.create_result(
            week_start=week_start,
            wins=wins,
            losses=losses,
            ties=ties,
            player_id=player_id,
            deck_archetype_1_id=deck.deck_archetype_1_id,
            deck_archetype_2_id=deck.deck_archetype_2_id,
        )
    except SQLAlchemyError as exc:
        raise DatabaseError("Failed to save tournament result") from exc

    logger.info(
        "result_recorded id=%s player_id=%s week_start=%s", row.id, player_id, week_start
    )
    return row.id


async def submit_tournament_record(
    repo: Repository,
    form: TournamentRecordRequest,
    *,
    expected_password: str,
    today: date,
    weekly_cap: int = DEFAULT_WEEKLY_RESULT_CAP,
    sprites_base: str = DEFAULT_POKEMON_SPRITES_BASE,
) -> SubmissionOutcome:
    """Run the whole submission: authorize, validate, resolve, insert."""
    authorize(form.password, expected_password)

    state = SubmissionState.VALIDATE
    player_id: str | None = None
    try:
        issues = validate_submission(form, today)
        if issues:
            raise SubmissionValidationError(issues)
        week_start = require_iso_date(form.date, "date")

        state = SubmissionState.RESOLVE_PLAYER
        player = await resolve_player(repo, form.player_name)
        player_id = player.player_id
        # Each step is persisted on its own; a later failure does not undo it.
        await repo.commit()

        state = SubmissionState.RESOLVE_ARCHETYPES
        deck = await resolve_deck(repo, form, sprites_base)
        await repo.commit()

        state = SubmissionState.INSERT_RESULT
        result_id = await record_result(
            repo,
            week_start=week_start,
            wins=form.wins,
            losses=form.losses,
            ties=form.ties,
            player_id=player_id,
            deck=deck,
            weekly_cap=weekly_cap,
        )
    except TcgWeeklyError as exc:
        if player_id is not None:
            exc.context.setdefault("player_id", player_id)
        logger.warning(
            "submission_failed state=%s status=%s error=%s",
            state.value,
            exc.status_code,
            exc.message,
        )
        raise

    return SubmissionOutcome(
        player_id=player_id,
        result_id=result_id,
        deck_archetype_1_id=deck.deck_archetype_1_id,
        deck_archetype_2_id=deck.deck_archetype_2_id,
        player_is_new=player.is_new,
    )


async def submit_result(
    repo: Repository,
    body: ResultRequest,
    *,
    expected_password: str,
    weekly_cap: int = DEFAULT_WEEKLY_RESULT_CAP,
) -> int:
    """Record a result whose player and archetype ids the caller already holds."""
    authorize(body.password, expected_password)

    issues = validate_result_request(body)
    if issues:
        raise SubmissionValidationError(issues)

    if await repo.get_player(body.player_id) is None:
        issues.append(ValidationIssue("player_id", "Player not found"))
    if not await repo.archetype_exists(ArchetypeRole.PRIMARY.model, body.deck_archetype_1_id):
        issues.append(
            ValidationIssue("deck_archetype_1_id", "Primary deck archetype not found")
        )
    if body.deck_archetype_2_id is not None and not await repo.archetype_exists(
        ArchetypeRole.SECONDARY.model, body.deck_archetype_2_id
    ):
        issues.append(
            ValidationIssue("deck_archetype_2_id", "Secondary deck archetype not found")
        )
    if issues:
        raise SubmissionValidationError(issues)

    week_start = require_iso_date(body.week_start, "week_start")
    return await record_result(
        repo,
        week_start=week_start,
        wins=body.wins,
        losses=body.losses,
        ties=body.ties,
        player_id=body.player_id,
        deck=DeckArchetypeIds(body.deck_archetype_1_id, body.deck_archetype_2_id),
        weekly_cap=weekly_cap,
    )
