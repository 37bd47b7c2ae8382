"""Field validation for submitted tournament records.

Checks collect every problem instead of stopping at the first, so the form
can highlight all bad fields at once. Nothing here touches the database.
"""

from __future__ import annotations

import re
from datetime import date

from tcgweekly.core.errors import SubmissionValidationError, ValidationIssue
from tcgweekly.core.meta_decks import get_meta_deck
from tcgweekly.models.submission import ResultRequest, TournamentRecordRequest

PLAYER_NAME_MIN_LENGTH = 2
PLAYER_NAME_MAX_LENGTH = 100

# Per-field cap on wins, losses and ties.
MAX_GAMES_PER_FIELD = 50

MAX_CUSTOM_POKEMON = 2

OTHER_DECK = "other"

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_iso_date(raw: str) -> date | None:
    """Parse a strict ``YYYY-MM-DD`` string; ``None`` if malformed or not a real date."""
    if not _ISO_DATE_RE.match(raw or ""):
        return None
    try:
        return date.fromisoformat(raw)
    except ValueError:
        return None


def require_iso_date(raw: str, field: str) -> date:
    """Parse *raw* or raise a 400 naming *field*."""
    parsed = parse_iso_date(raw)
    if parsed is None:
        raise SubmissionValidationError(
            [ValidationIssue(field, "Date must be in YYYY-MM-DD format")]
        )
    return parsed


def validate_player_name(raw: str) -> list[ValidationIssue]:
    name = (raw or "").strip()
    if not name:
        return [ValidationIssue("player_name", "Player name is required")]
    if len(name) < PLAYER_NAME_MIN_LENGTH:
        return [
            ValidationIssue(
                "player_name",
                f"Player name must be at least {PLAYER_NAME_MIN_LENGTH} characters",
            )
        ]
    if len(name) > PLAYER_NAME_MAX_LENGTH:
        return [
            ValidationIssue(
                "player_name",
                f"Player name must be {PLAYER_NAME_MAX_LENGTH} characters or less",
            )
        ]
    return []


def validate_record_counts(wins: int, losses: int, ties: int) -> list[ValidationIssue]:
    """Each count within 0..50 and at least one game played."""
    issues: list[ValidationIssue] = []
    for field, value in (("wins", wins), ("losses", losses), ("ties", ties)):
        if value < 0 or value > MAX_GAMES_PER_FIELD:
            label = field.capitalize()
            issues.append(
                ValidationIssue(
                    field, f"{label} must be a number between 0 and {MAX_GAMES_PER_FIELD}"
                )
            )
    if not issues and wins + losses + ties == 0:
        issues.append(ValidationIssue("general", "You must have played at least one game"))
    return issues


def _validate_date(raw: str, today: date) -> list[ValidationIssue]:
    if not raw:
        return [ValidationIssue("date", "Date is required")]
    parsed = parse_iso_date(raw)
    if parsed is None:
        return [ValidationIssue("date", "Date must be in YYYY-MM-DD format")]
    if parsed > today:
        return [ValidationIssue("date", "Tournament date cannot be in the future")]
    return []


def _validate_deck(form: TournamentRecordRequest) -> list[ValidationIssue]:
    selected = form.selected_deck
    if selected is None or selected == "":
        return [ValidationIssue("selected_deck", "Deck selection is required")]

    if isinstance(selected, int) and not isinstance(selected, bool):
        if get_meta_deck(selected) is None:
            return [ValidationIssue("selected_deck", "Selected meta deck not found")]
        return []

    if selected != OTHER_DECK:
        return [ValidationIssue("selected_deck", "Invalid deck selection")]

    if not form.custom_pokemon:
        return [
            ValidationIssue(
                "custom_pokemon",
                'Custom Pokemon selection is required when "Other" is selected',
            )
        ]
    if len(form.custom_pokemon) > MAX_CUSTOM_POKEMON:
        return [
            ValidationIssue(
                "custom_pokemon",
                f"Choose at most {MAX_CUSTOM_POKEMON} Pokemon for a custom deck",
            )
        ]
    issues: list[ValidationIssue] = []
    for pokemon in form.custom_pokemon:
        if not pokemon.name.strip() or pokemon.pokedex_number <= 0:
            issues.append(
                ValidationIssue(
                    "custom_pokemon", "Each Pokemon needs a name and a Pokedex number"
                )
            )
            break
    return issues


def validate_submission(form: TournamentRecordRequest, today: date) -> list[ValidationIssue]:
    """Validate a full submission form. An empty list means the form is valid."""
    issues: list[ValidationIssue] = []
    issues.extend(validate_player_name(form.player_name))
    issues.extend(_validate_date(form.date, today))
    issues.extend(validate_record_counts(form.wins, form.losses, form.ties))
    issues.extend(_validate_deck(form))
    return issues


def validate_result_request(body: ResultRequest) -> list[ValidationIssue]:
    """Validate a result whose player and archetype ids are already known."""
    issues: list[ValidationIssue] = []
    if not body.week_start:
        issues.append(ValidationIssue("week_start", "Week start date is required"))
    elif parse_iso_date(body.week_start) is None:
        issues.append(ValidationIssue("week_start", "Invalid week start date format"))
    if not body.player_id.strip():
        issues.append(ValidationIssue("player_id", "Player ID is required"))
    if body.deck_archetype_1_id is None:
        issues.append(
            ValidationIssue("deck_archetype_1_id", "Primary deck archetype is required")
        )
    elif body.deck_archetype_1_id <= 0:
        issues.append(
            ValidationIssue(
                "deck_archetype_1_id",
                "Primary deck archetype ID must be a positive number",
            )
        )
    if body.deck_archetype_2_id is not None and body.deck_archetype_2_id <= 0:
        issues.append(
            ValidationIssue(
                "deck_archetype_2_id",
                "Secondary deck archetype ID must be a positive number or null",
            )
        )
    issues.extend(validate_record_counts(body.wins, body.losses, body.ties))
    return issues
