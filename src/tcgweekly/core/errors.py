"""Error kinds raised by the submission flow and mapped to HTTP responses.

Every error carries the status code it should surface with. The API layer
converts them to ``{"error": ..., "details": [...]}`` payloads; nothing
here knows about FastAPI.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class ValidationIssue:
    """One rejected form field."""

    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


class TcgWeeklyError(Exception):
    """Base class for errors that become JSON error responses."""

    status_code = 500

    def __init__(self, message: str, **context: object) -> None:
        super().__init__(message)
        self.message = message
        # Identifiers resolved before the failure (e.g. player_id).
        self.context = {k: v for k, v in context.items() if v is not None}

    def to_payload(self) -> dict[str, object]:
        return {"error": self.message, **self.context}


class SubmissionValidationError(TcgWeeklyError):
    status_code = 400

    def __init__(
        self,
        issues: list[ValidationIssue],
        message: str = "Validation failed",
        **context: object,
    ) -> None:
        super().__init__(message, **context)
        self.issues = issues

    def to_payload(self) -> dict[str, object]:
        payload = super().to_payload()
        payload["details"] = [issue.to_dict() for issue in self.issues]
        return payload


class UnauthorizedError(TcgWeeklyError):
    status_code = 401

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class NotFoundError(TcgWeeklyError):
    status_code = 404


class ConflictError(TcgWeeklyError):
    """Duplicate result for a player's week, or the weekly cap is reached."""

    status_code = 409


class DatabaseError(TcgWeeklyError):
    status_code = 500
