"""Error taxonomy for the daily push service.

Every error maps to one HTTP status and one stable ``error`` code that clients
branch on:

- validation (400): missing header, malformed body or date. Nothing was touched.
- not found (404): unknown player id. The client should register again.
- conflict (409): already played or rollback required. Expected steady-state
  signals, not failures.
- rate limit (429): too many push attempts. The client should back off.
"""

from typing import Any, Optional


class SisyphusError(Exception):
    """Base class for errors returned to the client."""

    status_code: int = 400
    error_code: str = "bad_request"
    default_message: str = "Bad request"

    def __init__(self, message: Optional[str] = None, details: Optional[dict[str, Any]] = None) -> None:
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON error body."""
        return {"error": self.error_code, "message": self.message, **self.details}

    def __str__(self) -> str:
        details_str = f" | Details: {self.details}" if self.details else ""
        return f"[{self.error_code}] {self.message}{details_str}"


class MissingPlayerIdError(SisyphusError):
    status_code = 400
    error_code = "missing_player_id"
    default_message = "X-Player-ID header required"


class InvalidBodyError(SisyphusError):
    status_code = 400
    error_code = "invalid_body"
    default_message = "Invalid JSON body"


class InvalidDateError(SisyphusError):
    status_code = 400
    error_code = "invalid_date"
    default_message = "localDate required (YYYY-MM-DD)"


class PlayerNotFoundError(SisyphusError):
    status_code = 404
    error_code = "invalid_player"
    default_message = "Player not found"


class AlreadyPlayedError(SisyphusError):
    status_code = 409
    error_code = "already_played_today"
    default_message = "You've already pushed today!"


class RollbackRequiredError(SisyphusError):
    """The player missed at least one day and must acknowledge the rollback."""

    status_code = 409
    error_code = "rollback_required"
    default_message = "You missed a day! The boulder rolled back."

    def __init__(self, height_lost: int, streak_lost: int, days_missed: int) -> None:
        self.height_lost = height_lost
        self.streak_lost = streak_lost
        self.days_missed = days_missed
        super().__init__(
            details={
                "heightLost": height_lost,
                "streakLost": streak_lost,
                "daysMissed": days_missed,
            }
        )


class RateLimitedError(SisyphusError):
    status_code = 429
    error_code = "rate_limited"
    default_message = "Too many requests. Try again later."
