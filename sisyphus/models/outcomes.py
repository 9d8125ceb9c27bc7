"""Results of progression decisions."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class ProgressionState(str, Enum):
    """Where a player stands relative to a claimed local date."""

    FRESH = "fresh"
    ALREADY_PLAYED = "already_played"
    ROLLBACK_REQUIRED = "rollback_required"
    ADVANCE = "advance"


class RollbackInfo(BaseModel):
    """What a missed interval costs the player."""

    model_config = ConfigDict(frozen=True)

    height_lost: int = Field(ge=0)
    streak_lost: int = Field(ge=0)
    days_missed: int = Field(ge=1)


class PushDecision(BaseModel):
    """Outcome of evaluating a push attempt, before anything is written."""

    model_config = ConfigDict(frozen=True)

    state: ProgressionState
    rollback: Optional[RollbackInfo] = None

    @property
    def allows_push(self) -> bool:
        return self.state in (ProgressionState.FRESH, ProgressionState.ADVANCE)


class PushResult(BaseModel):
    """Response body for a successful push or acknowledge."""

    model_config = ConfigDict(frozen=True)

    success: bool = True
    height: int = Field(ge=0)
    streak: int = Field(ge=0)

    def to_api(self) -> dict[str, Any]:
        return self.model_dump()
