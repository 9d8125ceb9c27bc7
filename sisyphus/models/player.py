"""Player models."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class PlayerRecord(BaseModel):
    """Snapshot of a persisted player row."""

    model_config = ConfigDict(frozen=True, from_attributes=True)  # Immutable model

    id: str = Field(description="Opaque unique player identifier")
    height: int = Field(ge=0, default=0, description="Current boulder height")
    streak: int = Field(ge=0, default=0, description="Consecutive days pushed since the last rollback")
    last_played_date: Optional[str] = Field(default=None, description="Local date of the latest push (YYYY-MM-DD)")
    total_pushes: int = Field(ge=0, default=0, description="Lifetime push count")
    max_height: int = Field(ge=0, default=0, description="Highest height ever reached")
    death_count: int = Field(ge=0, default=0, description="Number of rollbacks")
    created_at: Optional[datetime] = Field(default=None, description="Registration timestamp")
    last_seen_at: Optional[datetime] = Field(default=None, description="Latest contact timestamp")

    @model_validator(mode="after")
    def check_height_below_max(self) -> "PlayerRecord":
        """Height can never exceed the high-water mark."""
        if self.height > self.max_height:
            raise ValueError(f"height {self.height} exceeds max_height {self.max_height}")
        return self


class PlayerState(BaseModel):
    """Player state as returned by ``GET /api/player``."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: str
    height: int
    streak: int
    last_played_date: Optional[str]
    has_played_today: bool = Field(description="Local date is on or before the last push")
    needs_rollback: bool = Field(description="Missed at least one day with height to lose")
    previous_height: int = Field(description="Height that will be lost, 0 without a pending rollback")
    total_pushes: int
    max_height: int
    death_count: int

    def to_api(self) -> dict[str, Any]:
        """Serialize with camelCase keys."""
        return self.model_dump(by_alias=True)
