"""Aggregate statistics models."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class LeaderboardEntry(BaseModel):
    """One ranked player."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    rank: int = Field(ge=1)
    id: str
    height: int
    streak: int
    max_height: int


class SurvivorshipEntry(BaseModel):
    """How many players reached, and still hold, a given height."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    height: int = Field(ge=1)
    players_reached: int
    reached_percent: float
    players_surviving: int
    surviving_percent: float


class DeathStats(BaseModel):
    """Totals over the death ledger."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    total_deaths: int = 0
    average_height_at_death: float = 0.0
    longest_streak_lost: int = 0
