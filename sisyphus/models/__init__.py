"""Data models module for Sisyphus."""

# Player
from sisyphus.models.player import PlayerRecord, PlayerState

# Progression outcomes
from sisyphus.models.outcomes import ProgressionState, PushDecision, PushResult, RollbackInfo

# Stats
from sisyphus.models.stats import DeathStats, LeaderboardEntry, SurvivorshipEntry

__all__ = [
    # Player
    "PlayerRecord",
    "PlayerState",
    # Progression outcomes
    "ProgressionState",
    "PushDecision",
    "PushResult",
    "RollbackInfo",
    # Stats
    "LeaderboardEntry",
    "SurvivorshipEntry",
    "DeathStats",
]
