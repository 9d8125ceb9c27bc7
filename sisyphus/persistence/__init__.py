"""Storage layer: players, push/death ledgers and aggregate reads."""

from sisyphus.persistence.database import Database
from sisyphus.persistence.ledgers import DeathLedger, PushLedger
from sisyphus.persistence.player_store import PlayerStore
from sisyphus.persistence.stats_reader import StatsReader

__all__ = [
    "Database",
    "DeathLedger",
    "PlayerStore",
    "PushLedger",
    "StatsReader",
]
