"""Read-only aggregate views over players and deaths."""

from datetime import timedelta
from typing import Optional

from sqlalchemy import func, select, union

from sisyphus.config import DEFAULT_ACTIVE_PLAYER_DAYS, DEFAULT_LEADERBOARD_LIMIT, DEFAULT_LEADERBOARD_MAX_LIMIT
from sisyphus.models.stats import DeathStats, LeaderboardEntry, SurvivorshipEntry
from sisyphus.persistence.database import Database
from sisyphus.persistence.tables import DeathEventRow, PlayerRow, utc_now

_RANK_ORDER = (PlayerRow.height.desc(), PlayerRow.streak.desc(), PlayerRow.created_at.asc(), PlayerRow.id.asc())


def _percent(part: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return round(part / total * 100, 1)


class StatsReader:
    """Leaderboard, survivorship and death statistics."""

    def __init__(self, database: Database, max_leaderboard_limit: int = DEFAULT_LEADERBOARD_MAX_LIMIT) -> None:
        self._database = database
        self.max_leaderboard_limit = max_leaderboard_limit

    def leaderboard(self, limit: int = DEFAULT_LEADERBOARD_LIMIT, offset: int = 0) -> list[LeaderboardEntry]:
        """
        Players still on the mountain, highest first.

        Args:
            limit: Page size, clamped to [1, max_leaderboard_limit]
            offset: Rows to skip, negative values count as 0

        Returns:
            Ranked entries; ties on height are broken by streak
        """
        limit = min(max(1, limit), self.max_leaderboard_limit)
        offset = max(0, offset)
        rank = func.row_number().over(order_by=_RANK_ORDER).label("rank")
        stmt = (
            select(rank, PlayerRow.id, PlayerRow.height, PlayerRow.streak, PlayerRow.max_height)
            .where(PlayerRow.height > 0)
            .order_by(*_RANK_ORDER)
            .limit(limit)
            .offset(offset)
        )
        with self._database.transaction() as session:
            rows = session.execute(stmt).all()
        return [
            LeaderboardEntry(rank=r.rank, id=r.id, height=r.height, streak=r.streak, max_height=r.max_height)
            for r in rows
        ]

    def player_rank(self, player_id: str) -> Optional[int]:
        """Leaderboard position of a player, None when at height 0 or unknown."""
        ranked = (
            select(PlayerRow.id, func.row_number().over(order_by=_RANK_ORDER).label("rank"))
            .where(PlayerRow.height > 0)
            .subquery()
        )
        stmt = select(ranked.c.rank).where(ranked.c.id == player_id)
        with self._database.transaction() as session:
            return session.execute(stmt).scalar_one_or_none()

    def total_players(self) -> int:
        with self._database.transaction() as session:
            return session.execute(select(func.count()).select_from(PlayerRow)).scalar_one()

    def active_players(self, since_days: int = DEFAULT_ACTIVE_PLAYER_DAYS) -> int:
        """Players seen within the last ``since_days`` days."""
        cutoff = utc_now() - timedelta(days=since_days)
        stmt = select(func.count()).select_from(PlayerRow).where(PlayerRow.last_seen_at > cutoff)
        with self._database.transaction() as session:
            return session.execute(stmt).scalar_one()

    def survivorship(self) -> list[SurvivorshipEntry]:
        """
        Survivorship curve.

        For every height anyone has reached: how many players ever got there
        (by max height) and how many are there right now (by current height).
        """
        heights = union(
            select(PlayerRow.max_height.label("height")).where(PlayerRow.max_height > 0),
            select(PlayerRow.height.label("height")).where(PlayerRow.height > 0),
        ).subquery()
        reached = (
            select(func.count())
            .select_from(PlayerRow)
            .where(PlayerRow.max_height >= heights.c.height)
            .scalar_subquery()
        )
        surviving = (
            select(func.count())
            .select_from(PlayerRow)
            .where(PlayerRow.height >= heights.c.height)
            .scalar_subquery()
        )
        stmt = select(
            heights.c.height,
            reached.label("players_reached"),
            surviving.label("players_surviving"),
        ).order_by(heights.c.height.asc())

        with self._database.transaction() as session:
            total = session.execute(select(func.count()).select_from(PlayerRow)).scalar_one()
            rows = session.execute(stmt).all()

        return [
            SurvivorshipEntry(
                height=r.height,
                players_reached=r.players_reached,
                reached_percent=_percent(r.players_reached, total),
                players_surviving=r.players_surviving,
                surviving_percent=_percent(r.players_surviving, total),
            )
            for r in rows
        ]

    def death_stats(self) -> DeathStats:
        stmt = select(
            func.count(DeathEventRow.id),
            func.coalesce(func.avg(DeathEventRow.height_lost), 0),
            func.coalesce(func.max(DeathEventRow.streak_lost), 0),
        )
        with self._database.transaction() as session:
            total, average, longest = session.execute(stmt).one()
        return DeathStats(
            total_deaths=total,
            average_height_at_death=round(float(average), 1),
            longest_streak_lost=longest,
        )
