"""Append-only ledgers of push and death events."""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from sisyphus.persistence.tables import DeathEventRow, PushEventRow, utc_now

logger = logging.getLogger(__name__.split(".")[-1])


class PushLedger:
    """Push history. The ``(player_id, play_date)`` pair is unique."""

    def has_pushed(self, session: Session, player_id: str, play_date: str) -> bool:
        """Check whether the player already pushed on ``play_date``."""
        stmt = select(PushEventRow.id).where(
            PushEventRow.player_id == player_id,
            PushEventRow.play_date == play_date,
        )
        return session.execute(stmt).first() is not None

    def append(
        self, session: Session, player_id: str, play_date: str, height_after: int, streak_at_time: int
    ) -> PushEventRow:
        """
        Record a push.

        Raises:
            sqlalchemy.exc.IntegrityError: On flush, if the date is already recorded
        """
        row = PushEventRow(
            player_id=player_id,
            play_date=play_date,
            played_at=utc_now(),
            height_after=height_after,
            streak_at_time=streak_at_time,
        )
        session.add(row)
        session.flush()
        logger.debug(f"Recorded push for {player_id} on {play_date} (height {height_after})")
        return row


class DeathLedger:
    """Death history. At most one death per player per missed interval."""

    def find_for_interval(self, session: Session, player_id: str, last_played_date: str) -> Optional[DeathEventRow]:
        """Get the death already recorded for the interval after ``last_played_date``."""
        stmt = select(DeathEventRow).where(
            DeathEventRow.player_id == player_id,
            DeathEventRow.last_played_date == last_played_date,
        )
        return session.execute(stmt).scalar_one_or_none()

    def append(
        self,
        session: Session,
        player_id: str,
        last_played_date: str,
        height_lost: int,
        streak_lost: int,
        days_missed: int,
    ) -> DeathEventRow:
        """
        Record a death.

        Raises:
            sqlalchemy.exc.IntegrityError: On flush, if the interval already has a death
        """
        row = DeathEventRow(
            player_id=player_id,
            died_at=utc_now(),
            last_played_date=last_played_date,
            height_lost=height_lost,
            streak_lost=streak_lost,
            days_missed=days_missed,
        )
        session.add(row)
        session.flush()
        logger.info(
            f"Recorded death for {player_id}: height {height_lost}, streak {streak_lost}, "
            f"{days_missed} day(s) missed"
        )
        return row

    def record_once(
        self,
        session: Session,
        player_id: str,
        last_played_date: str,
        height_lost: int,
        streak_lost: int,
        days_missed: int,
    ) -> tuple[DeathEventRow, bool]:
        """
        Record the death for an interval unless it already exists.

        Returns:
            Tuple of (death_row, created)
        """
        existing = self.find_for_interval(session, player_id, last_played_date)
        if existing is not None:
            return existing, False
        row = self.append(session, player_id, last_played_date, height_lost, streak_lost, days_missed)
        return row, True
