"""Persistence for player progress rows."""

import logging
import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from sisyphus.models.player import PlayerRecord
from sisyphus.persistence.tables import PlayerRow, utc_now

logger = logging.getLogger(__name__.split(".")[-1])


class PlayerStore:
    """
    Reads and mutates player rows.

    Every method works inside a session owned by the caller, so several store
    calls can share one transaction.
    """

    def create(self, session: Session, player_id: Optional[str] = None) -> PlayerRow:
        """
        Insert a new player with zeroed progress.

        Args:
            session: Open transactional session
            player_id: Optional id, a random UUID4 by default

        Returns:
            The new row
        """
        now = utc_now()
        row = PlayerRow(
            id=player_id or str(uuid.uuid4()),
            created_at=now,
            height=0,
            streak=0,
            last_played_date=None,
            total_pushes=0,
            max_height=0,
            death_count=0,
            last_seen_at=now,
        )
        session.add(row)
        session.flush()
        logger.info(f"Registered player {row.id}")
        return row

    def get(self, session: Session, player_id: str) -> Optional[PlayerRow]:
        """Get a player row, or None."""
        return session.get(PlayerRow, player_id)

    def lock(self, session: Session, player_id: str) -> Optional[PlayerRow]:
        """
        Get a player row for update.

        Serializes concurrent transitions of the same player on databases with
        row locks. SQLite ignores FOR UPDATE; there the transaction already holds
        the write lock (see Database).
        """
        stmt = select(PlayerRow).where(PlayerRow.id == player_id).with_for_update()
        return session.execute(stmt).scalar_one_or_none()

    def touch(self, row: PlayerRow) -> None:
        """Refresh the last-seen timestamp."""
        row.last_seen_at = utc_now()

    def advance(self, row: PlayerRow, play_date: str) -> PlayerRow:
        """
        Apply one successful push to the row.

        Args:
            row: Locked player row
            play_date: Local date being pushed

        Returns:
            The updated row
        """
        row.height += 1
        row.streak += 1
        row.last_played_date = play_date
        row.total_pushes += 1
        row.max_height = max(row.max_height, row.height)
        self.touch(row)
        return row

    def reset(self, row: PlayerRow) -> PlayerRow:
        """
        Zero height and streak after a death.

        ``last_played_date`` is kept: the next push from a later date starts a
        new climb from height 0.
        """
        row.height = 0
        row.streak = 0
        row.death_count += 1
        self.touch(row)
        return row

    @staticmethod
    def to_record(row: PlayerRow) -> PlayerRecord:
        """Detach a row into an immutable snapshot."""
        return PlayerRecord.model_validate(row)
