"""ORM tables for players and their push/death ledgers."""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class PlayerRow(Base):
    """Mutable projection of a player's progress."""

    __tablename__ = "players"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utc_now)
    height: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    streak: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_played_date: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)
    total_pushes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    max_height: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    death_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_seen_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utc_now)

    __table_args__ = (
        Index("idx_players_height", "height"),
        Index("idx_players_max_height", "max_height"),
    )


class PushEventRow(Base):
    """One push, at most one per player per calendar date."""

    __tablename__ = "daily_plays"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    player_id: Mapped[str] = mapped_column(String(64), ForeignKey("players.id"), nullable=False)
    play_date: Mapped[str] = mapped_column(String(10), nullable=False)
    played_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utc_now)
    height_after: Mapped[int] = mapped_column(Integer, nullable=False)
    streak_at_time: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (
        UniqueConstraint("player_id", "play_date", name="uq_daily_plays_player_date"),
        Index("idx_daily_plays_date", "play_date"),
    )


class DeathEventRow(Base):
    """
    A rollback. ``last_played_date`` is the last push before the missed days,
    so each missed interval can only ever produce one death.
    """

    __tablename__ = "deaths"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    player_id: Mapped[str] = mapped_column(String(64), ForeignKey("players.id"), nullable=False)
    died_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utc_now)
    last_played_date: Mapped[str] = mapped_column(String(10), nullable=False)
    height_lost: Mapped[int] = mapped_column(Integer, nullable=False)
    streak_lost: Mapped[int] = mapped_column(Integer, nullable=False)
    days_missed: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    __table_args__ = (
        UniqueConstraint("player_id", "last_played_date", name="uq_deaths_player_interval"),
        Index("idx_deaths_height", "height_lost"),
    )
