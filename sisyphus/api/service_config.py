"""Service configuration."""

from pydantic import BaseModel, Field

from sisyphus.config import (
    DEFAULT_ACTIVE_PLAYER_DAYS,
    DEFAULT_DATABASE_ECHO,
    DEFAULT_DATABASE_URL,
    DEFAULT_LEADERBOARD_LIMIT,
    DEFAULT_LEADERBOARD_MAX_LIMIT,
    DEFAULT_LOG_LEVEL,
    DEFAULT_RATE_LIMIT_MAX_ATTEMPTS,
    DEFAULT_RATE_LIMIT_WINDOW_MS,
)


class ServiceConfig(BaseModel):
    """Runtime configuration of the HTTP service."""

    database_url: str = Field(
        default=DEFAULT_DATABASE_URL,
        description="SQLAlchemy database URL. In-memory sqlite:// serializes all requests, use it for tests only",
    )
    database_echo: bool = Field(default=DEFAULT_DATABASE_ECHO, description="Log emitted SQL")
    rate_limit_max_attempts: int = Field(
        default=DEFAULT_RATE_LIMIT_MAX_ATTEMPTS,
        ge=1,
        le=10000,
        description="Push attempts allowed per player per window",
    )
    rate_limit_window_ms: int = Field(
        default=DEFAULT_RATE_LIMIT_WINDOW_MS,
        ge=1,
        description="Rate limit window in milliseconds",
    )
    leaderboard_limit: int = Field(
        default=DEFAULT_LEADERBOARD_LIMIT, ge=1, description="Default leaderboard page size"
    )
    leaderboard_max_limit: int = Field(
        default=DEFAULT_LEADERBOARD_MAX_LIMIT, ge=1, le=1000, description="Largest leaderboard page size"
    )
    active_player_days: int = Field(
        default=DEFAULT_ACTIVE_PLAYER_DAYS, ge=1, description="Window for counting a player as active"
    )
    log_level: str = Field(default=DEFAULT_LOG_LEVEL, description="Root logging level")
