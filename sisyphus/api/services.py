"""Per-application service wiring."""

from typing import Callable, Optional

from flask import current_app

from sisyphus.api.service_config import ServiceConfig
from sisyphus.engine.progression import ProgressionEngine
from sisyphus.engine.rate_limiter import SlidingWindowRateLimiter
from sisyphus.persistence.database import Database
from sisyphus.persistence.stats_reader import StatsReader

EXTENSION_KEY = "sisyphus"


class Services:
    """Everything a request handler needs, built once per app."""

    def __init__(self, config: ServiceConfig, clock: Optional[Callable[[], float]] = None) -> None:
        """
        Build services from config.

        Args:
            config: Service configuration
            clock: Optional millisecond clock for the rate limiter
        """
        self.config = config
        self.database = Database(url=config.database_url, echo=config.database_echo)
        self.database.create_schema()
        self.engine = ProgressionEngine(self.database)
        self.rate_limiter = SlidingWindowRateLimiter(
            max_attempts=config.rate_limit_max_attempts,
            window_ms=config.rate_limit_window_ms,
            clock=clock,
        )
        self.stats = StatsReader(self.database, max_leaderboard_limit=config.leaderboard_max_limit)


def current_services() -> Services:
    """Services of the app handling the current request."""
    return current_app.extensions[EXTENSION_KEY]
