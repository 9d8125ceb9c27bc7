"""Progression engine package."""

from sisyphus.engine.dates import DateArithmetic
from sisyphus.engine.progression import ProgressionEngine, ProgressionRules
from sisyphus.engine.rate_limiter import SlidingWindowRateLimiter

__all__ = [
    "DateArithmetic",
    "ProgressionEngine",
    "ProgressionRules",
    "SlidingWindowRateLimiter",
]
