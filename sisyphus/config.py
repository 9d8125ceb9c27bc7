"""Central configuration defaults and constants for Sisyphus."""

import os

# Storage
DEFAULT_DATABASE_URL = os.getenv("SISYPHUS_DATABASE_URL", "sqlite:///data/sisyphus.db")
DEFAULT_DATABASE_ECHO = os.getenv("SISYPHUS_DATABASE_ECHO", "false").lower() in ("true", "1", "yes", "on")

# Push rate limiting (sliding window, per player)
DEFAULT_RATE_LIMIT_WINDOW_MS = int(os.getenv("SISYPHUS_RATE_LIMIT_WINDOW_MS", "60000"))  # 1 minute
DEFAULT_RATE_LIMIT_MAX_ATTEMPTS = int(os.getenv("SISYPHUS_RATE_LIMIT_MAX_ATTEMPTS", "10"))

# Stats
DEFAULT_LEADERBOARD_LIMIT = int(os.getenv("SISYPHUS_LEADERBOARD_LIMIT", "100"))
DEFAULT_LEADERBOARD_MAX_LIMIT = int(os.getenv("SISYPHUS_LEADERBOARD_MAX_LIMIT", "100"))
DEFAULT_ACTIVE_PLAYER_DAYS = int(os.getenv("SISYPHUS_ACTIVE_PLAYER_DAYS", "7"))

# Request identity
PLAYER_ID_HEADER = "X-Player-ID"

# Server
DEFAULT_LOG_LEVEL = os.getenv("SISYPHUS_LOG_LEVEL", "INFO").upper()
DEFAULT_PORT = int(os.getenv("SISYPHUS_PORT", "3000"))
