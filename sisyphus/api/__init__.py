"""HTTP API for Sisyphus."""

from sisyphus.api.app import create_app
from sisyphus.api.service_config import ServiceConfig

__all__ = ["ServiceConfig", "create_app"]
