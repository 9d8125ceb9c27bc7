"""Pytest configuration and fixtures."""

import pytest

from sisyphus.api.app import create_app
from sisyphus.api.service_config import ServiceConfig
from sisyphus.engine.progression import ProgressionEngine
from sisyphus.persistence.database import Database


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


@pytest.fixture
def database():
    """Fresh in-memory database with the schema created."""
    db = Database(url="sqlite://")
    db.create_schema()
    yield db
    db.dispose()


@pytest.fixture
def engine(database):
    """Progression engine over the in-memory database."""
    return ProgressionEngine(database)


@pytest.fixture
def clock():
    """Controllable clock for rate limiting."""
    return FakeClock()


@pytest.fixture
def app(clock):
    """Flask app over an in-memory database."""
    config = ServiceConfig(
        database_url="sqlite://",
        rate_limit_max_attempts=10,
        rate_limit_window_ms=60000,
        log_level="WARNING",
    )
    flask_app = create_app(config, clock=clock)
    flask_app.config.update(TESTING=True)
    yield flask_app
    flask_app.extensions["sisyphus"].database.dispose()


@pytest.fixture
def client(app):
    """Test client for the Flask app."""
    return app.test_client()


@pytest.fixture
def player_id(client):
    """Id of a freshly registered player."""
    response = client.post("/api/player/register")
    return response.get_json()["id"]


@pytest.fixture
def file_database(tmp_path):
    """Database in a temporary SQLite file, shared by several connections."""
    db = Database(url=f"sqlite:///{tmp_path / 'sisyphus.db'}")
    db.create_schema()
    yield db
    db.dispose()
