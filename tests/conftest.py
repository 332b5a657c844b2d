"""Shared fixtures: a temp-file SQLite store and an API client."""
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from string_analyzer.app import create_app
from string_analyzer.database import create_db_engine, create_session_factory, init_db
from string_analyzer.store import RecordStore


class TickingClock:
    """Returns a strictly increasing UTC timestamp on every call."""

    def __init__(self, start=datetime(2025, 1, 1, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self):
        self.now += timedelta(seconds=1)
        return self.now


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite:///{tmp_path / 'strings.db'}"


@pytest.fixture
def store(database_url):
    engine = create_db_engine(database_url)
    init_db(engine)
    yield RecordStore(create_session_factory(engine), clock=TickingClock())
    engine.dispose()


@pytest.fixture
def client(database_url):
    app = create_app(database_url, clock=TickingClock())
    with TestClient(app) as c:
        yield c
    app.state.engine.dispose()
