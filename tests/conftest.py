"""
Shared fixtures: an in-memory SQLite repository with a deterministic clock
and an application wired to it.
"""
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from nexusai.core.config import Settings
from nexusai.db.sqlite import create_sqlite_engine, init_sqlite_schema
from nexusai.main import create_app
from nexusai.repositories.sql_repository import SqlRepository
from nexusai.services.notifier import JobNotifier

START = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)


class FakeClock:
    """Returns START, then one second later on every call."""

    def __init__(self, start: datetime = START):
        self.current = start
        self.calls = []

    def __call__(self) -> datetime:
        now = self.current
        self.calls.append(now)
        self.current = now + timedelta(seconds=1)
        return now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def settings(tmp_path):
    return Settings(
        mongodb_uri="",
        sqlite_path=":memory:",
        frontend_dir=str(tmp_path / "no-frontend")
    )


@pytest.fixture
def sql_repo(clock):
    engine = create_sqlite_engine("sqlite://")
    init_sqlite_schema(engine)
    repo = SqlRepository(engine, clock=clock)
    yield repo
    repo.close()


@pytest.fixture
def sio():
    """Socket.IO server stand-in recording emitted events."""
    server = MagicMock()
    server.emit = AsyncMock()
    return server


@pytest.fixture
def client(settings, sql_repo, sio):
    app = create_app(settings, repository=sql_repo, notifier=JobNotifier(sio=sio))
    with TestClient(app) as test_client:
        yield test_client


def job_payload(**overrides):
    payload = {
        "title": "Frontend Engineer",
        "company": "Acme",
        "location": "Remote",
        "salary": "$90k",
        "type": "Full-time",
        "description": "Build dashboards",
        "skillsRequired": ["React", "Go"],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def make_job():
    return job_payload
