"""Shared fixtures."""

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from habit_tracker.habits.ledger import CompletionLedger
from habit_tracker.habits.scheduling import HabitScheduler
from habit_tracker.main import app, get_clock, get_database, get_renderer
from habit_tracker.dashboard.renderer import SummaryRenderer
from habit_tracker.storage.database import HabitDatabase


class FakeClock:
    """Clock that returns a settable instant."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock():
    # Wednesday
    return FakeClock(datetime(2024, 1, 10, 14, 30))


@pytest.fixture
def db(tmp_path):
    return HabitDatabase(str(tmp_path / "habits.db"))


@pytest.fixture
def scheduler(db, clock):
    return HabitScheduler(db, clock)


@pytest.fixture
def ledger(db, clock):
    return CompletionLedger(db, clock)


@pytest.fixture
def renderer():
    return SummaryRenderer()


@pytest.fixture
def client(db, clock, renderer):
    app.dependency_overrides[get_database] = lambda: db
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_renderer] = lambda: renderer
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
