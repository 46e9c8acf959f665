"""
Shared pytest fixtures for activity organizer tests.
"""
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from organizer.models import ActivityInput
from organizer.services import ActivityStore, MemoryStorage


class SteppingClock:
    """Returns a strictly increasing UTC time on each call."""

    def __init__(self, start=None, step=timedelta(seconds=1)):
        self.current = start or datetime(2025, 1, 15, 8, 30, tzinfo=timezone.utc)
        self.step = step

    def __call__(self):
        self.current = self.current + self.step
        return self.current


@pytest.fixture
def clock():
    return SteppingClock()


@pytest.fixture
def storage():
    """
    In-memory storage shared by every store built in a test.
    """
    return MemoryStorage()


@pytest.fixture
def store(storage, clock):
    """
    An empty ActivityStore over in-memory storage.
    """
    return ActivityStore(storage, clock=clock)


@pytest.fixture
def make_input():
    """
    Factory for ActivityInput with sensible defaults.
    """
    def _make(name="Write report", category="Professional", priority="normal", notes=""):
        return ActivityInput(name=name, category=category, priority=priority, notes=notes)

    return _make


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "data" / "activities.json"


@pytest.fixture
def client(data_file):
    """
    TestClient over a fresh app whose store is backed by a temp file.
    """
    from main import create_app

    app = create_app(data_file=data_file, seed_samples=False)
    with TestClient(app) as test_client:
        yield test_client
