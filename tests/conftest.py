from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app
from app.services.book_store import BookStore


class FrozenClock:
    """Clock that only moves when told to."""

    def __init__(self, start=None):
        self.now = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, seconds=1):
        self.now = self.now + timedelta(seconds=seconds)


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def store(clock):
    return BookStore(clock=clock)


@pytest.fixture
def app(store):
    return create_app(store=store, settings=Settings(APP_ENV="test"))


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
