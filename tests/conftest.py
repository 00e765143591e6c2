"""Shared pytest fixtures: in-memory backend fakes and a wired TestClient."""

import datetime as dt
from typing import Optional

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.models import to_datetime
from app.services.auth import ANONYMOUS, get_auth_context
from app.services.neighborhoods import get_repository


class FakeCursor:
    """Mimics the slice of motor's cursor API the repository uses."""

    def __init__(self, docs: list):
        self.docs = list(docs)
        self.limit_value: Optional[int] = None

    def limit(self, n: int) -> "FakeCursor":
        self.limit_value = n
        return self

    async def to_list(self, length=None):
        docs = self.docs
        if self.limit_value:
            docs = docs[: self.limit_value]
        if length is not None:
            docs = docs[:length]
        return docs


class FakeCollection:
    """Records ``find`` calls and returns canned documents."""

    def __init__(self, docs: Optional[list] = None, error: Optional[Exception] = None):
        self.docs = docs or []
        self.error = error
        self.calls = []

    def find(self, query, sort=None):
        self.calls.append({"query": query, "sort": sort})
        if self.error:
            raise self.error
        return FakeCursor(self.docs)


class FakeRepository:
    """In-memory stand-in for NeighborhoodRepository."""

    def __init__(self, zipcodes=None, events=None, zip_error=None, events_error=None):
        self.zipcodes = zipcodes or []
        self.events = events or []
        self.zip_error = zip_error
        self.events_error = events_error
        self.calls = []

    async def find_zipcode(self, zipcode: str):
        self.calls.append(("zipcodes", zipcode))
        if self.zip_error:
            raise self.zip_error
        matches = [z for z in self.zipcodes if z["zipcode"] == zipcode]
        return matches[0] if matches else None

    async def find_upcoming_events(self, zipcode: str, now: dt.datetime):
        self.calls.append(("events", zipcode))
        if self.events_error:
            raise self.events_error
        upcoming = [
            e for e in self.events
            if e["zipcode"] == zipcode and to_datetime(e["start_datetime"]) >= now
        ]
        return sorted(upcoming, key=lambda e: to_datetime(e["start_datetime"]))


def future(days: int = 1, hours: int = 0) -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc) + dt.timedelta(days=days, hours=hours)


@pytest.fixture
def memorial() -> dict:
    """Provide the Memorial neighborhood record."""
    return {"zipcode": "77024", "city": "Houston", "neighborhood": "Memorial", "active_events": 3}


@pytest.fixture
def memorial_events() -> list:
    """Provide upcoming and past events for 77024, deliberately unordered."""
    return [
        {
            "_id": "evt-2",
            "title": "Farmers Market",
            "description": "Local produce and crafts",
            "start_datetime": future(days=3),
            "venue_name": "Memorial City Plaza",
            "category": "Food",
            "zipcode": "77024",
        },
        {
            "_id": "evt-1",
            "title": "Park Cleanup",
            "description": None,
            "start_datetime": future(days=1),
            "venue_name": None,
            "category": None,
            "zipcode": "77024",
        },
        {
            "_id": "evt-old",
            "title": "Last Week's Concert",
            "start_datetime": future(days=-7),
            "zipcode": "77024",
        },
        {
            "_id": "evt-other",
            "title": "Heights Art Walk",
            "start_datetime": future(days=2),
            "zipcode": "77008",
        },
    ]


@pytest.fixture
def repo(memorial: dict, memorial_events: list) -> FakeRepository:
    return FakeRepository(zipcodes=[memorial], events=memorial_events)


@pytest.fixture
def client(repo: FakeRepository):
    """TestClient with the backend and auth replaced by fakes."""
    app.dependency_overrides[get_repository] = lambda: repo
    app.dependency_overrides[get_auth_context] = lambda: ANONYMOUS
    yield TestClient(app)
    app.dependency_overrides.clear()
