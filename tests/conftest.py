"""Shared fixtures for the test suite."""

from __future__ import annotations

from datetime import time
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from gymmatch.db import get_session
from gymmatch.main import app
from gymmatch.matching.models import (
    Coordinate,
    FitnessLevel,
    ScheduleSlot,
    UserProfile,
    Weekday,
)
from gymmatch.matching.scoring_config import ScoringConfig


NYC = Coordinate(lat=40.7831, lng=-73.9712)
BOSTON = Coordinate(lat=42.3601, lng=-71.0589)


# ---------------------------------------------------------------------------
# Fake DB session (no real Postgres needed)
# ---------------------------------------------------------------------------

class FakeSession:
    """Minimal stand-in for AsyncSession.

    `results` is consumed one list of rows per execute() call; once it runs
    out every call returns `rows`. Executed statements are kept in `calls`.
    """

    def __init__(
        self,
        rows: list[dict[str, Any]] | None = None,
        results: list[list[dict[str, Any]]] | None = None,
    ):
        self._rows = rows or []
        self._results = list(results or [])
        self.calls: list[tuple[str, dict[str, Any] | None]] = []

    async def execute(self, stmt, params=None):
        self.calls.append((str(stmt), params))
        rows = self._results.pop(0) if self._results else self._rows
        return FakeResult(rows)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        pass


class FakeResult:
    def __init__(self, rows: list[dict[str, Any]]):
        self._rows = rows
        self._keys = list(rows[0].keys()) if rows else []

    def keys(self):
        return self._keys

    def fetchall(self):
        return [tuple(r[k] for k in self._keys) for r in self._rows]

    def fetchone(self):
        rows = self.fetchall()
        return rows[0] if rows else None


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def fake_session():
    """Return a FakeSession with no rows (override _rows in tests if needed)."""
    return FakeSession()


@pytest.fixture()
def override_session(fake_session):
    """Override the FastAPI dependency so no real DB is needed."""
    async def _override():
        yield fake_session

    app.dependency_overrides[get_session] = _override
    yield fake_session
    app.dependency_overrides.clear()


@pytest.fixture()
async def client(override_session):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture()
def config() -> ScoringConfig:
    return ScoringConfig()


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------

def slot(day: str = "monday", start: str = "06:00", end: str = "09:00") -> ScheduleSlot:
    return ScheduleSlot(day=Weekday(day), start=time.fromisoformat(start), end=time.fromisoformat(end))


def make_profile(user_id: str = "u-1", **overrides) -> UserProfile:
    """UserProfile with no scoring data unless overridden."""
    fields: dict[str, Any] = {"user_id": user_id}
    fields.update(overrides)
    return UserProfile(**fields)


def make_profile_row(user_id: str, **overrides) -> dict[str, Any]:
    """Helper to build a fake profiles row dict."""
    row: dict[str, Any] = {
        "user_id": user_id,
        "name": f"User {user_id}",
        "age": 28,
        "gender": None,
        "location_name": "New York",
        "location_lat": NYC.lat,
        "location_lng": NYC.lng,
        "gym_name": None,
        "fitness_level": "intermediate",
        "fitness_goals": [],
        "workout_styles": [],
        "preferred_gender": None,
        "age_range": None,
        "max_distance": None,
    }
    row.update(overrides)
    return row


def make_schedule_row(user_id: str, day: str = "monday", start: str = "06:00", end: str = "09:00") -> dict[str, Any]:
    return {"user_id": user_id, "day_of_week": day, "start_time": start, "end_time": end}


def example_pair() -> tuple[UserProfile, UserProfile]:
    """Requester/candidate pair that scores 30 + 25 + 10 + 15 + 5 = 85."""
    requester = make_profile(
        "requester",
        location=NYC,
        schedule=[slot("monday", "06:00", "09:00")],
        workout_styles={"weightlifting"},
        fitness_level=FitnessLevel.intermediate,
        fitness_goals={"build_muscle"},
    )
    candidate = make_profile(
        "candidate",
        location=NYC,
        schedule=[slot("monday", "06:00", "09:00")],
        workout_styles={"weightlifting", "cardio"},
        fitness_level=FitnessLevel.intermediate,
        fitness_goals={"build_muscle", "lose_weight"},
    )
    return requester, candidate
