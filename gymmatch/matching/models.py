"""Matching contract: Pydantic v2 models."""

from __future__ import annotations

from datetime import datetime, time, timezone
from enum import Enum

from pydantic import BaseModel, Field


class FitnessLevel(str, Enum):
    beginner = "beginner"
    intermediate = "intermediate"
    advanced = "advanced"


class Weekday(str, Enum):
    monday = "monday"
    tuesday = "tuesday"
    wednesday = "wednesday"
    thursday = "thursday"
    friday = "friday"
    saturday = "saturday"
    sunday = "sunday"


class Coordinate(BaseModel):
    lat: float = Field(ge=-90.0, le=90.0)
    lng: float = Field(ge=-180.0, le=180.0)


class ScheduleSlot(BaseModel):
    """Recurring weekly availability. end <= start is kept but never overlaps."""

    day: Weekday
    start: time
    end: time


class UserProfile(BaseModel):
    user_id: str = Field(min_length=1)
    name: str | None = None
    age: int | None = None
    gender: str | None = None
    location_name: str | None = None
    gym_name: str | None = None
    location: Coordinate | None = None
    schedule: list[ScheduleSlot] = Field(default_factory=list)
    workout_styles: set[str] = Field(default_factory=set)
    fitness_level: FitnessLevel | None = None
    fitness_goals: set[str] = Field(default_factory=set)
    preferred_gender: str | None = None  # None or "any" = no preference
    # Saved discovery preferences; used when a request sets no bound of its own.
    age_range: tuple[int, int] | None = None
    max_distance_miles: float | None = Field(default=None, gt=0)


class ScoreBreakdown(BaseModel):
    distance: int = 0  # 0–30
    schedule: int = 0  # 0–25
    style: int = 0  # 0–20
    level: int = 0  # 0–15
    goals: int = 0  # 0–10

    def total(self) -> int:
        return self.distance + self.schedule + self.style + self.level + self.goals


class MatchScore(BaseModel):
    """Compatibility of one candidate for one requester. Computed, never stored."""

    candidate_id: str
    total_score: int = Field(ge=0, le=100)
    breakdown: ScoreBreakdown = Field(default_factory=ScoreBreakdown)
    passes_threshold: bool = False
    distance_miles: float | None = None


class DiscoveryFilters(BaseModel):
    fitness_levels: list[FitnessLevel] = Field(default_factory=list)
    workout_styles: list[str] = Field(default_factory=list)  # any-of
    min_age: int | None = None
    max_age: int | None = None
    max_distance_miles: float | None = None
    include_below_threshold: bool = False


class RankedCandidate(BaseModel):
    user_id: str
    name: str | None = None
    age: int | None = None
    gym_name: str | None = None
    location_name: str | None = None
    score: MatchScore
    reasons: list[str] = Field(default_factory=list)


class DiscoveryPage(BaseModel):
    """Top-level discovery response. Always constructible, even when empty."""

    requester_id: str
    items: list[RankedCandidate] = Field(default_factory=list)
    total: int = 0
    offset: int = 0
    limit: int = 20
    next_offset: int | None = None
    warnings: list[str] = Field(default_factory=list)
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ScorePairRequest(BaseModel):
    requester: UserProfile
    candidate: UserProfile


class ScorePairResponse(BaseModel):
    score: MatchScore
    reasons: list[str] = Field(default_factory=list)
