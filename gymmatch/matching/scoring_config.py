"""Static scoring configuration: no DB, config only.

Weights are fixed; tiers, thresholds and partial-credit ratios can be tuned
through Settings. The config is built once per process and never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from gymmatch.config import Settings, settings


@dataclass(frozen=True, slots=True)
class MatchWeights:
    distance: int = 30  # proximity
    schedule: int = 25  # can they work out together?
    style: int = 20
    level: int = 15
    goals: int = 10

    def __post_init__(self) -> None:
        if min(self.distance, self.schedule, self.style, self.level, self.goals) < 0:
            raise ValueError("Match weights must be non-negative")
        if self.total != 100:
            raise ValueError(f"Match weights must sum to 100, got {self.total}")

    @property
    def total(self) -> int:
        return self.distance + self.schedule + self.style + self.level + self.goals


@dataclass(frozen=True, slots=True)
class DistanceTier:
    max_miles: float
    points: int


MATCH_WEIGHTS = MatchWeights()

DISTANCE_TIERS: tuple[DistanceTier, ...] = (
    DistanceTier(max_miles=1.0, points=30),  # excellent
    DistanceTier(max_miles=3.0, points=20),  # good
    DistanceTier(max_miles=5.0, points=10),  # fair
    DistanceTier(max_miles=10.0, points=5),  # poor
)

MINIMUM_MATCH_SCORE = 40
SCHEDULE_FULL_OVERLAP_MINUTES = 180
LEVEL_ADJACENT_RATIO = 0.5


@dataclass(frozen=True, slots=True)
class ScoringConfig:
    weights: MatchWeights = field(default_factory=MatchWeights)
    distance_tiers: tuple[DistanceTier, ...] = DISTANCE_TIERS
    schedule_full_overlap_minutes: int = SCHEDULE_FULL_OVERLAP_MINUTES
    level_adjacent_ratio: float = LEVEL_ADJACENT_RATIO
    minimum_match_score: int = MINIMUM_MATCH_SCORE

    def __post_init__(self) -> None:
        _validate_tiers(self.distance_tiers, self.weights.distance)
        if self.schedule_full_overlap_minutes <= 0:
            raise ValueError("schedule_full_overlap_minutes must be positive")
        if not 0.0 <= self.level_adjacent_ratio <= 1.0:
            raise ValueError("level_adjacent_ratio must be within [0, 1]")
        if not 0 <= self.minimum_match_score <= 100:
            raise ValueError("minimum_match_score must be within [0, 100]")

    @property
    def max_radius_miles(self) -> float:
        """Outermost tier radius. Still scored at that radius; 0 only beyond it."""
        return self.distance_tiers[-1].max_miles if self.distance_tiers else 0.0

    def as_dict(self) -> dict[str, Any]:
        return {
            "weights": {
                "distance": self.weights.distance,
                "schedule": self.weights.schedule,
                "style": self.weights.style,
                "level": self.weights.level,
                "goals": self.weights.goals,
            },
            "distance_tiers": [{"max_miles": t.max_miles, "points": t.points} for t in self.distance_tiers],
            "max_radius_miles": self.max_radius_miles,
            "schedule_full_overlap_minutes": self.schedule_full_overlap_minutes,
            "level_adjacent_ratio": self.level_adjacent_ratio,
            "minimum_match_score": self.minimum_match_score,
        }


def _validate_tiers(tiers: tuple[DistanceTier, ...], weight: int) -> None:
    prev: DistanceTier | None = None
    for tier in tiers:
        if tier.max_miles < 0:
            raise ValueError("Distance tier radius must be non-negative")
        if not 0 <= tier.points <= weight:
            raise ValueError(f"Distance tier points must be within [0, {weight}]")
        if prev is not None:
            if tier.max_miles <= prev.max_miles:
                raise ValueError("Distance tiers must be ordered by increasing radius")
            if tier.points > prev.points:
                raise ValueError("Distance tier points must not increase with radius")
        prev = tier


def tiers_from_pairs(pairs: Iterable[tuple[float, int]]) -> tuple[DistanceTier, ...]:
    return tuple(DistanceTier(max_miles=float(m), points=int(p)) for m, p in pairs)


def build_scoring_config(cfg: Settings) -> ScoringConfig:
    """Build the process-wide ScoringConfig. Raises ValueError on bad settings."""
    return ScoringConfig(
        distance_tiers=tiers_from_pairs(cfg.distance_tiers),
        schedule_full_overlap_minutes=cfg.schedule_full_overlap_minutes,
        level_adjacent_ratio=cfg.level_adjacent_ratio,
        minimum_match_score=cfg.minimum_match_score,
    )


SCORING_CONFIG = build_scoring_config(settings)


def get_scoring_config() -> ScoringConfig:
    return SCORING_CONFIG
