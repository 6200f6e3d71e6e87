"""Compatibility scorer: one requester, one candidate, one MatchScore.

Pure and deterministic: no I/O, no shared state, no logging. Missing data
(no coordinate, empty schedule/style/goal sets, unknown level) drops the
affected component to 0 instead of raising, so it is safe to map over a
candidate list in any order.
"""

from __future__ import annotations

from typing import Iterable

from gymmatch.matching import features
from gymmatch.matching.models import MatchScore, RankedCandidate, ScoreBreakdown, UserProfile
from gymmatch.matching.scoring_config import ScoringConfig

MAX_REASONS = 4


def score(requester: UserProfile, candidate: UserProfile, config: ScoringConfig) -> MatchScore:
    weights = config.weights
    distance_miles = features.distance_between(requester.location, candidate.location)

    breakdown = ScoreBreakdown(
        distance=min(features.distance_points(distance_miles, config.distance_tiers), weights.distance),
        schedule=features.schedule_points(
            features.schedule_overlap_minutes(requester.schedule, candidate.schedule),
            config.schedule_full_overlap_minutes,
            weights.schedule,
        ),
        style=features.overlap_points(requester.workout_styles, candidate.workout_styles, weights.style),
        level=features.level_points(
            requester.fitness_level, candidate.fitness_level, weights.level, config.level_adjacent_ratio
        ),
        goals=features.overlap_points(requester.fitness_goals, candidate.fitness_goals, weights.goals),
    )
    total = breakdown.total()

    return MatchScore(
        candidate_id=candidate.user_id,
        total_score=total,
        breakdown=breakdown,
        passes_threshold=passes_threshold(total, config),
        distance_miles=round(distance_miles, 2) if distance_miles is not None else None,
    )


def passes_threshold(total_score: int, config: ScoringConfig) -> bool:
    return total_score >= config.minimum_match_score


def _same_text(a: str | None, b: str | None) -> bool:
    if not a or not b:
        return False
    return a.strip().lower() == b.strip().lower()


def match_reasons(
    requester: UserProfile,
    candidate: UserProfile,
    distance_miles: float | None,
    config: ScoringConfig,
) -> list[str]:
    """Short human-readable reasons, strongest first (at most four)."""
    reasons: list[str] = []

    if _same_text(requester.gym_name, candidate.gym_name):
        reasons.append(f"Same gym: {candidate.gym_name}")

    nearby = config.distance_tiers[0].max_miles if config.distance_tiers else 0.0
    if distance_miles is not None and distance_miles <= nearby:
        reasons.append(f"{distance_miles:.1f} mi away")
    elif _same_text(requester.location_name, candidate.location_name):
        reasons.append(f"Both in {candidate.location_name}")

    gap = features.level_gap(requester.fitness_level, candidate.fitness_level)
    if gap == 0:
        reasons.append(f"Both {candidate.fitness_level.value} level")
    elif gap == 1:
        reasons.append("Compatible fitness levels")

    goals = features.shared_tags(requester.fitness_goals, candidate.fitness_goals)
    if len(goals) >= 2:
        reasons.append(f"{len(goals)} shared goals")
    elif goals:
        reasons.append(f"Shared goal: {goals[0].replace('_', ' ')}")

    styles = features.shared_tags(requester.workout_styles, candidate.workout_styles)
    if len(styles) >= 2:
        reasons.append(f"{len(styles)} shared workout styles")
    elif styles:
        reasons.append(f"Both enjoy {styles[0]}")

    return reasons[:MAX_REASONS]


def ranking_key(item: RankedCandidate) -> tuple[int, str]:
    return (-item.score.total_score, item.user_id)


def rank_scored(items: Iterable[RankedCandidate]) -> list[RankedCandidate]:
    """Order by total score descending, then user_id, so pages are stable."""
    return sorted(items, key=ranking_key)
