"""Pure stateless scoring features: math only, never raises."""

from __future__ import annotations

import math
from datetime import time
from typing import Iterable, Sequence

from gymmatch.matching.models import Coordinate, FitnessLevel, ScheduleSlot
from gymmatch.matching.scoring_config import DistanceTier

EARTH_RADIUS_MILES = 3958.8

LEVEL_ORDER: tuple[FitnessLevel, ...] = (
    FitnessLevel.beginner,
    FitnessLevel.intermediate,
    FitnessLevel.advanced,
)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 away from zero (never banker's rounding)."""
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)


def clamp_points(value: float, weight: int) -> int:
    return min(max(round_half_up(value), 0), weight)


# ---------------------------------------------------------------------------
# Distance
# ---------------------------------------------------------------------------

def haversine_miles(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance between two coordinates, in miles."""
    lat1, lng1, lat2, lng2 = map(math.radians, (a.lat, a.lng, b.lat, b.lng))
    dlat = lat2 - lat1
    dlng = lng2 - lng1
    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlng / 2) ** 2
    # Rounding can push h a hair past 1 for antipodal points
    h = min(max(h, 0.0), 1.0)
    return 2 * EARTH_RADIUS_MILES * math.asin(math.sqrt(h))


def distance_between(a: Coordinate | None, b: Coordinate | None) -> float | None:
    if a is None or b is None:
        return None
    return haversine_miles(a, b)


def distance_points(distance_miles: float | None, tiers: Sequence[DistanceTier]) -> int:
    """Points of the nearest tier that covers the distance; 0 beyond all tiers or when unknown."""
    if distance_miles is None or math.isnan(distance_miles):
        return 0
    for tier in tiers:
        if distance_miles <= tier.max_miles:
            return tier.points
    return 0


# ---------------------------------------------------------------------------
# Schedule
# ---------------------------------------------------------------------------

def _minutes(t: time) -> int:
    return t.hour * 60 + t.minute


def slot_overlap_minutes(a: ScheduleSlot, b: ScheduleSlot) -> int:
    """Overlap in minutes of two slots; 0 on different days or for inverted slots."""
    if a.day != b.day:
        return 0
    if a.end <= a.start or b.end <= b.start:
        return 0
    start = max(_minutes(a.start), _minutes(b.start))
    end = min(_minutes(a.end), _minutes(b.end))
    return max(0, end - start)


def schedule_overlap_minutes(a: Iterable[ScheduleSlot], b: Iterable[ScheduleSlot]) -> int:
    """Total same-day overlap across every pair of slots."""
    b_slots = list(b)
    return sum(slot_overlap_minutes(x, y) for x in a for y in b_slots)


def schedule_points(overlap_minutes: int, full_overlap_minutes: int, weight: int) -> int:
    if overlap_minutes <= 0 or full_overlap_minutes <= 0:
        return 0
    ratio = min(1.0, overlap_minutes / full_overlap_minutes)
    return clamp_points(ratio * weight, weight)


# ---------------------------------------------------------------------------
# Set overlap (styles, goals)
# ---------------------------------------------------------------------------

def normalize_tags(tags: Iterable[str] | None) -> set[str]:
    if not tags:
        return set()
    return {t.strip().lower() for t in tags if isinstance(t, str) and t.strip()}


def jaccard(a: Iterable[str] | None, b: Iterable[str] | None) -> float:
    """|A ∩ B| / |A ∪ B| on normalized tags. Empty union yields 0.0."""
    sa = normalize_tags(a)
    sb = normalize_tags(b)
    union = sa | sb
    if not union:
        return 0.0
    return len(sa & sb) / len(union)


def shared_tags(a: Iterable[str] | None, b: Iterable[str] | None) -> list[str]:
    return sorted(normalize_tags(a) & normalize_tags(b))


def overlap_points(a: Iterable[str] | None, b: Iterable[str] | None, weight: int) -> int:
    return clamp_points(jaccard(a, b) * weight, weight)


# ---------------------------------------------------------------------------
# Fitness level
# ---------------------------------------------------------------------------

def level_gap(a: FitnessLevel | None, b: FitnessLevel | None) -> int | None:
    """Steps apart on the ordinal scale, or None when either side is unknown."""
    if a is None or b is None:
        return None
    return abs(LEVEL_ORDER.index(a) - LEVEL_ORDER.index(b))


def level_points(a: FitnessLevel | None, b: FitnessLevel | None, weight: int, adjacent_ratio: float) -> int:
    gap = level_gap(a, b)
    if gap == 0:
        return weight
    if gap == 1:
        return clamp_points(weight * adjacent_ratio, weight)
    return 0
