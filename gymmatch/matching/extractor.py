"""Build UserProfile objects from profiles / workout_schedules rows."""

from __future__ import annotations

import math
from datetime import time
from typing import Any, Iterable

from loguru import logger

from gymmatch.matching.models import Coordinate, FitnessLevel, ScheduleSlot, UserProfile, Weekday

WEEKDAY_ORDER: tuple[Weekday, ...] = tuple(Weekday)  # Monday = 0


def _as_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _as_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _as_str(value: Any) -> str | None:
    """Text columns only; numbers are stringified, anything else is dropped."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return None


def parse_age_range(value: Any) -> tuple[int, int] | None:
    """Saved [min, max] age preference; None unless both ends are usable."""
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        return None
    low, high = _as_int(value[0]), _as_int(value[1])
    if low is None or high is None or low < 0 or low > high:
        return None
    return low, high


def parse_max_distance(value: Any) -> float | None:
    miles = _as_float(value)
    if miles is None or not math.isfinite(miles) or miles <= 0:
        return None
    return miles


def parse_coordinate(lat: Any, lng: Any) -> Coordinate | None:
    """None when either side is missing, non-numeric or out of range."""
    flat = _as_float(lat)
    flng = _as_float(lng)
    if flat is None or flng is None:
        return None
    if not (-90.0 <= flat <= 90.0 and -180.0 <= flng <= 180.0):
        return None
    return Coordinate(lat=flat, lng=flng)


def parse_level(value: Any) -> FitnessLevel | None:
    if not isinstance(value, str):
        return None
    try:
        return FitnessLevel(value.strip().lower())
    except ValueError:
        return None


def parse_tags(value: Any) -> set[str]:
    """Tag arrays come back as lists; tolerate a comma-separated string too."""
    if value is None:
        return set()
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, (list, tuple, set, frozenset)):
        return set()
    return {v.strip().lower() for v in value if isinstance(v, str) and v.strip()}


def parse_weekday(value: Any) -> Weekday | None:
    if isinstance(value, Weekday):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return WEEKDAY_ORDER[value] if 0 <= value < len(WEEKDAY_ORDER) else None
    if isinstance(value, str):
        try:
            return Weekday(value.strip().lower())
        except ValueError:
            return None
    return None


def parse_time(value: Any) -> time | None:
    if isinstance(value, time):
        return value.replace(tzinfo=None)
    if isinstance(value, str):
        try:
            return time.fromisoformat(value.strip())
        except ValueError:
            return None
    return None


def slot_from_row(row: dict[str, Any]) -> ScheduleSlot | None:
    """Returns None for malformed rows, never raises."""
    day = parse_weekday(row.get("day_of_week"))
    start = parse_time(row.get("start_time"))
    end = parse_time(row.get("end_time"))
    if day is None or start is None or end is None:
        logger.debug("Skipping malformed schedule row for user {}: {}", row.get("user_id"), row)
        return None
    return ScheduleSlot(day=day, start=start, end=end)


def group_slots(schedule_rows: Iterable[dict[str, Any]]) -> dict[str, list[ScheduleSlot]]:
    """Slots keyed by user_id, in row order."""
    grouped: dict[str, list[ScheduleSlot]] = {}
    for row in schedule_rows:
        user_id = row.get("user_id")
        if user_id is None:
            continue
        slot = slot_from_row(row)
        if slot is not None:
            grouped.setdefault(str(user_id), []).append(slot)
    return grouped


def profile_from_row(row: dict[str, Any], slots: list[ScheduleSlot] | None = None) -> UserProfile | None:
    """Build a UserProfile from a profiles row.

    Only a missing user_id yields None; every other gap degrades to an empty
    or None field.
    """
    user_id = row.get("user_id")
    if user_id is None or str(user_id) == "":
        logger.debug("Skipping profile row without user_id")
        return None

    return UserProfile(
        user_id=str(user_id),
        name=_as_str(row.get("name")),
        age=_as_int(row.get("age")),
        gender=_as_str(row.get("gender")),
        location_name=_as_str(row.get("location_name")),
        gym_name=_as_str(row.get("gym_name")),
        location=parse_coordinate(row.get("location_lat"), row.get("location_lng")),
        schedule=list(slots or []),
        workout_styles=parse_tags(row.get("workout_styles")),
        fitness_level=parse_level(row.get("fitness_level")),
        fitness_goals=parse_tags(row.get("fitness_goals")),
        preferred_gender=_as_str(row.get("preferred_gender")),
        age_range=parse_age_range(row.get("age_range")),
        max_distance_miles=parse_max_distance(row.get("max_distance")),
    )
