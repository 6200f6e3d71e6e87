"""Database connector: async reads from profiles, likes and workout_schedules.

profiles: user_id, name, age, gender, location_name, location_lat, location_lng,
gym_name, fitness_level, fitness_goals (text[]), workout_styles (text[]),
preferred_gender, age_range (int[2]), max_distance (miles).
likes: from_user_id, to_user_id.
workout_schedules: user_id, day_of_week, start_time, end_time.

Nothing here writes; "not found" is an empty result, never an exception.
"""

from __future__ import annotations

from typing import Any, Iterable, Sequence

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

PROFILE_COLUMNS = (
    "user_id, name, age, gender, location_name, location_lat, location_lng, "
    "gym_name, fitness_level, fitness_goals, workout_styles, preferred_gender, "
    "age_range, max_distance"
)


async def fetch_profile_row(session: AsyncSession, user_id: str) -> dict[str, Any] | None:
    """Fetch a single profiles row. Returns None when nothing found."""
    query = f"SELECT {PROFILE_COLUMNS} FROM profiles WHERE user_id = :user_id LIMIT 1"
    result = await session.execute(text(query), {"user_id": user_id})
    row = result.fetchone()
    if row is None:
        return None
    columns = result.keys()
    return dict(zip(columns, row))


async def fetch_candidate_rows(
    session: AsyncSession,
    user_id: str,
    limit: int,
) -> Sequence[dict[str, Any]]:
    """Fetch up to `limit` profiles other than `user_id`, ordered by user_id.

    Users already liked by `user_id` are excluded before the limit applies.
    """
    query = (
        f"SELECT {PROFILE_COLUMNS} FROM profiles "
        "WHERE user_id <> :user_id "
        "AND user_id NOT IN (SELECT to_user_id FROM likes WHERE from_user_id = :user_id) "
        "ORDER BY user_id LIMIT :limit"
    )
    result = await session.execute(text(query), {"user_id": user_id, "limit": limit})
    columns = result.keys()
    return [dict(zip(columns, r)) for r in result.fetchall()]


async def fetch_liked_user_ids(session: AsyncSession, user_id: str) -> set[str]:
    """Users `user_id` has already liked. They are never shown again."""
    query = "SELECT to_user_id FROM likes WHERE from_user_id = :user_id"
    result = await session.execute(text(query), {"user_id": user_id})
    return {str(r[0]) for r in result.fetchall() if r[0] is not None}


async def fetch_schedule_rows(
    session: AsyncSession,
    user_ids: Iterable[str],
) -> Sequence[dict[str, Any]]:
    """Fetch availability slots for the given users. Empty input skips the query."""
    ids = sorted(set(user_ids))
    if not ids:
        return []
    query = (
        "SELECT user_id, day_of_week, start_time, end_time "
        "FROM workout_schedules "
        "WHERE user_id = ANY(:user_ids) "
        "ORDER BY user_id, day_of_week, start_time"
    )
    result = await session.execute(text(query), {"user_ids": ids})
    columns = result.keys()
    return [dict(zip(columns, r)) for r in result.fetchall()]
