"""Discovery assembly: builds the candidate list a requester swipes through.

Loads the requester and a bounded batch of not-yet-liked candidates, applies
the request filters (falling back to the requester's saved age and distance
preferences), scores every remaining candidate and returns one stable,
paginated DiscoveryPage.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from gymmatch.config import settings
from gymmatch.matching import connector, extractor, features, scorer
from gymmatch.matching.models import (
    DiscoveryFilters,
    DiscoveryPage,
    RankedCandidate,
    UserProfile,
)
from gymmatch.matching.scoring_config import ScoringConfig


class ProfileNotFoundError(LookupError):
    def __init__(self, user_id: str):
        super().__init__(f"No profile for user {user_id}")
        self.user_id = user_id


def _gender_ok(requester: UserProfile, candidate: UserProfile) -> bool:
    preferred = (requester.preferred_gender or "").strip().lower()
    if not preferred or preferred == "any":
        return True
    return (candidate.gender or "").strip().lower() == preferred


def effective_age_bounds(requester: UserProfile, filters: DiscoveryFilters) -> tuple[int | None, int | None]:
    """Request bounds win; with neither set, fall back to the saved age_range."""
    if filters.min_age is not None or filters.max_age is not None:
        return filters.min_age, filters.max_age
    if requester.age_range is not None:
        return requester.age_range
    return None, None


def effective_max_distance(requester: UserProfile, filters: DiscoveryFilters) -> float | None:
    if filters.max_distance_miles is not None:
        return filters.max_distance_miles
    return requester.max_distance_miles


def _passes_filters(requester: UserProfile, candidate: UserProfile, filters: DiscoveryFilters) -> bool:
    if candidate.user_id == requester.user_id:
        return False
    if not _gender_ok(requester, candidate):
        return False

    if filters.fitness_levels and candidate.fitness_level not in filters.fitness_levels:
        return False

    if filters.workout_styles and not features.shared_tags(filters.workout_styles, candidate.workout_styles):
        return False

    min_age, max_age = effective_age_bounds(requester, filters)
    if min_age is not None or max_age is not None:
        if candidate.age is None:
            return False
        if min_age is not None and candidate.age < min_age:
            return False
        if max_age is not None and candidate.age > max_age:
            return False

    max_distance = effective_max_distance(requester, filters)
    if max_distance is not None:
        distance = features.distance_between(requester.location, candidate.location)
        if distance is None or distance > max_distance:
            return False

    return True


def apply_filters(
    requester: UserProfile,
    candidates: Iterable[UserProfile],
    filters: DiscoveryFilters,
) -> list[UserProfile]:
    return [c for c in candidates if _passes_filters(requester, c, filters)]


def rank_candidates(
    requester: UserProfile,
    candidates: Iterable[UserProfile],
    config: ScoringConfig,
    include_below_threshold: bool = False,
) -> list[RankedCandidate]:
    """Score each candidate independently, drop low scores, sort stably."""
    ranked: list[RankedCandidate] = []
    for candidate in candidates:
        match = scorer.score(requester, candidate, config)
        if not match.passes_threshold and not include_below_threshold:
            continue
        ranked.append(
            RankedCandidate(
                user_id=candidate.user_id,
                name=candidate.name,
                age=candidate.age,
                gym_name=candidate.gym_name,
                location_name=candidate.location_name,
                score=match,
                reasons=scorer.match_reasons(requester, candidate, match.distance_miles, config),
            )
        )
    return scorer.rank_scored(ranked)


def paginate(items: Sequence[RankedCandidate], offset: int, limit: int) -> tuple[list[RankedCandidate], int | None]:
    """Slice one page; next_offset is None on the last page."""
    offset = max(offset, 0)
    limit = max(limit, 0)
    page = list(items[offset:offset + limit])
    next_offset = offset + limit if offset + limit < len(items) else None
    return page, next_offset


async def load_profiles(
    session: AsyncSession,
    rows: Sequence[dict],
) -> list[UserProfile]:
    """Attach schedules to profile rows in one query; rows without user_id are skipped."""
    ids = [str(r["user_id"]) for r in rows if r.get("user_id") is not None]
    slots_by_user = extractor.group_slots(await connector.fetch_schedule_rows(session, ids))
    profiles: list[UserProfile] = []
    for row in rows:
        profile = extractor.profile_from_row(row, slots_by_user.get(str(row.get("user_id")), []))
        if profile is not None:
            profiles.append(profile)
    return profiles


async def build_discovery_page(
    session: AsyncSession,
    user_id: str,
    filters: DiscoveryFilters,
    offset: int,
    limit: int,
    config: ScoringConfig,
) -> DiscoveryPage:
    requester_row = await connector.fetch_profile_row(session, user_id)
    if requester_row is None:
        logger.info("Discovery requested for unknown user {}", user_id)
        raise ProfileNotFoundError(user_id)

    candidate_rows = await connector.fetch_candidate_rows(session, user_id, settings.discovery_candidate_limit)
    # The query already skips liked users; this catches likes made since.
    liked = await connector.fetch_liked_user_ids(session, user_id)
    unseen_rows = [r for r in candidate_rows if str(r.get("user_id")) not in liked]

    profiles = await load_profiles(session, [requester_row, *unseen_rows])
    if not profiles or profiles[0].user_id != str(user_id):
        raise ProfileNotFoundError(user_id)
    requester, candidates = profiles[0], profiles[1:]

    filtered = apply_filters(requester, candidates, filters)
    ranked = rank_candidates(requester, filtered, config, filters.include_below_threshold)
    page, next_offset = paginate(ranked, offset, limit)

    logger.debug(
        "Discovery for {}: fetched={} unseen={} filtered={} ranked={}",
        user_id,
        len(candidate_rows),
        len(unseen_rows),
        len(filtered),
        len(ranked),
    )

    warnings: list[str] = []
    if requester.location is None:
        warnings.append("Your profile has no location; distance is not scored")
    if not requester.schedule:
        warnings.append("Your profile has no schedule; schedule overlap is not scored")
    if not ranked:
        warnings.append("No candidates match your preferences")

    return DiscoveryPage(
        requester_id=requester.user_id,
        items=page,
        total=len(ranked),
        offset=offset,
        limit=limit,
        next_offset=next_offset,
        warnings=warnings,
    )
