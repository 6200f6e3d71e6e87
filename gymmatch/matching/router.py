"""Matching HTTP router: scoring, discovery, config & catalog."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from gymmatch.auth import verify_api_key
from gymmatch.config import settings
from gymmatch.db import get_session
from gymmatch.matching import scorer
from gymmatch.matching.catalog import list_catalog
from gymmatch.matching.discovery import ProfileNotFoundError, build_discovery_page
from gymmatch.matching.models import (
    DiscoveryFilters,
    DiscoveryPage,
    FitnessLevel,
    ScorePairRequest,
    ScorePairResponse,
)
from gymmatch.matching.scoring_config import ScoringConfig, get_scoring_config

router = APIRouter(prefix="/matching", tags=["matching"])

MAX_PAGE_SIZE = 50


# ---------------------------------------------------------------------------
# /matching/config, /matching/catalog
# ---------------------------------------------------------------------------


@router.get("/config")
async def scoring_config(
    _: str = Depends(verify_api_key),
    config: ScoringConfig = Depends(get_scoring_config),
) -> dict:
    return config.as_dict()


@router.get("/catalog")
async def catalog(
    _: str = Depends(verify_api_key),
) -> dict:
    return list_catalog()


# ---------------------------------------------------------------------------
# /matching/score
# ---------------------------------------------------------------------------


@router.post("/score", response_model=ScorePairResponse)
async def score_pair(
    body: ScorePairRequest,
    _: str = Depends(verify_api_key),
    config: ScoringConfig = Depends(get_scoring_config),
) -> ScorePairResponse:
    match = scorer.score(body.requester, body.candidate, config)
    reasons = scorer.match_reasons(body.requester, body.candidate, match.distance_miles, config)
    return ScorePairResponse(score=match, reasons=reasons)


# ---------------------------------------------------------------------------
# /matching/discover/{user_id}
# ---------------------------------------------------------------------------


@router.get("/discover/{user_id}", response_model=DiscoveryPage)
async def discover(
    user_id: str,
    session: AsyncSession = Depends(get_session),
    _: str = Depends(verify_api_key),
    config: ScoringConfig = Depends(get_scoring_config),
    offset: int = Query(default=0, ge=0),
    limit: int | None = Query(default=None, ge=1, le=MAX_PAGE_SIZE, description="Page size"),
    level: list[FitnessLevel] = Query(default=[], description="Fitness levels to keep"),
    style: list[str] = Query(default=[], description="Keep candidates sharing any of these styles"),
    min_age: int | None = Query(default=None, ge=0),
    max_age: int | None = Query(default=None, ge=0),
    max_distance: float | None = Query(default=None, gt=0, description="Miles"),
    include_below_threshold: bool = Query(default=False),
) -> DiscoveryPage:
    if min_age is not None and max_age is not None and min_age > max_age:
        raise HTTPException(status_code=422, detail="min_age must not exceed max_age")

    filters = DiscoveryFilters(
        fitness_levels=level,
        workout_styles=style,
        min_age=min_age,
        max_age=max_age,
        max_distance_miles=max_distance,
        include_below_threshold=include_below_threshold,
    )
    page_size = limit or min(settings.discovery_page_size, MAX_PAGE_SIZE)

    try:
        return await build_discovery_page(session, user_id, filters, offset, page_size, config)
    except ProfileNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
