"""
API routes for shooting-schedule generation.

Provides endpoints for generating a schedule from storyboard scenes, the
per-category resource breakdown and CSV exports of both.
Authentication is optional; a caller's token is forwarded to the location
registry.
"""

from datetime import date
from typing import Any, Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from pydantic import BaseModel

from shootplan.api.middleware.auth import AuthenticatedUser, get_optional_user
from shootplan.config import get_settings
from shootplan.db.repository import ScheduleRepository
from shootplan.scheduling.breakdown import generate_breakdown
from shootplan.scheduling.config import get_scheduler_config
from shootplan.scheduling.export import breakdown_csv, schedule_csv
from shootplan.scheduling.models import Breakdown, Schedule
from shootplan.scheduling.optimizer import (
    assign_dates,
    generate_schedule,
    parse_scenes,
    scene_fingerprint,
)
from shootplan.scheduling.resolver import (
    HttpLocationResolver,
    LocationNameResolver,
    LocationResolver,
)

logger = structlog.get_logger()

router = APIRouter(prefix="/api/schedules", tags=["schedules"])


# ══════════════════════════════════════════════════════════
# Request/Response Models
# ══════════════════════════════════════════════════════════


class GenerateScheduleRequest(BaseModel):
    """Request to generate a shooting schedule."""

    project_id: str = ""
    scenes: list[dict[str, Any]]
    start_date: date | None = None
    use_cache: bool = True


class BreakdownRequest(BaseModel):
    """Request to classify scenes by resource."""

    scenes: list[dict[str, Any]]


# ══════════════════════════════════════════════════════════
# Dependencies
# ══════════════════════════════════════════════════════════


def get_location_resolver(
    user: Optional[AuthenticatedUser] = Depends(get_optional_user),
) -> LocationResolver:
    """Registry-backed resolver when a registry is configured, else by location name."""
    settings = get_settings()
    if not settings.location_registry_url:
        return LocationNameResolver()

    token = user.access_token if user else settings.location_registry_token
    return HttpLocationResolver(
        settings.location_registry_url,
        access_token=token,
        timeout=settings.location_lookup_timeout_seconds,
        max_retries=settings.location_lookup_retries,
    )


def get_schedule_repository() -> ScheduleRepository | None:
    """Schedule cache, None when Supabase is not configured."""
    if not get_settings().cache_enabled:
        return None
    return ScheduleRepository()


async def _generate(
    request: GenerateScheduleRequest,
    resolver: LocationResolver,
    repo: ScheduleRepository | None,
) -> Schedule:
    settings = get_settings()
    cacheable = bool(repo and request.use_cache and request.project_id)

    schedule = None
    if cacheable:
        fingerprint = scene_fingerprint(parse_scenes(request.scenes))
        try:
            schedule = repo.get_cached(request.project_id, fingerprint)
        except Exception as e:
            logger.warning("Schedule cache read failed", project_id=request.project_id, error=str(e))
        if schedule:
            logger.info("Schedule cache hit", project_id=request.project_id)

    if schedule is None:
        schedule = await generate_schedule(
            request.scenes,
            resolver,
            config=get_scheduler_config(),
            project_id=request.project_id,
            max_concurrent=settings.max_concurrent_location_lookups,
            timeout=settings.location_lookup_timeout_seconds,
        )
        if cacheable:
            try:
                if schedule.total_days:
                    repo.save(request.project_id, schedule)
                else:
                    # Nothing left to shoot; a stored schedule would be stale
                    repo.delete(request.project_id)
            except Exception as e:
                logger.warning("Schedule cache write failed", project_id=request.project_id, error=str(e))

    if request.start_date:
        schedule = assign_dates(schedule, request.start_date)
    return schedule


# ══════════════════════════════════════════════════════════
# Endpoints
# ══════════════════════════════════════════════════════════


@router.post("/generate")
async def create_schedule(
    request: GenerateScheduleRequest,
    resolver: LocationResolver = Depends(get_location_resolver),
    repo: ScheduleRepository | None = Depends(get_schedule_repository),
) -> Schedule:
    """
    Generate a multi-day shooting schedule.

    Scenes are re-scheduled wholesale; when the same scene list was already
    scheduled for the project the stored schedule is returned.
    """
    logger.info("Generating schedule", project_id=request.project_id, scenes=len(request.scenes))
    try:
        return await _generate(request, resolver, repo)
    except HTTPException:
        raise
    except Exception as e:
        logger.error("Schedule generation failed", project_id=request.project_id, error=str(e))
        raise HTTPException(status_code=500, detail=f"Schedule generation failed: {str(e)}")


@router.post("/breakdown")
async def create_breakdown(request: BreakdownRequest) -> Breakdown:
    """Classify scenes by location, actor, time slot, equipment, crew, props, costume and camera."""
    return generate_breakdown(parse_scenes(request.scenes))


@router.post("/export/schedule.csv")
async def export_schedule(
    request: GenerateScheduleRequest,
    resolver: LocationResolver = Depends(get_location_resolver),
    repo: ScheduleRepository | None = Depends(get_schedule_repository),
) -> Response:
    """Generate the schedule and return it as CSV."""
    try:
        schedule = await _generate(request, resolver, repo)
    except HTTPException:
        raise
    except Exception as e:
        logger.error("Schedule export failed", project_id=request.project_id, error=str(e))
        raise HTTPException(status_code=500, detail=f"Schedule export failed: {str(e)}")
    return _csv_response(schedule_csv(schedule), "schedule.csv")


@router.post("/export/breakdown.csv")
async def export_breakdown(request: BreakdownRequest) -> Response:
    """Return the resource breakdown as CSV."""
    breakdown = generate_breakdown(parse_scenes(request.scenes))
    return _csv_response(breakdown_csv(breakdown), "breakdown.csv")


def _csv_response(content: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
