"""
Timeline API endpoints.

Stateless: every request carries the full input set (tasks, materials,
forecast, crew snapshot). Persisting the returned updates is the caller's job.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, status

from phaseline.api.deps import Timeline
from phaseline.core.exceptions import PhaseLockedError, ValidationError
from phaseline.models.enums import PhaseId
from phaseline.models.timeline import (
    AutoShiftPlan,
    BulkStatusCommand,
    BulkStatusRequest,
    DueDateUpdate,
    PhaseInteraction,
    ProjectDateShiftRequest,
    TimelineInput,
    TimelineSnapshot,
)

router = APIRouter(prefix="/timeline", tags=["timeline"])


def _rebuild(service: Timeline, payload: TimelineInput) -> TimelineSnapshot:
    try:
        return service.rebuild(
            payload.tasks,
            payload.materials,
            payload.forecast,
            payload.crew_locations,
            today=payload.today,
            project_start=payload.project_start,
            project_end=payload.project_end,
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=e.message,
        )


@router.post("/rebuild", response_model=TimelineSnapshot)
async def rebuild_timeline(
    payload: TimelineInput,
    service: Timeline,
) -> TimelineSnapshot:
    """Derive phases, sub-timelines, conflicts and the pending shift plan."""
    return _rebuild(service, payload)


@router.post("/apply-shift", response_model=list[DueDateUpdate])
async def apply_shift(
    plan: AutoShiftPlan,
    service: Timeline,
) -> list[DueDateUpdate]:
    """
    Resolve a confirmed plan into due-date writes.

    Overlapping proposals for the same task collapse to the largest shift.
    """
    return service.apply_shift(plan)


@router.post("/phases/{phase_id}/expand", response_model=PhaseInteraction)
async def expand_phase(
    phase_id: PhaseId,
    payload: TimelineInput,
    service: Timeline,
) -> PhaseInteraction:
    """Check whether a phase may be expanded. Locked phases come back with allowed=false."""
    snapshot = _rebuild(service, payload)
    return service.check_phase_access(snapshot.phases, phase_id)


@router.post("/phases/{phase_id}/bulk-status", response_model=BulkStatusRequest)
async def bulk_status(
    phase_id: PhaseId,
    payload: BulkStatusCommand,
    service: Timeline,
) -> BulkStatusRequest:
    """
    Mark every task of a phase (or one sub-timeline) completed or pending.

    Returns the status change to persist; 409 when the phase is locked.
    """
    snapshot = _rebuild(service, payload)
    try:
        service.ensure_unlocked(snapshot.phases, phase_id)
    except PhaseLockedError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=e.message,
        )

    try:
        result = service.bulk_status(
            snapshot.phases,
            phase_id,
            sub_timeline_id=payload.sub_timeline_id,
            complete=payload.complete,
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=e.message,
        )
    return result


@router.post("/project-date-shift", response_model=Optional[AutoShiftPlan])
async def project_date_shift(
    payload: ProjectDateShiftRequest,
    service: Timeline,
) -> Optional[AutoShiftPlan]:
    """Propose moving every open task with the project start date."""
    return service.propose_project_date_shift(
        payload.tasks, payload.previous_start, payload.new_start
    )
