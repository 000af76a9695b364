"""
Timeline model definitions.

Derived structures produced by a rebuild: phases, their material
sub-timelines, and auto-shift proposals. None of these are persisted.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from phaseline.models.crew import CrewLocation
from phaseline.models.enums import ConflictStatus, PhaseId, ShiftReason, TaskStatus
from phaseline.models.material import MaterialItem
from phaseline.models.task import Task
from phaseline.models.weather import ForecastDay


# ===========================================
# Derived tree
# ===========================================


class SubTimeline(BaseModel):
    """Material-category grouping of tasks inside one phase."""

    id: str = Field(..., description="'<phase>-<category>' or '<phase>-general'")
    name: str
    phase_id: PhaseId
    material_type: Optional[str] = Field(None, description="Material category (None for general)")
    tasks: list[Task] = Field(default_factory=list)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    progress: int = Field(0, ge=0, le=100, description="Completion percentage")
    delayed: bool = False
    delay_days: int = Field(0, ge=0, description="Largest overdue day count among delayed tasks")
    conflict_status: ConflictStatus = ConflictStatus.NONE
    conflict_message: Optional[str] = None


class TimelinePhase(BaseModel):
    """One of the three schedule phases."""

    id: PhaseId
    name: str
    order: int = Field(..., ge=0, le=2)
    sub_timelines: list[SubTimeline] = Field(default_factory=list)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    progress: int = Field(0, ge=0, le=100)
    verification_progress: int = Field(0, ge=0, le=100)
    locked: bool = False
    lock_reason: Optional[str] = None
    task_count: int = 0
    completed_count: int = 0

    @property
    def task_ids(self) -> list[str]:
        return [task.id for sub in self.sub_timelines for task in sub.tasks]


# ===========================================
# Auto-shift
# ===========================================


class TaskShift(BaseModel):
    """Proposed due-date move for one task."""

    task_id: str
    new_due_date: date
    shift_days: int
    trigger_task_id: Optional[str] = Field(
        None, description="Delayed task that caused this shift"
    )


class AutoShiftPlan(BaseModel):
    """Unconfirmed batch of due-date moves. Applied or discarded by the caller."""

    reason: ShiftReason = ShiftReason.DELAY
    shifts: list[TaskShift] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.shifts


class DueDateUpdate(BaseModel):
    """Due-date write the caller must persist."""

    task_id: str
    new_due_date: date


# ===========================================
# Rebuild input / output
# ===========================================


class TimelineInput(BaseModel):
    """Everything a rebuild needs, supplied wholesale."""

    tasks: list[Task] = Field(default_factory=list)
    materials: list[MaterialItem] = Field(default_factory=list)
    forecast: list[ForecastDay] = Field(default_factory=list)
    crew_locations: list[CrewLocation] = Field(default_factory=list)
    today: Optional[date] = Field(None, description="Reference date (defaults to today in TIMEZONE)")
    project_start: Optional[date] = None
    project_end: Optional[date] = None


class TimelineSnapshot(BaseModel):
    """Result of a single rebuild."""

    generated_for: date
    phases: list[TimelinePhase]
    proposed_shift: Optional[AutoShiftPlan] = None


class PhaseInteraction(BaseModel):
    """Outcome of an attempt to expand or act on a phase."""

    phase_id: PhaseId
    allowed: bool
    message: Optional[str] = None


class BulkStatusRequest(BaseModel):
    """Status change the caller should apply to a group of tasks."""

    task_ids: list[str]
    new_status: TaskStatus


class ProjectDateShiftRequest(BaseModel):
    """Project start moved; every open task follows."""

    tasks: list[Task] = Field(default_factory=list)
    previous_start: date
    new_start: date


class BulkStatusCommand(TimelineInput):
    """Bulk status change for a phase, or one sub-timeline when sub_timeline_id is set."""

    sub_timeline_id: Optional[str] = None
    complete: bool = True
