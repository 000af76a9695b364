"""Pydantic models (schemas) for the application."""

from phaseline.models.crew import CrewLocation
from phaseline.models.enums import (
    AlertSeverity,
    AlertType,
    ConflictStatus,
    MaterialCategory,
    PhaseId,
    Priority,
    ShiftReason,
    TaskStatus,
)
from phaseline.models.material import MaterialItem
from phaseline.models.task import Task
from phaseline.models.timeline import (
    AutoShiftPlan,
    BulkStatusCommand,
    BulkStatusRequest,
    DueDateUpdate,
    PhaseInteraction,
    ProjectDateShiftRequest,
    SubTimeline,
    TaskShift,
    TimelineInput,
    TimelinePhase,
    TimelineSnapshot,
)
from phaseline.models.weather import ConstructionAlert, ForecastDay

__all__ = [
    # Enums
    "AlertSeverity",
    "AlertType",
    "ConflictStatus",
    "MaterialCategory",
    "PhaseId",
    "Priority",
    "ShiftReason",
    "TaskStatus",
    # Inputs
    "Task",
    "MaterialItem",
    "ConstructionAlert",
    "ForecastDay",
    "CrewLocation",
    "TimelineInput",
    "ProjectDateShiftRequest",
    # Derived
    "SubTimeline",
    "TimelinePhase",
    "TimelineSnapshot",
    "TaskShift",
    "AutoShiftPlan",
    "DueDateUpdate",
    "PhaseInteraction",
    "BulkStatusCommand",
    "BulkStatusRequest",
]
