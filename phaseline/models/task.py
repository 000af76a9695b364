"""
Task model definitions.

Tasks are created and updated by the task store; the timeline engine only
reads them.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from phaseline.models.enums import PhaseId, Priority, TaskStatus
from phaseline.utils.datetime_utils import to_calendar_date


class Task(BaseModel):
    """Construction task as supplied by the task store."""

    id: str = Field(..., min_length=1, description="Opaque task identifier")
    title: str = Field(..., description="Task title (drives phase classification)")
    description: Optional[str] = Field(None, description="Free-form description")
    priority: Priority = Field(Priority.MEDIUM, description="Priority")
    status: TaskStatus = Field(TaskStatus.PENDING, description="Status")
    due_date: Optional[date] = Field(None, description="Due date (calendar day)")
    material_category: Optional[str] = Field(
        None, description="Material category label (informational only)"
    )
    assigned_to: Optional[str] = Field(None, description="Assignee user ID")
    assignee_name: Optional[str] = Field(None, description="Assignee display name")
    phase: Optional[PhaseId] = Field(
        None, description="Explicit phase, honoured by ExplicitPhaseClassifier"
    )

    model_config = ConfigDict(from_attributes=True)

    @field_validator("due_date", mode="before")
    @classmethod
    def normalize_due_date(cls, value):
        """Accept dates, datetimes and ISO strings; keep only the calendar day."""
        return to_calendar_date(value)

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED
