"""
Enum definitions for the application.

These enums are used across models and provide type-safe status/priority values.
"""

from enum import Enum


class TaskStatus(str, Enum):
    """Task status."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class Priority(str, Enum):
    """Task priority."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class PhaseId(str, Enum):
    """
    Schedule phase.

    Declaration order is the phase order: PREPARATION (0), EXECUTION (1),
    VERIFICATION (2).
    """

    PREPARATION = "preparation"
    EXECUTION = "execution"
    VERIFICATION = "verification"

    @property
    def order(self) -> int:
        return list(PhaseId).index(self)

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


class ConflictStatus(str, Enum):
    """External conflict affecting a sub-timeline."""

    NONE = "none"
    WEATHER = "weather"
    GPS = "gps"
    BOTH = "both"


class AlertSeverity(str, Enum):
    """Severity of a construction weather alert."""

    WARNING = "warning"
    DANGER = "danger"


class AlertType(str, Enum):
    """Kind of construction weather alert."""

    FROST = "frost"
    HEAT = "heat"
    RAIN = "rain"
    WIND = "wind"
    SNOW = "snow"
    LOW_VISIBILITY = "low_visibility"


class MaterialCategory(str, Enum):
    """Material grouping used for sub-timelines."""

    FLOORING = "flooring"
    UNDERLAYMENT = "underlayment"
    TRIM = "trim"
    SUPPLIES = "supplies"
    OTHER = "other"


class ShiftReason(str, Enum):
    """Why an auto-shift plan was proposed."""

    DELAY = "delay"
    PROJECT_DATES = "project_dates"
