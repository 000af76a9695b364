"""
Phase construction and dependency lock.

Assembles the three fixed phases from classified tasks, computes progress and
verification completion, and derives which phases are locked behind an
unverified predecessor.
"""

from __future__ import annotations

import math
from datetime import date
from typing import Optional, Sequence

from phaseline.core.config import get_settings
from phaseline.core.exceptions import ValidationError
from phaseline.interfaces.task_classifier import ITaskClassifier
from phaseline.models.crew import CrewLocation
from phaseline.models.enums import PhaseId
from phaseline.models.material import MaterialItem
from phaseline.models.task import Task
from phaseline.models.timeline import TimelinePhase
from phaseline.models.weather import ForecastDay
from phaseline.services.sub_timeline_builder import SubTimelineBuilder
from phaseline.services.task_classifier import KeywordTaskClassifier
from phaseline.services.task_utils import (
    completion_percent,
    due_date_range,
    title_contains_any,
)
from phaseline.utils.datetime_utils import add_days, days_between

# Titles that mark a task as a checkpoint for verification completion
CHECKPOINT_KEYWORDS = ("verify", "inspect", "check", "final")

PHASE_ORDER: tuple[PhaseId, ...] = (
    PhaseId.PREPARATION,
    PhaseId.EXECUTION,
    PhaseId.VERIFICATION,
)


class PhaseBuilder:
    """Builds the ordered phase tree."""

    def __init__(
        self,
        classifier: Optional[ITaskClassifier] = None,
        sub_timeline_builder: Optional[SubTimelineBuilder] = None,
        window_ratios: Optional[Sequence[float]] = None,
        lock_reason_template: Optional[str] = None,
    ):
        settings = get_settings()
        self.classifier = classifier or KeywordTaskClassifier()
        self.sub_timeline_builder = sub_timeline_builder or SubTimelineBuilder(
            classifier=self.classifier
        )
        self.window_ratios = list(window_ratios or settings.PHASE_WINDOW_RATIOS)
        if len(self.window_ratios) != len(PHASE_ORDER):
            raise ValidationError(
                f"Expected {len(PHASE_ORDER)} phase window ratios, got {len(self.window_ratios)}",
                details={"window_ratios": self.window_ratios},
            )
        self.lock_reason_template = lock_reason_template or settings.LOCK_REASON_TEMPLATE

    def group_by_phase(self, tasks: Sequence[Task]) -> dict[PhaseId, list[Task]]:
        grouped: dict[PhaseId, list[Task]] = {phase: [] for phase in PHASE_ORDER}
        for task in tasks:
            grouped[self.classifier.classify_phase(task)].append(task)
        return grouped

    def verification_progress(self, tasks: Sequence[Task]) -> int:
        """
        Completion of the phase's checkpoint tasks.

        Checkpoint tasks are those whose title contains a CHECKPOINT_KEYWORDS
        entry. Phases that name no checkpoint fall back to overall completion.
        """
        checkpoints = [t for t in tasks if title_contains_any(t, CHECKPOINT_KEYWORDS)]
        if checkpoints:
            return completion_percent(checkpoints)
        return completion_percent(tasks)

    def phase_window(
        self,
        order: int,
        project_start: Optional[date],
        project_end: Optional[date],
    ) -> tuple[Optional[date], Optional[date]]:
        """
        Slice of the project window allotted to a phase.

        Offsets are cumulative ratios of the total day count, floored.
        """
        if project_start is None or project_end is None:
            return None, None

        total_days = days_between(project_start, project_end)
        start_ratio = sum(self.window_ratios[:order])
        end_ratio = start_ratio + self.window_ratios[order]
        return (
            add_days(project_start, math.floor(total_days * start_ratio)),
            add_days(project_start, math.floor(total_days * end_ratio)),
        )

    def lock_reason(self, blocking_percent: int) -> str:
        return self.lock_reason_template.format(percent=blocking_percent)

    def build(
        self,
        tasks: Sequence[Task],
        materials: Sequence[MaterialItem],
        forecast: Sequence[ForecastDay],
        crew_locations: Sequence[CrewLocation],
        today: date,
        project_start: Optional[date] = None,
        project_end: Optional[date] = None,
    ) -> list[TimelinePhase]:
        """
        Build all three phases in fixed order.

        Lock rule: preparation is never locked; every later phase is locked iff
        the previous phase's verification progress is below 100. An empty task
        set locks nothing.

        Returns:
            [preparation, execution, verification]
        """
        grouped = self.group_by_phase(tasks)
        has_tasks = len(tasks) > 0

        phases: list[TimelinePhase] = []
        previous_verification = 100

        for order, phase_id in enumerate(PHASE_ORDER):
            phase_tasks = grouped[phase_id]
            verification = self.verification_progress(phase_tasks)

            locked = has_tasks and order > 0 and previous_verification < 100
            lock_reason = self.lock_reason(previous_verification) if locked else None

            sub_timelines = self.sub_timeline_builder.build(
                phase_id, phase_tasks, materials, forecast, crew_locations, today
            )

            if project_start is not None and project_end is not None:
                start, end = self.phase_window(order, project_start, project_end)
            else:
                start, end = due_date_range(phase_tasks)

            phases.append(TimelinePhase(
                id=phase_id,
                name=phase_id.display_name,
                order=order,
                sub_timelines=sub_timelines,
                start_date=start,
                end_date=end,
                progress=completion_percent(phase_tasks),
                verification_progress=verification,
                locked=locked,
                lock_reason=lock_reason,
                task_count=len(phase_tasks),
                completed_count=sum(1 for t in phase_tasks if t.is_completed),
            ))

            previous_verification = verification

        return phases
