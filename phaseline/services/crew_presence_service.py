"""
Crew presence (GPS) conflict detection.

Execution work that is happening today needs somebody on site. The check only
fires when a crew snapshot was supplied at all: no snapshot means unknown, not
absent.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, Sequence

from phaseline.models.crew import CrewLocation
from phaseline.models.enums import TaskStatus
from phaseline.models.task import Task


class CrewPresenceEvaluator:
    """Evaluates crew location snapshots against active tasks."""

    def anyone_on_site(self, crew: Iterable[CrewLocation]) -> bool:
        return any(member.is_on_site for member in crew)

    def is_task_active(self, task: Task, today: date) -> bool:
        """A task is active when it is in progress or due today."""
        return task.status == TaskStatus.IN_PROGRESS or task.due_date == today

    def has_gps_conflict(
        self,
        tasks: Iterable[Task],
        crew: Sequence[CrewLocation],
        today: date,
    ) -> bool:
        if not crew:
            return False
        if self.anyone_on_site(crew):
            return False
        return any(self.is_task_active(task, today) for task in tasks)
