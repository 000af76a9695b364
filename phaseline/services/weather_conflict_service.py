"""
Weather conflict detection.

A task conflicts with the weather when its due date carries a danger-level
construction alert. Warnings never block.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from phaseline.models.task import Task
from phaseline.models.weather import ConstructionAlert, ForecastDay


class WeatherConflictEvaluator:
    """Looks up forecast alerts for task dates."""

    def alerts_for_date(
        self,
        day: date,
        forecast: Iterable[ForecastDay],
    ) -> list[ConstructionAlert]:
        """All alerts of the first forecast entry for the given day."""
        for entry in forecast:
            if entry.date == day:
                return list(entry.alerts)
        return []

    def find_danger_alert(
        self,
        task: Task,
        forecast: Iterable[ForecastDay],
    ) -> Optional[ConstructionAlert]:
        """
        Return the first danger alert on the task's due date.

        Args:
            task: Task to check
            forecast: Forecast days (may be empty)

        Returns:
            The first danger alert, or None if the task is undated, the date is
            not covered by the forecast, or only warnings exist
        """
        if task.due_date is None:
            return None
        for alert in self.alerts_for_date(task.due_date, forecast):
            if alert.is_danger:
                return alert
        return None

    def has_conflict(self, task: Task, forecast: Iterable[ForecastDay]) -> bool:
        return self.find_danger_alert(task, forecast) is not None
