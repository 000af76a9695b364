"""
Sub-timeline construction.

Splits the tasks of one phase into material-category groups and computes
range, progress, delay and conflict status for each group.
"""

from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from phaseline.core.config import get_settings
from phaseline.interfaces.task_classifier import ITaskClassifier
from phaseline.models.crew import CrewLocation
from phaseline.models.enums import ConflictStatus, PhaseId
from phaseline.models.material import MaterialItem
from phaseline.models.task import Task
from phaseline.models.timeline import SubTimeline
from phaseline.models.weather import ForecastDay
from phaseline.services.auto_shift_service import DelayDetector
from phaseline.services.crew_presence_service import CrewPresenceEvaluator
from phaseline.services.task_classifier import KeywordTaskClassifier
from phaseline.services.task_utils import completion_percent, due_date_range
from phaseline.services.weather_conflict_service import WeatherConflictEvaluator

GENERAL_BUCKET = "general"


def material_match_key(item: str) -> str:
    """First word of a material name, lower-cased ('Laminate Flooring' -> 'laminate')."""
    words = item.lower().split()
    return words[0] if words else ""


class SubTimelineBuilder:
    """Builds the sub-timelines of a single phase."""

    def __init__(
        self,
        classifier: Optional[ITaskClassifier] = None,
        weather: Optional[WeatherConflictEvaluator] = None,
        crew: Optional[CrewPresenceEvaluator] = None,
        delays: Optional[DelayDetector] = None,
        general_label: Optional[str] = None,
        no_crew_message: Optional[str] = None,
    ):
        settings = get_settings()
        self.classifier = classifier or KeywordTaskClassifier()
        self.weather = weather or WeatherConflictEvaluator()
        self.crew = crew or CrewPresenceEvaluator()
        self.delays = delays or DelayDetector()
        self.general_label = general_label or settings.GENERAL_TASKS_LABEL
        self.no_crew_message = no_crew_message or settings.NO_CREW_MESSAGE

    def material_categories(self, materials: Sequence[MaterialItem]) -> list[str]:
        """Distinct categories of the material list, in list order."""
        categories: list[str] = []
        for material in materials:
            category = self.classifier.categorize_material(material.item)
            if category not in categories:
                categories.append(category)
        return categories

    def category_for_task(
        self,
        task: Task,
        materials: Sequence[MaterialItem],
    ) -> Optional[str]:
        """
        Category of the first material whose leading word appears in the title.

        Returns:
            Category name, or None when no material matches
        """
        title = task.title.lower()
        for material in materials:
            key = material_match_key(material.item)
            if key and key in title:
                return self.classifier.categorize_material(material.item)
        return None

    def build(
        self,
        phase_id: PhaseId,
        tasks: Sequence[Task],
        materials: Sequence[MaterialItem],
        forecast: Sequence[ForecastDay],
        crew_locations: Sequence[CrewLocation],
        today: date,
    ) -> list[SubTimeline]:
        """
        Group a phase's tasks and evaluate each group.

        Args:
            phase_id: Phase the tasks belong to
            tasks: Tasks already classified into this phase
            materials: Project material list
            forecast: Weather forecast (may be empty)
            crew_locations: Crew snapshot (may be empty)
            today: Reference date for delay/activity checks

        Returns:
            Material sub-timelines in category order, then the general group.
            Groups without tasks are omitted.
        """
        grouped: dict[str, list[Task]] = {c: [] for c in self.material_categories(materials)}
        general: list[Task] = []

        for task in tasks:
            category = self.category_for_task(task, materials)
            if category is None:
                general.append(task)
            else:
                grouped[category].append(task)

        sub_timelines = [
            self._evaluate(
                phase_id,
                sub_id=f"{phase_id.value}-{category}",
                name=category.capitalize(),
                material_type=category,
                tasks=members,
                forecast=forecast,
                crew_locations=crew_locations,
                today=today,
            )
            for category, members in grouped.items()
            if members
        ]

        if general:
            sub_timelines.append(self._evaluate(
                phase_id,
                sub_id=f"{phase_id.value}-{GENERAL_BUCKET}",
                name=self.general_label,
                material_type=None,
                tasks=general,
                forecast=forecast,
                crew_locations=crew_locations,
                today=today,
            ))

        return sub_timelines

    def _evaluate(
        self,
        phase_id: PhaseId,
        sub_id: str,
        name: str,
        material_type: Optional[str],
        tasks: list[Task],
        forecast: Sequence[ForecastDay],
        crew_locations: Sequence[CrewLocation],
        today: date,
    ) -> SubTimeline:
        start, end = due_date_range(tasks)
        delay_days = self.delays.max_delay_days(tasks, today)
        delayed = any(self.delays.is_delayed(task, today) for task in tasks)
        status, message = self._conflicts(phase_id, tasks, forecast, crew_locations, today)

        return SubTimeline(
            id=sub_id,
            name=name,
            phase_id=phase_id,
            material_type=material_type,
            tasks=tasks,
            start_date=start,
            end_date=end,
            progress=completion_percent(tasks),
            delayed=delayed,
            delay_days=delay_days,
            conflict_status=status,
            conflict_message=message,
        )

    def _conflicts(
        self,
        phase_id: PhaseId,
        tasks: list[Task],
        forecast: Sequence[ForecastDay],
        crew_locations: Sequence[CrewLocation],
        today: date,
    ) -> tuple[ConflictStatus, Optional[str]]:
        message: Optional[str] = None
        weather_conflict = False
        for task in tasks:
            alert = self.weather.find_danger_alert(task, forecast)
            if alert is not None:
                # First alert wins; later ones are not aggregated
                weather_conflict = True
                message = alert.message
                break

        gps_conflict = (
            phase_id == PhaseId.EXECUTION
            and self.crew.has_gps_conflict(tasks, crew_locations, today)
        )
        if gps_conflict and message is None:
            message = self.no_crew_message

        if weather_conflict and gps_conflict:
            return ConflictStatus.BOTH, message
        if weather_conflict:
            return ConflictStatus.WEATHER, message
        if gps_conflict:
            return ConflictStatus.GPS, message
        return ConflictStatus.NONE, None
