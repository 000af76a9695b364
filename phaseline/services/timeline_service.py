"""
Timeline service.

Entry point for callers. TimelineService runs one stateless rebuild pass
(classification, sub-timelines, phases, auto-shift proposal) and answers
interaction requests against a rebuilt tree. TimelineScheduler wraps it for a
caller that wants to keep the latest tree and the pending shift plan around
between user actions.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Callable, Optional, Sequence, Type, TypeVar, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from phaseline.core.config import get_settings
from phaseline.core.exceptions import PhaseLockedError, ValidationError
from phaseline.core.logger import setup_logger
from phaseline.interfaces.task_classifier import ITaskClassifier
from phaseline.models.crew import CrewLocation
from phaseline.models.enums import PhaseId, TaskStatus
from phaseline.models.material import MaterialItem
from phaseline.models.task import Task
from phaseline.models.timeline import (
    AutoShiftPlan,
    BulkStatusRequest,
    DueDateUpdate,
    PhaseInteraction,
    TimelinePhase,
    TimelineSnapshot,
)
from phaseline.models.weather import ForecastDay
from phaseline.services.auto_shift_service import AutoShiftPlanner
from phaseline.services.phase_builder import PhaseBuilder
from phaseline.services.sub_timeline_builder import SubTimelineBuilder
from phaseline.services.task_classifier import KeywordTaskClassifier
from phaseline.utils.datetime_utils import get_user_today

logger = setup_logger(__name__)

TModel = TypeVar("TModel", bound=BaseModel)

PHASE_LOCKED_MESSAGE = "This phase is locked"


def _coerce_list(
    name: str,
    items: Optional[Sequence[Any]],
    model: Type[TModel],
) -> list[TModel]:
    """Accept model instances or plain dicts; reject anything that is not a list."""
    if items is None:
        return []
    if not isinstance(items, (list, tuple)):
        raise ValidationError(
            f"{name} must be a list, got {type(items).__name__}",
            details={"field": name},
        )
    result = []
    for index, item in enumerate(items):
        if isinstance(item, model):
            result.append(item)
            continue
        try:
            result.append(model.model_validate(item))
        except PydanticValidationError as e:
            raise ValidationError(
                f"Invalid {name}[{index}]",
                details={"field": name, "index": index, "errors": e.errors()},
            ) from e
    return result


def _coerce_phase_id(phase_id: Union[PhaseId, str]) -> PhaseId:
    try:
        return PhaseId(phase_id)
    except ValueError as e:
        raise ValidationError(f"Unknown phase: {phase_id}") from e


class TimelineService:
    """Stateless timeline engine."""

    def __init__(
        self,
        classifier: Optional[ITaskClassifier] = None,
        phase_builder: Optional[PhaseBuilder] = None,
        planner: Optional[AutoShiftPlanner] = None,
        timezone: Optional[str] = None,
    ):
        """
        Initialize timeline service.

        Args:
            classifier: Phase/material classifier (keyword tables by default)
            phase_builder: Phase builder; built around the classifier if omitted
            planner: Auto-shift planner
            timezone: IANA timezone used when a caller does not pass `today`
        """
        self.classifier = classifier or KeywordTaskClassifier()
        self.phase_builder = phase_builder or PhaseBuilder(
            classifier=self.classifier,
            sub_timeline_builder=SubTimelineBuilder(classifier=self.classifier),
        )
        self.planner = planner or AutoShiftPlanner()
        self.timezone = timezone or get_settings().TIMEZONE

    def resolve_today(self, today: Optional[date] = None) -> date:
        return today if today is not None else get_user_today(self.timezone)

    def rebuild(
        self,
        tasks: Sequence[Task],
        materials: Optional[Sequence[MaterialItem]] = None,
        forecast: Optional[Sequence[ForecastDay]] = None,
        crew_locations: Optional[Sequence[CrewLocation]] = None,
        today: Optional[date] = None,
        project_start: Optional[date] = None,
        project_end: Optional[date] = None,
    ) -> TimelineSnapshot:
        """
        Derive the full phase tree and the pending shift proposal.

        Same inputs always give the same snapshot; nothing is kept between calls.

        Args:
            tasks: Current task set (source of truth for this pass)
            materials: Material list used for sub-timeline grouping
            forecast: Weather forecast days
            crew_locations: Crew presence snapshot
            today: Reference date; defaults to today in the configured timezone
            project_start: Optional project window start (phase windows)
            project_end: Optional project window end

        Returns:
            TimelineSnapshot with phases in fixed order and an optional plan

        Raises:
            ValidationError: If an input is not a list or holds malformed items
        """
        task_list = _coerce_list("tasks", tasks, Task)
        material_list = _coerce_list("materials", materials, MaterialItem)
        forecast_list = _coerce_list("forecast", forecast, ForecastDay)
        crew_list = _coerce_list("crew_locations", crew_locations, CrewLocation)
        reference = self.resolve_today(today)

        phases = self.phase_builder.build(
            task_list,
            material_list,
            forecast_list,
            crew_list,
            reference,
            project_start=project_start,
            project_end=project_end,
        )
        plan = self.planner.build_plan(
            [sub for phase in phases for sub in phase.sub_timelines],
            task_list,
            reference,
        )

        logger.debug(
            f"Rebuilt timeline for {reference}: {len(task_list)} task(s), "
            f"locked={[p.id.value for p in phases if p.locked]}, "
            f"shifts={len(plan.shifts) if plan else 0}"
        )
        return TimelineSnapshot(generated_for=reference, phases=phases, proposed_shift=plan)

    def find_phase(
        self,
        phases: Sequence[TimelinePhase],
        phase_id: Union[PhaseId, str],
    ) -> TimelinePhase:
        target = _coerce_phase_id(phase_id)
        for phase in phases:
            if phase.id == target:
                return phase
        raise ValidationError(f"Phase {target.value} not present in timeline")

    def check_phase_access(
        self,
        phases: Sequence[TimelinePhase],
        phase_id: Union[PhaseId, str],
    ) -> PhaseInteraction:
        """
        Decide whether a phase may be expanded or acted on.

        Locked phases are rejected with their lock reason; this never raises
        for a known phase.
        """
        phase = self.find_phase(phases, phase_id)
        if phase.locked:
            message = phase.lock_reason or PHASE_LOCKED_MESSAGE
            logger.warning(f"Rejected interaction with locked phase {phase.id.value}: {message}")
            return PhaseInteraction(phase_id=phase.id, allowed=False, message=message)
        return PhaseInteraction(phase_id=phase.id, allowed=True)

    def ensure_unlocked(
        self,
        phases: Sequence[TimelinePhase],
        phase_id: Union[PhaseId, str],
    ) -> TimelinePhase:
        """
        Raising variant of check_phase_access for callers that map errors.

        Raises:
            PhaseLockedError: If the phase is locked
        """
        phase = self.find_phase(phases, phase_id)
        if phase.locked:
            raise PhaseLockedError(phase.id.value, phase.lock_reason)
        return phase

    def bulk_status(
        self,
        phases: Sequence[TimelinePhase],
        phase_id: Union[PhaseId, str],
        sub_timeline_id: Optional[str] = None,
        complete: bool = True,
    ) -> Union[BulkStatusRequest, PhaseInteraction]:
        """
        Build a status change for every task of a phase or one of its sub-timelines.

        Returns:
            BulkStatusRequest for the caller to persist, or the rejecting
            PhaseInteraction when the phase is locked

        Raises:
            ValidationError: If the sub-timeline does not exist in the phase
        """
        access = self.check_phase_access(phases, phase_id)
        if not access.allowed:
            return access

        phase = self.find_phase(phases, phase_id)
        if sub_timeline_id is None:
            task_ids = phase.task_ids
        else:
            sub = next((s for s in phase.sub_timelines if s.id == sub_timeline_id), None)
            if sub is None:
                raise ValidationError(
                    f"Sub-timeline {sub_timeline_id} not found in phase {phase.id.value}"
                )
            task_ids = [task.id for task in sub.tasks]

        new_status = TaskStatus.COMPLETED if complete else TaskStatus.PENDING
        return BulkStatusRequest(task_ids=task_ids, new_status=new_status)

    def apply_shift(self, plan: Optional[AutoShiftPlan]) -> list[DueDateUpdate]:
        """Turn a confirmed plan into due-date writes (one per task)."""
        return self.planner.resolve_updates(plan)

    def propose_project_date_shift(
        self,
        tasks: Sequence[Task],
        previous_start: date,
        new_start: date,
    ) -> Optional[AutoShiftPlan]:
        task_list = _coerce_list("tasks", tasks, Task)
        return self.planner.calculate_project_date_shift(task_list, previous_start, new_start)


_default_service: Optional[TimelineService] = None


def get_timeline_service() -> TimelineService:
    """Get the shared default TimelineService."""
    global _default_service
    if _default_service is None:
        _default_service = TimelineService()
    return _default_service


class TimelineScheduler:
    """
    Caller-side facade around TimelineService.

    Keeps the latest rebuilt tree and the plan awaiting confirmation. A newly
    detected plan only replaces the pending one once the pending plan has been
    applied or discarded.
    """

    def __init__(
        self,
        service: Optional[TimelineService] = None,
        on_task_selected: Optional[Callable[[Task], None]] = None,
    ):
        self.service = service or get_timeline_service()
        self._on_task_selected = on_task_selected
        self._snapshot: Optional[TimelineSnapshot] = None
        self._pending: Optional[AutoShiftPlan] = None

    def refresh(
        self,
        tasks: Sequence[Task],
        materials: Optional[Sequence[MaterialItem]] = None,
        forecast: Optional[Sequence[ForecastDay]] = None,
        crew_locations: Optional[Sequence[CrewLocation]] = None,
        today: Optional[date] = None,
        project_start: Optional[date] = None,
        project_end: Optional[date] = None,
    ) -> TimelineSnapshot:
        """Rebuild from the caller's current inputs and remember the result."""
        snapshot = self.service.rebuild(
            tasks,
            materials,
            forecast,
            crew_locations,
            today=today,
            project_start=project_start,
            project_end=project_end,
        )
        self._snapshot = snapshot
        if self._pending is None and snapshot.proposed_shift is not None:
            self._pending = snapshot.proposed_shift
        return snapshot

    def get_phases(self) -> list[TimelinePhase]:
        if self._snapshot is None:
            return []
        return list(self._snapshot.phases)

    def proposed_shift(self) -> Optional[AutoShiftPlan]:
        return self._pending

    def apply_shift(self, plan: Optional[AutoShiftPlan] = None) -> list[DueDateUpdate]:
        """
        Confirm a plan (the pending one by default).

        Returns:
            Due-date writes the caller must persist as one batch
        """
        target = plan if plan is not None else self._pending
        updates = self.service.apply_shift(target)
        if updates:
            logger.info(
                f"Applying shift: {len(updates)} task(s) moved "
                f"(reason={target.reason.value})"
            )
        self._pending = None
        return updates

    def discard_shift(self) -> None:
        self._pending = None

    def _current_phases(self) -> list[TimelinePhase]:
        # Before the first refresh, answer against an empty tree: nothing is locked
        if self._snapshot is None:
            return self.service.rebuild([]).phases
        return self._snapshot.phases

    def request_expand(self, phase_id: Union[PhaseId, str]) -> PhaseInteraction:
        """Check a caller's attempt to expand a phase; locked phases are refused."""
        return self.service.check_phase_access(self._current_phases(), phase_id)

    def request_bulk_status(
        self,
        phase_id: Union[PhaseId, str],
        sub_timeline_id: Optional[str] = None,
        complete: bool = True,
    ) -> Union[BulkStatusRequest, PhaseInteraction]:
        return self.service.bulk_status(
            self._current_phases(), phase_id, sub_timeline_id=sub_timeline_id, complete=complete
        )

    def propose_project_date_shift(
        self,
        tasks: Sequence[Task],
        previous_start: date,
        new_start: date,
    ) -> Optional[AutoShiftPlan]:
        """Propose moving open tasks with the project start; becomes the pending plan."""
        plan = self.service.propose_project_date_shift(tasks, previous_start, new_start)
        if plan is not None:
            self._pending = plan
        return plan

    def on_task_selected(self, task: Task) -> None:
        if self._on_task_selected is not None:
            self._on_task_selected(task)
