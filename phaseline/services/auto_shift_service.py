"""
Delay detection and auto-shift planning.

This module provides functionality to:
- Detect overdue, incomplete tasks relative to an explicit reference date
- Propose cascading due-date moves for tasks scheduled after a delayed task
- Propose a uniform move of all open tasks when the project start changes
- Resolve a proposal into the due-date writes the caller persists

Proposals are advisory. Nothing here mutates a task.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from phaseline.core.logger import setup_logger
from phaseline.models.enums import ShiftReason
from phaseline.models.task import Task
from phaseline.models.timeline import AutoShiftPlan, DueDateUpdate, SubTimeline, TaskShift
from phaseline.utils.datetime_utils import add_days, days_between

logger = setup_logger(__name__)


class DelayDetector:
    """Finds overdue work."""

    def is_delayed(self, task: Task, today: date) -> bool:
        """Due strictly before today and not completed. Due today is not late."""
        if task.due_date is None or task.is_completed:
            return False
        return task.due_date < today

    def delay_days(self, task: Task, today: date) -> int:
        if not self.is_delayed(task, today):
            return 0
        return days_between(task.due_date, today)

    def max_delay_days(self, tasks: Iterable[Task], today: date) -> int:
        return max((self.delay_days(task, today) for task in tasks), default=0)

    def find_delay_triggers(
        self,
        sub_timelines: Iterable[SubTimeline],
        today: date,
    ) -> list[tuple[Task, int]]:
        """
        Pick one root cause per delayed sub-timeline.

        Returns:
            List of (first delayed task in the sub-timeline, sub-timeline delay_days)
        """
        triggers: list[tuple[Task, int]] = []
        for sub in sub_timelines:
            if not sub.delayed or sub.delay_days <= 0:
                continue
            trigger = next((t for t in sub.tasks if self.is_delayed(t, today)), None)
            if trigger is not None:
                triggers.append((trigger, sub.delay_days))
        return triggers


class AutoShiftPlanner:
    """Builds and resolves auto-shift proposals."""

    def __init__(self, detector: Optional[DelayDetector] = None):
        self.detector = detector or DelayDetector()

    def calculate_auto_shift(
        self,
        delayed_task: Task,
        all_tasks: Iterable[Task],
        delay_days: int,
    ) -> list[TaskShift]:
        """
        Calculate shifts for tasks scheduled after a delayed task.

        Args:
            delayed_task: The late task acting as root cause
            all_tasks: Full task set
            delay_days: Days every downstream task moves

        Returns:
            One TaskShift per open task due strictly after the delayed task
        """
        if delayed_task.due_date is None or delay_days <= 0:
            return []

        shifts = []
        for task in all_tasks:
            if task.id == delayed_task.id or task.due_date is None:
                continue
            if task.is_completed or task.due_date <= delayed_task.due_date:
                continue
            shifts.append(TaskShift(
                task_id=task.id,
                new_due_date=add_days(task.due_date, delay_days),
                shift_days=delay_days,
                trigger_task_id=delayed_task.id,
            ))
        return shifts

    def build_plan(
        self,
        sub_timelines: Iterable[SubTimeline],
        all_tasks: list[Task],
        today: date,
    ) -> Optional[AutoShiftPlan]:
        """
        Build the delay plan for a rebuilt tree.

        Proposals from independent triggers are concatenated as-is; a task may
        appear more than once. See resolve_updates for how they collapse.
        """
        shifts: list[TaskShift] = []
        for trigger, delay in self.detector.find_delay_triggers(sub_timelines, today):
            proposed = self.calculate_auto_shift(trigger, all_tasks, delay)
            logger.debug(
                f"Task {trigger.id} is {delay} day(s) late; {len(proposed)} task(s) to shift"
            )
            shifts.extend(proposed)

        if not shifts:
            return None
        return AutoShiftPlan(reason=ShiftReason.DELAY, shifts=shifts)

    def calculate_project_date_shift(
        self,
        tasks: Iterable[Task],
        previous_start: date,
        new_start: date,
    ) -> Optional[AutoShiftPlan]:
        """
        Move every dated, open task by the change in project start.

        Returns:
            Plan with a (possibly negative) uniform shift, or None when the start
            did not move or nothing is eligible
        """
        shift_days = days_between(previous_start, new_start)
        if shift_days == 0:
            return None

        shifts = [
            TaskShift(
                task_id=task.id,
                new_due_date=add_days(task.due_date, shift_days),
                shift_days=shift_days,
            )
            for task in tasks
            if task.due_date is not None and not task.is_completed
        ]
        if not shifts:
            return None
        return AutoShiftPlan(reason=ShiftReason.PROJECT_DATES, shifts=shifts)

    def resolve_updates(self, plan: Optional[AutoShiftPlan]) -> list[DueDateUpdate]:
        """
        Collapse a plan into one due-date write per task.

        When a task was proposed more than once, the shift with the largest
        magnitude wins. Output keeps the order in which tasks first appear.
        """
        if plan is None or plan.is_empty:
            return []

        chosen: dict[str, TaskShift] = {}
        for shift in plan.shifts:
            current = chosen.get(shift.task_id)
            if current is None:
                chosen[shift.task_id] = shift
            elif abs(shift.shift_days) > abs(current.shift_days):
                logger.info(
                    f"Task {shift.task_id} has overlapping shifts "
                    f"({current.shift_days}d, {shift.shift_days}d); keeping {shift.shift_days}d"
                )
                chosen[shift.task_id] = shift

        return [
            DueDateUpdate(task_id=shift.task_id, new_due_date=shift.new_due_date)
            for shift in chosen.values()
        ]
