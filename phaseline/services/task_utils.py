"""
Task utility functions.

Helper functions for progress and date-range calculations shared by the
sub-timeline and phase builders.
"""

from datetime import date
from typing import Iterable, Optional

from phaseline.models.task import Task


def percent(part: int, total: int) -> int:
    """
    Integer percentage of part over total, rounding halves up.

    Returns 0 when total is 0.
    """
    if total <= 0:
        return 0
    return (part * 200 + total) // (total * 2)


def completion_percent(tasks: Iterable[Task]) -> int:
    """
    Share of completed tasks as an integer percentage.

    Args:
        tasks: Tasks to measure (undated tasks count too)

    Returns:
        0-100, 0 for an empty collection
    """
    task_list = list(tasks)
    completed = sum(1 for task in task_list if task.is_completed)
    return percent(completed, len(task_list))


def due_date_range(tasks: Iterable[Task]) -> tuple[Optional[date], Optional[date]]:
    """Earliest and latest due date; tasks without a due date are ignored."""
    dates = [task.due_date for task in tasks if task.due_date is not None]
    if not dates:
        return None, None
    return min(dates), max(dates)


def title_contains_any(task: Task, keywords: Iterable[str]) -> bool:
    title = task.title.lower()
    return any(keyword in title for keyword in keywords)
