"""
Unit tests for crew presence (GPS) conflicts.
"""

from datetime import date, timedelta

from phaseline.models.crew import CrewLocation
from phaseline.models.enums import TaskStatus
from phaseline.models.task import Task
from phaseline.services.crew_presence_service import CrewPresenceEvaluator

TODAY = date(2024, 5, 28)


def make_crew(*on_site: bool) -> list[CrewLocation]:
    return [
        CrewLocation(user_id=f"user-{i}", name=f"Member {i}", is_on_site=flag)
        for i, flag in enumerate(on_site)
    ]


class TestCrewPresenceEvaluator:
    """Tests for CrewPresenceEvaluator."""

    def test_in_progress_task_with_nobody_on_site(self):
        evaluator = CrewPresenceEvaluator()
        tasks = [Task(id="t-1", title="Install tile", status=TaskStatus.IN_PROGRESS)]

        assert evaluator.has_gps_conflict(tasks, make_crew(False, False), TODAY)

    def test_task_due_today_with_nobody_on_site(self):
        evaluator = CrewPresenceEvaluator()
        tasks = [Task(id="t-1", title="Install tile", due_date=TODAY)]

        assert evaluator.has_gps_conflict(tasks, make_crew(False), TODAY)

    def test_someone_on_site(self):
        evaluator = CrewPresenceEvaluator()
        tasks = [Task(id="t-1", title="Install tile", status=TaskStatus.IN_PROGRESS)]

        assert evaluator.anyone_on_site(make_crew(False, True))
        assert not evaluator.has_gps_conflict(tasks, make_crew(False, True), TODAY)

    def test_no_active_task(self):
        """Pending work due another day does not need a crew today."""
        evaluator = CrewPresenceEvaluator()
        tasks = [Task(id="t-1", title="Install tile", due_date=TODAY + timedelta(days=2))]

        assert not evaluator.has_gps_conflict(tasks, make_crew(False), TODAY)

    def test_empty_snapshot_is_not_a_conflict(self):
        """No crew data means unknown, not absent."""
        evaluator = CrewPresenceEvaluator()
        tasks = [Task(id="t-1", title="Install tile", status=TaskStatus.IN_PROGRESS)]

        assert not evaluator.has_gps_conflict(tasks, [], TODAY)

    def test_crew_location_accepts_wire_aliases(self):
        member = CrewLocation.model_validate(
            {"userId": "u-9", "name": "Sam", "isOnSite": True, "lastSeen": "2024-05-28T08:30:00Z"}
        )
        legacy = CrewLocation.model_validate({"memberId": "u-10", "name": "Ana"})

        assert member.user_id == "u-9"
        assert member.is_on_site is True
        assert member.last_seen.hour == 8
        assert legacy.user_id == "u-10"
        assert legacy.is_on_site is False
