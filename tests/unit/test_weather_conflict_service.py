"""
Unit tests for weather conflict detection.
"""

from datetime import date

from phaseline.models.enums import AlertSeverity
from phaseline.models.task import Task
from phaseline.models.weather import ConstructionAlert, ForecastDay
from phaseline.services.weather_conflict_service import WeatherConflictEvaluator

RAIN_DAY = date(2024, 6, 1)


def make_forecast() -> list[ForecastDay]:
    return [
        ForecastDay(
            date=date(2024, 5, 31),
            alerts=[ConstructionAlert(type="wind", severity=AlertSeverity.WARNING, message="Gusty")],
        ),
        ForecastDay(
            date=RAIN_DAY,
            alerts=[
                ConstructionAlert(type="wind", severity=AlertSeverity.WARNING, message="Breezy"),
                ConstructionAlert(type="rain", severity=AlertSeverity.DANGER, message="Heavy rain"),
                ConstructionAlert(type="frost", severity=AlertSeverity.DANGER, message="Frost"),
            ],
        ),
    ]


class TestWeatherConflictEvaluator:
    """Tests for WeatherConflictEvaluator."""

    def test_danger_alert_on_due_date(self):
        """First danger alert on the due date is returned; warnings are skipped."""
        evaluator = WeatherConflictEvaluator()
        task = Task(id="t-1", title="Install deck", due_date=RAIN_DAY)

        alert = evaluator.find_danger_alert(task, make_forecast())

        assert alert is not None
        assert alert.message == "Heavy rain"
        assert evaluator.has_conflict(task, make_forecast())

    def test_warning_only_is_not_a_conflict(self):
        evaluator = WeatherConflictEvaluator()
        task = Task(id="t-1", title="Install deck", due_date=date(2024, 5, 31))

        assert evaluator.find_danger_alert(task, make_forecast()) is None

    def test_undated_task_has_no_conflict(self):
        evaluator = WeatherConflictEvaluator()
        task = Task(id="t-1", title="Install deck")

        assert not evaluator.has_conflict(task, make_forecast())

    def test_date_outside_forecast(self):
        evaluator = WeatherConflictEvaluator()
        task = Task(id="t-1", title="Install deck", due_date=date(2024, 7, 1))

        assert not evaluator.has_conflict(task, make_forecast())

    def test_empty_forecast(self):
        """Missing forecast data is not an error."""
        evaluator = WeatherConflictEvaluator()
        task = Task(id="t-1", title="Install deck", due_date=RAIN_DAY)

        assert not evaluator.has_conflict(task, [])

    def test_alerts_for_date(self):
        evaluator = WeatherConflictEvaluator()

        alerts = evaluator.alerts_for_date(RAIN_DAY, make_forecast())

        assert [a.type for a in alerts] == ["wind", "rain", "frost"]
        assert evaluator.alerts_for_date(date(2024, 1, 1), make_forecast()) == []

    def test_forecast_date_parsed_from_iso_string(self):
        """Forecast days arrive as ISO strings from the weather feed."""
        evaluator = WeatherConflictEvaluator()
        forecast = [
            ForecastDay.model_validate({
                "date": "2024-06-01",
                "alerts": [{"type": "snow", "severity": "danger", "message": "Snowfall"}],
            })
        ]
        task = Task(id="t-1", title="Pour footing", due_date="2024-06-01")

        assert evaluator.find_danger_alert(task, forecast).message == "Snowfall"
