"""
Weather forecast models.

Mirrors the payload produced by the weather feed: one ForecastDay per date,
each carrying construction alerts.
"""

from datetime import date
from typing import Optional, Union

from pydantic import BaseModel, Field

from phaseline.models.enums import AlertSeverity, AlertType


class ConstructionAlert(BaseModel):
    """Construction-relevant weather alert."""

    type: Union[AlertType, str] = Field(
        ...,
        union_mode="left_to_right",
        description="Known AlertType, or the raw feed value for types not modelled here",
    )
    severity: AlertSeverity = Field(..., description="warning | danger")
    message: str = Field(..., description="Human-readable alert text")

    @property
    def is_danger(self) -> bool:
        return self.severity == AlertSeverity.DANGER


class ForecastDay(BaseModel):
    """Forecast for a single calendar day."""

    date: date
    alerts: list[ConstructionAlert] = Field(default_factory=list)
    temp_min: Optional[float] = None
    temp_max: Optional[float] = None
    description: Optional[str] = None
    rain_prob: Optional[float] = None
    snow_prob: Optional[float] = None
