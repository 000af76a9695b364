"""
Crew location snapshot models.
"""

from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class CrewLocation(BaseModel):
    """Latest known location state of one crew member."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(
        ...,
        validation_alias=AliasChoices("user_id", "userId", "memberId", "member_id"),
        description="Crew member user ID",
    )
    name: str = Field("", description="Display name")
    is_on_site: bool = Field(
        False,
        validation_alias=AliasChoices("is_on_site", "isOnSite"),
        description="Inside the project geofence at last check",
    )
    last_seen: Optional[datetime] = Field(
        None,
        validation_alias=AliasChoices("last_seen", "lastSeen"),
        description="Timestamp of the last location ping",
    )
