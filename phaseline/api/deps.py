"""
Dependency injection for API endpoints.

This module provides FastAPI dependencies for the timeline engine.
"""

from typing import Annotated

from fastapi import Depends

from phaseline.services.timeline_service import TimelineService, get_timeline_service


def get_timeline() -> TimelineService:
    """Get timeline service instance."""
    return get_timeline_service()


Timeline = Annotated[TimelineService, Depends(get_timeline)]
