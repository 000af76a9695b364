"""API routers."""

from phaseline.api import timeline

__all__ = ["timeline"]
