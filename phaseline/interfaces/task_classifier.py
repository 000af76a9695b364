"""
Task classifier interface.

Defines the contract for placing tasks into phases and materials into
categories. The default implementation is keyword based; callers with a
stricter source of truth (e.g. an explicit phase field) plug in their own.
"""

from abc import ABC, abstractmethod

from phaseline.models.enums import PhaseId
from phaseline.models.task import Task


class ITaskClassifier(ABC):
    """Interface for task/material classification."""

    @abstractmethod
    def classify_phase(self, task: Task) -> PhaseId:
        """Return the phase the task belongs to."""
        pass

    @abstractmethod
    def categorize_material(self, item_name: str) -> str:
        """Return the material category for a material name."""
        pass
