"""
Keyword-based task classification.

Phase and material category are inferred from plain text. This is a
heuristic: a title like "Order final trim" lands in preparation because the
preparation keywords are checked first.
"""

from __future__ import annotations

from typing import Optional

from phaseline.interfaces.task_classifier import ITaskClassifier
from phaseline.models.enums import MaterialCategory, PhaseId
from phaseline.models.task import Task

# Checked in order; first phase with a matching keyword wins.
PHASE_KEYWORDS: list[tuple[PhaseId, tuple[str, ...]]] = [
    (PhaseId.PREPARATION, ("prep", "order", "measure", "deliver")),
    (PhaseId.EXECUTION, ("install", "lay", "apply", "cut")),
    (PhaseId.VERIFICATION, ("inspect", "verify", "clean", "final")),
]

DEFAULT_PHASE = PhaseId.EXECUTION

MATERIAL_KEYWORDS: list[tuple[MaterialCategory, tuple[str, ...]]] = [
    (
        MaterialCategory.FLOORING,
        (
            "laminate flooring",
            "hardwood flooring",
            "vinyl flooring",
            "tile",
            "carpet",
            "laminate",
            "hardwood",
        ),
    ),
    (MaterialCategory.UNDERLAYMENT, ("underlayment", "vapor barrier", "padding")),
    (MaterialCategory.TRIM, ("baseboard", "molding", "transition strips", "quarter round")),
    (MaterialCategory.SUPPLIES, ("adhesive", "nails", "screws", "spacers")),
]


class KeywordTaskClassifier(ITaskClassifier):
    """Default classifier driven by fixed keyword tables."""

    def __init__(
        self,
        phase_keywords: Optional[list[tuple[PhaseId, tuple[str, ...]]]] = None,
        material_keywords: Optional[list[tuple[MaterialCategory, tuple[str, ...]]]] = None,
        default_phase: PhaseId = DEFAULT_PHASE,
    ):
        """
        Initialize classifier.

        Args:
            phase_keywords: Ordered (phase, keywords) table; defaults to PHASE_KEYWORDS
            material_keywords: Ordered (category, keywords) table; defaults to MATERIAL_KEYWORDS
            default_phase: Phase for titles matching no keyword
        """
        self.phase_keywords = phase_keywords or PHASE_KEYWORDS
        self.material_keywords = material_keywords or MATERIAL_KEYWORDS
        self.default_phase = default_phase

    def classify_phase(self, task: Task) -> PhaseId:
        title = task.title.lower()
        for phase, keywords in self.phase_keywords:
            if any(keyword in title for keyword in keywords):
                return phase
        return self.default_phase

    def categorize_material(self, item_name: str) -> str:
        name = item_name.lower()
        for category, keywords in self.material_keywords:
            if any(keyword in name for keyword in keywords):
                return category.value
        return MaterialCategory.OTHER.value


class ExplicitPhaseClassifier(ITaskClassifier):
    """Uses Task.phase when the task store sets it, keywords otherwise."""

    def __init__(self, fallback: Optional[ITaskClassifier] = None):
        self.fallback = fallback or KeywordTaskClassifier()

    def classify_phase(self, task: Task) -> PhaseId:
        if task.phase is not None:
            return task.phase
        return self.fallback.classify_phase(task)

    def categorize_material(self, item_name: str) -> str:
        return self.fallback.categorize_material(item_name)
