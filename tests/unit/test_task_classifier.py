"""
Unit tests for task/material classification.
"""

import pytest

from phaseline.models.enums import PhaseId
from phaseline.models.task import Task
from phaseline.services.task_classifier import ExplicitPhaseClassifier, KeywordTaskClassifier


def make_task(title: str, phase: PhaseId | None = None) -> Task:
    return Task(id="t-1", title=title, phase=phase)


class TestKeywordTaskClassifier:
    """Tests for KeywordTaskClassifier."""

    @pytest.mark.parametrize(
        "title, expected",
        [
            ("Prep subfloor", PhaseId.PREPARATION),
            ("Order laminate", PhaseId.PREPARATION),
            ("Measure living room", PhaseId.PREPARATION),
            ("Material delivery", PhaseId.PREPARATION),
            ("Install Laminate Flooring", PhaseId.EXECUTION),
            ("Lay underlayment", PhaseId.EXECUTION),
            ("Apply adhesive", PhaseId.EXECUTION),
            ("Cut baseboard", PhaseId.EXECUTION),
            ("Inspect seams", PhaseId.VERIFICATION),
            ("Verify level", PhaseId.VERIFICATION),
            ("Clean site", PhaseId.VERIFICATION),
            ("Final walkthrough", PhaseId.VERIFICATION),
        ],
    )
    def test_classify_phase_keywords(self, title, expected):
        """Each keyword table maps to its phase, case-insensitively."""
        classifier = KeywordTaskClassifier()

        assert classifier.classify_phase(make_task(title)) == expected
        assert classifier.classify_phase(make_task(title.upper())) == expected

    def test_classify_phase_defaults_to_execution(self):
        """Titles with no keyword fall back to execution."""
        classifier = KeywordTaskClassifier()

        assert classifier.classify_phase(make_task("Misc work")) == PhaseId.EXECUTION

    def test_preparation_keywords_checked_first(self):
        """A title matching several tables takes the earliest phase."""
        classifier = KeywordTaskClassifier()

        assert classifier.classify_phase(make_task("Order final trim")) == PhaseId.PREPARATION

    def test_classification_ignores_description(self):
        """Only the title drives the phase."""
        classifier = KeywordTaskClassifier()
        task = Task(id="t-1", title="Misc work", description="inspect everything")

        assert classifier.classify_phase(task) == PhaseId.EXECUTION

    @pytest.mark.parametrize(
        "item, expected",
        [
            ("Laminate Flooring", "flooring"),
            ("Oak Hardwood Flooring", "flooring"),
            ("Porcelain Tile", "flooring"),
            ("Vapor Barrier", "underlayment"),
            ("Foam Underlayment", "underlayment"),
            ("Baseboard", "trim"),
            ("Transition Strips", "trim"),
            ("Wood Screws", "supplies"),
            ("Flooring Adhesive", "supplies"),
            ("Paint", "other"),
            ("", "other"),
        ],
    )
    def test_categorize_material(self, item, expected):
        classifier = KeywordTaskClassifier()

        assert classifier.categorize_material(item) == expected


class TestExplicitPhaseClassifier:
    """Tests for ExplicitPhaseClassifier."""

    def test_explicit_phase_wins(self):
        """An explicit phase overrides the keyword heuristic."""
        classifier = ExplicitPhaseClassifier()

        task = make_task("Install tile", phase=PhaseId.VERIFICATION)

        assert classifier.classify_phase(task) == PhaseId.VERIFICATION

    def test_falls_back_to_keywords(self):
        classifier = ExplicitPhaseClassifier()

        assert classifier.classify_phase(make_task("Measure hallway")) == PhaseId.PREPARATION
        assert classifier.categorize_material("Quarter Round") == "trim"
