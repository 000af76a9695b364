"""Abstract interfaces for pluggable strategies."""

from phaseline.interfaces.task_classifier import ITaskClassifier

__all__ = [
    "ITaskClassifier",
]
