"""
Custom exceptions for the application.
"""

from typing import Any, Optional


class PhaselineError(Exception):
    """Base exception for phaseline."""

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class ValidationError(PhaselineError):
    """Caller supplied structurally invalid input."""

    pass


class BusinessLogicError(PhaselineError):
    """Business logic constraint violation."""

    pass


class PhaseLockedError(BusinessLogicError):
    """Interaction attempted on a phase whose predecessor is not verified."""

    def __init__(self, phase_id: str, lock_reason: Optional[str]):
        super().__init__(
            lock_reason or f"Phase {phase_id} is locked",
            details={"phase_id": phase_id},
        )
        self.phase_id = phase_id
        self.lock_reason = lock_reason
