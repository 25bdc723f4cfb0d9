"""
Custom exceptions for the planner.
"""

from typing import Any, Optional


class DayPlannerError(Exception):
    """Base exception for dayplanner."""

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class NotFoundError(DayPlannerError):
    """Task or block not found in the current schedule."""

    pass


class ValidationError(DayPlannerError):
    """Invalid input (inverted interval, non-positive duration, bad weekday set)."""

    pass


class BusinessLogicError(DayPlannerError):
    """Operation not allowed in the engine's current state."""

    pass
