"""
Enum definitions for the planner.

These enums are used across models and provide type-safe priority/category/kind values.
"""

from enum import Enum


class Priority(str, Enum):
    """Priority level of a task."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class TaskCategory(str, Enum):
    """What kind of activity a task is."""

    WORK = "work"
    STUDY = "study"
    LEISURE = "leisure"


class BlockKind(str, Enum):
    """Kind of a scheduled time block."""

    TASK = "task"
    BREAK = "break"
    UNAVAILABLE = "unavailable"


class RecurrenceType(str, Enum):
    """Supported recurrence frequencies for unavailability rules."""

    DAILY = "daily"
    WEEKLY = "weekly"


class ScheduleState(str, Enum):
    """
    Lifecycle of the engine's current-day schedule.

    EMPTY = nothing generated yet
    GENERATED = first generation
    MODIFIED = interactive reschedule/delete applied
    REGENERATED = generated again from scratch
    """

    EMPTY = "EMPTY"
    GENERATED = "GENERATED"
    MODIFIED = "MODIFIED"
    REGENERATED = "REGENERATED"
