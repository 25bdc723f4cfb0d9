"""Pydantic models (schemas) for the planner."""

from dayplanner.models.enums import (
    BlockKind,
    Priority,
    RecurrenceType,
    ScheduleState,
    TaskCategory,
)
from dayplanner.models.schedule import Schedule, TimeBlock, UnplacedTask
from dayplanner.models.scheduler_config import (
    BreakPolicy,
    DeadlineBand,
    DurationPenalty,
    RankingWeights,
    SchedulerConfig,
    SchedulerConfigUpdate,
)
from dayplanner.models.task import Task
from dayplanner.models.unavailability import Recurrence, UnavailabilityRule

__all__ = [
    # Enums
    "BlockKind",
    "Priority",
    "RecurrenceType",
    "ScheduleState",
    "TaskCategory",
    # Task
    "Task",
    # Unavailability
    "Recurrence",
    "UnavailabilityRule",
    # Schedule
    "Schedule",
    "TimeBlock",
    "UnplacedTask",
    # Config
    "BreakPolicy",
    "DeadlineBand",
    "DurationPenalty",
    "RankingWeights",
    "SchedulerConfig",
    "SchedulerConfigUpdate",
]
