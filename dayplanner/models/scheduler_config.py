"""
Models for engine tunables: scheduling window, break policy and ranking weights.
"""

from __future__ import annotations

from datetime import time
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from dayplanner.core.config import Settings
from dayplanner.models.enums import Priority, TaskCategory


class DeadlineBand(BaseModel):
    """Score awarded when hours-to-deadline is at most max_hours."""

    max_hours: float
    score: float


class DurationPenalty(BaseModel):
    """Adjustment applied to tasks longer than min_minutes."""

    min_minutes: int = Field(..., ge=0)
    penalty: float = Field(..., le=0)


DEFAULT_DEADLINE_BANDS = [
    DeadlineBand(max_hours=24, score=100),
    DeadlineBand(max_hours=48, score=80),
    DeadlineBand(max_hours=168, score=60),
]
DEFAULT_DEADLINE_FLOOR = 20.0


def default_priority_weights() -> dict[Priority, float]:
    return {Priority.HIGH: 50.0, Priority.MEDIUM: 30.0, Priority.LOW: 10.0}


def default_category_weights() -> dict[TaskCategory, float]:
    return {TaskCategory.WORK: 20.0, TaskCategory.STUDY: 15.0, TaskCategory.LEISURE: 5.0}


def default_duration_penalties() -> list[DurationPenalty]:
    return [
        DurationPenalty(min_minutes=120, penalty=-2.0),
        DurationPenalty(min_minutes=180, penalty=-4.0),
    ]


class RankingWeights(BaseModel):
    """Urgency scoring weights."""

    deadline_bands: list[DeadlineBand] = Field(
        default_factory=lambda: [band.model_copy() for band in DEFAULT_DEADLINE_BANDS]
    )
    deadline_floor: float = DEFAULT_DEADLINE_FLOOR
    priority_weights: dict[Priority, float] = Field(default_factory=default_priority_weights)
    category_weights: dict[TaskCategory, float] = Field(default_factory=default_category_weights)
    duration_penalties: list[DurationPenalty] = Field(default_factory=default_duration_penalties)

    @model_validator(mode="after")
    def validate_ordering(self):
        bands = sorted(self.deadline_bands, key=lambda band: band.max_hours)
        scores = [band.score for band in bands] + [self.deadline_floor]
        if any(closer < farther for closer, farther in zip(scores, scores[1:])):
            raise ValueError("closer deadline bands must not score lower than farther ones")
        self.deadline_bands = bands

        if set(self.priority_weights) != set(Priority):
            raise ValueError("priority_weights needs a weight for every priority")
        if not (
            self.priority_weights[Priority.HIGH]
            > self.priority_weights[Priority.MEDIUM]
            > self.priority_weights[Priority.LOW]
        ):
            raise ValueError("priority weights must be strictly high > medium > low")

        if set(self.category_weights) != set(TaskCategory):
            raise ValueError("category_weights needs a weight for every category")
        if not (
            self.category_weights[TaskCategory.WORK]
            > self.category_weights[TaskCategory.STUDY]
            > self.category_weights[TaskCategory.LEISURE]
        ):
            raise ValueError("category weights must be strictly work > study > leisure")

        self.duration_penalties = sorted(self.duration_penalties, key=lambda entry: entry.min_minutes)
        return self


class BreakPolicy(BaseModel):
    """When and how long recovery breaks are."""

    short_break_minutes: int = Field(15, ge=1)
    long_break_minutes: int = Field(30, ge=1)
    max_continuous_work_minutes: int = Field(90, ge=1)
    long_break_threshold_minutes: int = Field(180, ge=1)
    long_gap_minutes: int = Field(60, ge=0)
    rest_between_intense_tasks: bool = False
    rest_break_minutes: int = Field(10, ge=1)
    intense_duration_minutes: int = Field(90, ge=1)


class SchedulerConfig(BaseModel):
    """Full engine configuration."""

    timezone: str = "UTC"
    day_start: time = time(6, 0)
    day_end: time = time(23, 0)
    slot_minutes: int = Field(30, ge=5, le=240)
    breaks: BreakPolicy = Field(default_factory=BreakPolicy)
    ranking: RankingWeights = Field(default_factory=RankingWeights)

    @model_validator(mode="after")
    def validate_window(self):
        if self.day_end <= self.day_start:
            raise ValueError("day_end must be after day_start")
        return self

    @classmethod
    def from_settings(cls, settings: Settings) -> "SchedulerConfig":
        return cls(
            timezone=settings.TIMEZONE,
            day_start=time.fromisoformat(settings.DAY_START),
            day_end=time.fromisoformat(settings.DAY_END),
            slot_minutes=settings.SLOT_MINUTES,
            breaks=BreakPolicy(
                short_break_minutes=settings.SHORT_BREAK_MINUTES,
                long_break_minutes=settings.LONG_BREAK_MINUTES,
                max_continuous_work_minutes=settings.MAX_CONTINUOUS_WORK_MINUTES,
                long_break_threshold_minutes=settings.LONG_BREAK_THRESHOLD_MINUTES,
                long_gap_minutes=settings.LONG_GAP_MINUTES,
                rest_between_intense_tasks=settings.REST_BETWEEN_INTENSE_TASKS,
                rest_break_minutes=settings.REST_BREAK_MINUTES,
            ),
        )

    def apply(self, update: "SchedulerConfigUpdate") -> "SchedulerConfig":
        """Return a new config with the non-empty fields of update merged in."""
        data = self.model_dump()
        for key, value in update.model_dump(exclude_none=True).items():
            data[key] = value
        return SchedulerConfig.model_validate(data)


class SchedulerConfigUpdate(BaseModel):
    timezone: Optional[str] = None
    day_start: Optional[time] = None
    day_end: Optional[time] = None
    slot_minutes: Optional[int] = Field(None, ge=5, le=240)
    breaks: Optional[BreakPolicy] = None
    ranking: Optional[RankingWeights] = None
