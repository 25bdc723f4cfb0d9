"""
Unavailability rule models.

A rule is a template period (daily, weekly on given weekdays, or one-off) that
the expander replays onto a target date.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from dayplanner.models.enums import RecurrenceType


class Recurrence(BaseModel):
    """How often a rule repeats."""

    type: RecurrenceType
    days: list[int] = Field(
        default_factory=list,
        description="Weekdays for weekly rules, 0=Sunday ... 6=Saturday",
    )

    @model_validator(mode="after")
    def validate_days(self):
        if any(day < 0 or day > 6 for day in self.days):
            raise ValueError("weekday values must be within 0 (Sunday) .. 6 (Saturday)")
        if len(self.days) != len(set(self.days)):
            raise ValueError("weekday set contains duplicates")
        if self.type == RecurrenceType.WEEKLY and not self.days:
            raise ValueError("weekly recurrence needs at least one weekday")
        return self


class UnavailabilityRule(BaseModel):
    """User-defined unavailable period."""

    id: UUID
    start: datetime = Field(..., description="Template start; its date matters only for one-off rules")
    end: datetime = Field(..., description="Template end")
    title: str = Field(..., min_length=1, max_length=500)
    description: Optional[str] = Field(None, max_length=2000)
    recurrence: Optional[Recurrence] = None

    @model_validator(mode="after")
    def validate_interval(self):
        if self.end <= self.start:
            raise ValueError("end must be after start")
        return self

    class Config:
        from_attributes = True
