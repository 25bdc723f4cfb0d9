"""
Schedule models for single-day planning outputs.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from dayplanner.models.enums import BlockKind
from dayplanner.models.task import Task


class TimeBlock(BaseModel):
    """A scheduled interval of one kind on a single day."""

    id: str
    kind: BlockKind
    start: datetime
    end: datetime
    title: str
    description: Optional[str] = None
    task_id: Optional[UUID] = None
    task: Optional[Task] = None
    rule_id: Optional[UUID] = Field(
        None, description="Originating recurring/one-off rule for expanded unavailable blocks"
    )
    is_fixed: bool = False

    @model_validator(mode="after")
    def validate_block(self):
        if self.end <= self.start:
            raise ValueError("block end must be after block start")
        if self.kind == BlockKind.UNAVAILABLE:
            self.is_fixed = True
        if self.kind == BlockKind.TASK and self.task_id is None:
            raise ValueError("task blocks must reference a task")
        return self

    @property
    def duration_minutes(self) -> int:
        return int((self.end - self.start).total_seconds() // 60)

    def overlaps(self, start: datetime, end: datetime) -> bool:
        return self.start < end and start < self.end


class UnplacedTask(BaseModel):
    """Task that could not be placed on the day, with reason."""

    task_id: UUID
    name: str
    reason: str


class Schedule(BaseModel):
    """Ordered, non-overlapping blocks for exactly one calendar date."""

    date: date
    window_start: datetime
    window_end: datetime
    blocks: list[TimeBlock] = Field(default_factory=list)
    unplaced_tasks: list[UnplacedTask] = Field(default_factory=list)

    @model_validator(mode="after")
    def sort_blocks(self):
        self.blocks = sorted(self.blocks, key=lambda block: (block.start, block.end, block.id))
        return self

    def task_blocks(self) -> list[TimeBlock]:
        return [block for block in self.blocks if block.kind == BlockKind.TASK]

    def find_block(self, block_id: str) -> Optional[TimeBlock]:
        return next((block for block in self.blocks if block.id == block_id), None)

    def find_task_block(self, task_id: UUID) -> Optional[TimeBlock]:
        return next(
            (block for block in self.blocks if block.kind == BlockKind.TASK and block.task_id == task_id),
            None,
        )

    def has_overlap(self) -> bool:
        """Check the no-overlap invariant (touching endpoints are fine)."""
        for previous, current in zip(self.blocks, self.blocks[1:]):
            if current.start < previous.end:
                return True
        return False
