"""
Validation and application of interactive task moves.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Iterable, Optional
from uuid import UUID

from dayplanner.core.exceptions import NotFoundError
from dayplanner.models.schedule import Schedule, TimeBlock
from dayplanner.services.time_grid import TimeGrid, TimeInterval


@dataclass
class MoveCheck:
    """Outcome of checking a requested move."""

    allowed: bool
    block: TimeBlock
    interval: TimeInterval
    conflicts: list[TimeBlock] = field(default_factory=list)
    reason: Optional[str] = None


class RescheduleValidator:
    """Checks that a moved task block would not collide with anything else."""

    @staticmethod
    def find_conflicts(
        blocks: Iterable[TimeBlock],
        candidate: TimeInterval,
        exclude_block_id: Optional[str] = None,
    ) -> list[TimeBlock]:
        return [
            block
            for block in blocks
            if block.id != exclude_block_id and TimeGrid.overlaps(block, candidate)
        ]

    def check(self, schedule: Schedule, task_id: UUID, new_start: datetime) -> MoveCheck:
        """
        Check whether the task's block may start at new_start.

        The new end is new_start plus the task's own duration.

        Raises:
            NotFoundError: If the task has no block in the schedule
        """
        block = schedule.find_task_block(task_id)
        if block is None or block.task is None:
            raise NotFoundError(f"Task {task_id} has no block on {schedule.date}")

        candidate = TimeInterval(new_start, new_start + timedelta(minutes=block.task.duration_minutes))
        window = TimeInterval(schedule.window_start, schedule.window_end)
        if not window.contains(candidate):
            return MoveCheck(
                allowed=False,
                block=block,
                interval=candidate,
                reason="outside_window",
            )

        conflicts = self.find_conflicts(schedule.blocks, candidate, exclude_block_id=block.id)
        if conflicts:
            return MoveCheck(
                allowed=False,
                block=block,
                interval=candidate,
                conflicts=conflicts,
                reason="conflict",
            )
        return MoveCheck(allowed=True, block=block, interval=candidate)

    @staticmethod
    def apply(schedule: Schedule, check: MoveCheck) -> list[TimeBlock]:
        """Replace the checked block in place; every other block is kept as-is."""
        if not check.allowed:
            return list(schedule.blocks)

        original = check.block
        start = check.interval.start
        moved_task = original.task.model_copy(update={"scheduled_start": start}) if original.task else None
        moved = original.model_copy(
            update={
                "id": f"task-{original.task_id}-{start.strftime('%Y%m%dT%H%M')}",
                "start": start,
                "end": check.interval.end,
                "task": moved_task,
            }
        )
        return [moved if block.id == original.id else block for block in schedule.blocks]
