"""
Recovery break insertion.

Walks placed task blocks in time order, tracks continuous work, and fills
existing gaps with breaks. Never moves a task.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable, Optional

from dayplanner.core.logger import setup_logger
from dayplanner.models.enums import BlockKind, Priority
from dayplanner.models.schedule import TimeBlock
from dayplanner.models.scheduler_config import BreakPolicy
from dayplanner.utils.datetime_utils import minutes_between

logger = setup_logger(__name__)

BREAK_DESCRIPTION = "Time to recharge and stay productive"


class BreakInserter:
    """Inserts short/long/rest breaks between consecutive tasks."""

    def __init__(self, policy: Optional[BreakPolicy] = None):
        self.policy = policy or BreakPolicy()

    def is_high_intensity(self, block: TimeBlock) -> bool:
        task = block.task
        if task is None:
            return False
        return (
            task.priority == Priority.HIGH
            or task.duration_minutes >= self.policy.intense_duration_minutes
        )

    @staticmethod
    def _break_title(long: bool, rest: bool) -> str:
        if rest:
            return "Rest Break"
        return "Long Break" if long else "Short Break"

    @staticmethod
    def _work_minutes(block: TimeBlock) -> int:
        if block.task is not None:
            return block.task.duration_minutes
        return block.duration_minutes

    @staticmethod
    def _fits(start: datetime, end: datetime, next_start: datetime, occupied: list[TimeBlock]) -> bool:
        if end > next_start:
            return False
        return not any(block.overlaps(start, end) for block in occupied)

    def _make_break(self, start: datetime, minutes: int, long: bool = False, rest: bool = False) -> TimeBlock:
        return TimeBlock(
            id=f"break-{start.strftime('%Y%m%dT%H%M')}",
            kind=BlockKind.BREAK,
            start=start,
            end=start + timedelta(minutes=minutes),
            title=self._break_title(long, rest),
            description=BREAK_DESCRIPTION,
        )

    def insert_breaks(self, blocks: Iterable[TimeBlock]) -> list[TimeBlock]:
        """
        Compute breaks for the given day.

        Args:
            blocks: Every non-break block of the day (tasks and unavailable time)

        Returns:
            Newly created break blocks, in time order
        """
        occupied = [block for block in blocks if block.kind != BlockKind.BREAK]
        task_blocks = sorted(
            (block for block in occupied if block.kind == BlockKind.TASK),
            key=lambda block: (block.start, block.end),
        )
        policy = self.policy
        breaks: list[TimeBlock] = []
        continuous_work = 0

        for current, following in zip(task_blocks, task_blocks[1:]):
            continuous_work += self._work_minutes(current)
            gap = minutes_between(current.end, following.start)

            if gap > policy.long_gap_minutes:
                continuous_work = 0
                continue

            if continuous_work >= policy.max_continuous_work_minutes and gap >= policy.short_break_minutes:
                long = continuous_work >= policy.long_break_threshold_minutes
                length = policy.long_break_minutes if long else policy.short_break_minutes
                break_end = current.end + timedelta(minutes=length)
                if self._fits(current.end, break_end, following.start, occupied):
                    breaks.append(self._make_break(current.end, length, long=long))
                    continuous_work = 0
                continue

            if (
                policy.rest_between_intense_tasks
                and self.is_high_intensity(current)
                and self.is_high_intensity(following)
                and gap >= policy.rest_break_minutes
            ):
                rest_end = current.end + timedelta(minutes=policy.rest_break_minutes)
                if self._fits(current.end, rest_end, following.start, occupied):
                    breaks.append(self._make_break(current.end, policy.rest_break_minutes, rest=True))
                    continuous_work = 0

        if breaks:
            logger.debug(f"Inserted {len(breaks)} break(s)")
        return breaks
