"""
Earliest-fit slot allocation for a single task.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from dayplanner.models.schedule import TimeBlock
from dayplanner.models.task import Task
from dayplanner.services.time_grid import TimeGrid, TimeInterval


class SlotAllocator:
    """Finds the earliest free run of slots long enough for a task."""

    def __init__(self, grid: Optional[TimeGrid] = None):
        self.grid = grid or TimeGrid()

    def allocate(
        self,
        occupied_blocks: Iterable[TimeBlock],
        task: Task,
        window: TimeInterval,
        anchor_time: Optional[datetime] = None,
    ) -> Optional[TimeInterval]:
        """
        Find where a task fits.

        Args:
            occupied_blocks: Blocks already placed on the day
            task: Task to place
            window: Scheduling window of the day
            anchor_time: Earliest allowed start; rounded up to the next slot boundary

        Returns:
            Interval spanning the whole slots used (may be longer than the task's
            duration), or None when no run fits before the window end
        """
        slots = self.grid.build_slots(window)
        for block in occupied_blocks:
            self.grid.mark_occupied(slots, block)

        start_index = 0
        if anchor_time is not None:
            start_index = self.grid.first_index_at_or_after(slots, anchor_time)

        needed = self.grid.slots_needed(task.duration_minutes)
        first = self.grid.find_run(slots, needed, start_index)
        if first is None:
            return None
        return TimeInterval(slots[first].start, slots[first + needed - 1].end)
