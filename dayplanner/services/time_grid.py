"""
Slot grid for one scheduling window.

Discretizes the window into fixed-width slots and answers occupancy questions.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from dayplanner.models.schedule import TimeBlock
from dayplanner.utils.datetime_utils import ceil_to_step


@dataclass
class TimeInterval:
    start: datetime
    end: datetime

    def overlaps(self, other: "TimeInterval") -> bool:
        return TimeGrid.overlaps(self, other)

    def contains(self, other: "TimeInterval") -> bool:
        return self.start <= other.start and other.end <= self.end


@dataclass
class Slot:
    start: datetime
    end: datetime
    available: bool = True


class TimeGrid:
    """Fixed-width slot bookkeeping for a window."""

    def __init__(self, slot_minutes: int = 30):
        if slot_minutes <= 0:
            raise ValueError("slot_minutes must be positive")
        self.slot_minutes = slot_minutes

    @property
    def slot_width(self) -> timedelta:
        return timedelta(minutes=self.slot_minutes)

    def build_slots(self, window: TimeInterval) -> list[Slot]:
        """Build whole slots from window start; a trailing partial slot is dropped."""
        slots: list[Slot] = []
        cursor = window.start
        while cursor + self.slot_width <= window.end:
            slots.append(Slot(start=cursor, end=cursor + self.slot_width))
            cursor += self.slot_width
        return slots

    @staticmethod
    def overlaps(first: TimeInterval | TimeBlock, second: TimeInterval | TimeBlock) -> bool:
        """Strict open-interval overlap; touching endpoints do not overlap."""
        return first.start < second.end and second.start < first.end

    def mark_occupied(self, slots: list[Slot], block: TimeInterval | TimeBlock) -> None:
        for slot in slots:
            if slot.available and self.overlaps(slot, block):
                slot.available = False

    @staticmethod
    def find_run(slots: list[Slot], needed: int, start_index: int = 0) -> Optional[int]:
        """Index of the first run of at least `needed` consecutive free slots."""
        if needed <= 0:
            return None
        run_start = start_index
        run_length = 0
        for index in range(start_index, len(slots)):
            if not slots[index].available:
                run_length = 0
                run_start = index + 1
                continue
            run_length += 1
            if run_length >= needed:
                return run_start
        return None

    def slots_needed(self, duration_minutes: int) -> int:
        return math.ceil(duration_minutes / self.slot_minutes)

    def first_index_at_or_after(self, slots: list[Slot], moment: datetime) -> int:
        """First slot starting at or after moment rounded up to a slot boundary."""
        if not slots:
            return 0
        boundary = ceil_to_step(moment, slots[0].start, self.slot_minutes)
        for index, slot in enumerate(slots):
            if slot.start >= boundary:
                return index
        return len(slots)

    @staticmethod
    def clamp(interval: TimeInterval, window: TimeInterval) -> Optional[TimeInterval]:
        """Trim an interval to the window, or None if they do not overlap."""
        if not TimeGrid.overlaps(interval, window):
            return None
        return TimeInterval(max(interval.start, window.start), min(interval.end, window.end))
