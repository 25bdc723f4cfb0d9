"""
Unit tests for SlotAllocator.
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

from dayplanner.models.enums import BlockKind
from dayplanner.models.schedule import TimeBlock
from dayplanner.models.task import Task
from dayplanner.services.slot_allocator import SlotAllocator
from dayplanner.services.time_grid import TimeInterval


def at(hour: int, minute: int = 0) -> datetime:
    return datetime(2025, 1, 6, hour, minute, tzinfo=timezone.utc)


def make_task(duration_minutes: int) -> Task:
    return Task(id=uuid4(), name="Task", duration_minutes=duration_minutes, deadline=at(23))


def busy(start: datetime, end: datetime) -> TimeBlock:
    return TimeBlock(id=f"busy-{start:%H%M}", kind=BlockKind.UNAVAILABLE, start=start, end=end, title="Busy")


def test_allocates_earliest_free_run():
    allocator = SlotAllocator()

    interval = allocator.allocate([busy(at(9), at(10))], make_task(60), TimeInterval(at(9), at(17)))

    assert interval == TimeInterval(at(10), at(11))


def test_duration_is_rounded_up_to_whole_slots():
    allocator = SlotAllocator()

    interval = allocator.allocate([], make_task(45), TimeInterval(at(9), at(17)))

    assert interval == TimeInterval(at(9), at(10))
    assert interval.end - interval.start >= timedelta(minutes=45)
    assert interval.end - interval.start < timedelta(minutes=45 + 30)


def test_skips_gaps_that_are_too_short():
    allocator = SlotAllocator()
    occupied = [busy(at(9), at(10)), busy(at(10, 30), at(12))]

    interval = allocator.allocate(occupied, make_task(60), TimeInterval(at(9), at(17)))

    assert interval == TimeInterval(at(12), at(13))


def test_anchor_is_rounded_up_to_next_slot():
    allocator = SlotAllocator()

    interval = allocator.allocate([], make_task(30), TimeInterval(at(9), at(17)), anchor_time=at(11, 5))

    assert interval == TimeInterval(at(11, 30), at(12))


def test_returns_none_when_only_shorter_run_is_left():
    allocator = SlotAllocator()
    occupied = [busy(at(9), at(16, 30))]

    assert allocator.allocate(occupied, make_task(45), TimeInterval(at(9), at(17))) is None


def test_returns_none_when_anchor_is_past_window_end():
    allocator = SlotAllocator()

    assert allocator.allocate([], make_task(30), TimeInterval(at(9), at(17)), anchor_time=at(18)) is None
