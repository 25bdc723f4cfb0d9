"""
Unit tests for planner models.
"""

from datetime import date, datetime, time, timezone
from uuid import uuid4

import pytest

from dayplanner.models.enums import BlockKind, Priority, RecurrenceType, TaskCategory
from dayplanner.models.schedule import Schedule, TimeBlock
from dayplanner.models.scheduler_config import (
    DeadlineBand,
    RankingWeights,
    SchedulerConfig,
    SchedulerConfigUpdate,
)
from dayplanner.models.task import Task
from dayplanner.models.unavailability import Recurrence, UnavailabilityRule


def at(hour: int, minute: int = 0) -> datetime:
    return datetime(2025, 1, 6, hour, minute, tzinfo=timezone.utc)


def block(block_id: str, start: datetime, end: datetime, kind: BlockKind = BlockKind.BREAK) -> TimeBlock:
    return TimeBlock(id=block_id, kind=kind, start=start, end=end, title=block_id)


def test_task_requires_positive_duration():
    with pytest.raises(ValueError):
        Task(id=uuid4(), name="Nothing", duration_minutes=0, deadline=at(12))


def test_task_summary():
    task = Task(
        id=uuid4(),
        name="Practice",
        duration_minutes=40,
        deadline=at(12),
        priority=Priority.LOW,
        category=TaskCategory.LEISURE,
    )

    assert task.summary == "leisure • low priority • 40m"


def test_time_block_rejects_zero_length():
    with pytest.raises(ValueError):
        block("empty", at(10), at(10))


def test_unavailable_block_is_always_fixed():
    assert block("busy", at(10), at(11), kind=BlockKind.UNAVAILABLE).is_fixed


def test_task_block_requires_task_reference():
    with pytest.raises(ValueError):
        block("orphan", at(10), at(11), kind=BlockKind.TASK)


def test_schedule_sorts_blocks_and_detects_overlap():
    schedule = Schedule(
        date=date(2025, 1, 6),
        window_start=at(9),
        window_end=at(17),
        blocks=[block("b", at(10), at(11)), block("a", at(9), at(10))],
    )

    assert [entry.id for entry in schedule.blocks] == ["a", "b"]
    assert not schedule.has_overlap()
    assert schedule.find_block("b").start == at(10)
    assert schedule.find_block("missing") is None

    overlapping = schedule.model_copy(update={"blocks": [block("a", at(9), at(10, 30)), block("b", at(10), at(11))]})
    assert overlapping.has_overlap()


@pytest.mark.parametrize(
    "days",
    [[], [7], [-1], [1, 1]],
)
def test_weekly_recurrence_rejects_malformed_days(days):
    with pytest.raises(ValueError):
        Recurrence(type=RecurrenceType.WEEKLY, days=days)


def test_daily_recurrence_needs_no_days():
    assert Recurrence(type=RecurrenceType.DAILY).days == []


def test_rule_rejects_inverted_interval():
    with pytest.raises(ValueError):
        UnavailabilityRule(id=uuid4(), start=at(11), end=at(10), title="Backwards")


def test_ranking_weights_reject_inverted_bands():
    with pytest.raises(ValueError):
        RankingWeights(
            deadline_bands=[DeadlineBand(max_hours=24, score=50), DeadlineBand(max_hours=48, score=80)]
        )


def test_ranking_weights_reject_unordered_priorities():
    with pytest.raises(ValueError):
        RankingWeights(priority_weights={Priority.HIGH: 10, Priority.MEDIUM: 30, Priority.LOW: 5})


def test_ranking_weights_sort_bands():
    weights = RankingWeights(
        deadline_bands=[DeadlineBand(max_hours=48, score=80), DeadlineBand(max_hours=24, score=100)]
    )

    assert [band.max_hours for band in weights.deadline_bands] == [24, 48]


def test_config_rejects_inverted_window():
    with pytest.raises(ValueError):
        SchedulerConfig(day_start=time(18), day_end=time(9))


def test_config_apply_merges_partial_update():
    config = SchedulerConfig(day_start=time(9), day_end=time(17))

    updated = config.apply(SchedulerConfigUpdate(day_end=time(18)))

    assert (updated.day_start, updated.day_end) == (time(9), time(18))
    assert updated.slot_minutes == config.slot_minutes
    assert config.day_end == time(17)


def test_config_apply_revalidates():
    config = SchedulerConfig(day_start=time(9), day_end=time(17))

    with pytest.raises(ValueError):
        config.apply(SchedulerConfigUpdate(day_start=time(20)))
