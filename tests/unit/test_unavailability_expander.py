"""
Unit tests for UnavailabilityExpander.
"""

from datetime import date, datetime, timedelta, timezone
from uuid import uuid4

from dayplanner.models.enums import BlockKind, RecurrenceType
from dayplanner.models.schedule import TimeBlock
from dayplanner.models.unavailability import Recurrence, UnavailabilityRule
from dayplanner.services.time_grid import TimeInterval
from dayplanner.services.unavailability_expander import (
    UnavailabilityExpander,
    sunday_based_weekday,
)

MONDAY = date(2025, 1, 6)


def at(day: date, hour: int, minute: int = 0) -> datetime:
    return datetime(day.year, day.month, day.day, hour, minute, tzinfo=timezone.utc)


def window_for(day: date) -> TimeInterval:
    return TimeInterval(at(day, 6), at(day, 23))


def make_rule(
    start: datetime,
    end: datetime,
    recurrence: Recurrence | None = None,
    title: str = "Busy",
) -> UnavailabilityRule:
    return UnavailabilityRule(id=uuid4(), start=start, end=end, title=title, recurrence=recurrence)


def test_sunday_based_weekday():
    assert sunday_based_weekday(date(2025, 1, 5)) == 0
    assert sunday_based_weekday(MONDAY) == 1
    assert sunday_based_weekday(date(2025, 1, 11)) == 6


def test_one_off_rule_applies_only_on_its_date():
    expander = UnavailabilityExpander()
    rule = make_rule(at(MONDAY, 12), at(MONDAY, 13))

    assert expander.applies_on(rule, MONDAY)
    assert not expander.applies_on(rule, MONDAY + timedelta(days=1))


def test_daily_rule_is_replayed_on_any_date():
    expander = UnavailabilityExpander()
    template_day = date(2024, 3, 1)
    rule = make_rule(
        at(template_day, 12),
        at(template_day, 13),
        recurrence=Recurrence(type=RecurrenceType.DAILY),
    )

    blocks = expander.expand([rule], MONDAY, window_for(MONDAY))

    assert len(blocks) == 1
    block = blocks[0]
    assert (block.start, block.end) == (at(MONDAY, 12), at(MONDAY, 13))
    assert block.kind == BlockKind.UNAVAILABLE
    assert block.is_fixed
    assert block.rule_id == rule.id


def test_weekly_rule_matches_weekday_set():
    expander = UnavailabilityExpander()
    rule = make_rule(
        at(MONDAY, 10),
        at(MONDAY, 11),
        recurrence=Recurrence(type=RecurrenceType.WEEKLY, days=[1, 3]),
    )

    assert expander.applies_on(rule, MONDAY)
    assert not expander.applies_on(rule, MONDAY + timedelta(days=1))
    assert expander.applies_on(rule, MONDAY + timedelta(days=2))
    assert expander.applies_on(rule, MONDAY + timedelta(days=7))


def test_suppressed_rule_is_excluded():
    expander = UnavailabilityExpander()
    daily = Recurrence(type=RecurrenceType.DAILY)
    kept = make_rule(at(MONDAY, 8), at(MONDAY, 9), recurrence=daily)
    suppressed = make_rule(at(MONDAY, 12), at(MONDAY, 13), recurrence=daily)

    blocks = expander.expand([kept, suppressed], MONDAY, window_for(MONDAY), suppressed_ids={suppressed.id})

    assert [block.rule_id for block in blocks] == [kept.id]


def test_partial_overlap_is_clamped_and_outside_is_omitted():
    expander = UnavailabilityExpander()
    daily = Recurrence(type=RecurrenceType.DAILY)
    early = make_rule(at(MONDAY, 5), at(MONDAY, 7), recurrence=daily)
    outside = make_rule(at(MONDAY, 2), at(MONDAY, 4), recurrence=daily)

    blocks = expander.expand([early, outside], MONDAY, window_for(MONDAY))

    assert len(blocks) == 1
    assert (blocks[0].start, blocks[0].end) == (at(MONDAY, 6), at(MONDAY, 7))


def test_rule_crossing_midnight_is_clamped_to_window_end():
    expander = UnavailabilityExpander()
    sunday = date(2025, 1, 5)
    rule = make_rule(
        at(sunday, 22),
        at(sunday + timedelta(days=1), 7),
        recurrence=Recurrence(type=RecurrenceType.DAILY),
    )

    blocks = expander.expand([rule], MONDAY, window_for(MONDAY))

    assert len(blocks) == 1
    assert (blocks[0].start, blocks[0].end) == (at(MONDAY, 22), at(MONDAY, 23))


def test_expand_sorts_by_start():
    expander = UnavailabilityExpander()
    daily = Recurrence(type=RecurrenceType.DAILY)
    late = make_rule(at(MONDAY, 18), at(MONDAY, 19), recurrence=daily, title="Dinner")
    early = make_rule(at(MONDAY, 7), at(MONDAY, 8), recurrence=daily, title="Commute")

    blocks = expander.expand([late, early], MONDAY, window_for(MONDAY))

    assert [block.title for block in blocks] == ["Commute", "Dinner"]


def test_separate_overlaps_trims_and_drops():
    def block(block_id: str, start: int, end: int) -> TimeBlock:
        return TimeBlock(
            id=block_id,
            kind=BlockKind.UNAVAILABLE,
            start=at(MONDAY, start),
            end=at(MONDAY, end),
            title=block_id,
        )

    separated = UnavailabilityExpander.separate_overlaps(
        [block("b", 10, 12), block("a", 9, 11), block("c", 9, 10)]
    )

    assert [(entry.id, entry.start.hour, entry.end.hour) for entry in separated] == [
        ("a", 9, 11),
        ("b", 11, 12),
    ]
