"""
Unavailability expansion.

Replays recurring and one-off unavailability rules onto a target date as fixed blocks.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, Optional
from uuid import UUID

from dayplanner.core.logger import setup_logger
from dayplanner.models.enums import BlockKind, RecurrenceType
from dayplanner.models.schedule import TimeBlock
from dayplanner.models.unavailability import UnavailabilityRule
from dayplanner.services.time_grid import TimeGrid, TimeInterval
from dayplanner.utils.datetime_utils import combine_local, to_local_datetime

logger = setup_logger(__name__)


def sunday_based_weekday(day: date) -> int:
    """Weekday index with 0=Sunday ... 6=Saturday."""
    return (day.weekday() + 1) % 7


class UnavailabilityExpander:
    """Turns unavailability rules into concrete blocked intervals for one date."""

    def __init__(self, timezone: str = "UTC"):
        self.timezone = timezone

    def applies_on(self, rule: UnavailabilityRule, target_date: date) -> bool:
        """Check whether a rule has an occurrence on target_date."""
        recurrence = rule.recurrence
        if recurrence is None:
            return to_local_datetime(rule.start, self.timezone).date() == target_date
        if recurrence.type == RecurrenceType.DAILY:
            return True
        if recurrence.type == RecurrenceType.WEEKLY:
            return sunday_based_weekday(target_date) in recurrence.days
        return False

    def materialize(
        self,
        rule: UnavailabilityRule,
        target_date: date,
        window: TimeInterval,
    ) -> Optional[TimeBlock]:
        """
        Place a rule's time-of-day on target_date, clamped to the window.

        A template crossing midnight keeps its length, so the occurrence ends
        on the following day before clamping.

        Returns:
            Fixed unavailable block, or None when the occurrence misses the window
        """
        template_start = to_local_datetime(rule.start, self.timezone)
        template_end = to_local_datetime(rule.end, self.timezone)
        day_span = (template_end.date() - template_start.date()).days

        start = combine_local(target_date, template_start.time(), self.timezone)
        end = combine_local(target_date + timedelta(days=day_span), template_end.time(), self.timezone)
        if end <= start:
            return None

        clamped = TimeGrid.clamp(TimeInterval(start, end), window)
        if clamped is None:
            return None

        return TimeBlock(
            id=f"unavailable-{rule.id}-{target_date.isoformat()}",
            kind=BlockKind.UNAVAILABLE,
            start=clamped.start,
            end=clamped.end,
            title=rule.title,
            description=rule.description,
            rule_id=rule.id,
            is_fixed=True,
        )

    def expand(
        self,
        rules: Iterable[UnavailabilityRule],
        target_date: date,
        window: TimeInterval,
        suppressed_ids: Iterable[UUID] = (),
    ) -> list[TimeBlock]:
        """
        Expand rules into blocks for target_date.

        Args:
            rules: Rules supplied by the caller
            target_date: Calendar date being planned
            window: Scheduling window of that date
            suppressed_ids: Rules whose occurrence was deleted for this date only

        Returns:
            Unavailable blocks sorted by start time
        """
        suppressed = set(suppressed_ids)
        blocks: list[TimeBlock] = []
        for rule in rules:
            if rule.id in suppressed:
                continue
            if not self.applies_on(rule, target_date):
                continue
            block = self.materialize(rule, target_date, window)
            if block is None:
                logger.debug(f"Rule {rule.id} falls outside the window on {target_date}")
                continue
            blocks.append(block)
        blocks.sort(key=lambda block: (block.start, block.end))
        return blocks

    @staticmethod
    def separate_overlaps(blocks: Iterable[TimeBlock]) -> list[TimeBlock]:
        """
        Make fixed blocks pairwise disjoint.

        A block starting inside an earlier one is trimmed to begin where the
        earlier one ends; a block fully covered by an earlier one is dropped.
        Two fixed blocks that collide cannot both keep their span without
        breaking the no-overlap invariant of a Schedule, so the later one
        yields. Blocks that collide with nothing are never moved or resized.
        """
        separated: list[TimeBlock] = []
        for block in sorted(blocks, key=lambda entry: (entry.start, -entry.end.timestamp(), entry.id)):
            if separated and block.start < separated[-1].end:
                previous_end = separated[-1].end
                if block.end <= previous_end:
                    logger.debug(f"Dropping {block.id}: covered by {separated[-1].id}")
                    continue
                block = block.model_copy(update={"start": previous_end})
            separated.append(block)
        return separated
