"""
In-memory implementation of the unavailability store.
"""

from __future__ import annotations

from datetime import date
from uuid import UUID

from dayplanner.interfaces.unavailability_store import IUnavailabilityStore
from dayplanner.models.schedule import TimeBlock


class InMemoryUnavailabilityStore(IUnavailabilityStore):
    def __init__(self):
        self._adhoc_by_date: dict[date, list[TimeBlock]] = {}
        self._suppressed_by_date: dict[date, set[UUID]] = {}

    def list_adhoc(self, target_date: date) -> list[TimeBlock]:
        return list(self._adhoc_by_date.get(target_date, []))

    def add_adhoc(self, target_date: date, block: TimeBlock) -> None:
        self._adhoc_by_date.setdefault(target_date, []).append(block)

    def remove_adhoc(self, target_date: date, block_id: str) -> bool:
        blocks = self._adhoc_by_date.get(target_date, [])
        remaining = [block for block in blocks if block.id != block_id]
        if len(remaining) == len(blocks):
            return False
        if remaining:
            self._adhoc_by_date[target_date] = remaining
        else:
            self._adhoc_by_date.pop(target_date, None)
        return True

    def suppressed_rule_ids(self, target_date: date) -> set[UUID]:
        return set(self._suppressed_by_date.get(target_date, set()))

    def suppress_rule(self, target_date: date, rule_id: UUID) -> None:
        self._suppressed_by_date.setdefault(target_date, set()).add(rule_id)

    def forget_rule(self, rule_id: UUID) -> None:
        for target_date in list(self._suppressed_by_date):
            suppressed = self._suppressed_by_date[target_date]
            suppressed.discard(rule_id)
            if not suppressed:
                del self._suppressed_by_date[target_date]
