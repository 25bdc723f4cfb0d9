"""
Unavailability store interface.

Holds the per-date state that outlives a single generation: ad-hoc unavailable
blocks and suppressed occurrences of recurring rules.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from uuid import UUID

from dayplanner.models.schedule import TimeBlock


class IUnavailabilityStore(ABC):
    @abstractmethod
    def list_adhoc(self, target_date: date) -> list[TimeBlock]:
        pass

    @abstractmethod
    def add_adhoc(self, target_date: date, block: TimeBlock) -> None:
        pass

    @abstractmethod
    def remove_adhoc(self, target_date: date, block_id: str) -> bool:
        """Remove an ad-hoc block; returns False when it was not stored."""
        pass

    @abstractmethod
    def suppressed_rule_ids(self, target_date: date) -> set[UUID]:
        pass

    @abstractmethod
    def suppress_rule(self, target_date: date, rule_id: UUID) -> None:
        pass

    @abstractmethod
    def forget_rule(self, rule_id: UUID) -> None:
        """Drop every suppression recorded for a rule that no longer exists."""
        pass
