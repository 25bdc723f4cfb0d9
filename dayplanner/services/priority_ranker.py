"""
Urgency ranking for pending tasks.

Score = deadline band + priority weight + category weight + long-task adjustment.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from dayplanner.core.logger import setup_logger
from dayplanner.models.scheduler_config import RankingWeights
from dayplanner.models.task import Task

logger = setup_logger(__name__)


class PriorityRanker:
    """Scores and orders tasks by urgency."""

    def __init__(self, weights: Optional[RankingWeights] = None):
        self.weights = weights or RankingWeights()

    def deadline_component(self, task: Task, now: datetime) -> float:
        """Band score by hours left; overdue tasks land in the closest band."""
        hours_to_deadline = (task.deadline - now).total_seconds() / 3600
        for band in self.weights.deadline_bands:
            if hours_to_deadline <= band.max_hours:
                return band.score
        return self.weights.deadline_floor

    def priority_component(self, task: Task) -> float:
        return self.weights.priority_weights[task.priority]

    def category_component(self, task: Task) -> float:
        return self.weights.category_weights[task.category]

    def wellbeing_adjustment(self, task: Task) -> float:
        """Penalty of the largest long-task threshold the duration exceeds."""
        adjustment = 0.0
        for entry in self.weights.duration_penalties:
            if task.duration_minutes > entry.min_minutes:
                adjustment = entry.penalty
        return adjustment

    def score(self, task: Task, now: datetime) -> float:
        return (
            self.deadline_component(task, now)
            + self.priority_component(task)
            + self.category_component(task)
            + self.wellbeing_adjustment(task)
        )

    def rank(self, tasks: Iterable[Task], now: datetime) -> list[Task]:
        """
        Order tasks by descending urgency score.

        The sort is stable, so equal scores keep the caller's input order.
        """
        scored = [(task, self.score(task, now)) for task in tasks]
        scored.sort(key=lambda entry: entry[1], reverse=True)
        if scored:
            logger.debug(
                "Ranked tasks: "
                + ", ".join(f"{task.name}={score:.1f}" for task, score in scored)
            )
        return [task for task, _ in scored]
