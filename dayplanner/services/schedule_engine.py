"""
Schedule engine.

Orchestrates expansion, ranking, allocation and break insertion into the
generate / reschedule / add-unavailable / delete operations for one day.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Callable, Iterable, Optional
from uuid import UUID, uuid4

from dayplanner.core.config import get_settings
from dayplanner.core.exceptions import BusinessLogicError, NotFoundError, ValidationError
from dayplanner.core.logger import setup_logger
from dayplanner.infrastructure.local.unavailability_store import InMemoryUnavailabilityStore
from dayplanner.interfaces.unavailability_store import IUnavailabilityStore
from dayplanner.models.enums import BlockKind, RecurrenceType, ScheduleState
from dayplanner.models.schedule import Schedule, TimeBlock, UnplacedTask
from dayplanner.models.scheduler_config import SchedulerConfig, SchedulerConfigUpdate
from dayplanner.models.task import Task
from dayplanner.models.unavailability import UnavailabilityRule
from dayplanner.services.break_inserter import BreakInserter
from dayplanner.services.priority_ranker import PriorityRanker
from dayplanner.services.reschedule_validator import RescheduleValidator
from dayplanner.services.slot_allocator import SlotAllocator
from dayplanner.services.time_grid import TimeGrid, TimeInterval
from dayplanner.services.unavailability_expander import UnavailabilityExpander
from dayplanner.utils.datetime_utils import combine_local, now_in, to_local_datetime

logger = setup_logger(__name__)

UNPLACED_NO_FREE_SLOT = "no_free_slot"


class ScheduleEngine:
    """
    Single-day planner.

    Provides:
    - Greedy generation (ranked tasks, earliest fit, no backtracking)
    - Interactive single-task moves with conflict rejection
    - Ad-hoc unavailable time and per-date suppression of recurring rules
    - Block deletion with break regeneration
    """

    def __init__(
        self,
        config: Optional[SchedulerConfig] = None,
        store: Optional[IUnavailabilityStore] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the engine.

        Args:
            config: Engine tunables (None = built from environment settings)
            store: Per-date ad-hoc blocks and suppressions (None = in-memory)
            clock: Returns the current moment; injectable for deterministic runs
        """
        self.config = config or SchedulerConfig.from_settings(get_settings())
        self.store = store or InMemoryUnavailabilityStore()
        self._clock = clock
        self.tasks: list[Task] = []
        self.rules: list[UnavailabilityRule] = []
        self.current_schedule: Optional[Schedule] = None
        self.state = ScheduleState.EMPTY
        self._build_components()

    def _build_components(self) -> None:
        self.grid = TimeGrid(self.config.slot_minutes)
        self.expander = UnavailabilityExpander(self.config.timezone)
        self.ranker = PriorityRanker(self.config.ranking)
        self.allocator = SlotAllocator(self.grid)
        self.break_inserter = BreakInserter(self.config.breaks)
        self.validator = RescheduleValidator()

    # ===========================================
    # Inputs
    # ===========================================

    def set_tasks(self, tasks: Iterable[Task]) -> None:
        """
        Replace the task collection; completed tasks are dropped.

        Raises:
            ValidationError: If a task has a non-positive duration
        """
        pending: list[Task] = []
        for task in tasks:
            if task.completed:
                continue
            if task.duration_minutes <= 0:
                logger.warning(f"Rejecting task {task.id}: duration {task.duration_minutes}m")
                raise ValidationError(
                    f"Task '{task.name}' must have a positive duration",
                    details={"task_id": str(task.id), "duration_minutes": task.duration_minutes},
                )
            pending.append(
                task.model_copy(update={"deadline": self._localize(task.deadline)})
            )
        self.tasks = pending

    def set_unavailability_rules(self, rules: Iterable[UnavailabilityRule]) -> None:
        """
        Replace the rule collection.

        Raises:
            ValidationError: If a rule is inverted or has a malformed weekday set
        """
        accepted: list[UnavailabilityRule] = []
        for rule in rules:
            self._validate_rule(rule)
            accepted.append(rule)
        self.rules = accepted

    def remove_unavailability_rule(self, rule_id: UUID) -> Optional[Schedule]:
        """Delete a rule everywhere and regenerate the current day if there is one."""
        remaining = [rule for rule in self.rules if rule.id != rule_id]
        if len(remaining) == len(self.rules):
            raise NotFoundError(f"Unavailability rule {rule_id} not found")
        self.rules = remaining
        self.store.forget_rule(rule_id)
        if self.current_schedule is None:
            return None
        return self.generate(self.current_schedule.date)

    def update_config(self, update: SchedulerConfigUpdate) -> SchedulerConfig:
        """Merge a partial config update; takes effect on the next operation."""
        self.config = self.config.apply(update)
        self._build_components()
        return self.config

    # ===========================================
    # Operations
    # ===========================================

    def get_schedule(self) -> Optional[Schedule]:
        return self.current_schedule

    def window_for(self, target_date: date) -> TimeInterval:
        return TimeInterval(
            combine_local(target_date, self.config.day_start, self.config.timezone),
            combine_local(target_date, self.config.day_end, self.config.timezone),
        )

    def generate(self, target_date: date | datetime, now: Optional[datetime] = None) -> Schedule:
        """
        Build the schedule for a date from scratch.

        Fixed blocks go in first, then ranked tasks are placed one by one at the
        earliest fit after the previously placed task, then breaks fill gaps.

        Args:
            target_date: Calendar date to plan
            now: Current moment (None = engine clock); on the current date,
                tasks never start before it

        Returns:
            Schedule sorted by start time, with unplaceable tasks listed
        """
        now = self._now(now)
        if isinstance(target_date, datetime):
            target_date = self._localize(target_date).date()
        window = self.window_for(target_date)

        blocks = self._fixed_blocks(target_date, window)
        ranked = self.ranker.rank(self.tasks, now)

        cursor = now if now.date() == target_date else window.start
        unplaced: list[UnplacedTask] = []
        placed = 0
        for task in ranked:
            interval = self.allocator.allocate(blocks, task, window, anchor_time=cursor)
            if interval is None:
                logger.info(f"Task '{task.name}' ({task.duration_minutes}m) does not fit on {target_date}")
                unplaced.append(
                    UnplacedTask(task_id=task.id, name=task.name, reason=UNPLACED_NO_FREE_SLOT)
                )
                continue
            blocks.append(self._task_block(task, interval))
            cursor = interval.end
            placed += 1

        breaks = self.break_inserter.insert_breaks(blocks)
        schedule = Schedule(
            date=target_date,
            window_start=window.start,
            window_end=window.end,
            blocks=blocks + breaks,
            unplaced_tasks=unplaced,
        )

        logger.info(
            f"Generated schedule for {target_date}: {placed} task(s) placed, "
            f"{len(unplaced)} unplaceable, {len(breaks)} break(s)"
        )
        self.state = (
            ScheduleState.GENERATED if self.state == ScheduleState.EMPTY else ScheduleState.REGENERATED
        )
        self.current_schedule = schedule
        return schedule

    def reschedule_task(
        self,
        task_id: UUID,
        new_start: datetime,
        schedule: Optional[Schedule] = None,
    ) -> Schedule:
        """
        Move one task block to a new start time.

        On conflict the schedule is returned unchanged; compare the task block's
        start before and after to tell a rejected move from a successful one.

        Raises:
            NotFoundError: If the task has no block in the schedule
            BusinessLogicError: If no schedule exists yet
        """
        schedule = self._require_schedule(schedule)
        check = self.validator.check(schedule, task_id, self._localize(new_start))
        if not check.allowed:
            logger.info(
                f"Could not move task {task_id} to {check.interval.start:%H:%M}: {check.reason} "
                f"{[block.id for block in check.conflicts]}"
            )
            return schedule

        blocks = self._rebuild_breaks(self.validator.apply(schedule, check))
        return self._commit_edit(schedule, blocks)

    def add_unavailable_time(
        self,
        start: datetime,
        end: datetime,
        title: str,
        description: Optional[str] = None,
    ) -> Schedule:
        """
        Add a one-off fixed block and regenerate its date.

        Tasks that no longer fit show up in the regenerated schedule's unplaced list.

        Raises:
            ValidationError: If end is not after start
        """
        start = self._localize(start)
        end = self._localize(end)
        if end <= start:
            logger.warning(f"Rejecting unavailable time '{title}': {start} - {end}")
            raise ValidationError(
                "Unavailable time must end after it starts",
                details={"start": start.isoformat(), "end": end.isoformat()},
            )

        target_date = start.date()
        block = TimeBlock(
            id=f"adhoc-{uuid4()}",
            kind=BlockKind.UNAVAILABLE,
            start=start,
            end=end,
            title=title,
            description=description,
            is_fixed=True,
        )
        self.store.add_adhoc(target_date, block)
        return self.generate(target_date)

    def delete_time_block(self, block_id: str, schedule: Optional[Schedule] = None) -> Schedule:
        """
        Remove a block from the day.

        - task: removed, breaks regenerated
        - break: removed
        - recurring unavailable: suppressed for this date only, day regenerated
        - ad-hoc unavailable: removed for this date, day regenerated

        Raises:
            NotFoundError: If the block is not in the schedule
            BusinessLogicError: If no schedule exists yet
        """
        schedule = self._require_schedule(schedule)
        block = schedule.find_block(block_id)
        if block is None:
            raise NotFoundError(f"Block {block_id} not found on {schedule.date}")

        if block.kind == BlockKind.UNAVAILABLE:
            if block.rule_id is not None:
                self.store.suppress_rule(schedule.date, block.rule_id)
                logger.info(f"Suppressed rule {block.rule_id} on {schedule.date}")
            elif not self.store.remove_adhoc(schedule.date, block_id):
                logger.warning(f"Ad-hoc block {block_id} was not stored for {schedule.date}")
            return self.generate(schedule.date)

        blocks = [entry for entry in schedule.blocks if entry.id != block_id]
        if block.kind == BlockKind.TASK:
            blocks = self._rebuild_breaks(blocks)
        return self._commit_edit(schedule, blocks)

    def estimate_completion(
        self,
        tasks: Optional[Iterable[Task]] = None,
        now: Optional[datetime] = None,
    ) -> datetime:
        """Rough finish time: all pending work plus one short break per full work stretch."""
        pending = [task for task in (self.tasks if tasks is None else tasks) if not task.completed]
        total_minutes = sum(task.duration_minutes for task in pending)
        policy = self.config.breaks
        breaks_needed = total_minutes // policy.max_continuous_work_minutes
        total_minutes += breaks_needed * policy.short_break_minutes
        return self._now(now) + timedelta(minutes=total_minutes)

    # ===========================================
    # Helpers
    # ===========================================

    def _now(self, now: Optional[datetime]) -> datetime:
        if now is None:
            now = self._clock() if self._clock else now_in(self.config.timezone)
        return self._localize(now)

    def _localize(self, value: datetime) -> datetime:
        return to_local_datetime(value, self.config.timezone)

    def _require_schedule(self, schedule: Optional[Schedule]) -> Schedule:
        schedule = schedule or self.current_schedule
        if schedule is None:
            raise BusinessLogicError("No schedule has been generated yet")
        return schedule

    def _validate_rule(self, rule: UnavailabilityRule) -> None:
        if rule.end <= rule.start:
            logger.warning(f"Rejecting rule {rule.id}: end {rule.end} <= start {rule.start}")
            raise ValidationError(
                f"Unavailability rule '{rule.title}' must end after it starts",
                details={"rule_id": str(rule.id)},
            )
        recurrence = rule.recurrence
        if recurrence is None:
            return
        days = list(recurrence.days)
        malformed = (
            any(day < 0 or day > 6 for day in days)
            or len(days) != len(set(days))
            or (recurrence.type == RecurrenceType.WEEKLY and not days)
        )
        if malformed:
            logger.warning(f"Rejecting rule {rule.id}: weekday set {days}")
            raise ValidationError(
                f"Unavailability rule '{rule.title}' has a malformed weekday set",
                details={"rule_id": str(rule.id), "days": days},
            )

    def _fixed_blocks(self, target_date: date, window: TimeInterval) -> list[TimeBlock]:
        recurring = self.expander.expand(
            self.rules,
            target_date,
            window,
            suppressed_ids=self.store.suppressed_rule_ids(target_date),
        )
        adhoc: list[TimeBlock] = []
        for block in self.store.list_adhoc(target_date):
            clamped = TimeGrid.clamp(TimeInterval(block.start, block.end), window)
            if clamped is None:
                continue
            adhoc.append(block.model_copy(update={"start": clamped.start, "end": clamped.end}))
        return self.expander.separate_overlaps(recurring + adhoc)

    @staticmethod
    def _task_block(task: Task, interval: TimeInterval) -> TimeBlock:
        return TimeBlock(
            id=f"task-{task.id}-{interval.start.strftime('%Y%m%dT%H%M')}",
            kind=BlockKind.TASK,
            start=interval.start,
            end=interval.end,
            title=task.name,
            description=task.summary,
            task_id=task.id,
            task=task.model_copy(update={"scheduled_start": interval.start}),
        )

    def _rebuild_breaks(self, blocks: list[TimeBlock]) -> list[TimeBlock]:
        kept = [block for block in blocks if block.kind != BlockKind.BREAK]
        return kept + self.break_inserter.insert_breaks(kept)

    def _commit_edit(self, schedule: Schedule, blocks: list[TimeBlock]) -> Schedule:
        edited = Schedule(
            date=schedule.date,
            window_start=schedule.window_start,
            window_end=schedule.window_end,
            blocks=blocks,
            unplaced_tasks=list(schedule.unplaced_tasks),
        )
        self.current_schedule = edited
        self.state = ScheduleState.MODIFIED
        return edited
