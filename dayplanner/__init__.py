"""Single-day planner: ranks pending tasks and lays them out around unavailable time."""

from dayplanner.services.schedule_engine import ScheduleEngine

__all__ = ["ScheduleEngine"]
