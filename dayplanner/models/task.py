"""
Task model definitions.

Tasks are owned by the caller's task list; the engine only reads them and
attaches a scheduled start when it places one.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from dayplanner.models.enums import Priority, TaskCategory


class Task(BaseModel):
    """A pending piece of work to place on the day."""

    id: UUID
    name: str = Field(..., min_length=1, max_length=500, description="Display name")
    duration_minutes: int = Field(..., gt=0, description="Estimated duration in minutes")
    deadline: datetime = Field(..., description="When the task must be done")
    priority: Priority = Field(Priority.MEDIUM)
    category: TaskCategory = Field(TaskCategory.WORK)
    completed: bool = Field(False)
    created_at: Optional[datetime] = None
    scheduled_start: Optional[datetime] = Field(
        None, description="Start of the block the engine placed this task in"
    )

    class Config:
        from_attributes = True

    @property
    def summary(self) -> str:
        """One-line description used on task blocks."""
        return f"{self.category.value} • {self.priority.value} priority • {self.duration_minutes}m"
