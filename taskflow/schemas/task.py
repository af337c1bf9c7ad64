"""Task schemas for create, list and partial update."""
from pydantic import BaseModel, Field, field_validator, model_validator
from datetime import datetime
from typing import Any, Dict, Optional

from taskflow.models.enums import TaskPriority, TaskStatus, RecurrencePattern
from taskflow.schemas.common import Count, RowId, reject_explicit_nulls
from taskflow.utils.timeutils import to_utc


class CreateTaskInput(BaseModel):
    """Schema for creating a task."""
    user_id: RowId
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: Optional[datetime] = None
    estimated_pomodoros: Optional[Count] = None
    is_recurring: bool = False
    recurrence_pattern: Optional[RecurrencePattern] = None
    parent_task_id: Optional[RowId] = None

    @field_validator("due_date")
    @classmethod
    def due_date_as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_utc(value)

    @model_validator(mode="after")
    def pattern_implies_recurring(self):
        if self.recurrence_pattern is not None:
            self.is_recurring = True
        return self


class UpdateTaskInput(BaseModel):
    """Schema for a partial task update.

    Only fields present in the request are applied. ``description``,
    ``due_date``, ``estimated_pomodoros``, ``recurrence_pattern`` and
    ``parent_task_id`` may be cleared with an explicit null.
    """
    id: RowId
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    priority: Optional[TaskPriority] = None
    status: Optional[TaskStatus] = None
    due_date: Optional[datetime] = None
    estimated_pomodoros: Optional[Count] = None
    is_recurring: Optional[bool] = None
    recurrence_pattern: Optional[RecurrencePattern] = None
    parent_task_id: Optional[RowId] = None

    @field_validator("due_date")
    @classmethod
    def due_date_as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_utc(value)

    @model_validator(mode="after")
    def non_nullable_fields(self):
        reject_explicit_nulls(self, ("title", "priority", "status", "is_recurring"))
        return self

    def changes(self) -> Dict[str, Any]:
        """Fields supplied by the caller, excluding ``id``."""
        return {name: getattr(self, name) for name in self.model_fields_set if name != "id"}


class GetTasksInput(BaseModel):
    """Filters for listing a user's tasks.

    ``parent_task_id`` sent as null selects root tasks only; leaving it out
    applies no parent filter.
    """
    user_id: RowId
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    parent_task_id: Optional[RowId] = None

    @property
    def filters_parent(self) -> bool:
        return "parent_task_id" in self.model_fields_set


class TaskResponse(BaseModel):
    """Schema for task API responses."""
    id: int
    user_id: int
    title: str
    description: Optional[str]
    priority: TaskPriority
    status: TaskStatus
    due_date: Optional[datetime] = None
    estimated_pomodoros: Optional[int] = None
    completed_pomodoros: int = 0
    is_recurring: bool = False
    recurrence_pattern: Optional[RecurrencePattern] = None
    parent_task_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
