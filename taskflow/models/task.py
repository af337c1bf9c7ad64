"""Task model for SQLModel."""
from sqlmodel import SQLModel, Field
from sqlalchemy import Column, Integer, ForeignKey, Text
from datetime import datetime
from typing import Optional

from taskflow.models.enums import TaskPriority, TaskStatus, RecurrencePattern
from taskflow.utils.timeutils import utcnow


class Task(SQLModel, table=True):
    """Task entity: a unit of work, optionally nested under a parent task.

    Subtasks are found by querying ``parent_task_id``; no child collection is
    kept on the row, so the tree is walked by id lookups only.
    """

    __tablename__ = "tasks"

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(
        sa_column=Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    )
    title: str = Field(max_length=200, min_length=1)
    description: str | None = Field(default=None, sa_column=Column(Text))
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM)
    status: TaskStatus = Field(default=TaskStatus.PENDING)
    due_date: Optional[datetime] = Field(default=None)
    estimated_pomodoros: Optional[int] = Field(default=None)
    completed_pomodoros: int = Field(default=0)

    # Recurrence is descriptive only; no instances are generated from it.
    is_recurring: bool = Field(default=False)
    recurrence_pattern: Optional[RecurrencePattern] = Field(default=None)

    parent_task_id: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, ForeignKey("tasks.id", ondelete="SET NULL"), nullable=True, index=True),
    )

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
