"""PomodoroSession model for SQLModel."""
from sqlmodel import SQLModel, Field
from sqlalchemy import Column, Integer, ForeignKey
from datetime import datetime
from typing import Optional

from taskflow.models.enums import PomodoroType
from taskflow.utils.timeutils import utcnow


class PomodoroSession(SQLModel, table=True):
    """A single timed work or break interval.

    ``completed_at`` is set exactly once, together with ``completed``.
    """

    __tablename__ = "pomodoro_sessions"

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(
        sa_column=Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    )
    task_id: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, ForeignKey("tasks.id", ondelete="SET NULL"), nullable=True, index=True),
    )
    type: PomodoroType = Field(default=PomodoroType.WORK)
    duration_minutes: int = Field(default=25)
    completed: bool = Field(default=False)
    started_at: datetime = Field(default_factory=utcnow)
    completed_at: Optional[datetime] = Field(default=None)
    created_at: datetime = Field(default_factory=utcnow)
