"""Table models. Importing this package registers every table on SQLModel.metadata."""
from taskflow.models.enums import (
    PomodoroType,
    RecurrencePattern,
    TaskPriority,
    TaskStatus,
    Theme,
)
from taskflow.models.pomodoro import PomodoroSession
from taskflow.models.preferences import UserPreferences
from taskflow.models.task import Task
from taskflow.models.user import User

__all__ = [
    "PomodoroSession",
    "PomodoroType",
    "RecurrencePattern",
    "Task",
    "TaskPriority",
    "TaskStatus",
    "Theme",
    "User",
    "UserPreferences",
]
