"""Pomodoro session schemas."""
from pydantic import BaseModel, field_validator, model_validator
from datetime import datetime
from typing import Optional

from taskflow.models.enums import PomodoroType
from taskflow.schemas.common import Count, RowId
from taskflow.utils.timeutils import to_utc


class StartPomodoroInput(BaseModel):
    user_id: RowId
    task_id: Optional[RowId] = None
    type: PomodoroType = PomodoroType.WORK
    duration_minutes: Count = 25


class CompletePomodoroInput(BaseModel):
    session_id: RowId


class GetPomodoroHistoryInput(BaseModel):
    """History filters. Date bounds are inclusive and apply to ``started_at``."""
    user_id: RowId
    task_id: Optional[RowId] = None
    from_date: Optional[datetime] = None
    to_date: Optional[datetime] = None

    @field_validator("from_date", "to_date")
    @classmethod
    def bounds_as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_utc(value)

    @model_validator(mode="after")
    def ordered_bounds(self):
        if self.from_date and self.to_date and self.from_date > self.to_date:
            raise ValueError("from_date must not be after to_date")
        return self


class PomodoroSessionResponse(BaseModel):
    id: int
    user_id: int
    task_id: Optional[int] = None
    type: PomodoroType
    duration_minutes: int
    completed: bool
    started_at: datetime
    completed_at: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True
