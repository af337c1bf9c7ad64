"""User preference schemas."""
from pydantic import BaseModel, model_validator
from datetime import datetime
from typing import Any, Dict, Optional

from taskflow.models.enums import Theme
from taskflow.schemas.common import Count, RowId, reject_explicit_nulls


class UpdateUserPreferencesInput(BaseModel):
    """Partial update of a user's preferences; omitted fields keep their value."""
    user_id: RowId
    work_duration: Optional[Count] = None
    short_break_duration: Optional[Count] = None
    long_break_duration: Optional[Count] = None
    pomodoros_until_long_break: Optional[Count] = None
    theme: Optional[Theme] = None
    color_scheme: Optional[str] = None
    minimalist_mode: Optional[bool] = None
    notifications_enabled: Optional[bool] = None
    sound_enabled: Optional[bool] = None

    @model_validator(mode="after")
    def no_nulls(self):
        reject_explicit_nulls(self, self.model_fields_set - {"user_id"})
        return self

    def changes(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in self.model_fields_set if name != "user_id"}


class UserPreferencesResponse(BaseModel):
    id: int
    user_id: int
    work_duration: int
    short_break_duration: int
    long_break_duration: int
    pomodoros_until_long_break: int
    theme: Theme
    color_scheme: str
    minimalist_mode: bool
    notifications_enabled: bool
    sound_enabled: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
