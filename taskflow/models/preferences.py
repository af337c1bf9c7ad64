"""UserPreferences model for SQLModel."""
from sqlmodel import SQLModel, Field
from sqlalchemy import Column, Integer, ForeignKey, Text
from datetime import datetime

from taskflow.models.enums import Theme
from taskflow.utils.timeutils import utcnow


class UserPreferences(SQLModel, table=True):
    """Per-user timer and display settings. Exactly one row per user."""

    __tablename__ = "user_preferences"

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(
        sa_column=Column(
            Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True, index=True
        )
    )
    work_duration: int = Field(default=25)
    short_break_duration: int = Field(default=5)
    long_break_duration: int = Field(default=15)
    pomodoros_until_long_break: int = Field(default=4)
    theme: Theme = Field(default=Theme.SYSTEM)
    color_scheme: str = Field(default="blue", sa_column=Column(Text, nullable=False))
    minimalist_mode: bool = Field(default=False)
    notifications_enabled: bool = Field(default=True)
    sound_enabled: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
