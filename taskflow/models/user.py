"""User model for SQLModel."""
from sqlmodel import SQLModel, Field
from datetime import datetime

from taskflow.utils.timeutils import utcnow


class User(SQLModel, table=True):
    """User entity for authentication and ownership of tasks, sessions and preferences."""

    __tablename__ = "users"

    id: int | None = Field(default=None, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    username: str = Field(unique=True, index=True, max_length=50)
    password_hash: str = Field(max_length=255)  # bcrypt hash, never the plaintext
    is_premium: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
