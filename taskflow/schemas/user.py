"""User schemas: registration, login and the public user view."""
from pydantic import BaseModel, EmailStr, Field, field_validator
from datetime import datetime

from taskflow.utils.security import MAX_PASSWORD_BYTES


class CreateUserInput(BaseModel):
    """Registration request body."""
    email: EmailStr
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
        return value


class LoginInput(BaseModel):
    """Login request body."""
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserResponse(BaseModel):
    """User view returned to callers. The password hash is never included."""
    id: int
    email: str
    username: str
    is_premium: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
