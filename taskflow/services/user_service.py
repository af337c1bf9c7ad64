"""User service: registration, login and account removal."""
from sqlmodel import Session, select
from sqlalchemy import delete, update
from sqlalchemy.exc import IntegrityError
from typing import Optional
import logging

from taskflow.models import PomodoroSession, Task, User, UserPreferences
from taskflow.schemas.user import CreateUserInput, LoginInput
from taskflow.services.errors import ConflictError, NotFoundError, UnauthorizedError
from taskflow.utils.security import hash_password, verify_password

logger = logging.getLogger(__name__)


class UserService:
    """Service class for user accounts."""

    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.session.get(User, user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        statement = select(User).where(User.email == email)
        return self.session.exec(statement).first()

    def require(self, user_id: int) -> User:
        """Return the user or raise NotFoundError."""
        user = self.get_by_id(user_id)
        if not user:
            raise NotFoundError(f"User {user_id} not found", {"user_id": user_id})
        return user

    def create_user(self, data: CreateUserInput) -> User:
        """Register a user together with a default preferences row."""
        if self.get_by_email(data.email):
            raise ConflictError("User with this email already exists", {"field": "email"})

        statement = select(User).where(User.username == data.username)
        if self.session.exec(statement).first():
            raise ConflictError("User with this username already exists", {"field": "username"})

        user = User(
            email=data.email,
            username=data.username,
            password_hash=hash_password(data.password),
        )
        try:
            self.session.add(user)
            self.session.flush()
            self.session.add(UserPreferences(user_id=user.id))
            self.session.commit()
        except IntegrityError:
            # Lost a race against a concurrent registration
            self.session.rollback()
            raise ConflictError("User with this email or username already exists")

        self.session.refresh(user)
        logger.info(f"Created user {user.id} ({user.username})")
        return user

    def login_user(self, data: LoginInput) -> User:
        """Check credentials. Unknown email and wrong password fail the same way."""
        user = self.get_by_email(data.email)
        if not user or not verify_password(data.password, user.password_hash):
            logger.info("Failed login attempt")
            raise UnauthorizedError("Invalid email or password")
        return user

    def delete_user(self, user_id: int) -> None:
        """Delete a user and everything the user owns."""
        self.require(user_id)

        self.session.execute(delete(PomodoroSession).where(PomodoroSession.user_id == user_id))
        # Detach the tree first so rows can go in any order
        self.session.execute(
            update(Task).where(Task.user_id == user_id).values(parent_task_id=None)
        )
        self.session.execute(delete(Task).where(Task.user_id == user_id))
        self.session.execute(delete(UserPreferences).where(UserPreferences.user_id == user_id))
        self.session.execute(delete(User).where(User.id == user_id))
        self.session.commit()
        logger.info(f"Deleted user {user_id} and owned data")
