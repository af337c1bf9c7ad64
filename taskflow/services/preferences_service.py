"""Preferences service: read and patch the per-user settings row."""
from sqlmodel import Session, select
import logging

from taskflow.models import UserPreferences
from taskflow.schemas.preferences import UpdateUserPreferencesInput
from taskflow.services.errors import IntegrityViolationError
from taskflow.services.user_service import UserService
from taskflow.utils.timeutils import utcnow

logger = logging.getLogger(__name__)


class PreferencesService:
    """Service class for user preferences.

    The row is created together with the user, so a user without one is a
    broken invariant rather than a normal "not found".
    """

    def __init__(self, session: Session):
        self.session = session

    def get_preferences(self, user_id: int) -> UserPreferences:
        UserService(self.session).require(user_id)

        statement = select(UserPreferences).where(UserPreferences.user_id == user_id)
        preferences = self.session.exec(statement).first()
        if not preferences:
            logger.error(f"User {user_id} exists without a preferences row")
            raise IntegrityViolationError(
                f"Preferences for user {user_id} are missing", {"user_id": user_id}
            )
        return preferences

    def update_preferences(self, data: UpdateUserPreferencesInput) -> UserPreferences:
        preferences = self.get_preferences(data.user_id)

        for field, value in data.changes().items():
            setattr(preferences, field, value)

        now = utcnow()
        preferences.updated_at = now
        user = UserService(self.session).require(data.user_id)
        user.updated_at = now

        self.session.add(preferences)
        self.session.add(user)
        self.session.commit()
        self.session.refresh(preferences)
        return preferences
