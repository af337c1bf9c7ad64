"""Pomodoro service: starting, completing and listing timer sessions."""
from sqlmodel import Session, select
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from typing import List
import logging

from taskflow.models import PomodoroSession, PomodoroType, Task
from taskflow.schemas.pomodoro import CompletePomodoroInput, GetPomodoroHistoryInput, StartPomodoroInput
from taskflow.services.errors import ConflictError, NotFoundError
from taskflow.services.task_service import TaskService
from taskflow.services.user_service import UserService
from taskflow.utils.timeutils import utcnow

logger = logging.getLogger(__name__)


class PomodoroService:
    """Service class for pomodoro sessions.

    Durations are descriptive only: nothing here waits for a timer. A session
    is created in the started state and may be completed exactly once.
    """

    def __init__(self, session: Session):
        self.session = session

    def start_pomodoro(self, data: StartPomodoroInput) -> PomodoroSession:
        UserService(self.session).require(data.user_id)
        if data.task_id is not None:
            TaskService(self.session).get_owned(data.task_id, data.user_id)

        now = utcnow()
        pomodoro = PomodoroSession(
            user_id=data.user_id,
            task_id=data.task_id,
            type=data.type,
            duration_minutes=data.duration_minutes,
            completed=False,
            started_at=now,
            completed_at=None,
            created_at=now,
        )
        self.session.add(pomodoro)
        try:
            self.session.commit()
        except IntegrityError:
            # The user or task was deleted after it was checked
            self.session.rollback()
            raise NotFoundError("A referenced user or task no longer exists", {"task_id": data.task_id})
        self.session.refresh(pomodoro)
        logger.info(f"Started {pomodoro.type.value} session {pomodoro.id} for user {pomodoro.user_id}")
        return pomodoro

    def complete_pomodoro(self, data: CompletePomodoroInput) -> PomodoroSession:
        """Mark a session completed and credit its task for finished work sessions.

        The completed flag is flipped with a conditional UPDATE, so when two
        requests race on the same session only one of them changes the row.
        """
        pomodoro = self.session.get(PomodoroSession, data.session_id)
        if not pomodoro:
            raise NotFoundError(f"Pomodoro session {data.session_id} not found", {"session_id": data.session_id})
        if pomodoro.completed:
            raise ConflictError(f"Pomodoro session {data.session_id} is already completed", {"session_id": data.session_id})

        now = utcnow()
        result = self.session.execute(
            update(PomodoroSession)
            .where(PomodoroSession.id == data.session_id)
            .where(PomodoroSession.completed == False)  # noqa: E712
            .values(completed=True, completed_at=now)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            self.session.rollback()
            raise ConflictError(f"Pomodoro session {data.session_id} is already completed", {"session_id": data.session_id})

        if pomodoro.task_id is not None and pomodoro.type == PomodoroType.WORK:
            self.session.execute(
                update(Task)
                .where(Task.id == pomodoro.task_id)
                .values(completed_pomodoros=Task.completed_pomodoros + 1, updated_at=now)
                .execution_options(synchronize_session=False)
            )

        self.session.commit()
        self.session.refresh(pomodoro)
        logger.info(f"Completed session {pomodoro.id}")
        return pomodoro

    def get_history(self, data: GetPomodoroHistoryInput) -> List[PomodoroSession]:
        """Sessions of a user, optionally narrowed to a task and a started_at window."""
        statement = select(PomodoroSession).where(PomodoroSession.user_id == data.user_id)

        if data.task_id is not None:
            statement = statement.where(PomodoroSession.task_id == data.task_id)
        if data.from_date is not None:
            statement = statement.where(PomodoroSession.started_at >= data.from_date)
        if data.to_date is not None:
            statement = statement.where(PomodoroSession.started_at <= data.to_date)

        statement = statement.order_by(PomodoroSession.started_at.asc(), PomodoroSession.id.asc())
        return list(self.session.exec(statement).all())
