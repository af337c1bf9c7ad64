"""Task service: creation, listing, partial updates and deletion of tasks."""
from sqlmodel import Session, select
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from typing import List, Optional, Set
import logging

from taskflow.models import PomodoroSession, Task, TaskStatus
from taskflow.models.enums import STATUS_TRANSITIONS
from taskflow.schemas.task import CreateTaskInput, GetTasksInput, UpdateTaskInput
from taskflow.services.errors import ConflictError, IntegrityViolationError, NotFoundError
from taskflow.services.user_service import UserService
from taskflow.utils.timeutils import utcnow

logger = logging.getLogger(__name__)


class TaskService:
    """Service class for task CRUD operations with priorities, statuses, recurrence and subtasks."""

    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, task_id: int) -> Optional[Task]:
        return self.session.get(Task, task_id)

    def get_owned(self, task_id: int, user_id: int) -> Task:
        """Get a task by id, ensuring user ownership.

        A task owned by someone else is reported exactly like a missing one.
        """
        task = self.get_by_id(task_id)
        if not task or task.user_id != user_id:
            if task:
                logger.warning(f"User {user_id} referenced task {task_id} owned by user {task.user_id}")
            raise NotFoundError(f"Task {task_id} not found", {"task_id": task_id})
        return task

    def create_task(self, data: CreateTaskInput) -> Task:
        """Create a new task for an existing user."""
        UserService(self.session).require(data.user_id)
        if data.parent_task_id is not None:
            self.get_owned(data.parent_task_id, data.user_id)

        now = utcnow()
        task = Task(
            user_id=data.user_id,
            title=data.title,
            description=data.description,
            priority=data.priority,
            due_date=data.due_date,
            estimated_pomodoros=data.estimated_pomodoros,
            is_recurring=data.is_recurring,
            recurrence_pattern=data.recurrence_pattern,
            parent_task_id=data.parent_task_id,
            created_at=now,
            updated_at=now,
        )

        self.session.add(task)
        self._commit_referencing(data.parent_task_id)
        self.session.refresh(task)
        logger.info(f"Created task {task.id} for user {task.user_id}")
        return task

    def get_tasks(self, data: GetTasksInput) -> List[Task]:
        """Get a user's tasks matching every supplied filter, in creation order."""
        statement = select(Task).where(Task.user_id == data.user_id)

        if data.status is not None:
            statement = statement.where(Task.status == data.status)
        if data.priority is not None:
            statement = statement.where(Task.priority == data.priority)
        if data.filters_parent:
            if data.parent_task_id is None:
                statement = statement.where(Task.parent_task_id.is_(None))
            else:
                statement = statement.where(Task.parent_task_id == data.parent_task_id)

        statement = statement.order_by(Task.created_at.asc(), Task.id.asc())
        return list(self.session.exec(statement).all())

    def update_task(self, data: UpdateTaskInput) -> Task:
        """Apply a partial update. Fields the caller did not send keep their value.

        A status change is written with a conditional UPDATE on the status
        this request validated against, so a concurrent change that landed
        first turns this one into a Conflict instead of being overwritten.
        """
        task = self.get_by_id(data.id)
        if not task:
            raise NotFoundError(f"Task {data.id} not found", {"task_id": data.id})

        changes = data.changes()
        now = utcnow()

        if "parent_task_id" in changes and changes["parent_task_id"] is not None:
            self.get_owned(changes["parent_task_id"], task.user_id)
            self._check_no_cycle(task.id, changes["parent_task_id"])

        if "status" in changes and changes["status"] != task.status:
            current = TaskStatus(task.status)
            self._check_transition(task, changes["status"])
            result = self.session.execute(
                update(Task)
                .where(Task.id == task.id)
                .where(Task.status == current)
                .values(status=changes["status"], updated_at=now)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                self.session.rollback()
                raise ConflictError(
                    f"Task {task.id} changed status concurrently",
                    {"task_id": task.id, "expected": current.value},
                )

        for field, value in changes.items():
            setattr(task, field, value)

        # Keep "pattern set implies recurring" true whatever combination was sent
        if task.recurrence_pattern is not None and "recurrence_pattern" in changes:
            task.is_recurring = True
        elif not task.is_recurring:
            task.recurrence_pattern = None

        task.updated_at = now
        self.session.add(task)
        self._commit_referencing(task.id)
        self.session.refresh(task)
        return task

    def delete_task(self, task_id: int) -> None:
        """Delete a task.

        Direct subtasks become root tasks and pomodoro sessions keep existing
        with their task reference cleared.
        """
        task = self.get_by_id(task_id)
        if not task:
            raise NotFoundError(f"Task {task_id} not found", {"task_id": task_id})

        self.session.execute(
            update(Task).where(Task.parent_task_id == task_id).values(parent_task_id=None)
        )
        self.session.execute(
            update(PomodoroSession).where(PomodoroSession.task_id == task_id).values(task_id=None)
        )
        self.session.delete(task)
        self.session.commit()
        logger.info(f"Deleted task {task_id}")

    def ancestor_ids(self, task_id: int) -> Set[int]:
        """Ids of every task above ``task_id`` in its tree."""
        seen: Set[int] = set()
        current = self.get_by_id(task_id)
        while current is not None and current.parent_task_id is not None:
            if current.parent_task_id in seen:
                raise IntegrityViolationError(
                    "Task tree contains a cycle", {"task_id": task_id}
                )
            seen.add(current.parent_task_id)
            current = self.get_by_id(current.parent_task_id)
        return seen

    def _commit_referencing(self, task_id: Optional[int]) -> None:
        """Commit, reporting a foreign key the database rejected as a missing row."""
        try:
            self.session.commit()
        except IntegrityError:
            # The referenced user or parent was deleted after it was checked
            self.session.rollback()
            raise NotFoundError("A referenced user or task no longer exists", {"task_id": task_id})

    def _check_no_cycle(self, task_id: int, new_parent_id: int) -> None:
        if new_parent_id == task_id or task_id in self.ancestor_ids(new_parent_id):
            raise ConflictError(
                "A task cannot be its own ancestor",
                {"task_id": task_id, "parent_task_id": new_parent_id},
            )

    @staticmethod
    def _check_transition(task: Task, new_status: TaskStatus) -> None:
        current = TaskStatus(task.status)
        if new_status == current:
            return
        if new_status not in STATUS_TRANSITIONS[current]:
            raise ConflictError(
                f"Cannot move task from {current.value} to {new_status.value}",
                {"task_id": task.id, "from": current.value, "to": new_status.value},
            )
