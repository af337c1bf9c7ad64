"""
RPC Procedures

Registers every public operation on an RPCServer. Handlers receive the
request's database session and the validated input model.
"""

from sqlmodel import Session

from taskflow.rpc.server import MUTATION, QUERY, RPCProcedure, RPCServer
from taskflow.schemas.common import TaskIdInput, UserIdInput
from taskflow.schemas.pomodoro import (
    CompletePomodoroInput,
    GetPomodoroHistoryInput,
    PomodoroSessionResponse,
    StartPomodoroInput,
)
from taskflow.schemas.preferences import UpdateUserPreferencesInput, UserPreferencesResponse
from taskflow.schemas.task import CreateTaskInput, GetTasksInput, TaskResponse, UpdateTaskInput
from taskflow.schemas.user import CreateUserInput, LoginInput, UserResponse
from taskflow.services.pomodoro_service import PomodoroService
from taskflow.services.preferences_service import PreferencesService
from taskflow.services.task_service import TaskService
from taskflow.services.user_service import UserService
from taskflow.utils.timeutils import utcnow


def healthcheck(session: Session, data: None):
    return {"status": "ok", "timestamp": utcnow().isoformat()}


def register_user_procedures(rpc_server: RPCServer):
    """Register account procedures"""
    rpc_server.register_procedure(RPCProcedure(
        name="createUser",
        description="Register a user with default preferences",
        kind=MUTATION,
        input_model=CreateUserInput,
        output_model=UserResponse,
        handler=lambda session, data: UserService(session).create_user(data),
    ))
    rpc_server.register_procedure(RPCProcedure(
        name="loginUser",
        description="Check credentials and return the user",
        kind=MUTATION,
        input_model=LoginInput,
        output_model=UserResponse,
        handler=lambda session, data: UserService(session).login_user(data),
    ))
    rpc_server.register_procedure(RPCProcedure(
        name="deleteUser",
        description="Delete a user with all owned tasks, sessions and preferences",
        kind=MUTATION,
        input_model=UserIdInput,
        handler=lambda session, data: UserService(session).delete_user(data.user_id),
    ))


def register_task_procedures(rpc_server: RPCServer):
    """Register task procedures"""
    rpc_server.register_procedure(RPCProcedure(
        name="createTask",
        description="Create a task, optionally as a subtask",
        kind=MUTATION,
        input_model=CreateTaskInput,
        output_model=TaskResponse,
        handler=lambda session, data: TaskService(session).create_task(data),
    ))
    rpc_server.register_procedure(RPCProcedure(
        name="getTasks",
        description="List a user's tasks filtered by status, priority or parent",
        kind=QUERY,
        input_model=GetTasksInput,
        output_model=TaskResponse,
        handler=lambda session, data: TaskService(session).get_tasks(data),
    ))
    rpc_server.register_procedure(RPCProcedure(
        name="updateTask",
        description="Partially update a task",
        kind=MUTATION,
        input_model=UpdateTaskInput,
        output_model=TaskResponse,
        handler=lambda session, data: TaskService(session).update_task(data),
    ))
    rpc_server.register_procedure(RPCProcedure(
        name="deleteTask",
        description="Delete a task; subtasks become root tasks",
        kind=MUTATION,
        input_model=TaskIdInput,
        handler=lambda session, data: TaskService(session).delete_task(data.task_id),
    ))


def register_pomodoro_procedures(rpc_server: RPCServer):
    """Register pomodoro procedures"""
    rpc_server.register_procedure(RPCProcedure(
        name="startPomodoro",
        description="Start a work or break session",
        kind=MUTATION,
        input_model=StartPomodoroInput,
        output_model=PomodoroSessionResponse,
        handler=lambda session, data: PomodoroService(session).start_pomodoro(data),
    ))
    rpc_server.register_procedure(RPCProcedure(
        name="completePomodoro",
        description="Complete a started session",
        kind=MUTATION,
        input_model=CompletePomodoroInput,
        output_model=PomodoroSessionResponse,
        handler=lambda session, data: PomodoroService(session).complete_pomodoro(data),
    ))
    rpc_server.register_procedure(RPCProcedure(
        name="getPomodoroHistory",
        description="List a user's sessions by task and date range",
        kind=QUERY,
        input_model=GetPomodoroHistoryInput,
        output_model=PomodoroSessionResponse,
        handler=lambda session, data: PomodoroService(session).get_history(data),
    ))


def register_preferences_procedures(rpc_server: RPCServer):
    """Register preferences procedures"""
    rpc_server.register_procedure(RPCProcedure(
        name="getUserPreferences",
        description="Read a user's preferences",
        kind=QUERY,
        input_model=UserIdInput,
        output_model=UserPreferencesResponse,
        handler=lambda session, data: PreferencesService(session).get_preferences(data.user_id),
    ))
    rpc_server.register_procedure(RPCProcedure(
        name="updateUserPreferences",
        description="Partially update a user's preferences",
        kind=MUTATION,
        input_model=UpdateUserPreferencesInput,
        output_model=UserPreferencesResponse,
        handler=lambda session, data: PreferencesService(session).update_preferences(data),
    ))


def register_procedures(rpc_server: RPCServer) -> RPCServer:
    """Register the full procedure set on ``rpc_server``."""
    rpc_server.register_procedure(RPCProcedure(
        name="healthcheck",
        description="Liveness check",
        kind=QUERY,
        handler=healthcheck,
    ))
    register_user_procedures(rpc_server)
    register_task_procedures(rpc_server)
    register_pomodoro_procedures(rpc_server)
    register_preferences_procedures(rpc_server)
    return rpc_server
