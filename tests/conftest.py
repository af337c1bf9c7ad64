# tests/conftest.py

from __future__ import annotations

import os

# Keep the module level engine away from the working directory
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session

from taskflow.db.config import build_engine, get_session
from taskflow.db.init import init_db
from taskflow.main import app
from taskflow.models import User
from taskflow.schemas.task import CreateTaskInput
from taskflow.schemas.user import CreateUserInput
from taskflow.services.task_service import TaskService
from taskflow.services.user_service import UserService


@pytest.fixture()
def engine():
    """
    Fresh in-memory SQLite database per test.

    StaticPool keeps one connection so every session sees the same memory DB.
    """
    engine = build_engine("sqlite://", poolclass=StaticPool)
    init_db(engine, reset=False)
    yield engine
    engine.dispose()


@pytest.fixture()
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture()
def alice(session) -> User:
    return UserService(session).create_user(
        CreateUserInput(email="alice@x.com", username="alice", password="secret123")
    )


@pytest.fixture()
def bob(session) -> User:
    return UserService(session).create_user(
        CreateUserInput(email="bob@example.org", username="bob", password="hunter22")
    )


@pytest.fixture()
def make_task(session):
    """Factory creating tasks through the service."""

    def _make(user_id: int, title: str = "Task", **fields):
        return TaskService(session).create_task(CreateTaskInput(user_id=user_id, title=title, **fields))

    return _make


@pytest.fixture()
def client(engine):
    """TestClient bound to the per-test database."""

    def override_get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def alice_on_file_db(tmp_path):
    """A file backed database so two sessions use separate connections."""
    engine = build_engine(f"sqlite:///{tmp_path / 'race.db'}")
    init_db(engine, reset=False)
    with Session(engine) as session:
        user = UserService(session).create_user(
            CreateUserInput(email="alice@x.com", username="alice", password="secret123")
        )
        task = TaskService(session).create_task(CreateTaskInput(user_id=user.id, title="race"))
        ids = (user.id, task.id)
    yield (engine, *ids)
    engine.dispose()
