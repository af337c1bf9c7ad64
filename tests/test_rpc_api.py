# tests/test_rpc_api.py

from __future__ import annotations

import json

import pytest

from taskflow.middleware.cors import allowed_origins
from taskflow.rpc.server import get_rpc_server

ALL_PROCEDURES = {
    "healthcheck",
    "createUser",
    "loginUser",
    "deleteUser",
    "createTask",
    "getTasks",
    "updateTask",
    "deleteTask",
    "startPomodoro",
    "completePomodoro",
    "getPomodoroHistory",
    "getUserPreferences",
    "updateUserPreferences",
}


def call(client, procedure: str, payload=None, expected: int = 200):
    response = client.post(f"/rpc/{procedure}", json=payload)
    assert response.status_code == expected, response.text
    return response.json()


@pytest.fixture()
def user(client):
    body = call(client, "createUser", {"email": "alice@x.com", "username": "alice", "password": "secret123"})
    return body["data"]


def test_every_procedure_is_registered():
    assert set(get_rpc_server().list_procedures()) == ALL_PROCEDURES


def test_healthcheck(client):
    body = client.get("/rpc/healthcheck").json()

    assert body["success"] is True
    assert body["data"]["status"] == "ok"
    assert body["data"]["timestamp"]


def test_health_endpoint(client):
    assert client.get("/health").json()["status"] == "ok"


def test_unknown_procedure(client):
    body = call(client, "launchRocket", {}, expected=404)

    assert body["success"] is False
    assert body["error"]["code"] == "NOT_FOUND"


def test_mutation_over_get_is_rejected(client):
    response = client.get("/rpc/createUser")

    assert response.status_code == 405
    assert response.json()["error"]["code"] == "METHOD_NOT_ALLOWED"


def test_validation_errors_carry_field_details(client):
    body = call(client, "createUser", {"email": "nope", "username": "al", "password": "1"}, expected=400)

    assert body["error"]["code"] == "VALIDATION_ERROR"
    fields = {e["field"] for e in body["error"]["details"]["errors"]}
    assert fields == {"email", "username", "password"}


def test_user_view_hides_password_hash(client, user):
    assert "password_hash" not in user
    assert "password" not in user
    assert user["username"] == "alice"
    assert user["is_premium"] is False


def test_duplicate_registration_is_conflict(client, user):
    body = call(
        client, "createUser", {"email": "alice@x.com", "username": "other", "password": "secret123"}, expected=409
    )
    assert body["error"]["code"] == "CONFLICT"


def test_login(client, user):
    ok = call(client, "loginUser", {"email": "alice@x.com", "password": "secret123"})
    bad = call(client, "loginUser", {"email": "alice@x.com", "password": "wrong!"}, expected=401)

    assert ok["data"]["id"] == user["id"]
    assert bad["error"]["code"] == "UNAUTHORIZED"


def test_write_report_scenario(client, user):
    task = call(client, "createTask", {"user_id": user["id"], "title": "Write report", "estimated_pomodoros": 4})["data"]
    pomodoro = call(
        client,
        "startPomodoro",
        {"user_id": user["id"], "task_id": task["id"], "type": "work", "duration_minutes": 25},
    )["data"]

    done = call(client, "completePomodoro", {"session_id": pomodoro["id"]})["data"]
    again = call(client, "completePomodoro", {"session_id": pomodoro["id"]}, expected=409)

    tasks = call(client, "getTasks", {"user_id": user["id"]})["data"]
    assert done["completed"] is True
    assert done["completed_at"] is not None
    assert again["error"]["code"] == "CONFLICT"
    assert tasks[0]["completed_pomodoros"] == 1


def test_get_tasks_via_query_string(client, user):
    call(client, "createTask", {"user_id": user["id"], "title": "a"})
    call(client, "createTask", {"user_id": user["id"], "title": "b", "priority": "urgent"})

    response = client.get(
        "/rpc/getTasks", params={"input": json.dumps({"user_id": user["id"], "priority": "urgent"})}
    )

    assert response.status_code == 200
    assert [t["title"] for t in response.json()["data"]] == ["b"]


def test_query_with_bad_json(client):
    response = client.get("/rpc/getTasks", params={"input": "{not json"})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


def test_update_and_delete_task(client, user):
    parent = call(client, "createTask", {"user_id": user["id"], "title": "parent", "description": "keep"})["data"]
    child = call(client, "createTask", {"user_id": user["id"], "title": "child", "parent_task_id": parent["id"]})["data"]

    updated = call(client, "updateTask", {"id": parent["id"], "status": "completed"})["data"]
    assert updated["status"] == "completed"
    assert updated["description"] == "keep"
    assert updated["title"] == "parent"

    illegal = call(client, "updateTask", {"id": parent["id"], "status": "pending"}, expected=409)
    assert illegal["error"]["code"] == "CONFLICT"

    assert call(client, "deleteTask", {"taskId": parent["id"]})["data"] is None
    remaining = call(client, "getTasks", {"user_id": user["id"]})["data"]
    assert [(t["id"], t["parent_task_id"]) for t in remaining] == [(child["id"], None)]

    missing = call(client, "deleteTask", {"taskId": parent["id"]}, expected=404)
    assert missing["error"]["code"] == "NOT_FOUND"


def test_preferences_roundtrip(client, user):
    prefs = call(client, "getUserPreferences", {"userId": user["id"]})["data"]
    assert prefs["theme"] == "system"

    updated = call(client, "updateUserPreferences", {"user_id": user["id"], "minimalist_mode": True})["data"]
    assert updated["minimalist_mode"] is True
    assert updated["work_duration"] == 25

    rejected = call(client, "updateUserPreferences", {"user_id": user["id"], "work_duration": 0}, expected=400)
    assert rejected["error"]["code"] == "VALIDATION_ERROR"


def test_history_over_rpc(client, user):
    call(client, "startPomodoro", {"user_id": user["id"], "type": "short_break", "duration_minutes": 5})

    history = call(client, "getPomodoroHistory", {"user_id": user["id"]})["data"]
    bad_range = call(
        client,
        "getPomodoroHistory",
        {"user_id": user["id"], "from_date": "2026-02-01T00:00:00Z", "to_date": "2026-01-01T00:00:00Z"},
        expected=400,
    )

    assert [h["type"] for h in history] == ["short_break"]
    assert bad_range["error"]["code"] == "VALIDATION_ERROR"


def test_delete_user(client, user):
    call(client, "createTask", {"user_id": user["id"], "title": "a"})

    call(client, "deleteUser", {"userId": user["id"]})

    assert call(client, "getTasks", {"user_id": user["id"]})["data"] == []
    assert call(client, "getUserPreferences", {"userId": user["id"]}, expected=404)["success"] is False


def test_procedure_schemas_listed(client):
    schemas = client.get("/rpc").json()

    assert set(schemas) == ALL_PROCEDURES
    assert schemas["getTasks"]["kind"] == "query"
    assert schemas["healthcheck"]["input"] is None


def test_cors_origin_list_parsing():
    assert allowed_origins(" https://a.app, https://b.app,,https://a.app ") == ["https://a.app", "https://b.app"]


def test_cors_preflight_from_dev_origin(client):
    response = client.options(
        "/rpc/createUser",
        headers={"Origin": "http://localhost:5173", "Access-Control-Request-Method": "POST"},
    )

    assert response.headers["access-control-allow-origin"] == "http://localhost:5173"


def test_oversized_integer_is_a_validation_error(client, user):
    body = call(
        client, "createTask", {"user_id": user["id"], "title": "big", "estimated_pomodoros": 2**63}, expected=400
    )

    assert body["error"]["code"] == "VALIDATION_ERROR"
    assert body["error"]["details"]["errors"][0]["field"] == "estimated_pomodoros"
