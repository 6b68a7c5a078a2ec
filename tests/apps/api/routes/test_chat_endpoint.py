"""Tests for the /api/chat endpoint."""
# pylint: disable=missing-function-docstring,redefined-outer-name

from http import HTTPStatus

import pytest
from conftest import FakeAnalytics, FakeTaskDirectory, FixedChoice
from fastapi.testclient import TestClient

from dobot_engine.apps.api.app import create_app
from dobot_engine.core.models import TaskSummary, UserStats
from dobot_engine.services import build_default_services
from dobot_engine.services import response_synthesizer as rs


@pytest.fixture
def directory() -> FakeTaskDirectory:
    return FakeTaskDirectory()


@pytest.fixture
def client(directory: FakeTaskDirectory) -> TestClient:
    """Create a test client around fake collaborators."""
    summary = TaskSummary(total=4, by_status={"Created": 2, "Completed": 2})
    stats = UserStats(total_users=1, tasks_per_user={"Ana": 2}, most_busy_user="Ana")
    services = build_default_services(
        task_directory_port=directory,
        analytics_port=FakeAnalytics(summary=summary, stats=stats),
        choice_source=FixedChoice(),
    )
    return TestClient(create_app(services))


def test_create_task_message(client: TestClient, directory: FakeTaskDirectory) -> None:
    resp = client.post("/api/chat", json={"message": 'Crear tarea "Revisar código"', "userId": 1})

    assert resp.status_code == HTTPStatus.OK
    body = resp.json()
    assert "Revisar código" in body["response"]
    assert body["actionTaken"]["type"] == "task_created"
    assert body["actionTaken"]["data"]["title"] == "Revisar código"
    assert "createdAt" in body["actionTaken"]["data"]
    assert len(body["suggestions"]) == 3
    assert "timestamp" in body
    assert [call["title"] for call in directory.created] == ["Revisar código"]


def test_status_message_returns_summary_payload(client: TestClient) -> None:
    resp = client.post("/api/chat", json={"message": "resumen", "context": "tasks"})

    body = resp.json()
    assert "50%" in body["response"]
    assert body["actionTaken"]["data"]["byStatus"] == {"Created": 2, "Completed": 2}


def test_greeting_omits_action(client: TestClient) -> None:
    resp = client.post("/api/chat", json={"message": "Hola"})

    body = resp.json()
    assert body["response"] == rs.GREETINGS[0]
    assert "actionTaken" not in body
    assert body["suggestions"] == list(rs.GENERAL_SUGGESTIONS)


def test_busy_user_payload_is_camel_case(client: TestClient) -> None:
    resp = client.post("/api/chat", json={"message": "¿Quién está más ocupado?"})

    data = resp.json()["actionTaken"]["data"]
    assert data == {"totalUsers": 1, "tasksPerUser": {"Ana": 2}, "mostBusyUser": "Ana"}


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"message": ""},
        {"message": "   "},
        {"message": "hola", "context": "billing"},
    ],
)
def test_invalid_payload_rejected(client: TestClient, payload: dict) -> None:
    resp = client.post("/api/chat", json=payload)

    assert resp.status_code == HTTPStatus.UNPROCESSABLE_ENTITY


def test_collaborator_failure_still_returns_ok() -> None:
    services = build_default_services(
        task_directory_port=FakeTaskDirectory(error=RuntimeError("db offline")),
        analytics_port=FakeAnalytics(),
        choice_source=FixedChoice(),
    )
    client = TestClient(create_app(services))

    resp = client.post("/api/chat", json={"message": 'Crear tarea "Deploy"'})

    assert resp.status_code == HTTPStatus.OK
    assert "db offline" in resp.json()["response"]
    assert "actionTaken" not in resp.json()
