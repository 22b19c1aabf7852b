from __future__ import annotations

from uuid import UUID, uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from tasker.db.base import Base
from tasker.db.deps import get_db
from tasker.db.models.task import Task
from tasker.db.models.task_field import TaskField
from tasker.llm.records import FieldType, GeneratedTask, InputFieldDefinition, Priority, TaskPlan
from tasker.main import app
from tasker.services.persistence import SqlAlchemyTaskSink


@pytest.fixture()
def client():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    Base.metadata.create_all(bind=engine)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client, TestingSessionLocal
    app.dependency_overrides.clear()


def _seed(SessionLocal, goal: str = "Plan a birthday party"):
    plan = TaskPlan(
        project_title="Birthday Party",
        tasks=(
            GeneratedTask(
                title="Book venue",
                priority=Priority.HIGH,
                fields=(InputFieldDefinition(name="deposit", label="Deposit", type=FieldType.CURRENCY),),
            ),
            GeneratedTask(title="Buy cake", estimated_minutes=15),
        ),
    )
    with SessionLocal() as db:
        return SqlAlchemyTaskSink(db).save_plan(goal, {"Guests?": "20"}, plan)


def test_list_projects(client) -> None:
    test_client, SessionLocal = client
    project_id = _seed(SessionLocal)

    response = test_client.get("/projects")

    assert response.status_code == 200
    projects = response.json()
    assert [item["id"] for item in projects] == [str(project_id)]
    assert projects[0]["task_count"] == 2
    assert projects[0]["category"] == "event"


def test_get_project_detail(client) -> None:
    test_client, SessionLocal = client
    project_id = _seed(SessionLocal)

    response = test_client.get(f"/projects/{project_id}")

    assert response.status_code == 200
    body = response.json()
    assert body["answers"] == {"Guests?": "20"}
    assert [task["title"] for task in body["tasks"]] == ["Book venue", "Buy cake"]
    assert body["tasks"][0]["fields"] == [
        {
            "id": body["tasks"][0]["fields"][0]["id"],
            "name": "deposit",
            "label": "Deposit",
            "type": "currency",
            "required": False,
            "order": 0,
            "value": None,
        }
    ]
    assert body["tasks"][1]["estimated_minutes"] == 15


def test_get_unknown_project_returns_404(client) -> None:
    test_client, _ = client

    response = test_client.get(f"/projects/{uuid4()}")

    assert response.status_code == 404
    assert response.json()["detail"] == "Project not found"


def test_task_status_toggles_between_todo_and_done(client) -> None:
    test_client, SessionLocal = client
    project_id = _seed(SessionLocal)
    task_id = test_client.get(f"/projects/{project_id}").json()["tasks"][0]["id"]

    response = test_client.patch(f"/projects/{project_id}/tasks/{task_id}", json={"status": "done"})
    assert response.status_code == 200
    assert response.json()["status"] == "done"

    response = test_client.patch(f"/projects/{project_id}/tasks/{task_id}", json={"status": "todo"})
    assert response.json()["status"] == "todo"
    with SessionLocal() as db:
        assert db.get(Task, UUID(task_id)).status == "todo"


def test_task_status_rejects_unknown_value(client) -> None:
    test_client, SessionLocal = client
    project_id = _seed(SessionLocal)
    task_id = test_client.get(f"/projects/{project_id}").json()["tasks"][0]["id"]

    response = test_client.patch(f"/projects/{project_id}/tasks/{task_id}", json={"status": "archived"})

    assert response.status_code == 422


def test_task_from_another_project_returns_404(client) -> None:
    test_client, SessionLocal = client
    project_id = _seed(SessionLocal)
    other_id = _seed(SessionLocal, goal="Move to a new apartment")
    task_id = test_client.get(f"/projects/{other_id}").json()["tasks"][0]["id"]

    response = test_client.patch(f"/projects/{project_id}/tasks/{task_id}", json={"status": "done"})

    assert response.status_code == 404
    assert response.json()["detail"] == "Task not found"


def test_field_value_is_saved_and_cleared(client) -> None:
    test_client, SessionLocal = client
    project_id = _seed(SessionLocal)
    task = test_client.get(f"/projects/{project_id}").json()["tasks"][0]
    url = f"/projects/{project_id}/tasks/{task['id']}/fields/{task['fields'][0]['id']}"

    response = test_client.put(url, json={"value": "  250.00 "})
    assert response.status_code == 200
    assert response.json()["value"] == "250.00"
    detail = test_client.get(f"/projects/{project_id}").json()
    assert detail["tasks"][0]["fields"][0]["value"] == "250.00"

    response = test_client.put(url, json={"value": "   "})
    assert response.json()["value"] is None


def test_unknown_field_returns_404(client) -> None:
    test_client, SessionLocal = client
    project_id = _seed(SessionLocal)
    task_id = test_client.get(f"/projects/{project_id}").json()["tasks"][1]["id"]

    response = test_client.put(f"/projects/{project_id}/tasks/{task_id}/fields/{uuid4()}", json={"value": "x"})

    assert response.status_code == 404
    assert response.json()["detail"] == "Field not found"


def test_delete_task(client) -> None:
    test_client, SessionLocal = client
    project_id = _seed(SessionLocal)
    task_id = test_client.get(f"/projects/{project_id}").json()["tasks"][0]["id"]

    response = test_client.delete(f"/projects/{project_id}/tasks/{task_id}")

    assert response.status_code == 204
    titles = [task["title"] for task in test_client.get(f"/projects/{project_id}").json()["tasks"]]
    assert titles == ["Buy cake"]
    with SessionLocal() as db:
        assert db.query(TaskField).count() == 0


def test_delete_project_removes_tasks_and_fields(client) -> None:
    test_client, SessionLocal = client
    project_id = _seed(SessionLocal)

    response = test_client.delete(f"/projects/{project_id}")

    assert response.status_code == 204
    assert test_client.get(f"/projects/{project_id}").status_code == 404
    with SessionLocal() as db:
        assert db.query(Task).count() == 0
        assert db.query(TaskField).count() == 0

    assert test_client.delete(f"/projects/{project_id}").status_code == 404
