import importlib.util
import sys
from datetime import datetime, timedelta
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from internal.api.routes import create_task_routes
from internal.api.utils import register_exception_handlers
from repositories.paths import tasks_path

from .fakes import USER_ID, FailingDocumentStore, InMemoryDocumentStore, seed_folder, seed_task

# Import cmd.api.main by path to avoid conflict with stdlib cmd
file_path = Path(__file__).resolve().parent.parent / "cmd" / "api" / "main.py"
module_spec = importlib.util.spec_from_file_location("cmd.api.main", file_path)
main_module = importlib.util.module_from_spec(module_spec)
sys.modules["cmd.api.main"] = main_module
module_spec.loader.exec_module(main_module)
create_app = main_module.create_app

HEADERS = {"X-User-Id": USER_ID}
BASE = "/api/v1/task"


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def client(store):
    app = create_app(store)
    return TestClient(app, raise_server_exceptions=False)


def test_missing_user_header_is_401(client):
    response = client.get(f"{BASE}/folders")

    assert response.status_code == 401
    body = response.json()
    assert body["success"] is False
    assert "X-User-Id" in body["message"]


def test_folder_lifecycle(client, store):
    created = client.post(f"{BASE}/folders", json={"title": "Work"}, headers=HEADERS)
    assert created.status_code == 201
    folder_id = created.json()["data"]["id"]

    listed = client.get(f"{BASE}/folders", headers=HEADERS)
    assert listed.status_code == 200
    assert listed.json()["data"][0]["total_tasks"] == 0

    updated = client.put(
        f"{BASE}/folders/{folder_id}", json={"description": "Office"}, headers=HEADERS
    )
    assert updated.status_code == 200
    assert updated.json()["data"]["title"] == "Work"
    assert updated.json()["data"]["description"] == "Office"

    deleted = client.delete(f"{BASE}/folders/{folder_id}", headers=HEADERS)
    assert deleted.status_code == 200
    assert deleted.json()["data"] == {"deleted_documents": 1}

    missing = client.get(f"{BASE}/folders/{folder_id}", headers=HEADERS)
    assert missing.status_code == 404
    assert missing.json()["success"] is False


def test_empty_folder_title_is_400(client, store):
    response = client.post(f"{BASE}/folders", json={"title": "  "}, headers=HEADERS)

    assert response.status_code == 400
    assert response.json() == {
        "success": False,
        "message": "Error creating task folder: Title must not be empty",
        "data": None,
    }
    assert store.writes == 0


def test_task_lifecycle(client, store):
    seed_folder(store, "f1", "Work")

    created = client.post(
        f"{BASE}/folders/f1/tasks",
        json={
            "title": "Write",
            "description": "Report",
            "status": "Pending",
            "priority": "High",
            "start_date": "2025-11-03T09:00:00",
            "end_date": "2025-11-05T17:00:00",
        },
        headers=HEADERS,
    )
    assert created.status_code == 201
    task = created.json()["data"]
    assert task["priority"] == "high"
    assert task["folder_source"] == "Work"

    fetched = client.get(f"{BASE}/folders/f1/tasks/{task['id']}", headers=HEADERS)
    assert fetched.json()["data"]["title"] == "Write"

    updated = client.put(
        f"{BASE}/folders/f1/tasks/{task['id']}", json={"status": "In Progress"}, headers=HEADERS
    )
    assert updated.status_code == 200
    assert updated.json()["data"]["status"] == "in_progress"

    board = client.get(f"{BASE}/folders/f1/tasks", headers=HEADERS)
    assert [t["id"] for t in board.json()["data"]["in_progress"]] == [task["id"]]

    by_day = client.get(f"{BASE}/folders/f1/tasks/date", params={"date": "2025-11-03"}, headers=HEADERS)
    assert [t["id"] for t in by_day.json()["data"]["in_progress"]] == [task["id"]]

    deleted = client.delete(f"{BASE}/folders/f1/tasks/{task['id']}", headers=HEADERS)
    assert deleted.status_code == 200
    again = client.delete(f"{BASE}/folders/f1/tasks/{task['id']}", headers=HEADERS)
    assert again.status_code == 404


def test_invalid_task_input_is_400(client, store):
    seed_folder(store, "f1", "Work")

    bad_status = client.post(
        f"{BASE}/folders/f1/tasks",
        json={"title": "Write", "description": "Report", "status": "archived"},
        headers=HEADERS,
    )
    bad_date = client.post(
        f"{BASE}/folders/f1/tasks",
        json={"title": "Write", "description": "Report", "start_date": "someday"},
        headers=HEADERS,
    )

    assert bad_status.status_code == 400
    assert bad_date.status_code == 400
    assert bad_date.json()["success"] is False
    assert store.writes == 0


def test_task_in_missing_folder_is_404(client):
    response = client.post(
        f"{BASE}/folders/nope/tasks",
        json={"title": "Write", "description": "Report"},
        headers=HEADERS,
    )
    assert response.status_code == 404


def test_cross_folder_views(client, store):
    seed_folder(store, "f1", "Work")
    seed_folder(store, "f2", "Home")
    soon = datetime.now() + timedelta(days=1)
    seed_task(store, "f1", "t1", "A", start_date=datetime(2025, 11, 3, 9), end_date=soon)
    seed_task(store, "f2", "t2", "B", start_date=datetime(2025, 11, 4, 9))

    all_tasks = client.get(f"{BASE}/tasks", headers=HEADERS)
    by_day = client.get(f"{BASE}/tasks/date", params={"date": "2025-11-03"}, headers=HEADERS)
    nearing = client.get(f"{BASE}/tasks/nearing-due", params={"threshold_days": 3}, headers=HEADERS)
    no_date = client.get(f"{BASE}/tasks/date", headers=HEADERS)

    assert sorted(t["id"] for t in all_tasks.json()["data"]) == ["t1", "t2"]
    assert [t["id"] for t in by_day.json()["data"]] == ["t1"]
    assert [t["id"] for t in nearing.json()["data"]] == ["t1"]
    assert nearing.json()["data"][0]["folder_source"] == "Work"
    assert no_date.status_code == 400


def test_store_failure_is_500():
    store = FailingDocumentStore()
    seed_folder(store, "f1", "Work")
    store.fail_lists.add(tasks_path(USER_ID, "f1"))
    client = TestClient(create_app(store), raise_server_exceptions=False)

    response = client.get(f"{BASE}/tasks", headers=HEADERS)

    assert response.status_code == 500
    assert response.json()["success"] is False
    assert response.json()["data"] is None


def test_unhandled_exception_becomes_500_envelope():
    task_service = MagicMock()
    task_service.get_tasks_by_user = AsyncMock(side_effect=RuntimeError("boom"))
    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(create_task_routes(task_service))
    client = TestClient(app, raise_server_exceptions=False)

    response = client.get(f"{BASE}/tasks", headers=HEADERS)

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "message": "Internal server error",
        "data": None,
    }


def test_health_endpoints(client):
    root = client.get("/")
    health = client.get("/health")

    assert root.status_code == 200
    assert root.json()["data"]["status"] == "running"
    assert health.status_code == 200
    assert health.json()["data"]["database"] == "connected"
