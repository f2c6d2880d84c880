"""API tests for the todo demo routes."""

from __future__ import annotations

import threading
import time

import pytest
from fastapi.testclient import TestClient

from beanbus.main import app, presentation_model, todo_store


@pytest.fixture(autouse=True)
def _reset_todos():
    presentation_model.initialize([])
    yield
    presentation_model.initialize([])


@pytest.fixture()
def client():
    return TestClient(app)


def _add(client: TestClient, *contents: str) -> dict:
    body = {}
    for content in contents:
        resp = client.post("/todos", json={"content": content})
        assert resp.status_code == 200
        body = resp.json()
    return body


def test_empty_list_state(client: TestClient):
    resp = client.get("/todos")

    assert resp.status_code == 200
    body = resp.json()
    assert body["todos"] == []
    assert body["remaining_label"] == "0 items"
    assert body["completed_label"] == "0 completed items"
    assert body["all_todos_are_complete"] is True


def test_submit_todo(client: TestClient):
    body = _add(client, "Buy milk")

    assert body["todos"] == [{"content": "Buy milk", "done": False}]
    assert body["remaining_label"] == "1 item"
    assert body["remaining_todos_exist"] is True
    assert body["completed_todos_exist"] is False


def test_blank_submission_is_ignored(client: TestClient):
    body = _add(client, "   ")

    assert body["todos"] == []


def test_changes_reach_the_store(client: TestClient):
    _add(client, "Buy milk", "Walk dog")

    saved = client.get("/todos/saved").json()

    assert saved == [
        {"content": "Buy milk", "done": False},
        {"content": "Walk dog", "done": False},
    ]
    assert todo_store.load() == saved


def test_toggle_todo(client: TestClient):
    _add(client, "Buy milk")

    body = client.post("/todos/0/toggle").json()

    assert body["todos"][0]["done"] is True
    assert body["completed_label"] == "1 completed item"
    assert body["remaining_label"] == "0 items"
    assert body["all_todos_are_complete"] is True


def test_delete_todo(client: TestClient):
    _add(client, "Buy milk", "Walk dog")

    resp = client.delete("/todos/0")

    assert resp.status_code == 200
    assert [t["content"] for t in resp.json()["todos"]] == ["Walk dog"]


def test_unknown_index_returns_404(client: TestClient):
    _add(client, "Buy milk")

    assert client.delete("/todos/5").status_code == 404
    assert client.post("/todos/-1/toggle").status_code == 404
    assert client.post("/todos/1/edit").status_code == 404
    assert client.post("/todos/3/update", json={"content": "x"}).status_code == 404


def test_clear_completed(client: TestClient):
    _add(client, "Buy milk", "Walk dog", "Call mom")
    client.post("/todos/0/toggle")
    client.post("/todos/2/toggle")

    body = client.post("/todos/clear-completed").json()

    assert [t["content"] for t in body["todos"]] == ["Walk dog"]
    assert body["completed_todos_exist"] is False


def test_complete_all_and_undo(client: TestClient):
    _add(client, "Buy milk", "Walk dog")

    body = client.post("/todos/complete-all", json={}).json()
    assert all(t["done"] for t in body["todos"])
    assert body["completed_label"] == "2 completed items"

    body = client.post("/todos/complete-all", json={"complete": False}).json()
    assert not any(t["done"] for t in body["todos"])
    assert body["remaining_label"] == "2 items"


def test_edit_then_update(client: TestClient):
    _add(client, "Buy milk")

    body = client.post("/todos/0/edit").json()
    assert body["edited_index"] == 0

    body = client.post("/todos/0/update", json={"content": "Buy oat milk"}).json()
    assert body["edited_index"] is None
    assert body["todos"][0]["content"] == "Buy oat milk"
    assert client.get("/todos/saved").json()[0]["content"] == "Buy oat milk"


def test_concurrent_deletes_of_last_todo(monkeypatch):
    """Only one of several simultaneous deletes succeeds; the rest see 404."""
    _add(TestClient(app), "Only one")
    check = presentation_model.has_index

    def slow_has_index(index: int) -> bool:
        found = check(index)
        time.sleep(0.05)
        return found

    monkeypatch.setattr(presentation_model, "has_index", slow_has_index)
    workers = 4
    barrier = threading.Barrier(workers)
    statuses: list[int] = []

    def delete_first():
        client = TestClient(app)
        barrier.wait(timeout=5)
        statuses.append(client.delete("/todos/0").status_code)

    threads = [threading.Thread(target=delete_first) for _ in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)

    assert sorted(statuses) == [200] + [404] * (workers - 1)
    assert presentation_model.todos == []


def test_blank_update_keeps_content(client: TestClient):
    _add(client, "Buy milk")
    client.post("/todos/0/edit")

    body = client.post("/todos/0/update", json={"content": " "}).json()

    assert body["todos"][0]["content"] == "Buy milk"
    assert body["edited_index"] is None
