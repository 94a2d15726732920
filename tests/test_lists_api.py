# tests/test_lists_api.py

from __future__ import annotations

from fastapi.testclient import TestClient


def _create_list(client: TestClient, headers: dict, **fields) -> dict:
    resp = client.post("/api/lists", json=fields, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]["list"]


def _create_task(client: TestClient, headers: dict, **fields) -> dict:
    resp = client.post("/api/tasks", json=fields, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]["task"]


def test_create_list_defaults(client: TestClient, alice: dict) -> None:
    created = _create_list(client, alice, name="Inbox")

    assert created["name"] == "Inbox"
    assert created["color"] == "#3B82F6"
    assert created["position"] == 0


def test_create_list_validation(client: TestClient, alice: dict) -> None:
    for payload in (
        {"name": ""},
        {"name": "x" * 101},
        {"name": "Colors", "color": "red"},
        {"name": "Colors", "color": "#12345G"},
        {"name": "Order", "position": -1},
    ):
        resp = client.post("/api/lists", json=payload, headers=alice)
        assert resp.status_code == 400, payload
        assert resp.json()["success"] is False


def test_lists_are_ordered_and_counted(client: TestClient, alice: dict, bob: dict) -> None:
    zeta = _create_list(client, alice, name="Zeta", position=1)
    beta = _create_list(client, alice, name="Beta", position=1)
    first = _create_list(client, alice, name="First", position=0)
    _create_list(client, bob, name="Bob's")

    for title in ("One", "Two", "Three"):
        _create_task(client, alice, title=title, list_id=beta["id"])
    _create_task(client, alice, title="Four", list_id=zeta["id"])

    lists = client.get("/api/lists", headers=alice).json()["data"]["lists"]

    assert [(item["id"], item["task_count"]) for item in lists] == [
        (first["id"], 0),
        (beta["id"], 3),
        (zeta["id"], 1),
    ]


def test_update_list(client: TestClient, alice: dict) -> None:
    created = _create_list(client, alice, name="Old", color="#000000")
    url = f"/api/lists/{created['id']}"

    updated = client.patch(url, json={"name": "New"}, headers=alice).json()["data"]["list"]
    assert updated["name"] == "New"
    assert updated["color"] == "#000000"

    updated = client.patch(url, json={"color": "#abcdef", "position": 3}, headers=alice).json()["data"]["list"]
    assert updated["color"] == "#abcdef"
    assert updated["position"] == 3
    assert updated["name"] == "New"

    assert client.patch(url, json={"name": None}, headers=alice).status_code == 400
    assert client.patch(url, json={"color": "blue"}, headers=alice).status_code == 400


def test_list_ownership(client: TestClient, alice: dict, bob: dict) -> None:
    created = _create_list(client, alice, name="Alice only")
    url = f"/api/lists/{created['id']}"

    assert client.patch(url, json={"name": "Taken"}, headers=bob).status_code == 403
    assert client.delete(url, headers=bob).status_code == 403
    assert client.patch("/api/lists/9999", json={"name": "Ghost"}, headers=bob).status_code == 404
    assert client.delete("/api/lists/9999", headers=bob).status_code == 404

    assert client.get("/api/lists", headers=bob).json()["data"]["lists"] == []


def test_delete_list_detaches_tasks(client: TestClient, alice: dict) -> None:
    doomed = _create_list(client, alice, name="Doomed")
    kept = _create_list(client, alice, name="Kept")
    detached = [_create_task(client, alice, title=f"Task {i}", list_id=doomed["id"]) for i in range(3)]
    other = _create_task(client, alice, title="Elsewhere", list_id=kept["id"])

    resp = client.delete(f"/api/lists/{doomed['id']}", headers=alice)

    assert resp.status_code == 200
    assert resp.json()["success"] is True
    for task in detached:
        detail = client.get(f"/api/tasks/{task['id']}", headers=alice).json()["data"]["task"]
        assert detail["list_id"] is None
        assert detail["task_list"] is None
    assert client.get(f"/api/tasks/{other['id']}", headers=alice).json()["data"]["task"]["list_id"] == kept["id"]

    lists = client.get("/api/lists", headers=alice).json()["data"]["lists"]
    assert [item["name"] for item in lists] == ["Kept"]
    assert client.get("/api/tasks", headers=alice).json()["data"]["counters"]["total"] == 4
