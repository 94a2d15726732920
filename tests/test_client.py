# tests/test_client.py

from __future__ import annotations

import json
from typing import Any

import pytest

from taskboard_client import ApiError, TaskboardClient


class FakeResponse:
    def __init__(self, status_code: int, body: Any = None, reason: str = "") -> None:
        self.status_code = status_code
        self.reason = reason
        self._body = body
        self.content = b"" if body is None else json.dumps(body).encode()

    def json(self) -> Any:
        if self._body is None:
            raise ValueError("no body")
        return self._body


class RecordingSession:
    """Stands in for session.request: records calls, replays queued responses."""

    def __init__(self, client: TaskboardClient, responses: list[FakeResponse]) -> None:
        self.client = client
        self.responses = responses
        self.calls: list[dict[str, Any]] = []

    def __call__(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({
            "method": method,
            "url": url,
            "auth": self.client.session.headers.get("Authorization"),
            **kwargs,
        })
        return self.responses.pop(0)


def _client_with(monkeypatch: pytest.MonkeyPatch, *responses: FakeResponse):
    client = TaskboardClient("http://tb.local/")
    recorder = RecordingSession(client, list(responses))
    monkeypatch.setattr(client.session, "request", recorder)
    return client, recorder


def test_login_stores_bearer_token(monkeypatch: pytest.MonkeyPatch) -> None:
    client, calls = _client_with(
        monkeypatch,
        FakeResponse(200, {"success": True, "data": {"token": "tok", "token_type": "bearer", "user": {"id": 1}}}),
        FakeResponse(200, {"success": True, "data": {"user": {"id": 1, "display_name": "Alice"}}}),
    )

    client.login(email="a@x.com", password="secret1")
    profile = client.get_profile()

    assert profile["display_name"] == "Alice"
    assert calls.calls[0]["url"] == "http://tb.local/api/auth/login"
    assert calls.calls[0]["json"] == {"email": "a@x.com", "password": "secret1"}
    assert calls.calls[0]["auth"] is None
    assert calls.calls[1]["auth"] == "Bearer tok"

    client.logout()
    assert "Authorization" not in client.session.headers


def test_list_tasks_sends_only_given_filters(monkeypatch: pytest.MonkeyPatch) -> None:
    payload = {"tasks": [], "counters": {"total": 0}, "pagination": {"page": 2}}
    client, calls = _client_with(monkeypatch, FakeResponse(200, {"success": True, "data": payload}))

    result = client.list_tasks(page=2, status="DONE")

    assert result == payload
    assert calls.calls[0]["method"] == "GET"
    assert calls.calls[0]["params"] == {"page": 2, "status": "DONE"}


def test_error_envelope_becomes_api_error(monkeypatch: pytest.MonkeyPatch) -> None:
    client, _ = _client_with(
        monkeypatch,
        FakeResponse(423, {"success": False, "error": "Account locked."}, reason="Locked"),
    )

    with pytest.raises(ApiError) as excinfo:
        client.login(email="a@x.com", password="secret1")

    err = excinfo.value
    assert err.status_code == 423
    assert err.message == "Account locked."
    assert err.is_locked
    assert not err.is_unauthorized
    assert "POST http://tb.local/api/auth/login" in str(err)


def test_error_without_body_uses_reason(monkeypatch: pytest.MonkeyPatch) -> None:
    client, _ = _client_with(monkeypatch, FakeResponse(502, None, reason="Bad Gateway"))

    with pytest.raises(ApiError) as excinfo:
        client.health()

    assert excinfo.value.message == "Bad Gateway"


def test_update_task_can_clear_fields(monkeypatch: pytest.MonkeyPatch) -> None:
    client, calls = _client_with(
        monkeypatch,
        FakeResponse(200, {"success": True, "data": {"task": {"id": 7, "list_id": None}}}),
    )

    task = client.update_task(7, list_id=None, status="DONE")

    assert task["list_id"] is None
    assert calls.calls[0]["method"] == "PATCH"
    assert calls.calls[0]["url"] == "http://tb.local/api/tasks/7"
    assert calls.calls[0]["json"] == {"list_id": None, "status": "DONE"}
