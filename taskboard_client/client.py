from __future__ import annotations

from typing import Any, Optional

import requests

from .exceptions import ApiError


class TaskboardClient:
    """
    Small HTTP client for the Taskboard REST API.

    - bearer token kept on the session after login()
    - unwraps the {success, data, error} envelope and returns data
    - raises ApiError for any 4xx/5xx answer
    """

    def __init__(self, base_url: str, token: Optional[str] = None, *, timeout: int = 15) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

        self.session = requests.Session()
        self.session.headers.update({
            "Content-Type": "application/json",
            "Accept": "application/json",
        })
        if token:
            self.set_token(token)

    # --------------------- low-level ---------------------

    def set_token(self, token: Optional[str]) -> None:
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"
        else:
            self.session.headers.pop("Authorization", None)

    def _url(self, path: str) -> str:
        if not path.startswith("/"):
            path = "/" + path
        return self.base_url + "/api" + path

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict[str, Any]] = None,
        json_body: Any = None,
    ) -> Any:
        url = self._url(path)
        resp = self.session.request(
            method,
            url,
            params=params,
            json=json_body,
            timeout=self.timeout,
        )

        body: Any = None
        if resp.content:
            try:
                body = resp.json()
            except ValueError:
                body = None

        if resp.status_code >= 400:
            message = resp.reason or "Request failed"
            if isinstance(body, dict):
                message = body.get("error") or body.get("detail") or message
            raise ApiError(
                status_code=resp.status_code,
                message=message,
                details=body,
                url=url,
                method=method,
            )

        if isinstance(body, dict) and "data" in body:
            return body["data"]
        return body

    # --------------------- auth & profile ---------------------

    def health(self) -> Any:
        return self._request("GET", "/health")

    def register(self, *, email: str, password: str, display_name: str) -> dict:
        payload = {"email": email, "password": password, "display_name": display_name}
        return self._request("POST", "/auth/register", json_body=payload)["user"]

    def login(self, *, email: str, password: str) -> dict:
        data = self._request("POST", "/auth/login", json_body={"email": email, "password": password})
        self.set_token(data["token"])
        return data

    def logout(self) -> None:
        # tokens are stateless, forgetting it is all there is to do
        self.set_token(None)

    def get_profile(self) -> dict:
        return self._request("GET", "/profile")["user"]

    def update_profile(self, *, display_name: str) -> dict:
        return self._request("PATCH", "/profile", json_body={"display_name": display_name})["user"]

    def change_password(self, *, old_password: str, new_password: str) -> None:
        payload = {"old_password": old_password, "new_password": new_password}
        self._request("PATCH", "/profile/password", json_body=payload)

    # --------------------- tasks ---------------------

    def create_task(
        self,
        *,
        title: str,
        description: str | None = None,
        priority: str | None = None,
        due_date: str | None = None,
        list_id: int | None = None,
    ) -> dict:
        payload: dict[str, Any] = {"title": title}
        if description is not None:
            payload["description"] = description
        if priority:
            payload["priority"] = priority
        if due_date:
            payload["due_date"] = due_date
        if list_id is not None:
            payload["list_id"] = list_id
        return self._request("POST", "/tasks", json_body=payload)["task"]

    def list_tasks(
        self,
        *,
        page: int | None = None,
        limit: int | None = None,
        status: str | None = None,
        priority: str | None = None,
        list_id: int | None = None,
    ) -> dict:
        params: dict[str, Any] = {}
        if page is not None:
            params["page"] = page
        if limit is not None:
            params["limit"] = limit
        if status:
            params["status"] = status
        if priority:
            params["priority"] = priority
        if list_id is not None:
            params["list_id"] = list_id
        return self._request("GET", "/tasks", params=params)

    def get_task(self, task_id: int) -> dict:
        return self._request("GET", f"/tasks/{task_id}")["task"]

    def update_task(self, task_id: int, **fields: Any) -> dict:
        # fields: title, description, status, priority, due_date, list_id (None clears)
        return self._request("PATCH", f"/tasks/{task_id}", json_body=fields)["task"]

    def delete_task(self, task_id: int) -> None:
        self._request("DELETE", f"/tasks/{task_id}")

    def task_history(self, task_id: int) -> list:
        return self._request("GET", f"/tasks/{task_id}/history")["history"]

    def search(self, query: str) -> list:
        return self._request("GET", "/search", params={"q": query})["tasks"]

    # --------------------- lists ---------------------

    def create_list(self, *, name: str, color: str | None = None, position: int | None = None) -> dict:
        payload: dict[str, Any] = {"name": name}
        if color:
            payload["color"] = color
        if position is not None:
            payload["position"] = position
        return self._request("POST", "/lists", json_body=payload)["list"]

    def list_lists(self) -> list:
        return self._request("GET", "/lists")["lists"]

    def update_list(self, list_id: int, **fields: Any) -> dict:
        # fields: name, color, position
        return self._request("PATCH", f"/lists/{list_id}", json_body=fields)["list"]

    def delete_list(self, list_id: int) -> None:
        self._request("DELETE", f"/lists/{list_id}")
