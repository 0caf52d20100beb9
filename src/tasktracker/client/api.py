"""Async HTTP client for the TaskTracker API.

Learn: Thin wrapper over httpx.AsyncClient. Every non-2xx response is
raised as ApiError carrying the status code and the server's "error"
message, so callers branch on status (401 → log out) rather than
parsing bodies.
"""

import os
from typing import Optional

import httpx

DEFAULT_API_URL = "http://localhost:3000"


def api_url() -> str:
    return os.environ.get("TASKTRACKER_API_URL", DEFAULT_API_URL).rstrip("/")


class ApiError(Exception):
    """Non-2xx response from the API."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


def _raise_for_error(r: httpx.Response) -> None:
    if r.is_success:
        return
    try:
        message = r.json().get("error") or r.reason_phrase
    except (ValueError, AttributeError):
        message = r.text or r.reason_phrase
    raise ApiError(r.status_code, message)


class TaskTrackerClient:
    """One method per API endpoint."""

    def __init__(self, http: httpx.AsyncClient, token: Optional[str] = None):
        self.http = http
        self.token = token

    def _auth(self) -> dict:
        # Raw token, no "Bearer " prefix
        return {"Authorization": self.token} if self.token else {}

    async def register(self, username: str, password: str) -> str:
        r = await self.http.post("/register", json={"username": username, "password": password})
        _raise_for_error(r)
        return r.json()["message"]

    async def login(self, username: str, password: str) -> dict:
        r = await self.http.post("/login", json={"username": username, "password": password})
        _raise_for_error(r)
        return r.json()

    async def list_tasks(self) -> list[dict]:
        r = await self.http.get("/tasks", headers=self._auth())
        _raise_for_error(r)
        return r.json()

    async def add_task(self, title: str) -> dict:
        r = await self.http.post("/tasks", json={"title": title}, headers=self._auth())
        _raise_for_error(r)
        return r.json()

    async def toggle_task(self, task_id: str) -> dict:
        r = await self.http.put(f"/tasks/{task_id}", headers=self._auth())
        _raise_for_error(r)
        return r.json()

    async def delete_task(self, task_id: str) -> str:
        r = await self.http.delete(f"/tasks/{task_id}", headers=self._auth())
        _raise_for_error(r)
        return r.json()["message"]
