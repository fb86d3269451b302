# src/tasklist_sync/tasks/rest_store.py

from __future__ import annotations

"""
HTTP implementation of the TaskStore port.

Speaks PostgREST conventions (the REST layer used by Supabase):
- GET    /rest/v1/<table>?select=*&order=created_at.desc
- POST   /rest/v1/<table>              (Prefer: return=representation)
- PATCH  /rest/v1/<table>?id=eq.<id>   (Prefer: return=representation)
- DELETE /rest/v1/<table>?id=eq.<id>

Every httpx failure is converted into a StoreError; callers never see httpx types.
"""

import logging
from typing import Any

import httpx

from ..core.ports import StoreError
from .task_models import Task, TaskId

logger = logging.getLogger(__name__)


def _error_message(resp: httpx.Response) -> str:
    """Pick the most useful message from a PostgREST error body."""
    try:
        body = resp.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        for key in ("message", "error_description", "error", "hint"):
            val = body.get(key)
            if isinstance(val, str) and val.strip():
                return val.strip()

    text = (resp.text or "").strip()
    return text or f"HTTP {resp.status_code}"


def friendly_store_error_message(err: Exception) -> str:
    msg = str(err).strip() or "Store error."
    if "REST URL is not set" in msg:
        return "Store is not configured (missing URL). Set TASKLIST_REST_URL in .env (see config.example.py)."
    if "REST API key is not set" in msg:
        return "Store is not configured (missing API key). Set TASKLIST_REST_API_KEY in .env (see config.example.py)."
    return msg


class RestTaskStore:
    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        table: str = "todoTable",
        connect_timeout: float = 5.0,
        read_timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not (base_url or "").strip():
            raise StoreError("REST URL is not set.")
        if not (api_key or "").strip():
            raise StoreError("REST API key is not set.")

        self._table = table.strip() or "todoTable"
        self._client = httpx.AsyncClient(
            base_url=f"{base_url.rstrip('/')}/rest/v1",
            headers={
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
                "Accept": "application/json",
            },
            timeout=httpx.Timeout(
                connect=connect_timeout,
                read=read_timeout,
                write=10.0,
                pool=connect_timeout,
            ),
            transport=transport,
        )
        logger.info("RestTaskStore ready url=%s table=%s", base_url, self._table)

    async def _request(
        self,
        method: str,
        *,
        params: dict[str, str] | None = None,
        json: Any = None,
        representation: bool = False,
    ) -> Any:
        headers = {"Prefer": "return=representation"} if representation else None
        try:
            resp = await self._client.request(
                method,
                f"/{self._table}",
                params=params,
                json=json,
                headers=headers,
            )
        except httpx.TimeoutException as e:
            raise StoreError(f"Store request timed out ({method})") from e
        except httpx.HTTPError as e:
            raise StoreError(f"Store network error ({method}): {e}") from e

        if resp.is_error:
            msg = _error_message(resp)
            logger.debug("Store %s failed status=%s body=%s", method, resp.status_code, resp.text)
            raise StoreError(msg)

        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as e:
            raise StoreError(f"Store returned invalid JSON ({method})") from e

    @staticmethod
    def _single(payload: Any, *, missing: str) -> Task:
        if isinstance(payload, list):
            if not payload:
                raise StoreError(missing)
            payload = payload[0]
        return Task.from_record(payload)

    async def list_tasks(self) -> list[Task]:
        payload = await self._request(
            "GET", params={"select": "*", "order": "created_at.desc"}
        )
        if not isinstance(payload, list):
            raise StoreError("Store returned an unexpected task list payload")
        return [Task.from_record(r) for r in payload]

    async def create_task(self, title: str) -> Task:
        payload = await self._request("POST", json=[{"title": title}], representation=True)
        return self._single(payload, missing="Store did not return the created task")

    async def update_task(self, task_id: TaskId, *, completed: bool) -> Task:
        payload = await self._request(
            "PATCH",
            params={"id": f"eq.{task_id}"},
            json={"completed": bool(completed)},
            representation=True,
        )
        return self._single(payload, missing=f"Task not found: {task_id}")

    async def delete_task(self, task_id: TaskId) -> None:
        await self._request("DELETE", params={"id": f"eq.{task_id}"})

    async def close(self) -> None:
        await self._client.aclose()
