# src/todo_editor/tasks/remote_store.py

"""
HTTP task store.

Talks to the task backend:

    GET    /list                 -> {"list": [...]}
    GET    /list?Title=<text>    -> {"list": [...]}
    GET    /list/sorted          -> {"sortedList": [...]}
    POST   /add?Title=&Status=&Priority=
    PUT    /update?ID=&Title=&Status=&Priority=
    DELETE /delete?id=

Write responses carry no entity we rely on, so every write is followed by a
re-list (refetch_after_write = True).
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..core.errors import ApplicationError, TransportError
from .task_models import ListQuery, Task, TaskDraft

logger = logging.getLogger(__name__)

# The backend answers the sorted endpoint under a different key than the others.
# Not a deliberate contract as far as we can tell; accept either, in this order.
LIST_RESPONSE_KEYS: tuple[str, ...] = ("list", "sortedList")


def _make_timeout(seconds: float | None) -> httpx.Timeout:
    if not seconds:
        return httpx.Timeout(None)
    return httpx.Timeout(seconds)


class RemoteTaskStore:
    refetch_after_write = True

    def __init__(
        self,
        base_url: str,
        *,
        timeout_seconds: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = _make_timeout(timeout_seconds)
        self._client = client
        self._owns_client = client is None

    def describe(self) -> str:
        return f"API {self._base_url}"

    def _get_client(self) -> httpx.AsyncClient:
        """Lazily create and cache the HTTP client (nothing is opened at construction)."""
        if self._client is None:
            self._client = httpx.AsyncClient(base_url=self._base_url, timeout=self._timeout)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def _request(self, method: str, path: str, params: dict[str, Any] | None = None) -> httpx.Response:
        client = self._get_client()
        try:
            response = await client.request(method, path, params=params)
        except httpx.HTTPError as e:
            logger.info("%s %s failed: %s", method, path, e.__class__.__name__)
            raise TransportError(str(e) or e.__class__.__name__) from e

        logger.info("%s %s -> %s", method, response.request.url, response.status_code)

        if not response.is_success:
            body = response.text
            if body:
                logger.debug("Error response body: %s", body)
            raise ApplicationError.from_status(response.status_code, body)
        return response

    async def list_tasks(self, query: ListQuery) -> list[Task]:
        if query.sort_by_priority:
            response = await self._request("GET", "/list/sorted")
        elif query.filter_title:
            response = await self._request("GET", "/list", params={"Title": query.filter_title})
        else:
            response = await self._request("GET", "/list")

        try:
            payload = response.json()
        except ValueError as e:
            raise TransportError(f"Malformed response body: {e}") from e

        items = None
        if isinstance(payload, dict):
            for key in LIST_RESPONSE_KEYS:
                if isinstance(payload.get(key), list):
                    items = payload[key]
                    break

        if items is None:
            logger.warning("List response has neither 'list' nor 'sortedList' array: %r", payload)
            raise ApplicationError(
                f"Unexpected list response (status {response.status_code}): "
                "no 'list' or 'sortedList' array",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            return [Task.from_wire(item) for item in items]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise TransportError(f"Malformed task in response: {e!r}") from e

    async def create_task(self, draft: TaskDraft) -> None:
        await self._request(
            "POST",
            "/add",
            params={"Title": draft.title, "Status": draft.status.value, "Priority": draft.priority},
        )

    async def update_task(self, task_id: int, draft: TaskDraft) -> None:
        await self._request(
            "PUT",
            "/update",
            params={
                "ID": task_id,
                "Title": draft.title,
                "Status": draft.status.value,
                "Priority": draft.priority,
            },
        )

    async def delete_task(self, task_id: int) -> None:
        await self._request("DELETE", "/delete", params={"id": task_id})
