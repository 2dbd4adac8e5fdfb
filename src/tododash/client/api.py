"""Async HTTP client for the TodoDash API.

Every call returns an ``ActionResult``; network failures and error bodies
come back as ``error`` rather than exceptions.
"""

import logging
from typing import Any

import httpx
from pydantic import TypeAdapter

from tododash.errors import ErrorKind
from tododash.schemas.bulk import BulkRequest, BulkResult
from tododash.schemas.category import CategoryCreate, CategoryResponse
from tododash.schemas.result import ActionResult
from tododash.schemas.tag import TagCreate, TagResponse
from tododash.schemas.todo import TodoCreate, TodoFilters, TodoResponse, TodoUpdate

logger = logging.getLogger(__name__)

KIND_BY_STATUS = {
    400: ErrorKind.VALIDATION,
    401: ErrorKind.UNAUTHORIZED,
    404: ErrorKind.NOT_FOUND,
    503: ErrorKind.UNAVAILABLE,
}

_todo = TypeAdapter(TodoResponse)
_todos = TypeAdapter(list[TodoResponse])
_categories = TypeAdapter(list[CategoryResponse])
_tags = TypeAdapter(list[TagResponse])


class TodoApiClient:
    def __init__(self, http: httpx.AsyncClient, token: str | None = None):
        self.http = http
        self.token = token

    async def _call(
        self,
        method: str,
        path: str,
        *,
        adapter: TypeAdapter | None = None,
        **kwargs: Any,
    ) -> ActionResult:
        headers = {"Authorization": f"Bearer {self.token}"} if self.token else {}
        try:
            response = await self.http.request(method, f"/api{path}", headers=headers, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %r", method, path, e)
            return ActionResult.fail("Network error, please try again", ErrorKind.UNAVAILABLE)

        try:
            body = response.json()
        except ValueError:
            body = {}

        data = body.get("data") if isinstance(body, dict) else None
        if response.is_error or (isinstance(body, dict) and "error" in body):
            message = body.get("error") if isinstance(body, dict) else None
            return ActionResult(
                success=False,
                data=data,
                error=message or f"Request failed ({response.status_code})",
                kind=KIND_BY_STATUS.get(response.status_code, ErrorKind.UNEXPECTED),
            )
        if adapter is not None and data is not None:
            data = adapter.validate_python(data)
        return ActionResult.ok(data)

    # Session

    async def sign_in(self, email: str, password: str) -> ActionResult:
        """Sign in and keep the session token for later calls."""
        result = await self._call(
            "POST", "/auth/signin", json={"email": email, "password": password}
        )
        if result.error is None:
            self.token = result.data["access_token"]
        return result

    async def sign_out(self) -> ActionResult:
        result = await self._call("POST", "/auth/signout")
        self.token = None
        return result

    # Todos

    async def list_todos(self, filters: TodoFilters | None = None) -> ActionResult:
        params = {}
        if filters is not None:
            params = filters.model_dump(mode="json", exclude_none=True)
        return await self._call("GET", "/todos", params=params, adapter=_todos)

    async def create_todo(self, data: TodoCreate) -> ActionResult:
        return await self._call(
            "POST", "/todos", json=data.model_dump(mode="json"), adapter=_todo
        )

    async def update_todo(self, todo_id: str, data: TodoUpdate) -> ActionResult:
        return await self._call(
            "PATCH",
            f"/todos/{todo_id}",
            json=data.model_dump(mode="json", exclude_unset=True),
            adapter=_todo,
        )

    async def toggle_todo(self, todo_id: str) -> ActionResult:
        return await self._call("POST", f"/todos/{todo_id}/toggle", adapter=_todo)

    async def delete_todo(self, todo_id: str) -> ActionResult:
        return await self._call("DELETE", f"/todos/{todo_id}")

    async def bulk(self, request: BulkRequest) -> ActionResult:
        return await self._call(
            "POST",
            "/todos/bulk",
            json=request.model_dump(mode="json", exclude_unset=True),
            adapter=TypeAdapter(BulkResult),
        )

    async def attach_tag(self, todo_id: str, tag_id: str) -> ActionResult:
        return await self._call("POST", f"/todos/{todo_id}/tags/{tag_id}")

    async def detach_tag(self, todo_id: str, tag_id: str) -> ActionResult:
        return await self._call("DELETE", f"/todos/{todo_id}/tags/{tag_id}")

    # Categories and tags

    async def list_categories(self) -> ActionResult:
        return await self._call("GET", "/categories", adapter=_categories)

    async def create_category(self, data: CategoryCreate) -> ActionResult:
        return await self._call(
            "POST",
            "/categories",
            json=data.model_dump(mode="json"),
            adapter=TypeAdapter(CategoryResponse),
        )

    async def list_tags(self) -> ActionResult:
        return await self._call("GET", "/tags", adapter=_tags)

    async def create_tag(self, data: TagCreate) -> ActionResult:
        return await self._call(
            "POST",
            "/tags",
            json=data.model_dump(mode="json"),
            adapter=TypeAdapter(TagResponse),
        )

    # Suggestions

    async def suggest(self, goal: str) -> ActionResult:
        return await self._call("POST", "/suggestions", json={"goal": goal})
