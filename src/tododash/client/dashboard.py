"""Dashboard controller tying the API client to the optimistic list."""

import logging

import pydantic

from tododash.client.api import TodoApiClient
from tododash.client.state import InvalidTransition, OptimisticTodoList, Selection
from tododash.errors import ErrorKind
from tododash.schemas.bulk import BulkOperation, BulkRequest
from tododash.schemas.result import ActionResult
from tododash.schemas.todo import TodoFilters, TodoUpdate

logger = logging.getLogger(__name__)


def validation_message(exc: pydantic.ValidationError) -> str:
    """First error as ``field: message``, the way the API reports it."""
    first = exc.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ()))
    return f"{field}: {first['msg']}" if field else first["msg"]


class DashboardController:
    def __init__(self, api: TodoApiClient, filters: TodoFilters | None = None):
        self.api = api
        self.filters = filters or TodoFilters()
        self.todos = OptimisticTodoList()
        self.selection = Selection()
        self.error: str | None = None

    async def refresh(self) -> ActionResult:
        """Reload the list from the server. Drops the current selection."""
        result = await self.api.list_todos(self.filters)
        if result.error:
            self.error = result.error
            return result
        self.error = None
        self.todos.sync(result.data or [])
        self.selection.sync(self.todos.ids)
        return result

    async def set_filters(self, filters: TodoFilters) -> ActionResult:
        self.filters = filters
        return await self.refresh()

    async def edit(self, todo_id: str, **changes) -> ActionResult:
        try:
            update = TodoUpdate(**changes)
        except pydantic.ValidationError as e:
            return ActionResult.fail(validation_message(e), ErrorKind.VALIDATION)
        started = self._start(todo_id, self.todos.begin_edit, update.model_dump(exclude_unset=True))
        if started.error:
            return started
        result = await self.api.update_todo(todo_id, update)
        self._finish(todo_id, result, started.data)
        return result

    async def toggle(self, todo_id: str) -> ActionResult:
        current = self.todos.get(todo_id)
        if current is None:
            return ActionResult.fail("Todo not found", ErrorKind.NOT_FOUND)
        started = self._start(todo_id, self.todos.begin_edit, {"completed": not current.completed})
        if started.error:
            return started
        result = await self.api.toggle_todo(todo_id)
        self._finish(todo_id, result, started.data)
        return result

    async def delete(self, todo_id: str) -> ActionResult:
        started = self._start(todo_id, self.todos.begin_delete)
        if started.error:
            return started
        result = await self.api.delete_todo(todo_id)
        self._finish(todo_id, result, started.data)
        return result

    def _start(self, todo_id: str, begin, *args) -> ActionResult:
        """Apply the optimistic change. ``data`` is the list generation it was made in."""
        if self.todos.get(todo_id) is None:
            return ActionResult.fail("Todo not found", ErrorKind.NOT_FOUND)
        try:
            begin(todo_id, *args)
        except InvalidTransition:
            return ActionResult.fail("Todo is still being saved", ErrorKind.VALIDATION)
        return ActionResult.ok(self.todos.generation)

    def _finish(self, todo_id: str, result: ActionResult, generation: int) -> None:
        if generation != self.todos.generation:
            # A refresh replaced the list while the request was in flight
            logger.debug("Ignoring outcome for todo %s from before the last refresh", todo_id)
            return
        if result.error:
            logger.warning("Change to todo %s rolled back: %s", todo_id, result.error)
            self.todos.fail(todo_id, result.error)
        else:
            self.todos.commit(todo_id, result.data)

    async def bulk(self, operation: BulkOperation, **fields) -> ActionResult:
        """Run ``operation`` over the selection, then reload the list.

        Returns only after every per-todo change has settled on the server.
        """
        ids = self.selection.ids
        if not ids:
            return ActionResult.fail("No todos selected", ErrorKind.VALIDATION)
        try:
            request = BulkRequest(todo_ids=ids, operation=operation, **fields)
        except pydantic.ValidationError as e:
            return ActionResult.fail(validation_message(e), ErrorKind.VALIDATION)
        result = await self.api.bulk(request)
        if result.error:
            logger.warning("Bulk %s finished with errors: %s", operation.value, result.error)
        await self.refresh()
        if result.error:
            self.error = result.error
        return result
