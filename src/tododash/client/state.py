"""Client-side view of the todo list with optimistic edits.

Each item moves through ``clean -> pending -> committed | failed``. A failed
item is rolled back to its last server value and returns to ``clean``;
deleted items are reinserted where they were.
"""

import enum
from collections.abc import Iterable

from tododash.schemas.todo import TodoResponse


class ItemState(str, enum.Enum):
    CLEAN = "clean"
    PENDING = "pending"
    COMMITTED = "committed"
    FAILED = "failed"


TRANSITIONS = {
    ItemState.CLEAN: {ItemState.PENDING},
    ItemState.PENDING: {ItemState.COMMITTED, ItemState.FAILED},
    ItemState.COMMITTED: {ItemState.PENDING, ItemState.CLEAN},
    ItemState.FAILED: {ItemState.CLEAN},
}


class InvalidTransition(Exception):
    def __init__(self, todo_id: str, current: ItemState, target: ItemState):
        self.todo_id = todo_id
        self.current = current
        self.target = target
        super().__init__(f"{todo_id}: cannot go from {current.value} to {target.value}")


class OptimisticTodoList:
    """Todos as shown to the user, ahead of the server by any pending edits."""

    def __init__(self, todos: Iterable[TodoResponse] = ()):
        self.generation = 0
        self.sync(todos)

    def sync(self, todos: Iterable[TodoResponse]) -> None:
        """Replace everything with a fresh server snapshot.

        Bumps ``generation`` so changes begun before the sync can be told apart.
        """
        todos = list(todos)
        self._server = {todo.id: todo for todo in todos}
        self._order = [todo.id for todo in todos]
        self._visible = list(todos)
        self._states = {todo.id: ItemState.CLEAN for todo in todos}
        self.deleting: set[str] = set()
        self.errors: dict[str, str] = {}
        self.generation += 1

    @property
    def items(self) -> list[TodoResponse]:
        return list(self._visible)

    @property
    def ids(self) -> list[str]:
        return [todo.id for todo in self._visible]

    def get(self, todo_id: str) -> TodoResponse | None:
        for todo in self._visible:
            if todo.id == todo_id:
                return todo
        return None

    def state(self, todo_id: str) -> ItemState:
        return self._states.get(todo_id, ItemState.CLEAN)

    def is_pending(self, todo_id: str) -> bool:
        return self.state(todo_id) is ItemState.PENDING

    def _move(self, todo_id: str, target: ItemState) -> None:
        current = self.state(todo_id)
        if target not in TRANSITIONS[current]:
            raise InvalidTransition(todo_id, current, target)
        self._states[todo_id] = target

    def _index(self, todo_id: str) -> int:
        for index, todo in enumerate(self._visible):
            if todo.id == todo_id:
                return index
        raise KeyError(todo_id)

    def begin_edit(self, todo_id: str, patch: dict) -> TodoResponse:
        """Show ``patch`` immediately and mark the todo pending."""
        index = self._index(todo_id)
        self._move(todo_id, ItemState.PENDING)
        self.errors.pop(todo_id, None)
        updated = self._visible[index].model_copy(update=patch)
        self._visible[index] = updated
        return updated

    def begin_delete(self, todo_id: str) -> None:
        """Hide the todo right away; it comes back if the delete fails."""
        index = self._index(todo_id)
        self._move(todo_id, ItemState.PENDING)
        self.errors.pop(todo_id, None)
        self.deleting.add(todo_id)
        del self._visible[index]

    def commit(self, todo_id: str, server_todo: TodoResponse | None = None) -> None:
        """The server accepted the change."""
        self._move(todo_id, ItemState.COMMITTED)
        if todo_id in self.deleting:
            self.deleting.discard(todo_id)
            self._server.pop(todo_id, None)
            self._order.remove(todo_id)
            return
        if server_todo is not None:
            self._server[todo_id] = server_todo
            self._visible[self._index(todo_id)] = server_todo
        else:
            self._server[todo_id] = self._visible[self._index(todo_id)]

    def fail(self, todo_id: str, error: str) -> None:
        """The server rejected the change: record ``error`` and roll back."""
        self._move(todo_id, ItemState.FAILED)
        self.errors[todo_id] = error
        original = self._server[todo_id]
        if todo_id in self.deleting:
            self.deleting.discard(todo_id)
            self._visible.insert(self._restore_index(todo_id), original)
        else:
            self._visible[self._index(todo_id)] = original
        self._move(todo_id, ItemState.CLEAN)

    def _restore_index(self, todo_id: str) -> int:
        # Position before the first visible todo that came after it on the server
        rank = {tid: i for i, tid in enumerate(self._order)}
        target = rank[todo_id]
        for index, todo in enumerate(self._visible):
            if rank.get(todo.id, len(rank)) > target:
                return index
        return len(self._visible)

    def settle(self, todo_id: str) -> None:
        """Acknowledge a committed change so the todo can be edited again cleanly."""
        self._move(todo_id, ItemState.CLEAN)


class Selection:
    """IDs picked for a bulk action; cleared whenever the list is refreshed."""

    def __init__(self):
        self._ids: list[str] = []
        self._available: list[str] = []

    @property
    def ids(self) -> list[str]:
        return list(self._ids)

    def __len__(self) -> int:
        return len(self._ids)

    def __contains__(self, todo_id: str) -> bool:
        return todo_id in self._ids

    def toggle(self, todo_id: str) -> bool:
        """Flip one todo in or out of the selection. Returns whether it is now selected."""
        if todo_id in self._ids:
            self._ids.remove(todo_id)
            return False
        if todo_id not in self._available:
            return False
        self._ids.append(todo_id)
        return True

    def select_all(self) -> None:
        self._ids = list(self._available)

    def clear(self) -> None:
        self._ids = []

    def sync(self, todo_ids: Iterable[str]) -> None:
        self._available = list(todo_ids)
        self.clear()
