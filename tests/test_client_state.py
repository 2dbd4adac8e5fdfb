"""Tests for optimistic client state."""

from datetime import datetime, timezone

import pytest

from tododash.client.state import InvalidTransition, ItemState, OptimisticTodoList, Selection
from tododash.models import Priority
from tododash.schemas.todo import TodoResponse

NOW = datetime(2026, 10, 16, tzinfo=timezone.utc)


def make_todo(todo_id, content=None, **fields):
    values = {
        "id": todo_id,
        "content": content or f"Todo {todo_id}",
        "completed": False,
        "priority": Priority.MEDIUM,
        "due_date": None,
        "position": 0,
        "category_id": None,
        "created_at": NOW,
        "updated_at": NOW,
    }
    values.update(fields)
    return TodoResponse(**values)


@pytest.fixture
def todos():
    return OptimisticTodoList([make_todo("a"), make_todo("b"), make_todo("c")])


class TestOptimisticTodoList:
    def test_edit_is_visible_immediately(self, todos):
        todos.begin_edit("b", {"content": "Changed"})

        assert todos.get("b").content == "Changed"
        assert todos.state("b") is ItemState.PENDING
        assert todos.is_pending("b") and not todos.is_pending("a")

    def test_commit_keeps_server_value(self, todos):
        todos.begin_edit("b", {"completed": True})
        server = make_todo("b", completed=True, priority=Priority.HIGH)

        todos.commit("b", server)

        assert todos.state("b") is ItemState.COMMITTED
        assert todos.get("b").priority == Priority.HIGH

    def test_failed_edit_rolls_back(self, todos):
        todos.begin_edit("b", {"content": "Changed"})

        todos.fail("b", "Failed to update todo")

        assert todos.get("b").content == "Todo b"
        assert todos.state("b") is ItemState.CLEAN
        assert todos.errors == {"b": "Failed to update todo"}

    def test_failed_edit_after_commit_restores_committed_value(self, todos):
        todos.begin_edit("a", {"content": "First"})
        todos.commit("a")
        todos.begin_edit("a", {"content": "Second"})

        todos.fail("a", "nope")

        assert todos.get("a").content == "First"

    def test_delete_hides_then_commits(self, todos):
        todos.begin_delete("b")
        assert todos.ids == ["a", "c"]
        assert todos.deleting == {"b"}

        todos.commit("b")

        assert todos.ids == ["a", "c"]
        assert todos.deleting == set()

    def test_failed_delete_reinserts_at_original_index(self, todos):
        todos.begin_delete("b")

        todos.fail("b", "Failed to delete todo")

        assert todos.ids == ["a", "b", "c"]
        assert todos.deleting == set()
        assert todos.state("b") is ItemState.CLEAN

    def test_failed_delete_with_neighbour_also_deleted(self, todos):
        todos.begin_delete("a")
        todos.begin_delete("b")
        todos.commit("a")

        todos.fail("b", "boom")

        assert todos.ids == ["b", "c"]

    def test_new_edit_clears_previous_error(self, todos):
        todos.begin_edit("a", {"content": "x"})
        todos.fail("a", "boom")

        todos.begin_edit("a", {"content": "y"})

        assert "a" not in todos.errors

    def test_invalid_transitions(self, todos):
        with pytest.raises(InvalidTransition):
            todos.commit("a")
        todos.begin_edit("a", {"content": "x"})
        with pytest.raises(InvalidTransition):
            todos.begin_edit("a", {"content": "y"})

    def test_settle_after_commit(self, todos):
        todos.begin_edit("a", {"completed": True})
        todos.commit("a")

        todos.settle("a")

        assert todos.state("a") is ItemState.CLEAN

    def test_sync_resets_everything(self, todos):
        todos.begin_edit("a", {"content": "x"})
        todos.begin_delete("b")
        before = todos.generation

        todos.sync([make_todo("z")])

        assert todos.ids == ["z"]
        assert todos.state("a") is ItemState.CLEAN
        assert todos.deleting == set()
        assert todos.errors == {}
        assert todos.generation == before + 1


class TestSelection:
    def test_toggle_and_select_all(self):
        selection = Selection()
        selection.sync(["a", "b", "c"])

        assert selection.toggle("b") is True
        assert "b" in selection
        assert selection.toggle("b") is False
        assert len(selection) == 0

        selection.select_all()
        assert selection.ids == ["a", "b", "c"]

    def test_unknown_id_not_selected(self):
        selection = Selection()
        selection.sync(["a"])

        assert selection.toggle("zzz") is False
        assert selection.ids == []

    def test_sync_clears(self):
        selection = Selection()
        selection.sync(["a", "b"])
        selection.select_all()

        selection.sync(["a", "b"])

        assert selection.ids == []
