"""Tests for bulk operations."""

import pydantic
import pytest
from sqlalchemy import func, select

from tododash.models import Priority, Todo, TodoTag
from tododash.schemas.bulk import BulkOperation, BulkRequest
from tododash.schemas.todo import TodoCreate
from tododash.services import actions
from tododash.services.bulk import BulkService
from tododash.services.todo_service import CategoryService, TagService, TodoService


async def make_todos(database, user_id, count, **fields):
    async with database.session() as session:
        service = TodoService(session, user_id)
        todos = [
            await service.create(TodoCreate(content=f"Todo {i}", **fields))
            for i in range(count)
        ]
        return [t.id for t in todos]


async def fetch(database, todo_ids):
    async with database.session() as session:
        result = await session.execute(select(Todo).where(Todo.id.in_(todo_ids)))
        return {t.id: t for t in result.scalars()}


class TestBulkRequest:
    """Tests for BulkRequest validation."""

    def test_update_requires_a_field(self):
        with pytest.raises(pydantic.ValidationError):
            BulkRequest(todo_ids=["a"], operation=BulkOperation.UPDATE)

    def test_update_with_explicit_null_category(self):
        request = BulkRequest.model_validate(
            {"todo_ids": ["a"], "operation": "update", "category_id": None}
        )
        assert request.patch_values() == {"category_id": None}

    def test_empty_selection_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            BulkRequest(todo_ids=[], operation=BulkOperation.COMPLETE)


class TestBulkService:
    """Tests for BulkService."""

    @pytest.mark.asyncio
    async def test_complete_with_missing_id(self, database):
        """A missing ID does not stop the others from completing."""
        ids = await make_todos(database, "alice", 4)

        result = await BulkService(database, "alice").apply(
            BulkRequest(todo_ids=ids + ["missing"], operation=BulkOperation.COMPLETE)
        )

        assert sorted(result.succeeded) == sorted(ids)
        assert result.missing == ["missing"]
        assert result.failed == []
        assert result.error is None
        todos = await fetch(database, ids)
        assert all(t.completed for t in todos.values())

    @pytest.mark.asyncio
    async def test_incomplete(self, database):
        ids = await make_todos(database, "alice", 2)
        service = BulkService(database, "alice")
        await service.apply(BulkRequest(todo_ids=ids, operation=BulkOperation.COMPLETE))

        await service.apply(BulkRequest(todo_ids=ids, operation=BulkOperation.INCOMPLETE))

        todos = await fetch(database, ids)
        assert not any(t.completed for t in todos.values())

    @pytest.mark.asyncio
    async def test_other_users_todos_untouched(self, database):
        mine = await make_todos(database, "alice", 1)
        theirs = await make_todos(database, "bob", 1)

        result = await BulkService(database, "alice").apply(
            BulkRequest(todo_ids=mine + theirs, operation=BulkOperation.DELETE)
        )

        assert result.succeeded == mine
        assert result.missing == theirs
        assert list(await fetch(database, mine + theirs)) == theirs

    @pytest.mark.asyncio
    async def test_delete_removes_tag_links(self, database):
        async with database.session() as session:
            tag = await TagService(session, "alice").create("x", "#6B7280")
        ids = await make_todos(database, "alice", 2, tag_ids=[tag.id])

        await BulkService(database, "alice").apply(
            BulkRequest(todo_ids=ids, operation=BulkOperation.DELETE)
        )

        async with database.session() as session:
            links = await session.execute(select(func.count()).select_from(TodoTag))
            assert links.scalar_one() == 0

    @pytest.mark.asyncio
    async def test_update_priority_and_category(self, database):
        async with database.session() as session:
            category = await CategoryService(session, "alice").create("Work", "#3B82F6")
        ids = await make_todos(database, "alice", 3)

        await BulkService(database, "alice").apply(BulkRequest(
            todo_ids=ids,
            operation=BulkOperation.UPDATE,
            priority=Priority.HIGH,
            category_id=category.id,
        ))

        todos = await fetch(database, ids)
        assert {t.priority for t in todos.values()} == {Priority.HIGH}
        assert {t.category_id for t in todos.values()} == {category.id}

    @pytest.mark.asyncio
    async def test_update_clears_category(self, database):
        async with database.session() as session:
            category = await CategoryService(session, "alice").create("Work", "#3B82F6")
        ids = await make_todos(database, "alice", 2, category_id=category.id)

        await BulkService(database, "alice").apply(BulkRequest.model_validate(
            {"todo_ids": ids, "operation": "update", "category_id": None}
        ))

        todos = await fetch(database, ids)
        assert {t.category_id for t in todos.values()} == {None}

    @pytest.mark.asyncio
    async def test_failure_keeps_completed_mutations(self, database, monkeypatch):
        """One failing mutation reports an error but the rest stay applied."""
        ids = await make_todos(database, "alice", 3)
        bad_id = ids[1]
        original = BulkService._execute

        async def flaky(self, session, operation, todo_ids, values):
            if todo_ids == [bad_id]:
                raise RuntimeError("disk on fire")
            return await original(self, session, operation, todo_ids, values)

        monkeypatch.setattr(BulkService, "_execute", flaky)

        result = await BulkService(database, "alice").apply(
            BulkRequest(todo_ids=ids, operation=BulkOperation.COMPLETE)
        )

        assert result.failed == [bad_id]
        assert sorted(result.succeeded) == sorted([ids[0], ids[2]])
        assert result.error == "Failed to complete 1 of 3 todos"
        todos = await fetch(database, ids)
        assert todos[ids[0]].completed and todos[ids[2]].completed
        assert not todos[bad_id].completed

    @pytest.mark.asyncio
    async def test_atomic_success(self, database):
        ids = await make_todos(database, "alice", 2)

        result = await BulkService(database, "alice").apply(BulkRequest(
            todo_ids=ids + ["missing"], operation=BulkOperation.COMPLETE, atomic=True
        ))

        assert result.succeeded == ids
        assert result.missing == ["missing"]
        todos = await fetch(database, ids)
        assert all(t.completed for t in todos.values())

    @pytest.mark.asyncio
    async def test_atomic_failure_changes_nothing(self, database, monkeypatch):
        ids = await make_todos(database, "alice", 2)
        original = BulkService._execute

        async def failing(self, session, operation, todo_ids, values):
            await original(self, session, operation, todo_ids, values)
            raise RuntimeError("constraint violated")

        monkeypatch.setattr(BulkService, "_execute", failing)

        result = await BulkService(database, "alice").apply(BulkRequest(
            todo_ids=ids, operation=BulkOperation.DELETE, atomic=True
        ))

        assert result.failed == ids
        assert result.error == "Failed to delete todos"
        assert set(await fetch(database, ids)) == set(ids)


class TestBulkAction:
    """Tests for the bulk action boundary."""

    @pytest.mark.asyncio
    async def test_partial_failure_is_reported_as_failure(self, database, monkeypatch):
        ids = await make_todos(database, "alice", 2)

        async def broken(self, session, operation, todo_ids, values):
            raise RuntimeError("boom")

        monkeypatch.setattr(BulkService, "_execute", broken)

        result = await actions.bulk_apply(
            database, "alice", BulkRequest(todo_ids=ids, operation=BulkOperation.COMPLETE)
        )

        assert result.success is False
        assert result.error == "Failed to complete 2 of 2 todos"
        assert result.data.failed == ids

    @pytest.mark.asyncio
    async def test_unowned_category_rejected(self, database):
        async with database.session() as session:
            category = await CategoryService(session, "bob").create("Bob's", "#3B82F6")
        ids = await make_todos(database, "alice", 1)

        result = await actions.bulk_apply(database, "alice", BulkRequest(
            todo_ids=ids, operation=BulkOperation.UPDATE, category_id=category.id
        ))

        assert result.error == "Category not found"
