"""Bulk operations over a selection of todos.

By default every selected ID gets its own session and transaction and all of
them run concurrently. A failure in one does not undo the others. With
``atomic=True`` the whole selection is changed by one statement in one
transaction instead.
"""

import asyncio
import logging

from sqlalchemy import select, update, delete
from sqlalchemy.ext.asyncio import AsyncSession

from tododash.database import Database
from tododash.errors import ValidationError
from tododash.models import Todo, TodoTag, Category
from tododash.models.base import utcnow
from tododash.schemas.bulk import BulkOperation, BulkRequest, BulkResult

logger = logging.getLogger(__name__)


class BulkService:
    """Applies one operation to many owned todos."""

    def __init__(self, database: Database, user_id: str):
        self.database = database
        self.user_id = user_id

    async def apply(self, request: BulkRequest) -> BulkResult:
        values = self._values_for(request)
        if "category_id" in values and values["category_id"] is not None:
            await self._check_category(values["category_id"])

        todo_ids = list(dict.fromkeys(request.todo_ids))
        if request.atomic:
            return await self._apply_atomic(request.operation, todo_ids, values)

        outcomes = await asyncio.gather(
            *(self._apply_one(request.operation, todo_id, values) for todo_id in todo_ids),
            return_exceptions=True,
        )

        result = BulkResult(operation=request.operation)
        for todo_id, outcome in zip(todo_ids, outcomes):
            if isinstance(outcome, BaseException):
                logger.error(
                    "bulk %s failed for todo %s: %r",
                    request.operation.value, todo_id, outcome,
                )
                result.failed.append(todo_id)
            elif outcome:
                result.succeeded.append(todo_id)
            else:
                result.missing.append(todo_id)

        if result.failed:
            result.error = (
                f"Failed to {request.operation.value} "
                f"{len(result.failed)} of {len(todo_ids)} todos"
            )
        return result

    @staticmethod
    def _values_for(request: BulkRequest) -> dict:
        if request.operation == BulkOperation.COMPLETE:
            return {"completed": True}
        if request.operation == BulkOperation.INCOMPLETE:
            return {"completed": False}
        if request.operation == BulkOperation.UPDATE:
            return request.patch_values()
        return {}

    async def _check_category(self, category_id: str) -> None:
        async with self.database.session() as session:
            found = await session.execute(
                select(Category.id).where(
                    Category.id == category_id,
                    Category.user_id == self.user_id,
                )
            )
            if found.scalar_one_or_none() is None:
                raise ValidationError("Category not found")

    async def _apply_one(self, operation: BulkOperation, todo_id: str, values: dict) -> bool:
        async with self.database.session() as session:
            return await self._execute(session, operation, [todo_id], values) > 0

    async def _apply_atomic(
        self, operation: BulkOperation, todo_ids: list[str], values: dict
    ) -> BulkResult:
        result = BulkResult(operation=operation)
        try:
            async with self.database.session() as session:
                owned = await session.execute(
                    select(Todo.id).where(Todo.id.in_(todo_ids), Todo.user_id == self.user_id)
                )
                owned_ids = set(owned.scalars())
                await self._execute(session, operation, todo_ids, values)
        except Exception as e:
            logger.error("atomic bulk %s rolled back: %r", operation.value, e)
            result.failed = todo_ids
            result.error = f"Failed to {operation.value} todos"
            return result

        result.succeeded = [i for i in todo_ids if i in owned_ids]
        result.missing = [i for i in todo_ids if i not in owned_ids]
        return result

    async def _execute(
        self,
        session: AsyncSession,
        operation: BulkOperation,
        todo_ids: list[str],
        values: dict,
    ) -> int:
        owned = (Todo.id.in_(todo_ids), Todo.user_id == self.user_id)
        if operation == BulkOperation.DELETE:
            result = await session.execute(
                delete(Todo).where(*owned).execution_options(synchronize_session=False)
            )
            # Join rows go in the same transaction; the FK cascade covers
            # connections with enforcement on, this covers the rest
            await session.execute(
                delete(TodoTag)
                .where(TodoTag.todo_id.in_(todo_ids))
                .where(~TodoTag.todo_id.in_(select(Todo.id)))
                .execution_options(synchronize_session=False)
            )
            return result.rowcount

        result = await session.execute(
            update(Todo)
            .where(*owned)
            .values(**values, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
