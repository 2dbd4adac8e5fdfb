"""Business logic for todo, category and tag operations.

Every service is bound to one owner ID at construction and every statement
it issues is restricted to rows owned by that user.
"""

import logging

from sqlalchemy import select, update, delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from tododash.errors import NotFoundError, ValidationError
from tododash.models import Todo, TodoTag, Tag, Category
from tododash.models.base import utcnow
from tododash.schemas.todo import TodoCreate, TodoUpdate, TodoFilters

logger = logging.getLogger(__name__)

# Columns that cannot be cleared by an explicit null in a patch
_REQUIRED_FIELDS = ("content", "completed", "priority")


class TodoService:
    """Service for todo CRUD, filtering and tagging."""

    def __init__(self, db: AsyncSession, user_id: str):
        self.db = db
        self.user_id = user_id

    def _owned(self):
        return (
            select(Todo)
            .options(
                selectinload(Todo.category),
                selectinload(Todo.tags),
            )
            .where(Todo.user_id == self.user_id)
        )

    async def get_all(self, filters: TodoFilters | None = None) -> list[Todo]:
        """List owned todos with their category and tags.

        The tag filter runs after the other predicates and keeps todos that
        carry at least one of the requested tags.
        """
        filters = filters or TodoFilters()
        query = self._owned()

        if filters.completed is not None:
            query = query.where(Todo.completed == filters.completed)
        if filters.priority is not None:
            query = query.where(Todo.priority == filters.priority)
        if filters.category_id:
            query = query.where(Todo.category_id == filters.category_id)

        query = query.order_by(Todo.position.asc(), Todo.created_at.desc())
        result = await self.db.execute(query)
        todos = list(result.scalars().unique())

        if not filters.tag_ids:
            return todos
        if not todos:
            return []

        tagged = await self.db.execute(
            select(TodoTag.todo_id)
            .where(
                TodoTag.todo_id.in_([t.id for t in todos]),
                TodoTag.tag_id.in_(filters.tag_ids),
            )
            .distinct()
        )
        matching = set(tagged.scalars())
        if not matching:
            return []
        return [t for t in todos if t.id in matching]

    async def get_by_id(self, todo_id: str) -> Todo | None:
        """Get a single owned todo with its relationships freshly loaded."""
        query = (
            self._owned()
            .where(Todo.id == todo_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def _check_category(self, category_id: str | None) -> None:
        if category_id is None:
            return
        found = await self.db.execute(
            select(Category.id).where(
                Category.id == category_id,
                Category.user_id == self.user_id,
            )
        )
        if found.scalar_one_or_none() is None:
            raise ValidationError("Category not found")

    async def _check_tags(self, tag_ids: list[str]) -> list[str]:
        unique_ids = list(dict.fromkeys(tag_ids))
        if not unique_ids:
            return []
        found = await self.db.execute(
            select(Tag.id).where(Tag.id.in_(unique_ids), Tag.user_id == self.user_id)
        )
        if len(set(found.scalars())) != len(unique_ids):
            raise ValidationError("Tag not found")
        return unique_ids

    async def create(self, data: TodoCreate) -> Todo:
        """Create a new todo, optionally attaching tags."""
        await self._check_category(data.category_id)
        tag_ids = await self._check_tags(data.tag_ids)

        todo = Todo(
            user_id=self.user_id,
            content=data.content,
            priority=data.priority,
            due_date=data.due_date,
            category_id=data.category_id,
        )
        self.db.add(todo)
        await self.db.flush()

        for tag_id in tag_ids:
            self.db.add(TodoTag(todo_id=todo.id, tag_id=tag_id))
        await self.db.flush()

        logger.debug("created todo %s for user %s", todo.id, self.user_id)
        return await self.get_by_id(todo.id)

    async def update(self, todo_id: str, data: TodoUpdate) -> Todo | None:
        """Apply a partial patch. Returns None when the todo is not owned."""
        todo = await self.get_by_id(todo_id)
        if not todo:
            return None

        update_data = data.model_dump(exclude_unset=True)
        for key in _REQUIRED_FIELDS:
            if update_data.get(key, ...) is None:
                del update_data[key]

        if "category_id" in update_data:
            await self._check_category(update_data["category_id"])

        for key, value in update_data.items():
            setattr(todo, key, value)

        todo.updated_at = utcnow()
        await self.db.flush()

        return await self.get_by_id(todo_id)

    async def toggle(self, todo_id: str) -> Todo | None:
        """Flip the completion flag."""
        todo = await self.get_by_id(todo_id)
        if not todo:
            return None
        todo.completed = not todo.completed
        todo.updated_at = utcnow()
        await self.db.flush()
        return await self.get_by_id(todo_id)

    async def delete(self, todo_id: str) -> bool:
        """Hard delete. Deleting a missing todo affects nothing and is not an error."""
        owned = select(Todo.id).where(Todo.id == todo_id, Todo.user_id == self.user_id)
        await self.db.execute(
            delete(TodoTag).where(TodoTag.todo_id.in_(owned))
        )
        result = await self.db.execute(
            delete(Todo).where(Todo.id == todo_id, Todo.user_id == self.user_id)
        )
        return result.rowcount > 0

    async def _require_todo_and_tag(self, todo_id: str, tag_id: str) -> None:
        todo = await self.db.execute(
            select(Todo.id).where(Todo.id == todo_id, Todo.user_id == self.user_id)
        )
        if todo.scalar_one_or_none() is None:
            raise NotFoundError("Todo not found")
        tag = await self.db.execute(
            select(Tag.id).where(Tag.id == tag_id, Tag.user_id == self.user_id)
        )
        if tag.scalar_one_or_none() is None:
            raise NotFoundError("Tag not found")

    async def attach_tag(self, todo_id: str, tag_id: str) -> bool:
        """Attach a tag. Attaching an already attached tag is a no-op (False)."""
        await self._require_todo_and_tag(todo_id, tag_id)
        if await self.db.get(TodoTag, (todo_id, tag_id)) is not None:
            return False
        self.db.add(TodoTag(todo_id=todo_id, tag_id=tag_id))
        await self.db.flush()
        return True

    async def detach_tag(self, todo_id: str, tag_id: str) -> bool:
        """Detach a tag. Detaching an absent pair is a no-op (False)."""
        await self._require_todo_and_tag(todo_id, tag_id)
        result = await self.db.execute(
            delete(TodoTag).where(TodoTag.todo_id == todo_id, TodoTag.tag_id == tag_id)
        )
        return result.rowcount > 0

    async def reorder(self, todo_ids: list[str]) -> int:
        """Persist display order: each listed todo gets its index as position."""
        now = utcnow()
        moved = 0
        for position, todo_id in enumerate(todo_ids):
            result = await self.db.execute(
                update(Todo)
                .where(Todo.id == todo_id, Todo.user_id == self.user_id)
                .values(position=position, updated_at=now)
            )
            moved += result.rowcount
        return moved


class CategoryService:
    """Service for category operations."""

    def __init__(self, db: AsyncSession, user_id: str):
        self.db = db
        self.user_id = user_id

    async def get_all(self) -> list[Category]:
        """Get all owned categories."""
        result = await self.db.execute(
            select(Category)
            .where(Category.user_id == self.user_id)
            .order_by(Category.sort_order, Category.name)
        )
        return list(result.scalars())

    async def get_by_id(self, category_id: str) -> Category | None:
        """Get an owned category by ID."""
        result = await self.db.execute(
            select(Category).where(
                Category.id == category_id,
                Category.user_id == self.user_id,
            )
        )
        return result.scalar_one_or_none()

    async def create(self, name: str, color: str, sort_order: int = 0) -> Category:
        """Create a new category."""
        category = Category(
            user_id=self.user_id,
            name=name,
            color=color,
            sort_order=sort_order,
        )
        self.db.add(category)
        await self.db.flush()
        return category

    async def update(self, category_id: str, **kwargs) -> Category | None:
        """Update a category."""
        category = await self.get_by_id(category_id)
        if not category:
            return None
        for key, value in kwargs.items():
            if hasattr(category, key) and value is not None:
                setattr(category, key, value)
        await self.db.flush()
        return category

    async def delete(self, category_id: str) -> bool:
        """Delete a category, keeping its todos with the reference cleared."""
        category = await self.get_by_id(category_id)
        if not category:
            return False
        await self.db.execute(
            update(Todo)
            .where(Todo.category_id == category_id, Todo.user_id == self.user_id)
            .values(category_id=None)
        )
        await self.db.execute(delete(Category).where(Category.id == category_id))
        return True


class TagService:
    """Service for tag operations."""

    def __init__(self, db: AsyncSession, user_id: str):
        self.db = db
        self.user_id = user_id

    async def get_all(self) -> list[Tag]:
        """Get all owned tags."""
        result = await self.db.execute(
            select(Tag).where(Tag.user_id == self.user_id).order_by(Tag.name)
        )
        return list(result.scalars())

    async def get_by_id(self, tag_id: str) -> Tag | None:
        """Get an owned tag by ID."""
        result = await self.db.execute(
            select(Tag).where(Tag.id == tag_id, Tag.user_id == self.user_id)
        )
        return result.scalar_one_or_none()

    async def create(self, name: str, color: str) -> Tag:
        """Create a new tag."""
        tag = Tag(user_id=self.user_id, name=name, color=color)
        self.db.add(tag)
        await self.db.flush()
        return tag

    async def delete(self, tag_id: str) -> bool:
        """Delete a tag and detach it from every todo."""
        tag = await self.get_by_id(tag_id)
        if not tag:
            return False
        await self.db.execute(delete(TodoTag).where(TodoTag.tag_id == tag_id))
        await self.db.execute(delete(Tag).where(Tag.id == tag_id))
        return True
