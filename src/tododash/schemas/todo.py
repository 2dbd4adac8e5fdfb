"""Todo schemas."""

from datetime import date, datetime

from pydantic import Field

from tododash.models.todo import Priority
from tododash.schemas.base import BaseSchema, TrimmedName
from tododash.schemas.category import CategorySummary
from tododash.schemas.tag import TagResponse


class TodoCreate(BaseSchema):
    """Schema for creating a todo."""

    content: TrimmedName
    priority: Priority = Priority.MEDIUM
    due_date: date | None = None
    category_id: str | None = None
    tag_ids: list[str] = Field(default_factory=list)


class TodoUpdate(BaseSchema):
    """Partial patch; only fields present in the payload are written."""

    content: TrimmedName | None = None
    completed: bool | None = None
    priority: Priority | None = None
    category_id: str | None = None
    due_date: date | None = None


class TodoFilters(BaseSchema):
    """Independently optional list filters, combined with AND."""

    completed: bool | None = None
    priority: Priority | None = None
    category_id: str | None = None
    # Matches todos carrying any of these tags
    tag_ids: list[str] | None = None


class TodoResponse(BaseSchema):
    """Schema for todo responses."""

    id: str
    content: str
    completed: bool
    priority: Priority
    due_date: date | None
    position: int
    category_id: str | None
    created_at: datetime
    updated_at: datetime

    # Nested relationships
    category: CategorySummary | None = None
    tags: list[TagResponse] = Field(default_factory=list)


class TodoReorder(BaseSchema):
    """New display order, first ID gets position 0."""

    todo_ids: list[str] = Field(..., min_length=1)
