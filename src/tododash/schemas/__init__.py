"""Pydantic schemas for TodoDash API."""

from tododash.schemas.todo import (
    TodoCreate,
    TodoUpdate,
    TodoFilters,
    TodoResponse,
    TodoReorder,
)
from tododash.schemas.category import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    CategorySummary,
)
from tododash.schemas.tag import TagCreate, TagResponse
from tododash.schemas.bulk import BulkOperation, BulkRequest, BulkResult
from tododash.schemas.profile import ProfileUpdate, ProfileResponse, AvatarResponse
from tododash.schemas.result import ActionResult

__all__ = [
    "TodoCreate",
    "TodoUpdate",
    "TodoFilters",
    "TodoResponse",
    "TodoReorder",
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryResponse",
    "CategorySummary",
    "TagCreate",
    "TagResponse",
    "BulkOperation",
    "BulkRequest",
    "BulkResult",
    "ProfileUpdate",
    "ProfileResponse",
    "AvatarResponse",
    "ActionResult",
]
