"""SQLAlchemy models for TodoDash."""

from tododash.models.base import Base
from tododash.models.todo import Priority, Todo, TodoTag
from tododash.models.category import Category
from tododash.models.tag import Tag
from tododash.models.profile import Profile

__all__ = [
    "Base",
    "Priority",
    "Todo",
    "TodoTag",
    "Category",
    "Tag",
    "Profile",
]
