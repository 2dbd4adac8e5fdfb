"""Business logic services for TodoDash."""

from tododash.services.todo_service import TodoService, CategoryService, TagService
from tododash.services.bulk import BulkService
from tododash.services.profile_service import ProfileService, AvatarService
from tododash.services.suggestions import SuggestionService

__all__ = [
    "TodoService",
    "CategoryService",
    "TagService",
    "BulkService",
    "ProfileService",
    "AvatarService",
    "SuggestionService",
]
